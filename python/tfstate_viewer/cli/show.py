#!/usr/bin/env python3
"""
tfstate_viewer/cli/show.py

CLI that reads a Terraform state file, normalizes and binds it, and prints the
result as text (default) or JSON.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

import aiofiles

from tfstate_viewer.models.presentation import PresentationPolicy
from tfstate_viewer.state.parse import StateDecodeError, read_state_file
from tfstate_viewer.view.binder import bind
from tfstate_viewer.view.render import render_json, render_text


async def _load_policy(path: Optional[str], group: bool) -> PresentationPolicy:
    """Build the presentation policy from an optional YAML file plus CLI flags."""
    if path is None:
        policy = PresentationPolicy()
    else:
        async with aiofiles.open(path, "r") as f:
            policy = PresentationPolicy.from_yaml(await f.read())
    if group:
        policy = policy.model_copy(update={"group_resources": True})
    return policy


async def _run_show(args: argparse.Namespace) -> int:
    """Handle `show`: returns the process exit code."""
    try:
        policy = await _load_policy(args.policy, args.group)
    except (OSError, ValueError) as exc:
        print(f"Error: failed to load policy: {exc}", file=sys.stderr)
        return 1

    try:
        state = await read_state_file(args.state_file)
    except FileNotFoundError:
        print(f"Error: state file not found: {args.state_file}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: cannot read state file {args.state_file}: {exc}", file=sys.stderr)
        return 1
    except StateDecodeError as exc:
        print(f"Error: failed to parse state: {exc}", file=sys.stderr)
        return 1

    view = bind(state, policy)
    output = render_json(view) + "\n" if args.format == "json" else render_text(view)
    sys.stdout.write(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfstate_viewer.cli.show",
        description="Print a human-readable view of a Terraform state file.",
    )
    parser.add_argument("state_file", help="Path to a terraform.tfstate JSON file.")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--group",
        action="store_true",
        default=False,
        help="Also group resources by architecture (ALB, EKS, RDS, S3, VPC, other).",
    )
    parser.add_argument(
        "--policy",
        default=None,
        help="YAML file overriding empty-state messages, tooltip template, etc.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for `tfviewctl show`."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    sys.exit(asyncio.run(_run_show(args)))


if __name__ == "__main__":
    main()
