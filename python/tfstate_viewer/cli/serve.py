#!/usr/bin/env python3
"""
tfstate_viewer/cli/serve.py

CLI that launches the Terraform state upload service. Flags override the
TFVIEW_* environment settings.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from tfstate_viewer.models.server_settings import ServerSettings
from tfstate_viewer.services.upload import run


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for `tfviewctl serve`."""
    parser = argparse.ArgumentParser(
        prog="tfstate_viewer.cli.serve",
        description="Serve POST /upload for Terraform state files.",
    )
    parser.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0).")
    parser.add_argument("--port", type=int, default=None, help="Port (default: 8080).")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: INFO).",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port))
        if value is not None
    }
    run(ServerSettings(**overrides))


if __name__ == "__main__":
    main()
