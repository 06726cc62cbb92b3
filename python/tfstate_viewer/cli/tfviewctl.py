"""
tfstate_viewer/cli/tfviewctl.py

Dispatches `tfviewctl <subcommand> [args...]` to
`python -m tfstate_viewer.cli.<subcommand>`. Subcommands: show, serve.
"""

import sys
import subprocess

SUBCOMMANDS = ("show", "serve")


def main() -> None:
    if len(sys.argv) < 2 or sys.argv[1] not in SUBCOMMANDS:
        print(f"Usage: tfviewctl {{{'|'.join(SUBCOMMANDS)}}} [args...]")
        sys.exit(1)

    subcommand = sys.argv[1]
    subcommand_args = sys.argv[2:]

    cmd = [sys.executable, "-m", f"tfstate_viewer.cli.{subcommand}"] + subcommand_args
    sys.exit(subprocess.call(cmd))


if __name__ == "__main__":
    main()
