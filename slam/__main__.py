"""Entry point for the slam CLI."""

import sys

from slam.cli.commands import cli_main


def main() -> int:
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
