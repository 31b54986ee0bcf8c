"""CLI command handlers for slam.

Without a subcommand the interactive dmenu front end runs. Dismissing a menu
is a normal way to quit and exits with status 0; every other failure is
reported and exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .. import __version__
from ..core.app import SlamApp
from ..core.builder import LayoutBuilder
from ..core.config import LayoutCatalog, LayoutConfig
from ..core.dmenu import Dmenu
from ..core.xrandr import Xrandr
from ..errors import EmptyPickerOutputError, SlamError
from ..models.settings import SlamSettings, default_config_path
from .logging_config import get_global_logger, init_logging


# ANSI color codes for output
class Colors:
    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    BLUE = "\033[34m"


def print_success(message: str) -> None:
    """Print success message in green."""
    print(f"{Colors.GREEN}✓{Colors.RESET} {message}")


def print_error(message: str) -> None:
    """Print error message in red."""
    print(f"{Colors.RED}✗{Colors.RESET} {message}", file=sys.stderr)


def print_warning(message: str) -> None:
    """Print warning message in yellow."""
    print(f"{Colors.YELLOW}⚠{Colors.RESET} {message}")


def print_error_with_remediation(error: str, remediation: str) -> None:
    """Print error with remediation steps.

    Format: "Error: <issue>. Remediation: <steps>"
    """
    print(f"{Colors.RED}✗ Error:{Colors.RESET} {error}", file=sys.stderr)
    print(f"{Colors.BLUE}  Remediation:{Colors.RESET} {remediation}", file=sys.stderr)


# ============================================================================
# Commands
# ============================================================================


def cmd_menu(args: argparse.Namespace, settings: SlamSettings) -> int:
    """Run the interactive main menu."""
    SlamApp.from_settings(settings).run()
    return 0


def cmd_new(args: argparse.Namespace, settings: SlamSettings) -> int:
    """Run the layout wizard only."""
    config = LayoutConfig.load(settings.config_path)
    builder = LayoutBuilder(Dmenu(settings.dmenu_path), Xrandr(settings.xrandr_path), config)

    layout = builder.create_layout()
    if layout is not None:
        print_success(f"Saved layout '{layout.name}' to {config.file}")
    return 0


def cmd_list(args: argparse.Namespace, settings: SlamSettings) -> int:
    """Print the layout catalog."""
    config = LayoutConfig.load(settings.config_path)

    if getattr(args, "json", False):
        data = LayoutCatalog(layouts=config.layouts).model_dump(mode="json", exclude_none=True)
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    if config.is_empty():
        print_warning(f"No layouts in {config.file}")
        return 0

    from .formatters import console, format_layout_table
    console.print(format_layout_table(config.layouts.values()))
    return 0


def cmd_apply(args: argparse.Namespace, settings: SlamSettings) -> int:
    """Apply a stored layout by name."""
    config = LayoutConfig.load(settings.config_path)

    if not config.apply(args.layout, Xrandr(settings.xrandr_path)):
        print_error_with_remediation(
            f"Layout '{args.layout}' not found",
            "Use 'slam list' to see available layouts",
        )
        return 1

    print_success(f"Applied layout '{args.layout}'")
    return 0


def cmd_remove(args: argparse.Namespace, settings: SlamSettings) -> int:
    """Remove a stored layout by name."""
    config = LayoutConfig.load(settings.config_path)

    if config.get(args.layout) is None:
        print_error_with_remediation(
            f"Layout '{args.layout}' not found",
            "Use 'slam list' to see available layouts",
        )
        return 1

    config.remove(args.layout)
    print_success(f"Removed layout '{args.layout}'")
    return 0


COMMAND_HANDLERS: Dict[Optional[str], Callable[[argparse.Namespace, SlamSettings], int]] = {
    None: cmd_menu,
    "new": cmd_new,
    "list": cmd_list,
    "apply": cmd_apply,
    "remove": cmd_remove,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slam",
        description="slam - Screen Layout Manager: build and apply xrandr layouts with dmenu",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"slam {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        metavar="FILE",
        help=f"Path to config.toml file (default: {default_config_path()})"
    )
    parser.add_argument(
        "--dmenu", "-e",
        type=Path,
        metavar="BIN",
        help="Path to dmenu executable"
    )
    parser.add_argument(
        "--xrandr",
        type=Path,
        metavar="BIN",
        help="Path to xrandr executable"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (INFO level)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level, includes verbose)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands (default: interactive menu)")

    subparsers.add_parser(
        "new",
        help="Create a layout with the dmenu wizard",
    )

    parser_list = subparsers.add_parser(
        "list",
        help="List stored layouts",
    )
    parser_list.add_argument(
        "--json",
        action="store_true",
        help="Output the catalog as JSON"
    )

    parser_apply = subparsers.add_parser(
        "apply",
        help="Apply a stored layout",
    )
    parser_apply.add_argument("layout", help="Layout name")

    parser_remove = subparsers.add_parser(
        "remove",
        help="Remove a stored layout",
    )
    parser_remove.add_argument("layout", help="Layout name")

    return parser


def cli_main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    init_logging(verbose=args.verbose, debug=args.debug)
    logger = get_global_logger()

    settings = SlamSettings(
        config_path=args.config or default_config_path(),
        dmenu_path=args.dmenu,
        xrandr_path=args.xrandr,
    )
    logger.debug(f"Settings: {settings}")

    handler = COMMAND_HANDLERS[args.command]
    try:
        return handler(args, settings)
    except EmptyPickerOutputError:
        logger.info("Menu dismissed, exiting")
        return 0
    except SlamError as e:
        logger.debug(f"Error details: {e.to_dict()}")
        if e.suggestion:
            print_error_with_remediation(e.message, e.suggestion)
        else:
            print_error(e.message)
        return 1


if __name__ == "__main__":
    sys.exit(cli_main())
