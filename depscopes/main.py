"""Main CLI entry point for depscopes.

Provides commands: wire, inspect
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from depscopes.cli.inspect import inspect_command
from depscopes.cli.wire import wire_command

logger = logging.getLogger("depscopes.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] [%(levelname)s] %(message)s",
        handlers=[handler],
    )


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Depscopes - compile-only and link-only dependency scopes for native builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    wire_parser = subparsers.add_parser(
        "wire",
        help="Apply dependency scopes to a build model and export the configuration graph",
    )
    wire_parser.add_argument(
        "model",
        help="Build model as a TOML/JSON file path or an inline TOML/JSON string",
    )
    wire_parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output graph file",
    )
    wire_parser.add_argument(
        "-f",
        "--format",
        choices=["json", "dot"],
        default="json",
        help="Output format (default: json)",
    )
    wire_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Optional scopes configuration (TOML/JSON path or inline string). "
            "Overrides the [scopes] table of the model."
        ),
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show a configuration's flags, extends hierarchy and resolved dependencies",
    )
    inspect_parser.add_argument(
        "model",
        help="Build model as a TOML/JSON file path or an inline TOML/JSON string",
    )
    inspect_parser.add_argument(
        "-p",
        "--project",
        required=True,
        help="Project name",
    )
    inspect_parser.add_argument(
        "-n",
        "--configuration",
        required=True,
        help="Configuration name, e.g. nativeLinkDebug",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command == "wire":
        return wire_command(args)
    elif args.command == "inspect":
        return inspect_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
