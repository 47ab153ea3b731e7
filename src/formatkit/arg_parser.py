# src/formatkit/arg_parser.py
"""
Command-line argument parsing.

Usage:
    formatkit resolve
    formatkit resolve --config ./formatkit.json
    formatkit file-extensions --plugins ./plugins/json_plugin.py
    formatkit clear-cache
"""

import argparse
from dataclasses import dataclass, field
from typing import List, Optional

COMMANDS = ("resolve", "file-extensions", "clear-cache")


@dataclass
class CliArgs:
    """Parsed invocation arguments."""

    command: str = "resolve"
    config: Optional[str] = None
    # Explicit plugin selection; non-empty means the user is filtering plugins
    plugins: List[str] = field(default_factory=list)
    verbose: bool = False


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formatkit",
        description="Resolve and inspect formatting plugins",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    formatkit resolve                          # Plugins from ./formatkit.json
    formatkit resolve -c other.json            # Use a different config file
    formatkit resolve --plugins a.py b.py      # Only these plugins
    formatkit clear-cache                      # Delete the plugin cache
        """,
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to the configuration file (default: ./formatkit.json)",
    )
    parser.add_argument(
        "--plugins",
        nargs="+",
        default=[],
        metavar="LOCATOR",
        help="Plugins to use instead of the configuration file's list",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "command",
        choices=COMMANDS,
        help="Subcommand to run",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    args = create_parser().parse_args(argv)
    return CliArgs(
        command=args.command,
        config=args.config,
        plugins=list(args.plugins),
        verbose=args.verbose,
    )
