"""
Command-line interface for JSX Splitter

Provides CLI access to component extraction: extracting a selection of a
JSX file into a new component file, inspecting a selection without changing
anything, and managing configuration files.
"""

import argparse
import json
import sys
import logging
from typing import Any, List, Optional, TextIO

from jsxsplitter import __version__
from jsxsplitter.api import JSXSplitter
from jsxsplitter.config import ConfigurationError, load_config
from jsxsplitter.cli.rich_output import set_rich_enabled
from jsxsplitter.cli.commands.config import cmd_config
from jsxsplitter.cli.commands.split import cmd_inspect, cmd_split


def _is_machine_readable(args: Any) -> bool:
    return bool(getattr(args, "machine_readable", False))


def _json_stdout(args: Any) -> TextIO:
    """
    When --machine-readable is enabled, main() redirects sys.stdout -> sys.stderr
    to prevent accidental non-JSON output. This function returns the original stdout.
    """
    return getattr(args, "_json_stdout", sys.__stdout__)


def _print_json_to_stdout(args: Any, payload: Any) -> None:
    """
    Always print JSON to the original stdout in machine-readable mode.
    """
    s = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    print(s, file=_json_stdout(args))


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="JSX file to extract from")
    parser.add_argument("--start", help="Selection start as LINE:COLUMN (1-based)")
    parser.add_argument("--end", help="Selection end as LINE:COLUMN (1-based, exclusive)")
    parser.add_argument("--lines", help="Select whole lines FIRST-LAST (1-based, inclusive)")


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="jsxsplitter",
        description="JSX Splitter - Extract selected JSX markup into a new component file",
        epilog='Use "jsxsplitter <command> --help" for detailed command help.',
    )

    # Global options
    parser.add_argument("--config", "-c", type=str, help="Path to configuration file")

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output and debug logging",
    )

    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Disable rich terminal output (use plain text)",
    )

    parser.add_argument(
        "--machine-readable",
        action="store_true",
        help="Output in machine-readable format (JSON)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Split command
    split_parser = subparsers.add_parser(
        "split", help="Extract the selected markup into a new component file"
    )
    _add_selection_arguments(split_parser)
    split_parser.add_argument("--name", "-n", help="Component name (prompted for when omitted)")
    split_parser.add_argument(
        "--dry-run", action="store_true", help="Show the result without writing any file"
    )
    split_parser.add_argument(
        "--diff", action="store_true", help="Show unified diffs of both files"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a selection and show its props and imports"
    )
    _add_selection_arguments(inspect_parser)

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_action", help="Config actions")

    config_subparsers.add_parser("show", help="Show current configuration")

    init_parser = config_subparsers.add_parser("init", help="Create a default configuration file")
    init_parser.add_argument(
        "--path", default="jsxsplitter.json", help="Configuration file path"
    )
    init_parser.add_argument(
        "--format", choices=["json", "yaml"], default="json", help="Configuration file format"
    )

    validate_parser = config_subparsers.add_parser("validate", help="Validate a configuration file")
    validate_parser.add_argument("config_file", help="Configuration file to validate")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.command == "config" and not args.config_action:
        parser.parse_args(["config", "--help"])
        return

    # JSON goes to the original stdout, everything else to stderr
    if _is_machine_readable(args):
        args._json_stdout = sys.stdout
        sys.stdout = sys.stderr

    try:
        setup_logging(getattr(args, "verbose", False))

        use_rich = not getattr(args, "no_rich", False) and not _is_machine_readable(args)
        set_rich_enabled(use_rich)

        if args.command == "config":
            cmd_config(args)
            return

        try:
            config = load_config(getattr(args, "config", None))
        except ConfigurationError as e:
            if _is_machine_readable(args):
                _print_json_to_stdout(args, {"success": False, "error": str(e)})
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        splitter = JSXSplitter(config)

        if args.command == "split":
            cmd_split(args, splitter)
        elif args.command == "inspect":
            cmd_inspect(args, splitter)

    except KeyboardInterrupt:
        if _is_machine_readable(args):
            _print_json_to_stdout(args, {"success": False, "error": "cancelled_by_user"})
        print("\nOperation cancelled by user", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        if _is_machine_readable(args):
            _print_json_to_stdout(
                args,
                {"success": False, "error": str(e), "command": getattr(args, "command", None)},
            )
        print(f"Error: {e}", file=sys.stderr)
        if getattr(args, "verbose", False):
            import traceback

            traceback.print_exc()
        sys.exit(1)
    finally:
        if _is_machine_readable(args):
            sys.stdout = args._json_stdout


if __name__ == "__main__":
    main()
