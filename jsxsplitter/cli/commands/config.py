"""
Configuration commands for JSX Splitter CLI.

This module contains command handlers for:
- Configuration management (show, init, validate)
"""

import sys

from jsxsplitter.config import ConfigurationError, SplitterConfig


def cmd_config(args) -> None:
    """Handle config command."""
    from jsxsplitter.cli_entry import _is_machine_readable, _print_json_to_stdout

    if args.config_action == "show":
        try:
            config = SplitterConfig.load(getattr(args, "config", None))
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if _is_machine_readable(args):
            _print_json_to_stdout(args, config.to_dict())
            return
        print("Current JSX Splitter Configuration:")
        print(config.get_config_summary())

    elif args.config_action == "init":
        config = SplitterConfig.default()
        try:
            config.to_file(args.path, args.format)
        except ConfigurationError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if _is_machine_readable(args):
            _print_json_to_stdout(args, {"success": True, "path": args.path})
            return
        print(f"Default configuration file created at {args.path}")
        print("Edit the file to customize your JSX Splitter settings.")

    elif args.config_action == "validate":
        try:
            SplitterConfig.load(args.config_file, use_env=False, validate=True)
        except ConfigurationError as e:
            if _is_machine_readable(args):
                _print_json_to_stdout(args, {"success": False, "error": str(e)})
            print(f"Error: Configuration file is invalid: {e}", file=sys.stderr)
            sys.exit(1)

        if _is_machine_readable(args):
            _print_json_to_stdout(args, {"success": True, "path": args.config_file})
            return
        print(f"Configuration file {args.config_file} is valid")
