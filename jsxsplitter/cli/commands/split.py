"""
Extraction commands for JSX Splitter CLI.

This module contains command handlers for:
- Extracting a selection into a new component file (split)
- Inspecting how a selection would be extracted (inspect)
"""

import re
import sys
from pathlib import Path
from typing import Any

from jsxsplitter.analysis.models import Position, Range
from jsxsplitter.api import InspectionResult, JSXSplitter, SplitResult
from jsxsplitter.cli.rich_output import ConsoleNamePrompt, RichOutputManager, get_rich_output
from jsxsplitter.refactoring.splicer import line_span

_POSITION_RE = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")
_LINES_RE = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+))?\s*$")


def parse_position(value: str) -> Position:
    """Parse a 1-based ``LINE:COLUMN`` argument into a zero-based position."""
    match = _POSITION_RE.match(value)
    if not match or int(match.group(1)) < 1 or int(match.group(2)) < 1:
        raise ValueError(f"Invalid position '{value}', expected LINE:COLUMN (1-based)")
    return Position(int(match.group(1)) - 1, int(match.group(2)) - 1)


def selection_from_args(args: Any, text: str) -> Range:
    """Build the zero-based selection range from --start/--end or --lines."""
    if getattr(args, "lines", None):
        match = _LINES_RE.match(args.lines)
        if not match:
            raise ValueError(f"Invalid line range '{args.lines}', expected FIRST-LAST (1-based)")
        first = int(match.group(1))
        last = int(match.group(2) or first)
        if first < 1 or last < first:
            raise ValueError(f"Invalid line range '{args.lines}'")
        return line_span(text, first - 1, last - 1)

    if not (getattr(args, "start", None) and getattr(args, "end", None)):
        raise ValueError("Give either --lines or both --start and --end")
    start = parse_position(args.start)
    end = parse_position(args.end)
    if end < start:
        raise ValueError("Selection end is before its start")
    return Range(start, end)


def _read_selection(args: Any) -> Range:
    path = Path(args.file)
    if not path.is_file():
        print(f"Error: File does not exist: {path}", file=sys.stderr)
        sys.exit(1)
    try:
        return selection_from_args(args, path.read_text(encoding="utf-8"))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


def format_split_result(result: SplitResult, output: RichOutputManager, show_diff: bool) -> None:
    """Print an extraction result."""
    if not result.success:
        output.print_error("Extraction failed")
        for error in result.errors:
            output.print_error(error)
        return

    component = result.component
    dry_run = result.metadata.get("dry_run", False)
    output.print_component_header(component.name, str(component.path), dry_run=dry_run)

    rows = [(prop, "prop", "caller") for prop in component.props]
    rows += [(entry.name, f"{entry.kind.value} import", entry.module) for entry in component.imports]
    rows += [
        (entry.name, f"{entry.kind.value} import (added)", entry.module)
        for entry in component.missing_imports
    ]
    output.print_partition("Partition", rows)

    for warning in result.warnings:
        output.print_warning(warning)

    if show_diff:
        output.print_diffs(result.diffs)
    else:
        output.print_source(component.source, title=component.path.name)

    labels = {"create": "Created", "modify": "Updated"}
    for change in result.changes_made:
        if dry_run:
            output.print_info(f"Dry run: would {change['type']} {change['path']}")
        else:
            output.print_success(f"{labels.get(change['type'], change['type'])} {change['path']}")


def format_inspection_result(result: InspectionResult, output: RichOutputManager) -> None:
    if not result.success:
        for error in result.errors:
            output.print_error(error)
        return

    data = result.data
    rows = [(prop, "prop", "caller") for prop in data["props"]]
    rows += [(entry["name"], f"{entry['kind']} import", entry["module"]) for entry in data["imports"]]
    output.print_partition("Free identifiers", rows)

    if data["wrapped"]:
        output.print_info("Selection has several roots and will be wrapped in <>...</>")
    output.print_source(data["reference"], title="Reference")


def cmd_split(args, splitter: JSXSplitter) -> None:
    """Handle split command."""
    from jsxsplitter.cli_entry import _is_machine_readable, _print_json_to_stdout

    selection = _read_selection(args)
    output = get_rich_output()

    prompt = None
    if not args.name and not _is_machine_readable(args):
        prompt = ConsoleNamePrompt(output)

    result = splitter.split_component(
        args.file,
        selection,
        name=args.name,
        prompt=prompt,
        dry_run=args.dry_run,
    )

    if _is_machine_readable(args):
        _print_json_to_stdout(args, result.to_dict())
    else:
        format_split_result(result, output, show_diff=args.diff)

    if not result.success:
        sys.exit(1)


def cmd_inspect(args, splitter: JSXSplitter) -> None:
    """Handle inspect command."""
    from jsxsplitter.cli_entry import _is_machine_readable, _print_json_to_stdout

    selection = _read_selection(args)
    result = splitter.inspect_selection(args.file, selection)

    if _is_machine_readable(args):
        _print_json_to_stdout(args, result.to_dict())
    else:
        format_inspection_result(result, get_rich_output())

    if not result.success:
        sys.exit(1)
