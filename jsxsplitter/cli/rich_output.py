"""
Terminal output for the JSX Splitter CLI.

Renders what the split and inspect commands report: the extracted
component's header, the prop/import partition, generated source, diffs and
status lines. ``--no-rich`` switches to an uncoloured console with ASCII
tables so the output stays readable when piped.
"""

from typing import Dict, Iterable, Optional, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.syntax import Syntax
from rich.table import Table

# (identifier, kind, source)
PartitionRow = Tuple[str, str, str]

_STATUS_MARKS = {
    "success": ("✓", "green"),
    "warning": ("⚠", "yellow"),
    "error": ("✗", "red"),
    "info": ("ℹ", "blue"),
}


class RichOutputManager:
    """Console output for extraction results."""

    def __init__(self, use_rich: bool = True):
        self.use_rich = use_rich
        if use_rich:
            self.console = Console()
        else:
            self.console = Console(no_color=True, highlight=False, emoji=False)

    def status(self, kind: str, message: str) -> None:
        mark, colour = _STATUS_MARKS[kind]
        self.console.print(f"[{colour}]{mark}[/{colour}] {escape(message)}")

    def print_success(self, message: str) -> None:
        self.status("success", message)

    def print_warning(self, message: str) -> None:
        self.status("warning", message)

    def print_error(self, message: str) -> None:
        self.status("error", message)

    def print_info(self, message: str) -> None:
        self.status("info", message)

    def print_component_header(self, name: str, path: str, dry_run: bool = False) -> None:
        """Title block naming the component and where it goes."""
        subtitle = escape(path) + (" (dry run, nothing written)" if dry_run else "")
        if self.use_rich:
            self.console.print(
                Panel(f"[bold]{escape(name)}[/bold]\n[dim]{subtitle}[/dim]", title="Extracted")
            )
        else:
            self.console.print(f"Extracted {escape(name)}: {subtitle}")

    def print_partition(self, title: str, rows: Iterable[PartitionRow]) -> None:
        """Table of free identifiers and where each one comes from."""
        table = Table(
            title=title,
            box=box.ROUNDED if self.use_rich else box.ASCII,
            header_style="bold" if self.use_rich else "",
        )
        for column in ("Identifier", "Kind", "Source"):
            table.add_column(column)
        rows = list(rows)
        for row in rows:
            table.add_row(*row)
        if rows:
            self.console.print(table)
        else:
            self.console.print(f"{escape(title)}: no free identifiers")

    def print_source(self, code: str, title: str, language: str = "jsx") -> None:
        self.console.rule(escape(title))
        if self.use_rich:
            self.console.print(Syntax(code, language, theme="monokai", line_numbers=True))
        else:
            self.console.print(escape(code))

    def print_diffs(self, diffs: Dict[str, str]) -> None:
        for path, diff in diffs.items():
            self.print_source(diff or "(no changes)", title=path, language="diff")

    def ask(self, message: str) -> str:
        if self.use_rich:
            return Prompt.ask(message, console=self.console) or ""
        return input(f"{message}: ").strip()


class ConsoleNamePrompt:
    """Asks for the component name on the terminal."""

    def __init__(self, output: RichOutputManager):
        self.output = output

    def ask(self, prompt: str, placeholder: str) -> Optional[str]:
        try:
            answer = self.output.ask(f"{prompt} ({placeholder})")
        except (EOFError, KeyboardInterrupt):
            return None
        return answer.strip() or None


_output = RichOutputManager()


def set_rich_enabled(enabled: bool) -> None:
    """Switch the shared output manager between rich and plain output."""
    global _output
    _output = RichOutputManager(use_rich=enabled)


def get_rich_output() -> RichOutputManager:
    return _output
