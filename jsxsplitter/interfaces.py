"""
Interfaces of the collaborators an extraction depends on.

The extraction core never talks to an editor, a prompt, a file system or a
parser directly; it is handed objects satisfying these protocols.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from .analysis.models import FreeIdentifier, Range, SyntaxCheck, TextEdit, UnusedImportBinding


class AnalysisOracle(Protocol):
    """Parse and lint capability for JSX source text."""

    def check_syntax(self, source: str) -> SyntaxCheck:
        """Report whether the source parses."""
        ...

    def find_free_identifiers(self, source: str) -> List[FreeIdentifier]:
        """Identifiers referenced but not declared. Raises SyntaxError on invalid input."""
        ...

    def find_unused_import_bindings(self, source: str) -> List[UnusedImportBinding]:
        """Import bindings never referenced. Raises SyntaxError on invalid input."""
        ...

    def find_declared_names(self, source: str) -> List[str]:
        """Names bound at the top level, imports included. Raises SyntaxError on invalid input."""
        ...

    def format_imports_block(self, source: str) -> str:
        """Return the source with its leading import block ordered."""
        ...


class Editor(Protocol):
    """The document being refactored and the current selection."""

    @property
    def file_path(self) -> Path:
        ...

    def get_text(self) -> str:
        ...

    def get_selection(self) -> Range:
        ...

    def get_selected_text(self) -> str:
        ...

    def apply_edits(self, edits: Iterable[TextEdit]) -> None:
        """Apply edits whose ranges all refer to the current text, atomically."""
        ...


class NamePrompt(Protocol):
    def ask(self, prompt: str, placeholder: str) -> Optional[str]:
        """Return the entered name, or None when the prompt was cancelled."""
        ...


class FileSystem(Protocol):
    """Workspace file access."""

    @property
    def workspace_root(self) -> Optional[Path]:
        ...

    def exists(self, path: Path) -> bool:
        ...

    def write_text(self, path: Path, text: str) -> None:
        ...
