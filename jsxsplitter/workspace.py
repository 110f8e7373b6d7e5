"""Local collaborators for running extractions on files on disk.

Provides an in-memory editor buffer over a file, a workspace file system
that can run dry, a fixed name prompt and unified diff rendering.
"""
import difflib
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from .analysis.models import Range, TextEdit
from .refactoring.splicer import apply_edits, get_text_in_range

logger = logging.getLogger(__name__)


class BufferEditor:
    """Editor over an in-memory copy of a file."""

    def __init__(self, file_path: Path, text: str, selection: Range):
        """Initialize the buffer.

        Args:
            file_path: Path of the document being edited
            text: Current document text
            selection: Selected range (zero-based positions)
        """
        self._file_path = Path(file_path)
        self._text = text
        self._selection = selection
        self.edit_count = 0

    @classmethod
    def open(cls, file_path: Path, selection: Range) -> "BufferEditor":
        path = Path(file_path)
        return cls(path, path.read_text(encoding="utf-8"), selection)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get_text(self) -> str:
        return self._text

    def get_selection(self) -> Range:
        return self._selection

    def get_selected_text(self) -> str:
        return get_text_in_range(self._text, self._selection)

    def apply_edits(self, edits: Iterable[TextEdit]) -> None:
        edits = list(edits)
        self._text = apply_edits(self._text, edits)
        self.edit_count += len(edits)

    def save(self) -> None:
        self._file_path.write_text(self._text, encoding="utf-8")


class LocalFileSystem:
    """Workspace file access, optionally without touching the disk."""

    def __init__(self, workspace_root: Optional[Path], dry_run: bool = False):
        """Initialize the file system.

        Args:
            workspace_root: Writable workspace root, None when there is none
            dry_run: If True, writes are recorded but not performed
        """
        self._workspace_root = Path(workspace_root) if workspace_root is not None else None
        self.dry_run = dry_run
        self.written: Dict[Path, str] = {}

    @property
    def workspace_root(self) -> Optional[Path]:
        return self._workspace_root

    def exists(self, path: Path) -> bool:
        return Path(path) in self.written or Path(path).exists()

    def write_text(self, path: Path, text: str) -> None:
        path = Path(path)
        self.written[path] = text
        if self.dry_run:
            logger.info(f"Dry run: not writing {path}")
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.debug(f"Wrote {path}")


class FixedNamePrompt:
    """Name prompt that answers with a name given up front."""

    def __init__(self, name: Optional[str]):
        self.name = name

    def ask(self, prompt: str, placeholder: str) -> Optional[str]:
        return self.name


def unified_diff(old: str, new: str, file_label: str) -> str:
    """Render a unified diff between two versions of a file."""
    diff = difflib.unified_diff(
        old.splitlines(True),
        new.splitlines(True),
        fromfile=f"a/{file_label}",
        tofile=f"b/{file_label}",
    )
    return "".join(diff)
