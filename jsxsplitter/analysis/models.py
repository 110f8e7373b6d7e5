"""
Core data models for JSX Splitter.

This module provides the records shared between the analysis oracle and the
refactoring pipeline: text positions and ranges, diagnostics reported by the
oracle, parsed import statements and the import entries relocated into a new
component.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based (line, character) position in a text buffer."""

    line: int
    character: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.character + 1}"


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    @classmethod
    def from_coordinates(
        cls, start_line: int, start_character: int, end_line: int, end_character: int
    ) -> "Range":
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class TextEdit:
    """Replace the text covered by ``range`` with ``new_text``."""

    range: Range
    new_text: str


@dataclass(frozen=True)
class SyntaxCheck:
    ok: bool
    message: str = ""
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass(frozen=True)
class FreeIdentifier:
    """An identifier referenced but not declared in the analysed source."""

    name: str
    line: int
    source_line: str


@dataclass(frozen=True)
class UnusedImportBinding:
    """An import-bound name that is never referenced."""

    name: str
    line: int
    message: str


class ImportKind(Enum):
    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


def normalize_module_quotes(module: str) -> str:
    """Turn a double-quoted module string into a single-quoted one."""
    module = module.strip()
    if len(module) >= 2 and module[0] == '"' and module[-1] == '"':
        return f"'{module[1:-1]}'"
    return module


@dataclass(frozen=True)
class ImportEntry:
    """
    A single binding imported from a module.

    ``name`` is the local binding. ``imported`` is the exported name for
    aliased named imports (``import {a as b}``) and None otherwise.
    """

    name: str
    module: str
    kind: ImportKind
    imported: Optional[str] = None

    def render(self) -> str:
        if self.kind == ImportKind.DEFAULT:
            clause = self.name
        elif self.kind == ImportKind.NAMESPACE:
            clause = f"* as {self.name}"
        elif self.imported and self.imported != self.name:
            clause = f"{{{self.imported} as {self.name}}}"
        else:
            clause = f"{{{self.name}}}"
        return f"import {clause} from {normalize_module_quotes(self.module)};"


@dataclass(frozen=True)
class NamedBinding:
    imported: str
    local: str


@dataclass
class ImportStatement:
    """A parsed ``import ... from ...`` statement."""

    module: str
    start_line: int
    end_line: int
    text: str
    start_offset: int = 0
    end_offset: int = 0
    default: Optional[str] = None
    namespace: Optional[str] = None
    named: List[NamedBinding] = field(default_factory=list)

    @property
    def bound_names(self) -> List[str]:
        names = []
        if self.default:
            names.append(self.default)
        if self.namespace:
            names.append(self.namespace)
        names.extend(b.local for b in self.named)
        return names

    @property
    def is_side_effect_only(self) -> bool:
        return not self.bound_names

    def entry_for(self, name: str) -> Optional[ImportEntry]:
        """Build the import entry that brings ``name`` into scope, if any."""
        if self.default == name:
            return ImportEntry(name, self.module, ImportKind.DEFAULT)
        if self.namespace == name:
            return ImportEntry(name, self.module, ImportKind.NAMESPACE)
        for binding in self.named:
            if binding.local == name:
                imported = binding.imported if binding.imported != name else None
                return ImportEntry(name, self.module, ImportKind.NAMED, imported)
        return None


@dataclass(frozen=True)
class NormalizedFragment:
    """A validated selection and the markup used as the component body."""

    text: str
    body: str
    wrapped: bool = False


@dataclass
class Partition:
    """Free identifiers split into caller-supplied props and relocated imports."""

    props: List[str] = field(default_factory=list)
    imports: List[ImportEntry] = field(default_factory=list)

    @property
    def import_names(self) -> List[str]:
        return [entry.name for entry in self.imports]


@dataclass
class NewComponent:
    """The component produced by an extraction."""

    name: str
    path: Path
    source: str
    reference: str
    props: List[str] = field(default_factory=list)
    imports: List[ImportEntry] = field(default_factory=list)
    missing_imports: List[ImportEntry] = field(default_factory=list)


@dataclass
class ReconcileResult:
    document_text: str
    missing_imports: List[ImportEntry] = field(default_factory=list)
    removed: List[Tuple[str, str]] = field(default_factory=list)
