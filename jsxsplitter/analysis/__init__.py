"""
Analysis module for JSX Splitter

Provides the static-analysis side of an extraction:
- Core data models shared with the refactoring pipeline
- Import statement parsing shared by every component that reads imports
- Lexical scope analysis over tree-sitter syntax trees
- The tree-sitter backed analysis oracle
"""

from .models import (
    FreeIdentifier,
    ImportEntry,
    ImportKind,
    ImportStatement,
    NamedBinding,
    NewComponent,
    NormalizedFragment,
    Partition,
    Position,
    Range,
    ReconcileResult,
    SyntaxCheck,
    TextEdit,
    UnusedImportBinding,
)
from .oracle import TreeSitterOracle

__all__ = [
    "FreeIdentifier",
    "ImportEntry",
    "ImportKind",
    "ImportStatement",
    "NamedBinding",
    "NewComponent",
    "NormalizedFragment",
    "Partition",
    "Position",
    "Range",
    "ReconcileResult",
    "SyntaxCheck",
    "TextEdit",
    "TreeSitterOracle",
    "UnusedImportBinding",
]
