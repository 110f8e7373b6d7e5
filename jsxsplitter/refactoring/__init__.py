"""
Refactoring module for JSX Splitter

Provides the Extract Component pipeline and its stages:
- Selection validation and fragment normalization
- Free-variable partitioning into props and imports
- Component and reference code generation
- Range-accurate text splicing
- Import reconciliation of the origin file
"""

from .code_generator import ComponentCodeGenerator
from .extractor import ComponentExtractor, component_path, validate_component_name
from .import_reconciler import ImportReconciler
from .partitioner import FreeVariablePartitioner
from .selection import SelectionValidator

__all__ = [
    "ComponentCodeGenerator",
    "ComponentExtractor",
    "FreeVariablePartitioner",
    "ImportReconciler",
    "SelectionValidator",
    "component_path",
    "validate_component_name",
]
