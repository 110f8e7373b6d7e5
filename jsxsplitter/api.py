"""
Main API interface for JSX Splitter

Provides a unified facade for extracting components from files on disk.
The facade loads configuration, builds the oracle and the local
collaborators, runs the extraction pipeline and reports the outcome as a
structured result instead of raising.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .analysis.models import NewComponent, Range
from .analysis.oracle import TreeSitterOracle
from .config import SplitterConfig
from .exceptions import SplitterError
from .interfaces import AnalysisOracle, NamePrompt
from .refactoring.code_generator import ComponentCodeGenerator
from .refactoring.extractor import ComponentExtractor
from .refactoring.partitioner import FreeVariablePartitioner
from .refactoring.selection import SelectionValidator
from .workspace import BufferEditor, FixedNamePrompt, LocalFileSystem, unified_diff

logger = logging.getLogger(__name__)

WORKSPACE_MARKERS = [
    "package.json",
    ".git",
    "node_modules",
    "jsconfig.json",
    "tsconfig.json",
    "yarn.lock",
    "package-lock.json",
    "pnpm-lock.yaml",
]

INSPECTION_UNIT_NAME = "ExtractedComponent"


@dataclass
class SplitResult:
    """Standardized extraction result structure."""

    success: bool
    component: Optional[NewComponent] = None
    changes_made: List[Dict[str, Any]] = field(default_factory=list)
    diffs: Dict[str, str] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        component = None
        if self.component is not None:
            component = {
                "name": self.component.name,
                "path": str(self.component.path),
                "props": list(self.component.props),
                "imports": [entry.render() for entry in self.component.imports],
                "missing_imports": [entry.render() for entry in self.component.missing_imports],
                "reference": self.component.reference,
                "source": self.component.source,
            }
        return {
            "success": self.success,
            "component": component,
            "changes_made": self.changes_made,
            "diffs": self.diffs,
            "errors": self.errors,
            "warnings": self.warnings,
            "metadata": self.metadata,
        }


@dataclass
class InspectionResult:
    """Standardized selection inspection result structure."""

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "metadata": self.metadata,
        }


class JSXSplitter:
    """
    Main API class for JSX Splitter.

    Builds one oracle and one code generator from the configuration and
    reuses them for every extraction.
    """

    def __init__(
        self,
        config: Optional[SplitterConfig] = None,
        oracle: Optional[AnalysisOracle] = None,
    ):
        """
        Initialize JSX Splitter with optional configuration.

        Args:
            config: Optional configuration object. If None, uses default configuration.
            oracle: Optional analysis oracle. If None, a tree-sitter oracle is built
                from the analysis settings.
        """
        self.config = config or SplitterConfig.default()
        self.oracle = oracle or TreeSitterOracle(
            framework_name=self.config.generation.framework_name,
            extra_globals=self.config.analysis.extra_globals,
            include_browser_globals=self.config.analysis.include_browser_globals,
        )
        self.generator = ComponentCodeGenerator.from_config(self.oracle, self.config)

    def split_component(
        self,
        file_path: Union[str, Path],
        selection: Range,
        name: Optional[str] = None,
        prompt: Optional[NamePrompt] = None,
        dry_run: bool = False,
        workspace_root: Optional[Path] = None,
    ) -> SplitResult:
        """
        Extract the selected markup of a file into a new component file.

        Args:
            file_path: File to extract from
            selection: Zero-based range of the markup to extract
            name: Component name, used when no prompt is given
            prompt: Name prompt to ask instead of using ``name``
            dry_run: If True, neither file is written
            workspace_root: Workspace root; found from project markers when omitted,
                falling back to the file's own directory, so a file opened
                outside any project still gets a workspace
        """
        file_path = Path(file_path)
        if not file_path.exists():
            return SplitResult(False, errors=[f"File does not exist: {file_path}"])

        logger.info(f"Extracting component from {file_path} at {selection}")
        editor = BufferEditor.open(file_path, selection)
        original_text = editor.get_text()
        filesystem = LocalFileSystem(
            workspace_root or self._find_workspace_root(file_path), dry_run=dry_run
        )
        extractor = ComponentExtractor(
            self.oracle,
            editor,
            prompt or FixedNamePrompt(name),
            filesystem,
            generator=self.generator,
            prompt_text=self.config.prompt.prompt,
            placeholder=self.config.prompt.placeholder,
        )

        metadata = {
            "file_path": str(file_path),
            "selection": str(selection),
            "dry_run": dry_run,
            "workspace_root": str(filesystem.workspace_root) if filesystem.workspace_root else None,
        }

        try:
            component = extractor.extract()
        except SplitterError as e:
            logger.warning(f"Extraction failed: {e}")
            return SplitResult(
                False, errors=[str(e)], metadata={**metadata, "error_type": type(e).__name__}
            )

        if not dry_run:
            try:
                editor.save()
            except OSError as e:
                logger.error(f"Failed to save {file_path}: {e}")
                return SplitResult(
                    False,
                    component=component,
                    errors=[f"Failed to write {file_path}: {e}"],
                    metadata=metadata,
                )

        warnings = []
        if component.missing_imports:
            rendered = ", ".join(entry.render() for entry in component.missing_imports)
            warnings.append(f"Added imports the component was missing: {rendered}")

        return SplitResult(
            True,
            component=component,
            changes_made=[
                {"type": "create", "path": str(component.path)},
                {"type": "modify", "path": str(file_path), "edits": editor.edit_count},
            ],
            diffs={
                str(file_path): unified_diff(original_text, editor.get_text(), file_path.name),
                str(component.path): unified_diff("", component.source, component.path.name),
            },
            warnings=warnings,
            metadata=metadata,
        )

    def inspect_selection(
        self, file_path: Union[str, Path], selection: Range
    ) -> InspectionResult:
        """
        Validate a selection and report how its free identifiers would be split.

        Nothing is written.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            return InspectionResult(False, errors=[f"File does not exist: {file_path}"])

        editor = BufferEditor.open(file_path, selection)
        document_text = editor.get_text()
        selected_text = editor.get_selected_text()
        validator = SelectionValidator(self.oracle, indent_unit=self.generator.indent_unit)
        partitioner = FreeVariablePartitioner(self.oracle)

        try:
            fragment = validator.validate(selected_text, document_text, selection)
            skeleton = self.generator.render_skeleton(INSPECTION_UNIT_NAME, fragment.body)
            partition = partitioner.partition(skeleton, document_text)
        except SplitterError as e:
            logger.warning(f"Inspection failed: {e}")
            return InspectionResult(
                False,
                errors=[str(e)],
                metadata={"file_path": str(file_path), "error_type": type(e).__name__},
            )

        data = {
            "props": list(partition.props),
            "imports": [
                {"name": entry.name, "module": entry.module, "kind": entry.kind.value}
                for entry in partition.imports
            ],
            "wrapped": fragment.wrapped,
            "reference": self.generator.render_reference(
                INSPECTION_UNIT_NAME, partition.props, selected_text
            ),
        }
        return InspectionResult(
            True,
            data=data,
            metadata={"file_path": str(file_path), "selection": str(selection)},
        )

    def _find_workspace_root(self, file_path: Path) -> Path:
        """
        Auto-determine the workspace root by looking for common project markers.

        Without a marker within five levels the file's directory is the root.
        NoWorkspace is therefore only raised for file systems built without one.
        """
        current_dir = file_path.resolve().parent

        # Look for project markers up to 5 levels up
        for _ in range(5):
            for marker in WORKSPACE_MARKERS:
                if (current_dir / marker).exists():
                    return current_dir

            parent_dir = current_dir.parent
            if parent_dir == current_dir:
                break
            current_dir = parent_dir

        return file_path.resolve().parent
