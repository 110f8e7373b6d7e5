"""
Extract Component pipeline.

Drives one extraction from the current selection to a new component file:

1. validate the selection
2. ask for a name and check it (pattern, not already used, collision, workspace)
3. partition the free identifiers and render the component and its reference
4. replace the selection and import the new component in the origin file
5. remove the imports the origin file no longer uses
6. add any imports the component still lacks and write it once

A failure at any stage raises a SplitterError and stops the pipeline. Edits
already applied to the origin document are not rolled back.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from ..analysis.models import NewComponent, Position, Range, TextEdit
from ..exceptions import (
    EmptySelection,
    FileWriteFailure,
    InternalAnalysisFailure,
    InvalidName,
    NameCollision,
    NoWorkspace,
)
from ..interfaces import AnalysisOracle, Editor, FileSystem, NamePrompt
from .code_generator import ComponentCodeGenerator
from .import_reconciler import ImportReconciler
from .partitioner import FreeVariablePartitioner
from .selection import SelectionValidator
from .splicer import full_range, import_insertion_line, line_separator, offset_to_position

logger = logging.getLogger(__name__)

COMPONENT_NAME_PATTERN = r"^[A-Z][0-9a-zA-Z_$]*$"
COMPONENT_NAME_RE = re.compile(COMPONENT_NAME_PATTERN)

DEFAULT_PROMPT = "Choose a name for the new component"
DEFAULT_PLACEHOLDER = "New component name..."


def validate_component_name(name: Optional[str]) -> str:
    """
    Return the stripped component name.

    Raises:
        InvalidName: If the name is missing or does not match the pattern
    """
    if name is None or not name.strip():
        raise InvalidName("No component name given")
    name = name.strip()
    if not COMPONENT_NAME_RE.match(name):
        raise InvalidName(
            f"Invalid component name '{name}': it must match {COMPONENT_NAME_PATTERN} "
            "(start with an upper-case letter, then letters, digits, '_' or '$')"
        )
    return name


def component_path(origin: Path, name: str) -> Path:
    """Sibling of ``origin`` named after the component, with the same extension."""
    return origin.parent / f"{name}{origin.suffix or '.js'}"


class ComponentExtractor:
    """
    Extracts the selected markup of an editor into a new component file.

    Args:
        oracle: Analysis oracle
        editor: Document and selection to extract from
        prompt: Source of the component name
        filesystem: Workspace file access
        generator: Code generator, built with defaults when omitted
        prompt_text: Text shown when asking for the name
        placeholder: Placeholder shown in the name prompt
    """

    def __init__(
        self,
        oracle: AnalysisOracle,
        editor: Editor,
        prompt: NamePrompt,
        filesystem: FileSystem,
        generator: Optional[ComponentCodeGenerator] = None,
        prompt_text: str = DEFAULT_PROMPT,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ):
        self.oracle = oracle
        self.editor = editor
        self.prompt = prompt
        self.filesystem = filesystem
        self.generator = generator or ComponentCodeGenerator(oracle)
        self.prompt_text = prompt_text
        self.placeholder = placeholder

        self.validator = SelectionValidator(oracle, indent_unit=self.generator.indent_unit)
        self.partitioner = FreeVariablePartitioner(oracle)
        self.reconciler = ImportReconciler(oracle)

    def extract(self) -> NewComponent:
        """
        Run the extraction.

        Returns:
            The written component

        Raises:
            SplitterError: The subclass naming the stage that failed
        """
        selected_text = self.editor.get_selected_text()
        if not selected_text or not selected_text.strip():
            raise EmptySelection()

        selection = self.editor.get_selection()
        document_text = self.editor.get_text()
        fragment = self.validator.validate(selected_text, document_text, selection)

        name = self._ask_name()
        self._check_name_unused(name, fragment.body, document_text)
        path = self._check_target(name)

        skeleton = self.generator.render_skeleton(name, fragment.body)
        partition = self.partitioner.partition(skeleton, document_text)
        source = self.generator.render(name, fragment.body, partition.props, partition.imports)
        reference = self.generator.render_reference(
            name, partition.props, selected_text, eol=line_separator(document_text)
        )

        already_unused = set(self.reconciler.unused_names(document_text))

        self._replace_selection(selection, reference)
        self._insert_component_import(name)

        result = self.reconciler.reconcile(self.editor.get_text(), partition.imports, already_unused)
        if result.removed:
            current = self.editor.get_text()
            self.editor.apply_edits([TextEdit(full_range(current), result.document_text)])

        source = self.generator.merge_missing_imports(source, result.missing_imports)
        self._write(path, source)

        logger.info(
            f"Extracted {name} to {path} ({len(partition.props)} props, "
            f"{len(partition.imports)} imports)"
        )
        return NewComponent(
            name=name,
            path=path,
            source=source,
            reference=reference,
            props=list(partition.props),
            imports=list(partition.imports),
            missing_imports=list(result.missing_imports),
        )

    def _ask_name(self) -> str:
        return validate_component_name(self.prompt.ask(self.prompt_text, self.placeholder))

    def _check_name_unused(self, name: str, fragment_body: str, document_text: str) -> None:
        """
        Reject a name the fragment references or the origin file already binds.

        Either way the new declaration would capture the existing binding.
        """
        referenced = self.partitioner.free_names(f"(\n{fragment_body}\n);")
        try:
            declared = self.oracle.find_declared_names(document_text)
        except SyntaxError as e:
            raise InternalAnalysisFailure(f"Failed to analyze {self.editor.file_path}: {e}") from e

        if name in referenced or name in declared:
            raise InvalidName(
                f"'{name}' is already used in {Path(self.editor.file_path).name}, "
                "choose another component name"
            )

    def _check_target(self, name: str) -> Path:
        path = component_path(Path(self.editor.file_path), name)
        if self.filesystem.exists(path):
            raise NameCollision(path.name)
        if self.filesystem.workspace_root is None:
            raise NoWorkspace()
        return path

    def _replace_selection(self, selection: Range, reference: str) -> None:
        self.editor.apply_edits([TextEdit(selection, reference)])
        logger.debug(f"Replaced selection {selection} with reference")

    def _insert_component_import(self, name: str) -> None:
        # Measured on the buffer as it is after the replacement
        current = self.editor.get_text()
        eol = line_separator(current)
        statement = self.generator.import_line(name, eol=eol)
        line = import_insertion_line(current)
        lines = current.split("\n")
        if line >= len(lines):
            # Past the last line: append on a line of its own
            end = offset_to_position(current, len(current))
            separator = "" if not current or current.endswith("\n") else eol
            edit = TextEdit(Range(end, end), separator + statement)
        else:
            start = Position(line, 0)
            edit = TextEdit(Range(start, start), statement)
        self.editor.apply_edits([edit])
        logger.debug(f"Inserted import of {name} at line {line + 1}")

    def _write(self, path: Path, source: str) -> None:
        try:
            self.filesystem.write_text(path, source)
        except OSError as e:
            raise FileWriteFailure(f"Failed to write {path}: {e}") from e
