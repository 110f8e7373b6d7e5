"""
Import reconciliation for the origin file.

After the selection has been replaced, imports that only the extracted markup
used become unused in the origin file. The reconciler removes those bindings
(dropping whole statements that end up empty) and reports the removed
entries the new component does not already import.
"""

from __future__ import annotations

import logging
from typing import Collection, Iterable, List

from ..analysis.imports import find_statement, parse_imports, remove_binding
from ..analysis.models import ImportEntry, ImportStatement, ReconcileResult
from ..exceptions import InternalAnalysisFailure
from ..interfaces import AnalysisOracle
from .splicer import delete_lines

logger = logging.getLogger(__name__)


class ImportReconciler:
    """Removes newly unused import bindings from a document."""

    def __init__(self, oracle: AnalysisOracle):
        self.oracle = oracle

    def unused_names(self, document_text: str) -> List[str]:
        try:
            return [binding.name for binding in self.oracle.find_unused_import_bindings(document_text)]
        except SyntaxError as e:
            raise InternalAnalysisFailure(f"Failed to analyze imports: {e}") from e

    def reconcile(
        self,
        document_text: str,
        unit_imports: Iterable[ImportEntry],
        preserve: Collection[str] = (),
    ) -> ReconcileResult:
        """
        Remove unused import bindings from ``document_text``.

        Args:
            document_text: Origin document after the selection was replaced
            unit_imports: Imports already rendered into the new component
            preserve: Bindings left alone (already unused before extraction)

        Returns:
            ReconcileResult with the rewritten text, the removed
            (name, module) pairs and the removed entries missing from
            ``unit_imports``
        """
        rendered_unit_imports = {entry.render() for entry in unit_imports}
        result = ReconcileResult(document_text=document_text)
        text = document_text

        for name in self.unused_names(document_text):
            if name in preserve:
                logger.debug(f"Keeping import '{name}', it was unused before the extraction")
                continue

            # Earlier removals shift every later statement
            statement = find_statement(parse_imports(text), name)
            if statement is None:
                logger.warning(f"No import statement binds unused name '{name}'")
                continue

            entry = statement.entry_for(name)
            text = self.remove_import(text, statement, name)
            result.removed.append((name, statement.module))
            logger.info(f"Removed unused import '{name}' from {statement.module}")

            if entry.render() not in rendered_unit_imports and entry not in result.missing_imports:
                result.missing_imports.append(entry)

        result.document_text = text
        return result

    def remove_import(self, text: str, statement: ImportStatement, name: str) -> str:
        """Remove one binding, or the whole statement when it was the last one."""
        replacement = remove_binding(statement, name)
        if replacement is not None:
            return text[: statement.start_offset] + replacement + text[statement.end_offset :]

        lines = text.split("\n")
        statement_lines = "\n".join(lines[statement.start_line : statement.end_line + 1])
        if statement_lines.strip() == statement.text:
            return delete_lines(text, statement.start_line, statement.end_line)
        # Other code shares the statement's lines
        return text[: statement.start_offset] + text[statement.end_offset :].lstrip(" \t")
