"""
Free-variable partitioning.

Splits the identifiers a component body references without declaring into
props (supplied by the caller) and imports (relocated from the origin file).
"""

from __future__ import annotations

import logging
from typing import List

from ..analysis.imports import find_statement, parse_imports
from ..analysis.models import Partition
from ..exceptions import InternalAnalysisFailure
from ..interfaces import AnalysisOracle

logger = logging.getLogger(__name__)


class FreeVariablePartitioner:
    """Classifies the free identifiers of a component skeleton."""

    def __init__(self, oracle: AnalysisOracle):
        self.oracle = oracle

    def free_names(self, skeleton_source: str) -> List[str]:
        """Free identifier names of ``skeleton_source`` in first-seen order."""
        try:
            free = self.oracle.find_free_identifiers(skeleton_source)
        except SyntaxError as e:
            raise InternalAnalysisFailure(f"Failed to analyze the generated component: {e}") from e

        names: List[str] = []
        for identifier in free:
            if identifier.name not in names:
                names.append(identifier.name)
        return names

    def partition(self, skeleton_source: str, original_source: str) -> Partition:
        """
        Split the skeleton's free identifiers into props and imports.

        A name bound by an import statement of ``original_source`` becomes
        an import entry of the same kind; every other name becomes a prop.

        Raises:
            InternalAnalysisFailure: If the oracle cannot parse the skeleton
        """
        statements = parse_imports(original_source)
        result = Partition()

        for name in self.free_names(skeleton_source):
            statement = find_statement(statements, name)
            entry = statement.entry_for(name) if statement else None
            if entry is None:
                result.props.append(name)
            else:
                result.imports.append(entry)

        logger.debug(f"Partitioned free identifiers: props={result.props}, imports={result.import_names}")
        return result
