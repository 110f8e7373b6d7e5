"""
Tests for free-variable partitioning.
"""

from unittest.mock import Mock

import pytest

from jsxsplitter.analysis.models import FreeIdentifier, ImportEntry, ImportKind
from jsxsplitter.exceptions import InternalAnalysisFailure
from jsxsplitter.refactoring.partitioner import FreeVariablePartitioner


class TestFreeVariablePartitioner:
    """Tests for FreeVariablePartitioner."""

    def test_partition_props_and_imports(self, oracle, generator, app_source):
        """Test that imported names are relocated and the rest become props."""
        skeleton = generator.render_skeleton("Labeled", "<Foo label={title}/>")
        partition = FreeVariablePartitioner(oracle).partition(skeleton, app_source)

        assert partition.props == ["title"]
        assert partition.imports == [ImportEntry("Foo", "'./foo'", ImportKind.NAMED)]

    def test_framework_binding_is_not_a_prop(self, oracle, generator, app_source):
        skeleton = generator.render_skeleton("Plain", "<div>{count}</div>")
        partition = FreeVariablePartitioner(oracle).partition(skeleton, app_source)

        assert partition.props == ["count"]
        assert partition.imports == []

    def test_locally_declared_names_are_ignored(self, oracle, generator):
        body = "<ul>{items.map(item => <li key={item.id}>{item.label}</li>)}</ul>"
        skeleton = generator.render_skeleton("List", body)
        partition = FreeVariablePartitioner(oracle).partition(skeleton, "")

        assert partition.props == ["items"]

    def test_default_and_namespace_imports(self, oracle, generator):
        original = (
            "import React from 'react';\n"
            "import Icon from './Icon';\n"
            "import * as styles from './styles';\n"
        )
        skeleton = generator.render_skeleton("Badge", "<Icon className={styles.badge}/>")
        partition = FreeVariablePartitioner(oracle).partition(skeleton, original)

        assert [(e.name, e.kind) for e in partition.imports] == [
            ("Icon", ImportKind.DEFAULT),
            ("styles", ImportKind.NAMESPACE),
        ]
        assert partition.props == []

    def test_free_names_are_deduplicated(self):
        oracle = Mock()
        oracle.find_free_identifiers.return_value = [
            FreeIdentifier("a", 1, ""),
            FreeIdentifier("b", 1, ""),
            FreeIdentifier("a", 2, ""),
        ]
        assert FreeVariablePartitioner(oracle).free_names("...") == ["a", "b"]

    def test_oracle_failure(self):
        """Test that a syntax error from the oracle is an internal failure."""
        oracle = Mock()
        oracle.find_free_identifiers.side_effect = SyntaxError("bad")

        with pytest.raises(InternalAnalysisFailure):
            FreeVariablePartitioner(oracle).partition("const = ;", "")
