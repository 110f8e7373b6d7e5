"""
Tests for import statement parsing and rewriting.
"""

from jsxsplitter.analysis.imports import (
    find_import_entry,
    import_group_rank,
    leading_import_block,
    parse_imports,
    remove_binding,
    sort_import_block,
)
from jsxsplitter.analysis.models import ImportEntry, ImportKind


MULTILINE_SOURCE = """import React from 'react';
import {
  a,
  b,
} from "./m";
import './side.css';

const x = 1;
"""


class TestParseImports:
    """Tests for parse_imports."""

    def test_default_import(self):
        """Test a default import statement."""
        [statement] = parse_imports("import React from 'react';\n")
        assert statement.default == "React"
        assert statement.module == "'react'"
        assert statement.start_line == 0
        assert statement.end_line == 0
        assert statement.text == "import React from 'react';"

    def test_named_and_aliased_imports(self):
        """Test named bindings with an alias."""
        [statement] = parse_imports("import {a, b as c} from './m';")
        assert [(b.imported, b.local) for b in statement.named] == [("a", "a"), ("b", "c")]
        assert statement.bound_names == ["a", "c"]

    def test_default_with_named(self):
        """Test a default binding combined with a brace group."""
        [statement] = parse_imports("import React, {useState} from 'react';")
        assert statement.default == "React"
        assert statement.bound_names == ["React", "useState"]

    def test_namespace_import(self):
        [statement] = parse_imports("import * as utils from './utils';")
        assert statement.namespace == "utils"
        assert statement.default is None

    def test_multiline_statement_lines(self):
        """Test that a statement spanning several lines reports both ends."""
        statements = parse_imports(MULTILINE_SOURCE)
        assert len(statements) == 3
        assert (statements[1].start_line, statements[1].end_line) == (1, 4)
        assert statements[1].bound_names == ["a", "b"]

    def test_side_effect_import(self):
        statements = parse_imports(MULTILINE_SOURCE)
        assert statements[2].is_side_effect_only
        assert statements[2].module == "'./side.css'"

    def test_offsets_cover_statement_text(self):
        """Test that offsets slice exactly the statement text."""
        for statement in parse_imports(MULTILINE_SOURCE):
            assert MULTILINE_SOURCE[statement.start_offset : statement.end_offset] == statement.text

    def test_dynamic_import_is_not_a_statement(self):
        assert parse_imports("const m = import('./lazy');\n") == []

    def test_commented_out_imports_are_ignored(self):
        """Test that imports inside block and line comments are not statements."""
        source = (
            "import React from 'react';\n"
            "/*\n"
            "import Foo from './old';\n"
            "*/\n"
            "// import Bar from './bar';\n"
            "const url = 'http://example.com';\n"
            "import Baz from './baz';\n"
        )
        assert [s.default for s in parse_imports(source)] == ["React", "Baz"]
        assert find_import_entry(source, "Foo") is None

    def test_trailing_comment_is_not_statement_text(self):
        [statement] = parse_imports("import React from 'react' // framework\n")
        assert statement.text == "import React from 'react'"


class TestFindImportEntry:
    """Tests for classifying a name by the statement that binds it."""

    def test_named_entry_normalizes_quotes(self):
        """Test that double-quoted modules render single-quoted."""
        entry = find_import_entry(MULTILINE_SOURCE, "b")
        assert entry == ImportEntry("b", '"./m"', ImportKind.NAMED)
        assert entry.render() == "import {b} from './m';"

    def test_default_entry(self):
        entry = find_import_entry(MULTILINE_SOURCE, "React")
        assert entry.kind == ImportKind.DEFAULT
        assert entry.render() == "import React from 'react';"

    def test_aliased_entry_keeps_alias(self):
        entry = find_import_entry("import {b as c} from './m';", "c")
        assert entry.imported == "b"
        assert entry.render() == "import {b as c} from './m';"

    def test_namespace_entry(self):
        entry = find_import_entry("import * as ns from './ns';", "ns")
        assert entry.kind == ImportKind.NAMESPACE
        assert entry.render() == "import * as ns from './ns';"

    def test_missing_name(self):
        assert find_import_entry(MULTILINE_SOURCE, "nothing") is None


class TestRemoveBinding:
    """Tests for rewriting a statement without one binding."""

    def test_shrink_named_group(self):
        [statement] = parse_imports("import {Foo, Bar} from './foo';")
        assert remove_binding(statement, "Foo") == "import {Bar} from './foo';"

    def test_remove_default_keeps_named(self):
        [statement] = parse_imports("import React, {useState} from 'react';")
        assert remove_binding(statement, "React") == "import {useState} from 'react';"

    def test_remove_last_named_keeps_default(self):
        [statement] = parse_imports("import React, {useState} from 'react';")
        assert remove_binding(statement, "useState") == "import React from 'react';"

    def test_remove_only_binding(self):
        """Test that removing the only binding drops the statement."""
        [statement] = parse_imports("import {Foo} from './foo';")
        assert remove_binding(statement, "Foo") is None

    def test_multiline_group_keeps_layout(self):
        statement = parse_imports(MULTILINE_SOURCE)[1]
        assert remove_binding(statement, "a") == 'import {\n  b,\n} from "./m";'


class TestImportBlock:
    """Tests for the leading import block and its ordering."""

    def test_leading_block_stops_at_code(self):
        source = "import a from 'a';\n\nconst x = 1;\nimport b from 'b';\n"
        assert [s.default for s in leading_import_block(source)] == ["a"]

    def test_leading_block_allows_comments(self):
        source = "import a from 'a';\n// local\nimport b from './b';\n"
        assert [s.default for s in leading_import_block(source)] == ["a", "b"]

    def test_leading_block_allows_block_comments(self):
        source = "import a from 'a';\n/*\n  local imports\n*/\nimport b from './b';\n"
        assert [s.default for s in leading_import_block(source)] == ["a", "b"]

    def test_group_ranks(self):
        assert import_group_rank("'node:fs'") == 0
        assert import_group_rank("'fs'") == 0
        assert import_group_rank("'react'") == 1
        assert import_group_rank("'../shared'") == 2
        assert import_group_rank("'./Button'") == 3
        assert import_group_rank("'./'") == 4

    def test_sort_is_stable_within_group(self):
        """Test ordering builtin, external, parent, sibling with stable groups."""
        source = (
            "import React from 'react';\n"
            "import Local from './Local';\n"
            "import lodash from 'lodash';\n"
            "import Shared from '../Shared';\n"
            "\n"
            "const x = 1;\n"
        )
        assert sort_import_block(source) == (
            "import React from 'react';\n"
            "import lodash from 'lodash';\n"
            "import Shared from '../Shared';\n"
            "import Local from './Local';\n"
            "\n"
            "const x = 1;\n"
        )

    def test_sort_leaves_single_import_alone(self):
        source = "import React from 'react';\n\nconst x = 1;\n"
        assert sort_import_block(source) == source
