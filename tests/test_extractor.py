"""
Tests for the Extract Component pipeline.
"""

from unittest.mock import Mock

import pytest

from jsxsplitter.analysis.models import Range
from jsxsplitter.exceptions import (
    EmptySelection,
    FileWriteFailure,
    InvalidName,
    InvalidSelection,
    NameCollision,
    NoWorkspace,
)
from jsxsplitter.refactoring.extractor import (
    ComponentExtractor,
    component_path,
    validate_component_name,
)
from jsxsplitter.refactoring.splicer import line_span
from jsxsplitter.workspace import BufferEditor, LocalFileSystem


CARD_SOURCE = """import React from 'react';

const Card = ({a, b, c, d}) => (
  <div>
    <span>{a}{b}{c}{d}</span>
  </div>
);

export default Card;
"""

# <Foo label={title}/> on line 6
FOO_SELECTION = Range.from_coordinates(5, 4, 5, 24)


def make_extractor(oracle, editor, name, filesystem):
    return ComponentExtractor(oracle, editor, Mock(ask=Mock(return_value=name)), filesystem)


class TestComponentName:
    """Tests for component name validation."""

    @pytest.mark.parametrize("name", ["Button", "A", "My_Button$2"])
    def test_valid_names(self, name):
        assert validate_component_name(name) == name

    def test_name_is_stripped(self):
        assert validate_component_name("  Button ") == "Button"

    @pytest.mark.parametrize("name", [None, "", "   ", "button", "1Button", "My-Button"])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidName):
            validate_component_name(name)

    def test_component_path_keeps_extension(self, tmp_path):
        assert component_path(tmp_path / "App.jsx", "Nav") == tmp_path / "Nav.jsx"
        assert component_path(tmp_path / "App", "Nav") == tmp_path / "Nav.js"


class TestExtract:
    """End-to-end extraction tests against an in-memory editor."""

    def test_extract_with_prop_and_import(self, oracle, app_file, app_source, workspace):
        """Test the reference, the relocated import and the origin rewrite."""
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)
        component = make_extractor(oracle, editor, "Labeled", workspace).extract()

        assert component.path == app_file.parent / "Labeled.js"
        assert component.props == ["title"]
        assert component.reference == "<Labeled title={title}/>"
        assert component.missing_imports == []
        assert component.source == (
            "import React from 'react';\n"
            "import {Foo} from './foo';\n"
            "\n"
            "const Labeled = ({title}) => (\n"
            "  <Foo label={title}/>\n"
            ");\n"
            "\n"
            "export default Labeled;\n"
        )
        assert (app_file.parent / "Labeled.js").read_text(encoding="utf-8") == component.source

        lines = editor.get_text().split("\n")
        assert lines[:3] == [
            "import React from 'react';",
            "import {Bar} from './foo';",
            "import Labeled from './Labeled';",
        ]
        assert "    <Labeled title={title}/>" in lines
        assert "    <Bar/>" in lines

    def test_origin_file_is_not_saved_by_extractor(self, oracle, app_file, app_source, workspace):
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)
        make_extractor(oracle, editor, "Labeled", workspace).extract()
        assert app_file.read_text(encoding="utf-8") == app_source

    def test_multiline_reference(self, oracle, tmp_path):
        """Test that more than three props are laid out one per line."""
        path = tmp_path / "Card.js"
        editor = BufferEditor(path, CARD_SOURCE, line_span(CARD_SOURCE, 4, 4))
        component = make_extractor(oracle, editor, "Part", LocalFileSystem(tmp_path)).extract()

        assert component.props == ["a", "b", "c", "d"]
        assert "const Part = ({\n  a,\n  b,\n  c,\n  d,\n}) => (\n" in component.source

        lines = editor.get_text().split("\n")
        assert lines[1] == "import Part from './Part';"
        assert lines[5] == "    <Part"
        assert lines[6] == "      a={a}"
        assert lines[10] == "    />"
        assert lines[11] == "  </div>"

    def test_wrapped_siblings(self, oracle, app_file, app_source, workspace):
        """Test that two adjacent elements become one fragment-rooted component."""
        editor = BufferEditor(app_file, app_source, line_span(app_source, 5, 6))
        component = make_extractor(oracle, editor, "Pair", workspace).extract()

        assert "  <>\n    <Foo label={title}/>\n    <Bar/>\n  </>\n" in component.source
        assert "import {Foo, Bar} from './foo';" not in editor.get_text()
        assert "import {Bar} from './foo';" in component.source
        assert "import {Foo} from './foo';" in component.source

    def test_import_still_used_by_origin_is_kept(self, oracle, tmp_path):
        """Test that an import used on both sides ends up in both files."""
        source = (
            "import React from 'react';\n"
            "import Icon from './Icon';\n"
            "\n"
            "const icon = Icon;\n"
            "const App = () => <div><Icon/></div>;\n"
        )
        path = tmp_path / "App.js"
        selection = Range.from_coordinates(4, 23, 4, 30)
        editor = BufferEditor(path, source, selection)
        component = make_extractor(oracle, editor, "Glyph", LocalFileSystem(tmp_path)).extract()

        assert "import Icon from './Icon';" in component.source
        assert "import Icon from './Icon';" in editor.get_text()

    def test_selection_trailing_newline_is_kept(self, oracle, tmp_path):
        """Test that a whole-line selection leaves the next line on its own line."""
        path = tmp_path / "Card.js"
        editor = BufferEditor(path, CARD_SOURCE, Range.from_coordinates(4, 0, 5, 0))
        component = make_extractor(oracle, editor, "Part", LocalFileSystem(tmp_path)).extract()

        assert component.reference.endswith("    />\n")
        lines = editor.get_text().split("\n")
        assert lines[5] == "    <Part"
        assert lines[10] == "    />"
        assert lines[11] == "  </div>"

    def test_commented_out_import_is_not_a_binding(self, oracle, tmp_path):
        """Test that an import inside a block comment neither supplies nor shifts imports."""
        source = (
            "import React from 'react';\n"
            "/*\n"
            "import Foo from './old';\n"
            "*/\n"
            "const App = ({Foo}) => (\n"
            "  <div>\n"
            "    <Foo/>\n"
            "  </div>\n"
            ");\n"
        )
        path = tmp_path / "App.js"
        editor = BufferEditor(path, source, Range.from_coordinates(6, 4, 6, 10))
        component = make_extractor(oracle, editor, "Part", LocalFileSystem(tmp_path)).extract()

        assert component.props == ["Foo"]
        assert component.imports == []
        assert "./old" not in component.source

        lines = editor.get_text().split("\n")
        assert lines[:5] == [
            "import React from 'react';",
            "import Part from './Part';",
            "/*",
            "import Foo from './old';",
            "*/",
        ]
        assert "    <Part Foo={Foo}/>" in lines

    def test_windows_line_endings_are_kept(self, oracle, tmp_path):
        source = (
            "import React from 'react';\r\n"
            "import {Foo} from './foo';\r\n"
            "\r\n"
            "const App = ({title}) => (\r\n"
            "  <div>\r\n"
            "    <Foo label={title}/>\r\n"
            "  </div>\r\n"
            ");\r\n"
        )
        path = tmp_path / "App.js"
        editor = BufferEditor(path, source, FOO_SELECTION)
        make_extractor(oracle, editor, "Labeled", LocalFileSystem(tmp_path)).extract()

        text = editor.get_text()
        assert "import Labeled from './Labeled';\r\n" in text
        assert "    <Labeled title={title}/>\r\n" in text
        assert text.count("\n") == text.count("\r\n")


class TestExtractFailures:
    """Tests for failures that must leave the workspace untouched."""

    def test_empty_selection(self, oracle, app_file, app_source, workspace):
        editor = BufferEditor(app_file, app_source, Range.from_coordinates(5, 4, 5, 4))
        with pytest.raises(EmptySelection):
            make_extractor(oracle, editor, "Labeled", workspace).extract()

    def test_invalid_selection(self, oracle, app_file, app_source, workspace):
        editor = BufferEditor(app_file, app_source, Range.from_coordinates(4, 2, 5, 24))
        with pytest.raises(InvalidSelection):
            make_extractor(oracle, editor, "Labeled", workspace).extract()
        assert editor.edit_count == 0

    def test_invalid_name(self, oracle, app_file, app_source, workspace):
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)
        with pytest.raises(InvalidName):
            make_extractor(oracle, editor, "labeled", workspace).extract()
        assert editor.edit_count == 0

    def test_name_imported_by_origin(self, oracle, tmp_path):
        """Test that a name the fragment already uses as an import is rejected."""
        source = (
            "import React from 'react';\n"
            "import Card from './widgets/Card';\n"
            "\n"
            "const App = ({t}) => (\n"
            "  <section>\n"
            "    <Card title={t}/>\n"
            "  </section>\n"
            ");\n"
        )
        path = tmp_path / "App.js"
        filesystem = LocalFileSystem(tmp_path)
        editor = BufferEditor(path, source, Range.from_coordinates(5, 4, 5, 21))

        with pytest.raises(InvalidName, match="'Card' is already used in App.js"):
            make_extractor(oracle, editor, "Card", filesystem).extract()

        assert editor.edit_count == 0
        assert filesystem.written == {}

    def test_name_declared_by_origin(self, oracle, app_file, app_source, workspace):
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)
        with pytest.raises(InvalidName):
            make_extractor(oracle, editor, "App", workspace).extract()
        assert editor.edit_count == 0
        assert workspace.written == {}

    def test_cancelled_prompt(self, oracle, app_file, app_source, workspace):
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)
        with pytest.raises(InvalidName):
            make_extractor(oracle, editor, None, workspace).extract()

    def test_name_collision(self, oracle, app_file, app_source, workspace):
        """Test that an existing file aborts before any edit or write."""
        existing = app_file.parent / "Button.js"
        existing.write_text("// keep\n", encoding="utf-8")
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)

        with pytest.raises(NameCollision, match="Button.js already exists"):
            make_extractor(oracle, editor, "Button", workspace).extract()

        assert editor.edit_count == 0
        assert editor.get_text() == app_source
        assert existing.read_text(encoding="utf-8") == "// keep\n"
        assert workspace.written == {}

    def test_no_workspace(self, oracle, app_file, app_source):
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)
        filesystem = LocalFileSystem(None)

        with pytest.raises(NoWorkspace):
            make_extractor(oracle, editor, "Labeled", filesystem).extract()
        assert editor.edit_count == 0
        assert filesystem.written == {}

    def test_write_failure(self, oracle, app_file, app_source):
        filesystem = Mock(workspace_root=app_file.parent)
        filesystem.exists.return_value = False
        filesystem.write_text.side_effect = PermissionError("read-only")
        editor = BufferEditor(app_file, app_source, FOO_SELECTION)

        with pytest.raises(FileWriteFailure):
            make_extractor(oracle, editor, "Labeled", filesystem).extract()
