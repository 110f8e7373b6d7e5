"""
Tests for range-accurate text splicing.
"""

import pytest

from jsxsplitter.analysis.models import Position, Range, TextEdit
from jsxsplitter.refactoring.splicer import (
    apply_edits,
    delete_lines,
    full_range,
    get_text_in_range,
    import_insertion_line,
    insert_at,
    line_separator,
    line_span,
    offset_to_position,
    position_to_offset,
    replace_lines,
    replace_range,
)


TEXT = "first\nsecond line\nthird"


class TestOffsets:
    """Tests for position/offset conversion."""

    def test_position_to_offset(self):
        assert position_to_offset(TEXT, Position(0, 0)) == 0
        assert position_to_offset(TEXT, Position(1, 0)) == 6
        assert position_to_offset(TEXT, Position(2, 3)) == 21

    def test_clamped_positions(self):
        """Test that positions past a line or the text are clamped."""
        assert position_to_offset(TEXT, Position(0, 99)) == 5
        assert position_to_offset(TEXT, Position(9, 0)) == len(TEXT)

    def test_offset_to_position_inverts(self):
        for offset in (0, 5, 6, 17, 18, len(TEXT)):
            assert position_to_offset(TEXT, offset_to_position(TEXT, offset)) == offset

    def test_get_text_in_range(self):
        assert get_text_in_range(TEXT, Range.from_coordinates(0, 2, 1, 6)) == "rst\nsecond"


class TestEdits:
    """Tests for text substitution."""

    def test_replace_range_across_lines(self):
        result = replace_range(TEXT, Range.from_coordinates(0, 5, 2, 0), " ")
        assert result == "first third"

    def test_insert_at_line(self):
        assert insert_at(TEXT, 1, "new\n") == "first\nnew\nsecond line\nthird"

    def test_insert_past_end_appends_line(self):
        assert insert_at("a", 5, "b\n") == "a\nb\n"
        assert insert_at("a\n", 5, "b\n") == "a\nb\n"

    def test_delete_and_replace_lines(self):
        assert delete_lines(TEXT, 1, 1) == "first\nthird"
        assert replace_lines(TEXT, 0, 1, "one") == "one\nthird"

    def test_full_range(self):
        assert replace_range(TEXT, full_range(TEXT), "x") == "x"

    def test_line_span(self):
        assert get_text_in_range(TEXT, line_span(TEXT, 1, 1)) == "second line"

    def test_line_separator(self):
        assert line_separator("a\r\nb\r\n") == "\r\n"
        assert line_separator("a\nb\n") == "\n"
        assert line_separator("") == "\n"


class TestApplyEdits:
    """Tests for applying several edits against one snapshot."""

    def test_later_edits_do_not_shift_earlier_ones(self):
        """Test that every range refers to the original text."""
        edits = [
            TextEdit(Range.from_coordinates(0, 0, 0, 5), "1st\nline"),
            TextEdit(Range.from_coordinates(2, 0, 2, 5), "3rd"),
        ]
        assert apply_edits(TEXT, edits) == "1st\nline\nsecond line\n3rd"

    def test_insertions_at_same_point_keep_order(self):
        point = Range.from_coordinates(1, 0, 1, 0)
        edits = [TextEdit(point, "a"), TextEdit(point, "b")]
        assert apply_edits(TEXT, edits) == "first\nabsecond line\nthird"

    def test_overlapping_edits_rejected(self):
        edits = [
            TextEdit(Range.from_coordinates(0, 0, 1, 3), "x"),
            TextEdit(Range.from_coordinates(1, 0, 1, 5), "y"),
        ]
        with pytest.raises(ValueError):
            apply_edits(TEXT, edits)


class TestImportInsertionLine:
    """Tests for the new import's insertion point."""

    def test_no_imports(self):
        assert import_insertion_line("const a = 1;\n") == 0

    def test_after_last_import(self):
        source = "import a from 'a';\nimport b from 'b';\n\nconst x = 1;\n"
        assert import_insertion_line(source) == 2

    def test_after_multiline_import(self):
        source = "import {\n  a,\n  b,\n} from 'ab';\nconst x = 1;\n"
        assert import_insertion_line(source) == 4
