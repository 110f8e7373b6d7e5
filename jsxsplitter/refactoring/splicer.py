"""
Range-accurate text splicing.

Positions are zero-based (line, character) pairs. Every function takes the
current text and converts positions to absolute offsets against it, so
callers must pass the buffer as it is after any earlier edit, never a text
whose line boundaries have since shifted.
"""

from __future__ import annotations

from typing import Iterable, List

from ..analysis.imports import leading_import_block
from ..analysis.models import Position, Range, TextEdit


def position_to_offset(text: str, position: Position) -> int:
    """
    Convert a (line, character) position to an absolute offset.

    Every fully preceding line contributes ``len(line) + 1``; the character
    is added on the boundary line. Positions past the end of a line or of
    the text are clamped.
    """
    lines = text.split("\n")
    if position.line >= len(lines):
        return len(text)
    line_index = max(position.line, 0)
    offset = sum(len(line) + 1 for line in lines[:line_index])
    return offset + min(max(position.character, 0), len(lines[line_index]))


def offset_to_position(text: str, offset: int) -> Position:
    offset = min(max(offset, 0), len(text))
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line, offset - line_start)


def get_text_in_range(text: str, range_: Range) -> str:
    return text[position_to_offset(text, range_.start) : position_to_offset(text, range_.end)]


def replace_range(text: str, range_: Range, replacement: str) -> str:
    """Replace the text between the range's start and end with ``replacement``."""
    start = position_to_offset(text, range_.start)
    end = position_to_offset(text, range_.end)
    if end < start:
        start, end = end, start
    return f"{text[:start]}{replacement}{text[end:]}"


def insert_at(text: str, line_index: int, insertion: str) -> str:
    """
    Insert ``insertion`` at the beginning of line ``line_index``.

    Inserting past the last line appends, adding the missing line break.
    """
    lines = text.split("\n")
    if line_index >= len(lines):
        separator = "" if not text or text.endswith("\n") else "\n"
        return f"{text}{separator}{insertion}"
    offset = position_to_offset(text, Position(max(line_index, 0), 0))
    return f"{text[:offset]}{insertion}{text[offset:]}"


def delete_lines(text: str, start_line: int, end_line: int) -> str:
    """Delete lines ``start_line..end_line`` (inclusive) with their line breaks."""
    lines = text.split("\n")
    del lines[start_line : end_line + 1]
    return "\n".join(lines)


def replace_lines(text: str, start_line: int, end_line: int, replacement: str) -> str:
    lines = text.split("\n")
    lines[start_line : end_line + 1] = replacement.split("\n")
    return "\n".join(lines)


def full_range(text: str) -> Range:
    return Range(Position(0, 0), offset_to_position(text, len(text)))


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """
    Apply edits whose ranges all refer to ``text``.

    Edits are applied from the end of the buffer backwards so that no edit
    shifts the offsets of one still pending. Overlapping ranges are rejected.
    """
    resolved: List[tuple] = []
    for index, edit in enumerate(edits):
        start = position_to_offset(text, edit.range.start)
        end = position_to_offset(text, edit.range.end)
        resolved.append((start, end, index, edit.new_text))

    resolved.sort(key=lambda item: (item[0], item[1], item[2]))
    for previous, current in zip(resolved, resolved[1:]):
        if current[0] < previous[1]:
            raise ValueError(f"Overlapping edits at offsets {previous[:2]} and {current[:2]}")

    for start, end, _, new_text in reversed(resolved):
        text = f"{text[:start]}{new_text}{text[end:]}"
    return text


def import_insertion_line(text: str) -> int:
    """
    Line at which a new import statement goes.

    This is the line after the last statement of the top-of-file import
    block, or 0 when the text has no imports.
    """
    block = leading_import_block(text)
    if not block:
        return 0
    return block[-1].end_line + 1


def line_separator(text: str) -> str:
    """``\\r\\n`` when the text uses Windows line endings, otherwise ``\\n``."""
    return "\r\n" if "\r\n" in text else "\n"


def line_span(text: str, first_line: int, last_line: int) -> Range:
    """Range covering whole lines ``first_line..last_line`` (zero-based, inclusive)."""
    lines = text.split("\n")
    last_line = min(last_line, len(lines) - 1)
    return Range(Position(first_line, 0), Position(last_line, len(lines[last_line])))
