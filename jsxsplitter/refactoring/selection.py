"""
Selection validation and fragment normalization.

A selection can be extracted when it is valid markup under a synthetic root
and when the document stays valid without it. Selections that are not a
single tag tree (adjacent siblings, surrounding text, a bare ``{expression}``)
are wrapped once in a ``<>...</>`` fragment; the wrapped body is what gets
validated and what ends up in the generated component.
"""

from __future__ import annotations

import logging
import re

from ..analysis.models import NormalizedFragment, Range
from ..exceptions import EmptySelection, InvalidSelection
from ..interfaces import AnalysisOracle
from .splicer import replace_range

logger = logging.getLogger(__name__)

_FIRST_MARKUP_LINE_RE = re.compile(r"^\s*<")
_LAST_MARKUP_LINE_RE = re.compile(r"^\s*[<|/>]")

# Stands in for the removed selection so the surrounding expression keeps a value
EMPTY_ELEMENT = "<></>"


def leading_whitespace(text: str, from_end: bool = False) -> str:
    """
    Leading whitespace of the first markup line of ``text``.

    With ``from_end`` the lines are scanned backwards for the last line that
    opens or closes markup. Falls back to the first non-blank line.
    """
    lines = text.split("\n")
    if from_end:
        lines.reverse()
    pattern = _LAST_MARKUP_LINE_RE if from_end else _FIRST_MARKUP_LINE_RE

    line = next((candidate for candidate in lines if pattern.match(candidate)), None)
    if line is None:
        line = next((candidate for candidate in lines if candidate.strip()), "")
    return line[: len(line) - len(line.lstrip())]


def dedent_markup(text: str) -> str:
    """
    Strip blank edges and remove the closing line's indentation from ``text``.

    The first line may start mid-line in the source (the selection began
    after the indentation), so the indentation to remove is measured on the
    last markup line.
    """
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        return ""

    base = leading_whitespace("\n".join(lines), from_end=True)
    dedented = [lines[0].lstrip()]
    for line in lines[1:]:
        if line.startswith(base):
            line = line[len(base):]
        dedented.append(line)
    return "\n".join(line.rstrip() for line in dedented)


def indent_lines(text: str, prefix: str) -> str:
    return "\n".join(f"{prefix}{line}" if line.strip() else line for line in text.split("\n"))


def wrap_in_fragment(text: str, indent_unit: str = "  ") -> str:
    """Wrap adjacent markup in a single ``<>...</>`` root, indented one level."""
    return f"<>\n{indent_lines(dedent_markup(text), indent_unit)}\n</>"


class SelectionValidator:
    """
    Validates a selection and normalizes it into a component body.

    Args:
        oracle: Analysis oracle used for syntax checks
        indent_unit: Indentation added inside a synthetic wrapping fragment
    """

    def __init__(self, oracle: AnalysisOracle, indent_unit: str = "  "):
        self.oracle = oracle
        self.indent_unit = indent_unit

    def validate(
        self, fragment_text: str, document_text: str, selection_range: Range
    ) -> NormalizedFragment:
        """
        Check the selection and the document without it.

        Raises:
            EmptySelection: If nothing but whitespace is selected
            InvalidSelection: If the selection or the remaining document
                does not parse
        """
        if not fragment_text or not fragment_text.strip():
            raise EmptySelection()

        check = self.oracle.check_syntax(f"<>{fragment_text}</>")
        if not check.ok:
            raise InvalidSelection(
                f"selection is not a valid component body: {check.message}"
            )

        fragment = self.normalize(fragment_text)
        if fragment.wrapped:
            check = self.oracle.check_syntax(f"(\n{fragment.body}\n)")
            if not check.ok:
                raise InvalidSelection(
                    f"selection is not a valid component body: {check.message}"
                )

        remainder = replace_range(document_text, selection_range, EMPTY_ELEMENT)
        check = self.oracle.check_syntax(remainder)
        if not check.ok:
            raise InvalidSelection(
                f"document is not valid without the selection: {check.message}"
            )

        logger.debug(f"Selection {selection_range} validated (wrapped={fragment.wrapped})")
        return fragment

    def normalize(self, fragment_text: str) -> NormalizedFragment:
        """Wrap the fragment once when it is not a single tag tree."""
        if self.is_single_root(fragment_text):
            return NormalizedFragment(text=fragment_text, body=fragment_text, wrapped=False)
        return NormalizedFragment(
            text=fragment_text,
            body=wrap_in_fragment(fragment_text, self.indent_unit),
            wrapped=True,
        )

    def is_single_root(self, fragment_text: str) -> bool:
        stripped = fragment_text.strip()
        if not (stripped.startswith("<") and stripped.endswith(">")):
            return False
        # Parenthesized so that a line break cannot end the expression early
        return self.oracle.check_syntax(f"(\n{stripped}\n)").ok

