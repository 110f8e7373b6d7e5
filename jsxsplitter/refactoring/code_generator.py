"""
Code generation for extracted components.

Renders the new component's source (framework import, relocated imports,
arrow-function definition wrapping the markup, default export) and the
reference element that replaces the selection in the origin file.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from ..analysis.models import ImportEntry
from ..interfaces import AnalysisOracle
from .selection import dedent_markup, indent_lines, leading_whitespace

logger = logging.getLogger(__name__)


class ComponentCodeGenerator:
    """
    Renders component sources and reference elements.

    Args:
        oracle: Oracle whose import-order pass is applied to generated sources
        framework_name: Default binding of the rendering framework
        framework_module: Module the framework is imported from
        indent_unit: One level of indentation
        max_inline_params: Most props rendered on one line in the parameter list
        max_inline_reference_props: Most props rendered inline on the reference
        sort_imports: Whether generated sources go through the import-order pass
    """

    def __init__(
        self,
        oracle: AnalysisOracle,
        framework_name: str = "React",
        framework_module: str = "react",
        indent_unit: str = "  ",
        max_inline_params: int = 2,
        max_inline_reference_props: int = 3,
        sort_imports: bool = True,
    ):
        self.oracle = oracle
        self.framework_name = framework_name
        self.framework_module = framework_module
        self.indent_unit = indent_unit
        self.max_inline_params = max_inline_params
        self.max_inline_reference_props = max_inline_reference_props
        self.sort_imports = sort_imports

    @classmethod
    def from_config(cls, oracle: AnalysisOracle, config) -> "ComponentCodeGenerator":
        generation = config.generation
        return cls(
            oracle,
            framework_name=generation.framework_name,
            framework_module=generation.framework_module,
            indent_unit=generation.indent_unit,
            max_inline_params=generation.max_inline_params,
            max_inline_reference_props=generation.max_inline_reference_props,
            sort_imports=generation.sort_imports,
        )

    @property
    def framework_import(self) -> str:
        return f"import {self.framework_name} from '{self.framework_module}';"

    def render_skeleton(self, unit_name: str, fragment_body: str) -> str:
        """Zero-parameter component with only the framework import."""
        return self._assemble(unit_name, fragment_body, [], [])

    def render(
        self,
        unit_name: str,
        fragment_body: str,
        props: Sequence[str] = (),
        imports: Sequence[ImportEntry] = (),
    ) -> str:
        source = self._assemble(unit_name, fragment_body, list(props), list(imports))
        logger.debug(f"Rendered {unit_name} with {len(props)} props and {len(imports)} imports")
        return self._format(source)

    def render_params(self, props: Sequence[str]) -> str:
        """Parameter list between the arrow function's parentheses."""
        if not props:
            return ""
        if len(props) <= self.max_inline_params:
            return "{" + ", ".join(props) + "}"
        lines = "".join(f"{self.indent_unit}{prop},\n" for prop in props)
        return "{\n" + lines + "}"

    def render_reference(
        self, unit_name: str, props: Sequence[str], fragment_text: str, eol: str = "\n"
    ) -> str:
        """
        Element that replaces the selection.

        The element keeps the indentation of the selection's first markup
        line and any whitespace trailing the selection, line breaks included.
        A multi-line attribute list is laid out against the indentation of the
        selection's last markup line and joined with ``eol``.
        """
        start_indent = leading_whitespace(fragment_text)
        tail = fragment_text[len(fragment_text.rstrip()) :]
        if not props:
            return f"{start_indent}<{unit_name}/>{tail}"

        attributes = [f"{prop}={{{prop}}}" for prop in props]
        if len(props) <= self.max_inline_reference_props:
            return f"{start_indent}<{unit_name} {' '.join(attributes)}/>{tail}"

        end_indent = leading_whitespace(fragment_text, from_end=True)
        lines = [f"{start_indent}<{unit_name}"]
        lines.extend(f"{end_indent}{self.indent_unit}{attribute}" for attribute in attributes)
        lines.append(f"{end_indent}/>")
        return eol.join(lines) + tail

    def merge_missing_imports(self, unit_source: str, missing: Iterable[ImportEntry]) -> str:
        """Insert ``missing`` imports directly under the first line of ``unit_source``."""
        present = set(unit_source.split("\n"))
        additions: List[str] = []
        for entry in missing:
            line = entry.render()
            if line not in present and line not in additions:
                additions.append(line)
        if not additions:
            return unit_source

        first, _, rest = unit_source.partition("\n")
        logger.info(f"Adding {len(additions)} missing import(s) to the new component")
        return self._format(first + "\n" + "\n".join(additions) + "\n" + rest)

    def import_line(self, unit_name: str, module: Optional[str] = None, eol: str = "\n") -> str:
        """Statement that imports the new component into its origin file."""
        return f"import {unit_name} from '{module or './' + unit_name}';{eol}"

    def _assemble(
        self, unit_name: str, fragment_body: str, props: List[str], imports: List[ImportEntry]
    ) -> str:
        header = "\n".join([self.framework_import] + [entry.render() for entry in imports])
        body = indent_lines(dedent_markup(fragment_body), self.indent_unit)
        return (
            f"{header}\n"
            "\n"
            f"const {unit_name} = ({self.render_params(props)}) => (\n"
            f"{body}\n"
            ");\n"
            "\n"
            f"export default {unit_name};\n"
        )

    def _format(self, source: str) -> str:
        if not self.sort_imports:
            return source
        return self.oracle.format_imports_block(source)
