"""
Static analysis oracle backed by tree-sitter.

The oracle answers the questions the extraction pipeline asks about a
piece of JSX source text:

- is it syntactically valid (check_syntax)
- which identifiers are referenced but never declared (find_free_identifiers)
- which import bindings are never referenced (find_unused_import_bindings)
- which names does it bind at the top level (find_declared_names)
- what does it look like with its import block ordered (format_imports_block)

An oracle is an explicitly constructed value; nothing is registered globally
and every call parses its input from scratch.
"""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, Iterable, List, Optional

import tree_sitter_javascript
from tree_sitter import Language, Parser

from .imports import sort_import_block
from .models import FreeIdentifier, SyntaxCheck, UnusedImportBinding
from .scope import ScopeAnalyzer, node_text, walk

logger = logging.getLogger(__name__)

JAVASCRIPT = Language(tree_sitter_javascript.language())

# ECMAScript built-in globals
ES_GLOBALS: FrozenSet[str] = frozenset(
    {
        "Array",
        "ArrayBuffer",
        "Atomics",
        "BigInt",
        "BigInt64Array",
        "BigUint64Array",
        "Boolean",
        "DataView",
        "Date",
        "Error",
        "EvalError",
        "FinalizationRegistry",
        "Float32Array",
        "Float64Array",
        "Function",
        "Infinity",
        "Int16Array",
        "Int32Array",
        "Int8Array",
        "Intl",
        "JSON",
        "Map",
        "Math",
        "NaN",
        "Number",
        "Object",
        "Promise",
        "Proxy",
        "RangeError",
        "ReferenceError",
        "Reflect",
        "RegExp",
        "Set",
        "SharedArrayBuffer",
        "String",
        "Symbol",
        "SyntaxError",
        "TypeError",
        "URIError",
        "Uint16Array",
        "Uint32Array",
        "Uint8Array",
        "Uint8ClampedArray",
        "WeakMap",
        "WeakRef",
        "WeakSet",
        "arguments",
        "decodeURI",
        "decodeURIComponent",
        "encodeURI",
        "encodeURIComponent",
        "escape",
        "eval",
        "globalThis",
        "isFinite",
        "isNaN",
        "parseFloat",
        "parseInt",
        "undefined",
        "unescape",
    }
)

BROWSER_GLOBALS: FrozenSet[str] = frozenset(
    {
        "alert",
        "AbortController",
        "Blob",
        "cancelAnimationFrame",
        "clearInterval",
        "clearTimeout",
        "confirm",
        "console",
        "CustomEvent",
        "document",
        "Event",
        "fetch",
        "File",
        "FileReader",
        "FormData",
        "Headers",
        "history",
        "HTMLElement",
        "Image",
        "localStorage",
        "location",
        "navigator",
        "performance",
        "prompt",
        "queueMicrotask",
        "Request",
        "requestAnimationFrame",
        "Response",
        "sessionStorage",
        "setInterval",
        "setTimeout",
        "structuredClone",
        "URL",
        "URLSearchParams",
        "WebSocket",
        "window",
        "XMLHttpRequest",
    }
)


class TreeSitterOracle:
    """
    Analysis oracle for JSX-flavoured JavaScript.

    Args:
        framework_name: Binding that JSX implicitly uses (counts as used
            whenever the source contains JSX)
        extra_globals: Additional names treated as declared globals
        include_browser_globals: Whether common browser globals are declared
    """

    def __init__(
        self,
        framework_name: str = "React",
        extra_globals: Optional[Iterable[str]] = None,
        include_browser_globals: bool = True,
    ):
        self.framework_name = framework_name
        globals_ = set(ES_GLOBALS)
        if include_browser_globals:
            globals_ |= BROWSER_GLOBALS
        globals_ |= set(extra_globals or ())
        self.globals: FrozenSet[str] = frozenset(globals_)
        self._parser = Parser(JAVASCRIPT)
        self._scopes = ScopeAnalyzer()

    def parse(self, source: str) -> Any:
        return self._parser.parse(source.encode("utf-8"))

    def check_syntax(self, source: str) -> SyntaxCheck:
        """Report whether ``source`` parses without error or missing nodes."""
        tree = self.parse(source)
        if not tree.root_node.has_error:
            return self._check_jsx_tags(tree.root_node)

        for node in walk(tree.root_node):
            if node.is_missing:
                line, column = node.start_point
                return SyntaxCheck(
                    ok=False,
                    message=f"Missing '{node.type}' at line {line + 1}, column {column + 1}",
                    line=line + 1,
                    column=column + 1,
                )
            if node.type == "ERROR":
                line, column = node.start_point
                return SyntaxCheck(
                    ok=False,
                    message=f"Unexpected token at line {line + 1}, column {column + 1}",
                    line=line + 1,
                    column=column + 1,
                )
        return SyntaxCheck(ok=False, message="Syntax error")

    def _check_jsx_tags(self, root: Any) -> SyntaxCheck:
        # The grammar accepts any closing tag name, so mismatches are checked here
        for node in walk(root):
            if node.type != "jsx_element":
                continue
            children = node.children
            if not children:
                continue
            opening, closing = children[0], children[-1]
            if opening.type != "jsx_opening_element" or closing.type != "jsx_closing_element":
                continue
            opening_name = _tag_name(opening)
            closing_name = _tag_name(closing)
            if opening_name != closing_name:
                line, column = closing.start_point
                expected = f"</{opening_name}>" if opening_name else "</>"
                return SyntaxCheck(
                    ok=False,
                    message=f"Expected corresponding closing tag {expected} "
                    f"at line {line + 1}, column {column + 1}",
                    line=line + 1,
                    column=column + 1,
                )
        return SyntaxCheck(ok=True)

    def find_free_identifiers(self, source: str) -> List[FreeIdentifier]:
        """
        Return every reference to an undeclared identifier, in document order.

        Raises:
            SyntaxError: If ``source`` does not parse
        """
        tree = self._parse_valid(source)
        analysis = self._scopes.analyze(tree.root_node)
        lines = source.split("\n")

        free = []
        for ref in analysis.unresolved():
            if ref.name in self.globals:
                continue
            row = ref.node.start_point[0]
            free.append(FreeIdentifier(ref.name, row + 1, lines[row] if row < len(lines) else ""))
        return free

    def find_unused_import_bindings(self, source: str) -> List[UnusedImportBinding]:
        """
        Return the import bindings that nothing in ``source`` references.

        JSX tag names count as usages, and the framework binding counts as
        used whenever the source contains JSX.

        Raises:
            SyntaxError: If ``source`` does not parse
        """
        tree = self._parse_valid(source)
        analysis = self._scopes.analyze(tree.root_node)
        used = analysis.used_program_names()
        if analysis.has_jsx:
            used.add(self.framework_name)

        unused = []
        for name, node in analysis.import_bindings:
            if name in used:
                continue
            unused.append(
                UnusedImportBinding(
                    name=name,
                    line=node.start_point[0] + 1,
                    message=f"'{name}' is defined but never used.",
                )
            )
        return unused

    def find_declared_names(self, source: str) -> List[str]:
        """
        Return the names bound at the top level of ``source``, imports included.

        Raises:
            SyntaxError: If ``source`` does not parse
        """
        tree = self._parse_valid(source)
        return sorted(self._scopes.analyze(tree.root_node).declared_program_names())

    def format_imports_block(self, source: str) -> str:
        return sort_import_block(source)

    def _parse_valid(self, source: str) -> Any:
        check = self.check_syntax(source)
        if not check.ok:
            raise SyntaxError(check.message)
        return self.parse(source)


_TAG_NAME_TYPES = frozenset({"identifier", "member_expression", "nested_identifier", "jsx_namespace_name"})


def _tag_name(tag: Any) -> str:
    name = tag.child_by_field_name("name")
    if name is None:
        name = next((child for child in tag.named_children if child.type in _TAG_NAME_TYPES), None)
    return "".join(node_text(name).split()) if name is not None else ""
