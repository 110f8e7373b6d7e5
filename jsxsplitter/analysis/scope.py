"""
Lexical scope analysis over tree-sitter JavaScript syntax trees.

Collects declarations per scope (var hoisted to the enclosing function,
let/const/class to the enclosing block, parameters to their function, imports
to the program) and resolves every identifier reference against the chain of
enclosing scopes. JSX tag names count as references when they start with an
upper-case letter or are member expressions; lower-case tags are intrinsic
elements.

Temporal dead zones and ``with`` statements are not modelled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)

FUNCTION_SCOPES = frozenset(
    {
        "program",
        "function_declaration",
        "generator_function_declaration",
        "function",
        "function_expression",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

BLOCK_SCOPES = frozenset(
    {
        "statement_block",
        "class_body",
        "switch_body",
        "for_statement",
        "for_in_statement",
        "catch_clause",
    }
)

JSX_ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element"})
JSX_TAG_PARENTS = frozenset({"jsx_opening_element", "jsx_self_closing_element", "jsx_closing_element"})

NamedFunctionTypes = frozenset(
    {"function_declaration", "generator_function_declaration", "class_declaration"}
)
SelfNamedTypes = frozenset({"function", "function_expression", "generator_function", "class"})

NodeKey = Tuple[int, int, str]


def node_key(node: Any) -> NodeKey:
    return (node.start_byte, node.end_byte, node.type)


def walk(node: Any) -> Iterator[Any]:
    """Pre-order traversal (document order) without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(node: Any) -> str:
    return node.text.decode("utf-8")


def _is_field(parent: Any, field_name: str, node: Any) -> bool:
    child = parent.child_by_field_name(field_name)
    return child is not None and node_key(child) == node_key(node)


def pattern_identifiers(pattern: Any) -> Iterator[Any]:
    """Yield the identifier nodes bound by a (possibly destructuring) pattern."""
    if pattern is None:
        return
    kind = pattern.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        yield pattern
    elif kind in ("object_pattern", "array_pattern"):
        for child in pattern.named_children:
            yield from pattern_identifiers(child)
    elif kind == "pair_pattern":
        yield from pattern_identifiers(pattern.child_by_field_name("value"))
    elif kind in ("assignment_pattern", "object_assignment_pattern"):
        yield from pattern_identifiers(pattern.child_by_field_name("left"))
    elif kind == "rest_pattern":
        for child in pattern.named_children:
            yield from pattern_identifiers(child)


@dataclass
class Reference:
    name: str
    node: Any
    resolved_scope: Optional[NodeKey] = None

    @property
    def line(self) -> int:
        return self.node.start_point[0] + 1


@dataclass
class ScopeAnalysis:
    """Result of analysing one syntax tree."""

    declarations: Dict[NodeKey, Set[str]] = field(default_factory=dict)
    import_bindings: List[Tuple[str, Any]] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)
    has_jsx: bool = False
    program_key: Optional[NodeKey] = None

    def unresolved(self) -> List[Reference]:
        return [ref for ref in self.references if ref.resolved_scope is None]

    def used_program_names(self) -> Set[str]:
        return {ref.name for ref in self.references if ref.resolved_scope == self.program_key}

    def declared_program_names(self) -> Set[str]:
        return set(self.declarations.get(self.program_key, ()))


class ScopeAnalyzer:
    """Builds a :class:`ScopeAnalysis` for a tree-sitter tree."""

    def analyze(self, root: Any) -> ScopeAnalysis:
        analysis = ScopeAnalysis(program_key=node_key(root))
        declared_nodes: Set[NodeKey] = set()

        for node in walk(root):
            if node.type in JSX_ELEMENT_TYPES:
                analysis.has_jsx = True
            for scope, ident in self._declarations_of(node):
                analysis.declarations.setdefault(node_key(scope), set()).add(node_text(ident))
                declared_nodes.add(node_key(ident))
                if node.type == "import_statement":
                    analysis.import_bindings.append((node_text(ident), ident))

        for node in walk(root):
            if node.type not in ("identifier", "shorthand_property_identifier"):
                continue
            if node_key(node) in declared_nodes or not self._is_reference(node):
                continue
            name = node_text(node)
            analysis.references.append(
                Reference(name=name, node=node, resolved_scope=self._resolve(node, name, analysis))
            )

        logger.debug(
            f"Scope analysis: {len(analysis.references)} references, "
            f"{len(analysis.import_bindings)} import bindings"
        )
        return analysis

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------
    def _declarations_of(self, node: Any) -> Iterator[Tuple[Any, Any]]:
        kind = node.type

        if kind in ("variable_declaration", "lexical_declaration"):
            scope = self._enclosing_scope(node, function_only=kind == "variable_declaration")
            for declarator in node.named_children:
                if declarator.type == "variable_declarator":
                    for ident in pattern_identifiers(declarator.child_by_field_name("name")):
                        yield scope, ident

        elif kind in NamedFunctionTypes:
            name = node.child_by_field_name("name")
            if name is not None:
                yield self._enclosing_scope(node), name

        elif kind in SelfNamedTypes:
            name = node.child_by_field_name("name")
            if name is not None:
                yield (node if kind != "class" else self._enclosing_scope(node)), name

        if kind in FUNCTION_SCOPES and kind != "program":
            parameters = node.child_by_field_name("parameters")
            if parameters is not None:
                for param in parameters.named_children:
                    for ident in pattern_identifiers(param):
                        yield node, ident
            parameter = node.child_by_field_name("parameter")
            if parameter is not None:
                for ident in pattern_identifiers(parameter):
                    yield node, ident

        elif kind == "catch_clause":
            for ident in pattern_identifiers(node.child_by_field_name("parameter")):
                yield node, ident

        elif kind == "for_in_statement" and node.child_by_field_name("kind") is not None:
            kind_text = node_text(node.child_by_field_name("kind"))
            scope = self._enclosing_scope(node, function_only=True) if kind_text == "var" else node
            for ident in pattern_identifiers(node.child_by_field_name("left")):
                yield scope, ident

        elif kind == "import_statement":
            program = self._program(node)
            for ident in self._import_identifiers(node):
                yield program, ident

    def _import_identifiers(self, statement: Any) -> Iterator[Any]:
        for clause in statement.named_children:
            if clause.type != "import_clause":
                continue
            for part in clause.named_children:
                if part.type == "identifier":
                    yield part
                elif part.type == "namespace_import":
                    for ident in part.named_children:
                        if ident.type == "identifier":
                            yield ident
                elif part.type == "named_imports":
                    for spec in part.named_children:
                        if spec.type != "import_specifier":
                            continue
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None and local.type == "identifier":
                            yield local

    # ------------------------------------------------------------------
    # References
    # ------------------------------------------------------------------
    def _is_reference(self, node: Any) -> bool:
        parent = node.parent
        if parent is None:
            return False
        ptype = parent.type

        if ptype in JSX_TAG_PARENTS:
            if ptype == "jsx_closing_element":
                return False
            return node_text(node)[:1].isupper()
        if ptype == "nested_identifier":
            return node_key(parent.children[0]) == node_key(node)
        if ptype in ("import_specifier", "namespace_import", "import_clause"):
            return False
        if ptype == "export_specifier":
            return _is_field(parent, "name", node)
        if ptype == "jsx_namespace_name":
            return False
        return True

    def _resolve(self, node: Any, name: str, analysis: ScopeAnalysis) -> Optional[NodeKey]:
        current = node.parent
        while current is not None:
            if current.type in FUNCTION_SCOPES or current.type in BLOCK_SCOPES:
                key = node_key(current)
                if name in analysis.declarations.get(key, ()):
                    return key
            current = current.parent
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _enclosing_scope(self, node: Any, function_only: bool = False) -> Any:
        current = node.parent
        while current is not None:
            if current.type in FUNCTION_SCOPES:
                return current
            if not function_only and current.type in BLOCK_SCOPES:
                return current
            current = current.parent
        return node

    def _program(self, node: Any) -> Any:
        current = node
        while current.parent is not None:
            current = current.parent
        return current
