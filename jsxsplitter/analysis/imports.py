"""
Import statement parsing for JSX Splitter.

A single shared routine classifies ES module import statements (default,
named, namespace, side-effect only), extracts their bound names and module
strings, and rewrites a statement with one binding removed. The partitioner,
the import reconciler, the splicer's insertion point and the oracle's
import-ordering pass all go through this module so they agree on what an
import statement is.

Matching is textual and runs on the source with its comments blanked out.
Statements may span several lines (multi-line brace groups); dynamic
``import(...)`` calls are not import statements.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .models import ImportEntry, ImportStatement, NamedBinding

_IMPORT_STATEMENT_RE = re.compile(
    r"^[ \t]*import\b(?P<clause>[^'\"`;()]*?)(?:\bfrom\s*)?"
    r"(?P<module>'[^'\n]*'|\"[^\"\n]*\")[ \t]*;?",
    re.MULTILINE,
)
_BRACES_RE = re.compile(r"\{(?P<inner>[^}]*)\}")
_SPECIFIER_RE = re.compile(
    r"^(?:type\s+)?(?P<imported>[A-Za-z_$][\w$]*|'[^']*'|\"[^\"]*\")"
    r"(?:\s+as\s+(?P<local>[A-Za-z_$][\w$]*))?$"
)
_NAMESPACE_RE = re.compile(r"\*\s*as\s+(?P<name>[A-Za-z_$][\w$]*)")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*")

NODE_BUILTIN_PREFIX = "node:"
NODE_BUILTINS = frozenset(
    {
        "assert",
        "buffer",
        "child_process",
        "crypto",
        "events",
        "fs",
        "http",
        "https",
        "net",
        "os",
        "path",
        "readline",
        "stream",
        "url",
        "util",
        "zlib",
    }
)


def mask_comments(source: str) -> str:
    """
    Blank out ``//`` and ``/* */`` comments, keeping offsets and line breaks.

    String and template literals are skipped so that ``'http://x'`` is not
    mistaken for a comment.
    """
    chars = list(source)
    length = len(source)
    quote = None
    i = 0
    while i < length:
        char = source[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote or (char == "\n" and quote != "`"):
                quote = None
        elif char in "'\"`":
            quote = char
        elif source.startswith("//", i):
            end = source.find("\n", i)
            end = length if end == -1 else end
            chars[i:end] = " " * (end - i)
            i = end
            continue
        elif source.startswith("/*", i):
            end = source.find("*/", i + 2)
            end = length if end == -1 else end + 2
            chars[i:end] = [c if c in "\r\n" else " " for c in source[i:end]]
            i = end
            continue
        i += 1
    return "".join(chars)


def parse_imports(source: str) -> List[ImportStatement]:
    """
    Parse every import statement in ``source``.

    Statements inside comments are ignored.

    Args:
        source: JavaScript/JSX source text

    Returns:
        Statements in document order, with zero-based start/end lines
    """
    statements: List[ImportStatement] = []
    for match in _IMPORT_STATEMENT_RE.finditer(mask_comments(source)):
        masked = match.group(0)
        start = match.start() + len(masked) - len(masked.lstrip())
        end = start + len(masked.strip())
        text = source[start:end]
        start_line = source.count("\n", 0, start)
        statement = ImportStatement(
            module=match.group("module"),
            start_line=start_line,
            end_line=start_line + text.count("\n"),
            text=text,
            start_offset=start,
            end_offset=end,
        )
        _parse_clause(match.group("clause"), statement)
        statements.append(statement)
    return statements


def _parse_clause(clause: str, statement: ImportStatement) -> None:
    clause = clause.strip()
    if clause.startswith("type "):
        clause = clause[len("type "):]

    rest = clause
    brace = _BRACES_RE.search(clause)
    if brace:
        for spec in brace.group("inner").split(","):
            spec = " ".join(spec.split())
            if not spec:
                continue
            match = _SPECIFIER_RE.match(spec)
            if not match:
                continue
            imported = match.group("imported")
            statement.named.append(NamedBinding(imported, match.group("local") or imported))
        rest = clause[: brace.start()] + clause[brace.end():]

    namespace = _NAMESPACE_RE.search(rest)
    if namespace:
        statement.namespace = namespace.group("name")
        rest = rest[: namespace.start()] + rest[namespace.end():]

    default = _IDENTIFIER_RE.search(rest)
    if default:
        statement.default = default.group(0)


def find_statement(statements: Iterable[ImportStatement], name: str) -> Optional[ImportStatement]:
    """Return the first statement that binds ``name``."""
    for statement in statements:
        if name in statement.bound_names:
            return statement
    return None


def find_import_entry(source: str, name: str) -> Optional[ImportEntry]:
    """Look up the import entry that brings ``name`` into scope in ``source``."""
    statement = find_statement(parse_imports(source), name)
    return statement.entry_for(name) if statement else None


def remove_binding(statement: ImportStatement, name: str) -> Optional[str]:
    """
    Rewrite ``statement`` without the binding ``name``.

    Everything before and after the removed binding, including the module
    string, is kept as written.

    Returns:
        The new statement text, or None when no binding would remain
    """
    remaining = [bound for bound in statement.bound_names if bound != name]
    if not remaining:
        return None

    text = statement.text
    escaped = re.escape(name)
    if statement.default == name:
        return re.sub(rf"(\bimport\s+){escaped}\s*,\s*", r"\1", text, count=1)
    if statement.namespace == name:
        return re.sub(rf"\s*,?\s*\*\s*as\s+{escaped}\b", "", text, count=1)

    brace = _BRACES_RE.search(text)
    if not brace:
        return text

    kept = []
    for spec in brace.group("inner").split(","):
        spec = " ".join(spec.split())
        if not spec:
            continue
        match = _SPECIFIER_RE.match(spec)
        local = (match.group("local") or match.group("imported")) if match else spec
        if local != name:
            kept.append(spec)

    if not kept:
        # Only the default/namespace part is left
        return text[: brace.start()].rstrip().rstrip(",") + " " + text[brace.end():].lstrip()

    inner = brace.group("inner")
    if "\n" in inner:
        indent_match = re.match(r"\s*\n([ \t]*)", inner)
        indent = indent_match.group(1) if indent_match else "  "
        closing = inner[inner.rfind("\n") + 1:]
        trailing = "," if inner.rstrip().endswith(",") else ""
        new_inner = "\n" + ",\n".join(indent + spec for spec in kept) + trailing + "\n" + closing
    else:
        lead = inner[: len(inner) - len(inner.lstrip())]
        trail = inner[len(inner.rstrip()):]
        new_inner = lead + ", ".join(kept) + trail

    return text[: brace.start()] + "{" + new_inner + "}" + text[brace.end():]


def leading_import_block(source: str) -> List[ImportStatement]:
    """
    Return the statements of the top-of-file import block.

    The block starts at the first import statement and continues while only
    blank lines and comments separate consecutive statements.
    """
    statements = parse_imports(source)
    if not statements:
        return []

    lines = mask_comments(source).split("\n")
    block = [statements[0]]
    for statement in statements[1:]:
        gap = lines[block[-1].end_line + 1 : statement.start_line]
        if any(line.strip() for line in gap):
            break
        block.append(statement)
    return block


def import_group_rank(module: str) -> int:
    """Order imports as builtin, external, parent, sibling, index."""
    path = module.strip("'\"")
    if path.startswith(NODE_BUILTIN_PREFIX) or path.split("/")[0] in NODE_BUILTINS:
        return 0
    if path in (".", "./", "./index") or path.startswith("./index."):
        return 4
    if path.startswith("./"):
        return 3
    if path == ".." or path.startswith("../") or path.startswith("/"):
        return 2
    return 1


def sort_import_block(source: str) -> str:
    """
    Stable-sort the leading run of consecutive import statements by group.

    Only statements on directly consecutive lines are reordered; statements
    keep their whole lines (trailing comments included) and keep their
    relative order within a group.
    """
    block = leading_import_block(source)
    run = block[:1]
    for statement in block[1:]:
        if statement.start_line != run[-1].end_line + 1:
            break
        run.append(statement)
    if len(run) < 2:
        return source

    lines = source.split("\n")
    chunks = [
        (import_group_rank(statement.module), lines[statement.start_line : statement.end_line + 1])
        for statement in run
    ]
    ordered = [chunk for _, chunk in sorted(chunks, key=lambda item: item[0])]
    start, end = run[0].start_line, run[-1].end_line
    new_lines = lines[:start] + [line for chunk in ordered for line in chunk] + lines[end + 1 :]
    return "\n".join(new_lines)
