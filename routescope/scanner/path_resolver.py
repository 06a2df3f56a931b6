# routescope/scanner/path_resolver.py
"""
Resolve the path argument of a route-registration call to a string.

Handles:
  - string literals:            app.get('/users', ...)
  - template strings:           app.get(`/users/${id}/posts`, ...)
  - single-hop variable lookup: const p = '/users'; app.get(p, ...)

Anything else (member access, calls, spread, ...) is unresolved and the
caller skips the registration.

The variable lookup is a textual scan of the source preceding the call.
It does not respect lexical scope or shadowing; the first matching
declaration wins.
"""

import re
from typing import List, NamedTuple, Optional

from tree_sitter import Node

from routescope.scanner.syntax_tree import node_text, strip_parens

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_SIMPLE_ESCAPES = {"'", '"', "`", "\\", "/", "$"}


class ResolvedPath(NamedTuple):
    path: Optional[str]
    extra_params: List[str]


UNRESOLVED = ResolvedPath(None, [])


def _unescape(raw: str) -> str:
    def _replace(match):
        char = match.group(1)
        return char if char in _SIMPLE_ESCAPES else match.group(0)

    return _ESCAPE_RE.sub(_replace, raw)


def string_value(node: Node) -> Optional[str]:
    """Literal value of a `string` node, or None for any other node."""
    if node is None or node.type != "string":
        return None
    raw = node_text(node)
    if len(raw) < 2:
        return None
    return _unescape(raw[1:-1])


def _resolve_template(node: Node) -> ResolvedPath:
    raw = node.text
    base = node.start_byte
    cursor = 1  # skip opening backtick
    parts: List[str] = []
    params: List[str] = []

    for child in node.named_children:
        if child.type != "template_substitution":
            continue
        parts.append(_unescape(raw[cursor:child.start_byte - base].decode("utf-8", errors="replace")))
        cursor = child.end_byte - base
        expr = [c for c in child.named_children if c.type != "comment"]
        if len(expr) == 1 and expr[0].type == "identifier":
            name = node_text(expr[0])
            params.append(name)
            parts.append("${%s}" % name)

    parts.append(_unescape(raw[cursor:len(raw) - 1].decode("utf-8", errors="replace")))
    return ResolvedPath("".join(parts), params)


def lookup_variable_path(name: str, source_text: str) -> Optional[str]:
    """
    Find the first `const|let|var <name> = '<literal>'` declaration in
    source_text and return the literal, or None.
    """
    pattern = re.compile(
        r"\b(?:const|let|var)\s+" + re.escape(name)
        + r"(?![\w$])\s*(?::\s*[\w$.]+\s*)?=\s*(['\"])([^'\"\n]*)\1"
    )
    match = pattern.search(source_text)
    if match:
        return match.group(2)
    return None


def resolve_path_argument(node: Node, source_text: str, limit: Optional[int] = None) -> ResolvedPath:
    """
    Resolve a path argument node.

    `limit` bounds the variable lookup to source_text[:limit] (the text
    before the call); None searches the whole text.
    """
    if node is None:
        return UNRESOLVED
    node = strip_parens(node)

    if node.type == "string":
        return ResolvedPath(string_value(node), [])
    if node.type == "template_string":
        return _resolve_template(node)
    if node.type == "identifier":
        searched = source_text if limit is None else source_text[:limit]
        return ResolvedPath(lookup_variable_path(node_text(node), searched), [])
    return UNRESOLVED
