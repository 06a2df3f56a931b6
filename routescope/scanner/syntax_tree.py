# routescope/scanner/syntax_tree.py
"""
Thin helpers over tree-sitter for JavaScript / TypeScript sources.

Grammar objects are loaded once per language id; a fresh Parser is created
per parse call because tree-sitter parsers must not be shared across
threads (the scheduler runs extractions in an executor).
"""

from typing import Callable, Dict, Iterator, List, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

DEFAULT_LANGUAGE = "typescript"

_GRAMMARS: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "javascriptreact": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "typescriptreact": tree_sitter_typescript.language_tsx,
}

_languages: Dict[str, Language] = {}

FUNCTION_NODE_TYPES = frozenset({
    "arrow_function",
    "function",
    "function_expression",
    "generator_function",
})


def get_language(language_id: Optional[str]) -> Language:
    key = language_id if language_id in _GRAMMARS else DEFAULT_LANGUAGE
    language = _languages.get(key)
    if language is None:
        language = Language(_GRAMMARS[key]())
        _languages[key] = language
    return language


def build_tree(text: str, language_id: Optional[str] = None) -> Tree:
    """Parse `text` into a syntax tree. Raises TypeError for non-str input."""
    if not isinstance(text, str):
        raise TypeError(f"source text must be str, got {type(text).__name__}")
    parser = Parser(get_language(language_id))
    return parser.parse(text.encode("utf-8", errors="replace"))


def walk(root: Node) -> Iterator[Node]:
    """Pre-order traversal in document order, without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def strip_parens(node: Node) -> Node:
    while node.type == "parenthesized_expression" and node.named_child_count:
        inner = [c for c in node.named_children if c.type != "comment"]
        if not inner:
            break
        node = inner[0]
    return node


def call_arguments(call: Node) -> List[Node]:
    """Positional argument nodes of a call, comments excluded."""
    args = call.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        # tagged templates put a template_string in the arguments slot
        return []
    return [child for child in args.named_children if child.type != "comment"]


def member_parts(node: Node):
    """Return (object, property_name) for a member expression, else (None, None)."""
    if node is None or node.type != "member_expression":
        return None, None
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if obj is None or prop is None:
        return None, None
    return obj, node_text(prop)


def prefix_text(source: bytes, node: Node) -> str:
    """Source text before `node`, decoded from the parsed bytes."""
    return source[:node.start_byte].decode("utf-8", errors="replace")
