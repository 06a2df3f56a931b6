# routescope/scanner/express_parser.py
"""
Route extractor for route-registration style frameworks (Express and friends).

Recognized shapes:
  app.get('/users', listUsers)                 -> GET /users
  router.post('/users/:id', auth, update)      -> POST <mount prefix>/users/:id
  app.route('/books').get(list).post(create)   -> GET /books, POST /books

`app` is any configured application handle or a binding created from an
application factory; `router` is any binding created from the router
factory (see router_bindings). Each route carries the zero-based line of
its registration call, a best-effort handler name and its parameters.

parse() never raises: unresolvable paths are skipped, per-node failures are
logged and skipped, and a failure to build the tree yields [].
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from tree_sitter import Node

from routescope.models.route_model import Route
from routescope.scanner.base_parser import BaseParser
from routescope.scanner.path_resolver import resolve_path_argument
from routescope.scanner.router_bindings import BindingMap, collect_router_bindings
from routescope.scanner.syntax_tree import (
    FUNCTION_NODE_TYPES,
    build_tree,
    call_arguments,
    member_parts,
    node_text,
    prefix_text,
    walk,
)
from routescope.scanner.vocabulary import RouteVocabulary
from routescope.utils.logger import get_logger

logger = get_logger(__name__)

PATH_PARAM_RE = re.compile(r":(\w+)", re.ASCII)

ANONYMOUS_HANDLER = "anonymous"
DEFAULT_HANDLER = "handler"


def extract_path_params(path: str) -> List[str]:
    """`/users/:id/posts/:postId` -> ['id', 'postId']"""
    return PATH_PARAM_RE.findall(path)


def merge_params(*groups: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for group in groups:
        for name in group:
            if name not in seen:
                seen.append(name)
    return tuple(seen)


def compose_path(prefix: str, path: str) -> str:
    """Join a mount prefix and a route path into one absolute path."""
    if not path.startswith("/"):
        path = "/" + path
    return prefix.rstrip("/") + path


def handler_name(node: Optional[Node]) -> str:
    """
    Best-effort handler name for the final argument of a registration:
      identifier        -> its name
      function / arrow  -> "anonymous"
      array             -> same rule applied to its last element
      anything else     -> "handler"
    """
    if node is None:
        return DEFAULT_HANDLER
    if node.type == "identifier":
        return node_text(node)
    if node.type in FUNCTION_NODE_TYPES:
        return ANONYMOUS_HANDLER
    if node.type == "array":
        elements = [c for c in node.named_children if c.type != "comment"]
        if elements:
            return handler_name(elements[-1])
    return DEFAULT_HANDLER


def remove_duplicates(routes: Sequence[Route]) -> List[Route]:
    """Keep the first route per (method, path), preserving order."""
    seen = set()
    unique = []
    for route in routes:
        if route.key in seen:
            continue
        seen.add(route.key)
        unique.append(route)
    return unique


class ExpressParser(BaseParser):
    name = "express"
    framework = "Express"
    languages = frozenset({"javascript", "typescript", "javascriptreact", "typescriptreact"})

    def __init__(self, vocabulary: Optional[RouteVocabulary] = None):
        self.vocabulary = vocabulary or RouteVocabulary()

    def parse(self, text: str, language_id: Optional[str] = None) -> List[Route]:
        try:
            tree = build_tree(text, language_id)
        except Exception:
            logger.exception("Failed to build syntax tree; reporting no routes")
            return []

        try:
            source = text.encode("utf-8", errors="replace")
            bindings = collect_router_bindings(tree.root_node, self.vocabulary)
            routes: List[Route] = []
            for node in walk(tree.root_node):
                if node.type != "call_expression":
                    continue
                try:
                    route = self._route_from_call(node, text, source, bindings)
                except Exception as exc:
                    logger.warning("Error parsing node at line %d: %s", node.start_point[0], exc)
                    continue
                if route is not None:
                    routes.append(route)
        except Exception:
            logger.exception("Route extraction failed; reporting no routes")
            return []

        unique = remove_duplicates(routes)
        logger.debug("Parsed %d routes from file", len(unique))
        return unique

    # -------------------------------------------------------------

    def _route_from_call(self, call: Node, text: str, source: bytes, bindings: BindingMap) -> Optional[Route]:
        receiver, verb = member_parts(call.child_by_field_name("function"))
        if receiver is None or verb.lower() not in self.vocabulary.http_methods:
            return None

        args = call_arguments(call)
        if receiver.type == "identifier":
            prefix = bindings.prefix_for(node_text(receiver))
            if prefix is None or not args:
                return None
            path_arg = args[0]
            handler_arg = args[-1] if len(args) > 1 else None
        else:
            target = self._chained_route_target(receiver, bindings)
            if target is None:
                return None
            prefix, path_arg = target
            handler_arg = args[-1] if args else None

        # variable paths only look at declarations before the call
        limit = len(prefix_text(source, call))
        resolved = resolve_path_argument(path_arg, text, limit)
        if not resolved.path:
            return None

        full_path = compose_path(prefix, resolved.path)
        params = merge_params(resolved.extra_params, extract_path_params(full_path))
        return Route(
            method=verb.upper(),
            path=full_path,
            handler=handler_name(handler_arg),
            line=call.start_point[0],
            params=params or None,
        )

    def _chained_route_target(self, node: Node, bindings: BindingMap) -> Optional[Tuple[str, Node]]:
        """
        Follow `x.route(path).get(...).post(...)` back to the `.route(path)` call.
        Returns (prefix, path argument node) when `x` is a known route target.
        """
        while node is not None and node.type == "call_expression":
            receiver, method = member_parts(node.child_by_field_name("function"))
            if receiver is None:
                return None
            if method == "route":
                if receiver.type != "identifier":
                    return None
                prefix = bindings.prefix_for(node_text(receiver))
                args = call_arguments(node)
                if prefix is None or not args:
                    return None
                return prefix, args[0]
            if method.lower() not in self.vocabulary.http_methods:
                return None
            node = receiver
        return None
