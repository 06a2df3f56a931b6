# routescope/scanner/router_bindings.py
"""
Pre-pass over one syntax tree that finds router bindings and their mounts.

    const users = express.Router();   -> users: ""
    app.use('/api/users', users);     -> users: "/api/users"

The same pass records application handles created from an application
factory (`const api = express()`), which register routes at prefix "".

The result is built fresh for every parse call and exposed read-only.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Set, Tuple

from tree_sitter import Node

from routescope.scanner.path_resolver import string_value
from routescope.scanner.syntax_tree import call_arguments, member_parts, node_text, walk
from routescope.scanner.vocabulary import RouteVocabulary


class BindingMap(NamedTuple):
    routers: Mapping[str, str]  # binding name -> mount prefix
    app_handles: FrozenSet[str]

    def prefix_for(self, name: str) -> Optional[str]:
        """Registration prefix for a receiver name, or None if it is not a route target."""
        if name in self.routers:
            return self.routers[name]
        if name in self.app_handles:
            return ""
        return None


def _callee_name(node: Node) -> Optional[str]:
    """Trailing name of a callee: `Router` for both `express.Router` and `Router`."""
    if node is None:
        return None
    if node.type == "identifier":
        return node_text(node)
    _, prop = member_parts(node)
    return prop


def _classify_initializer(value: Node, vocabulary: RouteVocabulary) -> Optional[str]:
    if value is None:
        return None
    if value.type == "call_expression":
        func = value.child_by_field_name("function")
        if _callee_name(func) == vocabulary.router_factory_name:
            return "router"
        if func is not None and func.type == "identifier" and node_text(func) in vocabulary.app_factory_names:
            return "app"
    elif value.type == "new_expression":
        if _callee_name(value.child_by_field_name("constructor")) == vocabulary.router_factory_name:
            return "router"
    return None


def _mount_targets(call: Node, vocabulary: RouteVocabulary) -> Optional[Tuple[str, List[str]]]:
    """(prefix, [identifier names]) for `<obj>.use('/prefix', a, b)`, else None."""
    _, method = member_parts(call.child_by_field_name("function"))
    if method != vocabulary.mount_method_name:
        return None
    args = call_arguments(call)
    if len(args) < 2:
        # single-argument mount: no prefix to record
        return None
    prefix = string_value(args[0])
    if prefix is None:
        prefix = ""
    names = [node_text(arg) for arg in args[1:] if arg.type == "identifier"]
    return prefix, names


def collect_router_bindings(root: Node, vocabulary: RouteVocabulary) -> BindingMap:
    routers: Dict[str, str] = {}
    app_handles: Set[str] = set(vocabulary.app_handle_names)
    mounts: List[Tuple[str, List[str]]] = []

    for node in walk(root):
        if node.type == "variable_declarator":
            name = node.child_by_field_name("name")
            if name is None or name.type != "identifier":
                continue
            kind = _classify_initializer(node.child_by_field_name("value"), vocabulary)
            if kind == "router":
                routers[node_text(name)] = ""
            elif kind == "app":
                app_handles.add(node_text(name))
        elif node.type == "call_expression":
            mount = _mount_targets(node, vocabulary)
            if mount is not None:
                mounts.append(mount)

    # mounts resolve by name regardless of where the binding is declared
    for prefix, names in mounts:
        for name in names:
            if name in routers:
                routers[name] = prefix

    app_handles.difference_update(routers)
    return BindingMap(MappingProxyType(routers), frozenset(app_handles))
