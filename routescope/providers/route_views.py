# routescope/providers/route_views.py
"""
Shapes handed to the editor integration for rendering.

  - build_code_lenses(): one inline "Run METHOD PATH" affordance per route
  - build_tree_items():  one tree node per route for the active document

Both carry the `{method, path}` payload that opens the request panel.
"""

from typing import Any, Dict, Iterable, List

from routescope.models.route_model import Route

RUN_COMMAND = "routescope.runApi"


def _command(title: str, route: Route) -> Dict[str, Any]:
    return {"command": RUN_COMMAND, "title": title, "arguments": [route.payload()]}


def build_code_lenses(routes: Iterable[Route], enabled: bool = True) -> List[Dict[str, Any]]:
    if not enabled:
        return []
    lenses = []
    for route in routes:
        title = f"Run {route.method} {route.path}"
        lenses.append({
            "line": route.line,
            "title": title,
            "command": _command(title, route),
        })
    return lenses


def build_tree_items(routes: Iterable[Route]) -> List[Dict[str, Any]]:
    items = []
    for route in routes:
        items.append({
            "label": f"{route.method} {route.path}",
            "tooltip": f"Line {route.line + 1}: {route.handler}",
            "command": _command("Run API", route),
            "contextValue": "route",
            "route": route.payload(),
        })
    return items
