# routescope/models/route_model.py
"""
Route record produced by the extractors.

A Route is immutable. Two routes are duplicates iff `method` and `path`
are equal; deduplication itself lives in the extractor.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Route:
    method: str  # uppercase HTTP verb
    path: str  # absolute, slash-normalized
    handler: str  # identifier, "anonymous" or "handler"
    line: int  # zero-based line of the registration call
    params: Optional[Tuple[str, ...]] = None  # distinct names, first-seen order

    @property
    def key(self) -> Tuple[str, str]:
        return (self.method, self.path)

    def payload(self) -> Dict[str, str]:
        """The `{method, path}` shape handed to the request panel."""
        return {"method": self.method, "path": self.path}

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "method": self.method,
            "path": self.path,
            "handler": self.handler,
            "line": self.line,
        }
        if self.params:
            data["params"] = list(self.params)
        return data


def routes_to_dicts(routes: Iterable[Route]) -> List[Dict[str, Any]]:
    return [route.to_dict() for route in routes]
