# routescope/scanner/base_parser.py
"""
Capability shared by every framework extractor.

`supports(language_id)` must be checked before `parse(text)` is called for a
document of that language.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, List, Optional

from routescope.models.route_model import Route


class BaseParser(ABC):
    name: str = "base"
    framework: str = "unknown"
    languages: FrozenSet[str] = frozenset()

    def supports(self, language_id: str) -> bool:
        return language_id in self.languages

    @abstractmethod
    def parse(self, text: str, language_id: Optional[str] = None) -> List[Route]:
        """Return the routes declared in `text`. Must not raise."""

    def describe(self) -> dict:
        return {"name": self.name, "framework": self.framework, "languages": sorted(self.languages)}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
