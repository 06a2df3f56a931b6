# routescope/scanner/parser_registry.py
"""
Dispatch a document to the framework extractor that supports its language.

Parsers are consulted in registration order and the first one whose
`supports(language_id)` is true wins. Placeholder parsers stay registered so
capability queries remain truthful for their languages.
"""

from typing import List, Optional

from routescope.models.route_model import Route
from routescope.scanner.base_parser import BaseParser
from routescope.scanner.express_parser import ExpressParser
from routescope.scanner.stub_parsers import PLACEHOLDER_PARSERS
from routescope.scanner.vocabulary import RouteVocabulary
from routescope.utils.logger import get_logger

logger = get_logger(__name__)


class ParserRegistry:
    def __init__(self, parsers: Optional[List[BaseParser]] = None):
        self._parsers: List[BaseParser] = list(parsers or [])

    def register(self, parser: BaseParser) -> None:
        self._parsers.append(parser)

    def names(self) -> List[str]:
        return [parser.name for parser in self._parsers]

    def describe(self) -> List[dict]:
        return [parser.describe() for parser in self._parsers]

    def supporting(self, language_id: str) -> List[BaseParser]:
        return [parser for parser in self._parsers if parser.supports(language_id)]

    def select(self, language_id: str) -> Optional[BaseParser]:
        for parser in self._parsers:
            if parser.supports(language_id):
                return parser
        return None

    def parse(self, language_id: str, text: str) -> List[Route]:
        """Extract routes with the selected parser; [] when nothing supports the language."""
        parser = self.select(language_id)
        if parser is None:
            logger.debug("No parser supports language '%s'", language_id)
            return []
        try:
            return parser.parse(text, language_id)
        except Exception:
            logger.exception("Parser %s failed for language '%s'", parser.name, language_id)
            return []


def default_registry(vocabulary: Optional[RouteVocabulary] = None) -> ParserRegistry:
    """Express first, then every placeholder framework."""
    registry = ParserRegistry([ExpressParser(vocabulary)])
    for parser_cls in PLACEHOLDER_PARSERS:
        registry.register(parser_cls())
    return registry
