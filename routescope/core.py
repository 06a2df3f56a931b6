# routescope/core.py
"""
Long-lived context wiring the parser registry and the recomputation
scheduler together. Built once at startup and handed to every consumer.
"""

from typing import Optional

from routescope.config import Settings
from routescope.scanner.parser_registry import ParserRegistry, default_registry
from routescope.scanner.vocabulary import RouteVocabulary
from routescope.scheduler.recompute import RecomputationScheduler
from routescope.utils.logger import get_logger

logger = get_logger(__name__)


class RouteScopeCore:
    def __init__(self, settings: Settings, registry: Optional[ParserRegistry] = None):
        self.settings = settings
        self.registry = registry or default_registry(RouteVocabulary.from_settings(settings))
        self.scheduler = RecomputationScheduler(
            self.registry,
            ttl_seconds=settings.CACHE_TTL_SECONDS,
            debounce_seconds=settings.DEBOUNCE_MS / 1000.0,
            enable_cache=settings.ENABLE_CACHE,
        )
        logger.info(
            "RouteScope core ready (parsers=%s, ttl=%ss, debounce=%sms)",
            ",".join(self.registry.names()),
            settings.CACHE_TTL_SECONDS,
            settings.DEBOUNCE_MS,
        )

    def supports(self, language_id: str) -> bool:
        return self.registry.select(language_id) is not None

    async def routes_for(self, identity: str, language_id: str, text: str, cancel_signal=None):
        if not self.supports(language_id):
            return []
        return await self.scheduler.request(identity, language_id, text, cancel_signal)

    def clear_cache(self) -> None:
        self.scheduler.clear_cache()

    def close_document(self, identity: str) -> None:
        self.scheduler.forget(identity)
