# routescope/scheduler/recompute.py
"""
Memoized, debounced route recomputation per open document.

Per source identity the scheduler moves through
    IDLE -> DEBOUNCING -> EXTRACTING -> IDLE

- A request whose text fingerprint matches a cache entry younger than the
  TTL returns the cached routes immediately. A hit also supersedes any
  queued or running recomputation for that identity.
- Otherwise the request (re)starts the identity's debounce timer. Requests
  arriving before the timer fires coalesce: the last text wins and every
  waiting caller receives the result of the single extraction.
- The cancel signal (anything with `is_set()`) is checked before and after
  extraction; a cancelled run resolves to [] and writes nothing.
- Extractions for one identity are serialized and a cache write only
  commits if no newer request for that identity was issued meanwhile.

Everything runs on one asyncio loop; only the extraction itself is
offloaded to the default executor.
"""

import asyncio
import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Hashable, List, Optional, Set, Tuple

from routescope.models.route_model import Route
from routescope.scanner.parser_registry import ParserRegistry
from routescope.utils.logger import get_logger
from routescope.utils.text_helpers import compute_fingerprint

logger = get_logger(__name__)


class SchedulerState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    EXTRACTING = "extracting"


@dataclass(frozen=True)
class CacheEntry:
    routes: Tuple[Route, ...]
    timestamp: float
    fingerprint: str


@dataclass
class _PendingRequest:
    future: asyncio.Future
    generation: int = 0
    language_id: str = ""
    text: str = ""
    fingerprint: str = ""
    cancel_signal: Any = None
    timer: Optional[asyncio.TimerHandle] = None


@dataclass
class SchedulerStats:
    hits: int = 0
    misses: int = 0
    extractions: int = 0
    cancellations: int = 0
    stale_writes: int = 0
    failures: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "extractions": self.extractions,
            "cancellations": self.cancellations,
            "stale_writes": self.stale_writes,
            "failures": self.failures,
        }


def _is_cancelled(signal) -> bool:
    return signal is not None and signal.is_set()


class RecomputationScheduler:
    def __init__(
        self,
        registry: ParserRegistry,
        ttl_seconds: float = 300.0,
        debounce_seconds: float = 0.3,
        enable_cache: bool = True,
        offload: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.registry = registry
        self.ttl_seconds = ttl_seconds
        self.debounce_seconds = debounce_seconds
        self.enable_cache = enable_cache
        self.offload = offload
        self._clock = clock

        self._cache: Dict[Hashable, CacheEntry] = {}
        self._pending: Dict[Hashable, _PendingRequest] = {}
        self._latest: Dict[Hashable, int] = {}
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._extracting: Dict[Hashable, int] = {}
        self._tasks: Set[asyncio.Task] = set()
        self._counter = itertools.count(1)
        self.stats = SchedulerStats()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def request(
        self,
        identity: Hashable,
        language_id: str,
        text: str,
        cancel_signal: Any = None,
    ) -> List[Route]:
        """Return the routes for `text`, from cache or after a debounced extraction."""
        fingerprint = compute_fingerprint(text)
        entry = self._valid_entry(identity, fingerprint)
        if entry is not None:
            self.stats.hits += 1
            logger.debug("Cache hit for %s", identity)
            self._supersede(identity, entry)
            return list(entry.routes)

        self.stats.misses += 1
        loop = asyncio.get_running_loop()
        pending = self._pending.get(identity)
        if pending is None:
            pending = _PendingRequest(future=loop.create_future())
            self._pending[identity] = pending
        elif pending.timer is not None:
            pending.timer.cancel()

        generation = next(self._counter)
        self._latest[identity] = generation
        pending.generation = generation
        pending.language_id = language_id
        pending.text = text
        pending.fingerprint = fingerprint
        pending.cancel_signal = cancel_signal
        pending.timer = loop.call_later(self.debounce_seconds, self._fire, identity, pending)

        # one caller going away must not cancel the shared result
        return await asyncio.shield(pending.future)

    def clear_cache(self) -> None:
        count = len(self._cache)
        self._cache.clear()
        logger.info("Route cache cleared (%d entries)", count)

    def forget(self, identity: Hashable) -> None:
        """Drop everything held for a closed document."""
        self._cache.pop(identity, None)
        self._latest.pop(identity, None)
        pending = self._pending.pop(identity, None)
        if pending is not None:
            if pending.timer is not None:
                pending.timer.cancel()
            if not pending.future.done():
                pending.future.set_result([])
        if not self._extracting.get(identity):
            self._locks.pop(identity, None)

    def cached(self, identity: Hashable) -> Optional[CacheEntry]:
        return self._cache.get(identity)

    def state(self, identity: Hashable) -> SchedulerState:
        if identity in self._pending:
            return SchedulerState.DEBOUNCING
        if self._extracting.get(identity):
            return SchedulerState.EXTRACTING
        return SchedulerState.IDLE

    async def drain(self) -> None:
        """Wait for every started extraction task to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _valid_entry(self, identity: Hashable, fingerprint: str) -> Optional[CacheEntry]:
        if not self.enable_cache:
            return None
        entry = self._cache.get(identity)
        if entry is None or entry.fingerprint != fingerprint:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            del self._cache[identity]
            return None
        return entry

    def _supersede(self, identity: Hashable, entry: CacheEntry) -> None:
        # the document is back at cached text; older queued or running work must not commit
        pending = self._pending.pop(identity, None)
        if pending is not None:
            if pending.timer is not None:
                pending.timer.cancel()
            if not pending.future.done():
                pending.future.set_result(list(entry.routes))
        if pending is not None or self._extracting.get(identity):
            self._latest[identity] = next(self._counter)

    def _lock_for(self, identity: Hashable) -> asyncio.Lock:
        lock = self._locks.get(identity)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[identity] = lock
        return lock

    def _fire(self, identity: Hashable, pending: _PendingRequest) -> None:
        if self._pending.get(identity) is pending:
            del self._pending[identity]
        pending.timer = None
        self._extracting[identity] = self._extracting.get(identity, 0) + 1
        task = asyncio.get_running_loop().create_task(self._run(identity, pending))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, identity: Hashable, pending: _PendingRequest) -> None:
        routes: List[Route] = []
        try:
            async with self._lock_for(identity):
                if _is_cancelled(pending.cancel_signal):
                    self.stats.cancellations += 1
                    logger.debug("Recomputation for %s cancelled before extraction", identity)
                else:
                    routes = await self._extract(pending.language_id, pending.text)
                    if _is_cancelled(pending.cancel_signal):
                        self.stats.cancellations += 1
                        logger.debug("Recomputation for %s cancelled after extraction", identity)
                        routes = []
                    else:
                        self._commit(identity, pending, routes)
        except Exception:
            self.stats.failures += 1
            logger.exception("Route recomputation failed for %s", identity)
            routes = []
        finally:
            remaining = self._extracting.get(identity, 1) - 1
            if remaining > 0:
                self._extracting[identity] = remaining
            else:
                self._extracting.pop(identity, None)
                if identity not in self._pending:
                    self._locks.pop(identity, None)
                    self._latest.pop(identity, None)
            if not pending.future.done():
                pending.future.set_result(routes)

    async def _extract(self, language_id: str, text: str) -> List[Route]:
        self.stats.extractions += 1
        if self.offload:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, self.registry.parse, language_id, text)
        return self.registry.parse(language_id, text)

    def _commit(self, identity: Hashable, pending: _PendingRequest, routes: List[Route]) -> None:
        if self._latest.get(identity) != pending.generation:
            self.stats.stale_writes += 1
            logger.debug("Discarding stale routes for %s", identity)
            return
        if not self.enable_cache:
            return
        self._cache[identity] = CacheEntry(tuple(routes), self._clock(), pending.fingerprint)
        logger.debug("Cached %d routes for %s", len(routes), identity)
