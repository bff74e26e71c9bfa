"""Freshness, single-flight and block cool-down around the draw cache."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future
from threading import Lock
from typing import Callable

from lotto_mirror.errors import AnomalousResponseError
from lotto_mirror.models.cache import CacheState, DrawCache
from lotto_mirror.models.draw import Draw
from lotto_mirror.services.latest_draw_locator import LatestDrawLocator
from lotto_mirror.services.range_fetcher import RangeFetcher


logger = logging.getLogger(__name__)


class CacheCoordinator:
    """The only writer of the cache's scalar fields.

    ``ensure_fresh()`` is safe to call from any number of request threads:
    while the cache is stale exactly one of them (the leader) runs a sync and
    the rest wait on the leader's ``Future``.
    """

    def __init__(
        self,
        cache: DrawCache,
        locator: LatestDrawLocator,
        range_fetcher: RangeFetcher,
        *,
        ttl_seconds: float = 12 * 60 * 60,
        block_ttl_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.cache = cache
        self._locator = locator
        self._range_fetcher = range_fetcher
        self._ttl = float(ttl_seconds)
        self._block_ttl = float(block_ttl_seconds)
        self._clock = clock
        self._lock = Lock()

    def _is_fresh(self) -> bool:
        updated_at = self.cache.updated_at
        return updated_at > 0 and self._clock() - updated_at < self._ttl

    def _is_blocked(self) -> bool:
        blocked_until = self.cache.blocked_until
        return blocked_until is not None and self._clock() < blocked_until

    def state(self) -> CacheState:
        if self.cache.in_flight is not None:
            return CacheState.SYNCING
        if self.cache.updated_at <= 0:
            return CacheState.UNINITIALIZED
        if self._is_blocked():
            return CacheState.BLOCKED
        if self._is_fresh():
            return CacheState.FRESH
        return CacheState.STALE

    def active_block_until(self) -> float | None:
        """End of the current cool-down, or None once it has passed."""

        return self.cache.blocked_until if self._is_blocked() else None

    def ensure_fresh(self) -> DrawCache:
        if self._is_fresh():
            return self.cache

        with self._lock:
            # A sync may have finished between the check above and the lock.
            if self._is_fresh():
                return self.cache
            in_flight = self.cache.in_flight
            leader = in_flight is None
            if leader:
                in_flight = Future()
                in_flight.set_running_or_notify_cancel()
                self.cache.in_flight = in_flight

        if not leader:
            return in_flight.result()

        try:
            result = self._sync()
        except BaseException as exc:
            in_flight.set_exception(exc)
            raise
        else:
            in_flight.set_result(result)
            return result
        finally:
            with self._lock:
                self.cache.in_flight = None

    def _sync(self) -> DrawCache:
        cache = self.cache

        if self._is_blocked():
            logger.info("Upstream blocked until %s, skipping sync", cache.blocked_until)
            cache.updated_at = self._clock()
            return cache

        previous_latest = cache.latest
        logger.info("Syncing draws (known latest=%s, cached=%s)", previous_latest, len(cache.draws))

        # Draws above the previous latest only reach the cache together with
        # the new latest, so no key ever exceeds ``cache.latest``.
        staged: dict[int, Draw] = {}
        try:
            latest = self._locator.find_latest(previous_latest or None)
            missing = self._range_fetcher.fetch_range(previous_latest + 1, latest, staged)
            if cache.missing:
                # Earlier gaps get one more chance each sync.
                missing += self._range_fetcher.fetch_numbers(cache.missing, cache.draws)
        except AnomalousResponseError as exc:
            if staged:
                logger.info("Dropping %s draws above %s fetched before the block", len(staged), previous_latest)
            self._enter_cool_down(exc)
            return cache

        missing.sort()
        cache.draws.update(staged)
        cache.latest = max(previous_latest, latest)
        cache.missing = missing
        cache.blocked_until = None
        cache.updated_at = self._clock()
        logger.info(
            "Sync done: latest=%s, cached=%s, missing=%s",
            cache.latest,
            len(cache.draws),
            len(missing),
        )
        return cache

    def _enter_cool_down(self, exc: AnomalousResponseError) -> None:
        now = self._clock()
        self.cache.blocked_until = now + self._block_ttl
        self.cache.updated_at = now
        logger.warning(
            "Upstream served a block page (%s); pausing upstream calls for %ss",
            exc,
            int(self._block_ttl),
        )
