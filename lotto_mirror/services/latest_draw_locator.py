"""Find the newest published draw with point existence queries only."""

from __future__ import annotations

import logging
from typing import Protocol


logger = logging.getLogger(__name__)


class DrawProbe(Protocol):
    def exists(self, draw_no: int) -> bool: ...


class LatestDrawLocator:
    """Exponential search for an upper bound + binary search for the boundary.

    Published draws are always ``1..N``. Starting from a seed, the locator
    doubles until it finds a missing draw (never probing above
    ``max_guess``) and then bisects. If the seed itself is missing it bisects
    downwards instead. ``AnomalousResponseError`` from the probe propagates
    as-is and stops the search.
    """

    def __init__(self, probe: DrawProbe, max_guess: int = 10_000, default_guess: int = 1100) -> None:
        if max_guess < 1:
            raise ValueError("max_guess must be >= 1")
        self._probe = probe
        self._max_guess = max_guess
        self._default_guess = default_guess

    def find_latest(self, seed: int | None = None) -> int:
        start = seed if seed and seed > 0 else self._default_guess
        start = max(1, min(int(start), self._max_guess))

        if not self._probe.exists(start):
            latest = self._search_below(start)
            logger.info("Seed %s not published yet, latest is %s", start, latest)
            return latest

        low = start
        while True:
            # The cap is probed once; if it exists it is the answer.
            if low >= self._max_guess:
                logger.warning("Draw %s exists, latest clamped to the ceiling", low)
                return self._max_guess
            high = min(low * 2, self._max_guess)
            if not self._probe.exists(high):
                break
            low = high

        # low exists, high does not.
        while low + 1 < high:
            mid = (low + high) // 2
            if self._probe.exists(mid):
                low = mid
            else:
                high = mid
        return low

    def _search_below(self, missing: int) -> int:
        lo = 1
        hi = missing - 1
        while lo <= hi:
            mid = (lo + hi) // 2
            if self._probe.exists(mid):
                lo = mid + 1
            else:
                hi = mid - 1
        return max(1, hi)
