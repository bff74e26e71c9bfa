"""Shared in-memory draw cache.

One instance per application, created in ``init_draw_cache`` and handed to the
coordinator. Scalar fields are only written by the coordinator while it holds
the single-flight slot; range-fetch workers write disjoint keys of ``draws``.
Readers go through ``snapshot()``.
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum

from lotto_mirror.models.draw import Draw


class CacheState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    SYNCING = "SYNCING"
    FRESH = "FRESH"
    STALE = "STALE"
    BLOCKED = "BLOCKED"


@dataclass(frozen=True)
class CacheSnapshot:
    updated_at: float
    latest: int
    draws: dict[int, Draw]
    missing: tuple[int, ...]
    blocked_until: float | None

    @property
    def total_draws(self) -> int:
        return len(self.draws)

    @property
    def latest_draw(self) -> Draw | None:
        return self.draws.get(self.latest)

    def ordered_draws(self) -> list[Draw]:
        return [self.draws[n] for n in sorted(self.draws)]


@dataclass
class DrawCache:
    updated_at: float = 0.0
    latest: int = 0
    draws: dict[int, Draw] = field(default_factory=dict)
    missing: list[int] = field(default_factory=list)
    blocked_until: float | None = None
    in_flight: Future | None = None

    def snapshot(self) -> CacheSnapshot:
        # dict.copy() runs without releasing the GIL, so it never observes a
        # half-applied insert from a worker thread.
        return CacheSnapshot(
            updated_at=self.updated_at,
            latest=self.latest,
            draws=self.draws.copy(),
            missing=tuple(self.missing),
            blocked_until=self.blocked_until,
        )
