"""Fill a set of draw numbers with a fixed-size worker pool."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from threading import Event, Lock
from typing import Callable, Iterable, MutableMapping, Protocol

from lotto_mirror.models.draw import Draw


logger = logging.getLogger(__name__)


class DrawLoader(Protocol):
    def fetch_draw(self, draw_no: int) -> Draw | None: ...


class _Cursor:
    """Hands out the queued draw numbers one at a time until stopped."""

    def __init__(self, numbers: list[int]) -> None:
        self._lock = Lock()
        self._numbers = numbers
        self._index = 0
        self.stopped = Event()

    def claim(self) -> int | None:
        with self._lock:
            if self.stopped.is_set() or self._index >= len(self._numbers):
                return None
            draw_no = self._numbers[self._index]
            self._index += 1
            return draw_no


class RangeFetcher:
    """Fetch draws with at most ``workers`` concurrent upstream calls."""

    def __init__(
        self,
        loader: DrawLoader,
        workers: int = 6,
        on_progress: Callable[[int], None] | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self._loader = loader
        self._workers = workers
        self._on_progress = on_progress

    def fetch_range(self, start: int, end: int, draws: MutableMapping[int, Draw]) -> list[int]:
        """Fetch every draw in ``[start, end]``; an empty range is a no-op."""

        if start > end:
            return []
        return self.fetch_numbers(range(start, end + 1), draws)

    def fetch_numbers(self, numbers: Iterable[int], draws: MutableMapping[int, Draw]) -> list[int]:
        """Store every fetched draw in ``draws`` and return the missing numbers.

        Numbers already present in ``draws`` are skipped, so a key is written
        at most once across syncs.

        Never aborts on a single missing draw. The first exception raised by a
        worker (in practice ``AnomalousResponseError``) stops all claiming and
        is re-raised after the pool has drained; draws stored before that stay.
        """

        queue = sorted(n for n in set(numbers) if n not in draws)
        if not queue:
            return []

        cursor = _Cursor(queue)

        def work() -> list[int]:
            local_missing: list[int] = []
            while True:
                draw_no = cursor.claim()
                if draw_no is None:
                    return local_missing
                try:
                    draw = self._loader.fetch_draw(draw_no)
                except Exception:
                    cursor.stopped.set()
                    raise
                if draw is None:
                    local_missing.append(draw_no)
                else:
                    draws[draw_no] = draw
                if self._on_progress is not None:
                    self._on_progress(draw_no)

        size = min(self._workers, len(queue))
        with ThreadPoolExecutor(max_workers=size, thread_name_prefix="draw-fetch") as pool:
            futures = [pool.submit(work) for _ in range(size)]

        missing: list[int] = []
        for future in futures:
            exc = future.exception()
            if exc is not None:
                raise exc
            missing.extend(future.result())

        missing.sort()
        if missing:
            logger.info("Fetched %s draws, %s missing: %s", len(queue) - len(missing), len(missing), missing)
        return missing
