"""Turn upstream payloads into ``Draw`` records, with bounded retry."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Protocol

from lotto_mirror.errors import UpstreamError
from lotto_mirror.models.draw import Draw


logger = logging.getLogger(__name__)

NUMBER_FIELDS = ("drwtNo1", "drwtNo2", "drwtNo3", "drwtNo4", "drwtNo5", "drwtNo6")


class DrawSource(Protocol):
    def fetch(self, draw_no: int) -> dict[str, Any]: ...


def _strict_int(value: Any) -> int:
    # bool is an int subclass; floats would truncate silently.
    if isinstance(value, bool):
        raise TypeError(f"boolean is not a draw field: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise ValueError(f"not an integer: {value!r}")


def parse_draw(payload: dict[str, Any], expected_draw_no: int) -> Draw | None:
    """Build a ``Draw`` from one upstream payload.

    Returns None when the upstream reports no such draw or when any field is
    unusable.
    """

    if payload.get("returnValue") != "success":
        return None

    try:
        draw_no = _strict_int(payload["drwNo"])
        numbers = tuple(_strict_int(payload[name]) for name in NUMBER_FIELDS)
        bonus = _strict_int(payload["bnusNo"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Unparsable fields in draw %s payload", expected_draw_no)
        return None

    if draw_no != expected_draw_no:
        logger.warning("Asked for draw %s, upstream answered %s", expected_draw_no, draw_no)
        return None
    if any(n < 1 or n > 45 for n in (*numbers, bonus)) or len(set(numbers)) != 6:
        logger.warning("Out-of-range or duplicate numbers in draw %s: %s + %s", draw_no, numbers, bonus)
        return None

    return Draw(
        draw_no=draw_no,
        draw_date=str(payload.get("drwNoDate") or ""),
        numbers=numbers,  # type: ignore[arg-type]
        bonus=bonus,
    )


class DrawFetcher:
    """Fetch one draw; None means "not found or currently unfetchable"."""

    def __init__(
        self,
        source: DrawSource,
        retries: int = 2,
        backoff_seconds: float = 0.25,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if retries < 0:
            raise ValueError("retries must be >= 0")
        self._source = source
        self._retries = retries
        self._backoff = backoff_seconds
        self._sleep = sleep

    def fetch_draw(self, draw_no: int) -> Draw | None:
        last_error: UpstreamError | None = None
        for attempt in range(self._retries + 1):
            if attempt:
                self._sleep(self._backoff * attempt)
            try:
                payload = self._source.fetch(draw_no)
            except UpstreamError as exc:
                if not exc.transient:
                    raise
                last_error = exc
                logger.debug("Attempt %s for draw %s failed: %s", attempt + 1, draw_no, exc)
                continue
            return parse_draw(payload, draw_no)

        logger.warning("Giving up on draw %s after %s attempts: %s", draw_no, self._retries + 1, last_error)
        return None

    def exists(self, draw_no: int) -> bool:
        return self.fetch_draw(draw_no) is not None
