"""Epoch-seconds helpers for API output."""

from __future__ import annotations

from datetime import datetime, timezone


def to_utc_datetime(ts: float | None) -> datetime | None:
    """0/None mean "never" and map to None."""

    if not ts:
        return None
    return datetime.fromtimestamp(ts, tz=timezone.utc)
