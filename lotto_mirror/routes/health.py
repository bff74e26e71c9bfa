"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from lotto_mirror.schemas.lotto import CacheStatusSchema
from lotto_mirror.state import get_coordinator
from lotto_mirror.utils.responses import ok
from lotto_mirror.utils.timestamps import to_utc_datetime

health_bp = Blueprint("health", __name__)

_status_schema = CacheStatusSchema()


@health_bp.get("/health")
def health_check():
    """Health check endpoint. Reports cache state without syncing."""

    coordinator = get_coordinator()
    snapshot = coordinator.cache.snapshot()
    cache_status = _status_schema.dump(
        {
            "state": coordinator.state().value,
            "latest": snapshot.latest,
            "total_draws": snapshot.total_draws,
            "missing": len(snapshot.missing),
            "updated_at": to_utc_datetime(snapshot.updated_at),
            "blocked_until": to_utc_datetime(coordinator.active_block_until()),
        }
    )
    return ok({"status": "ok", "cache": cache_status})
