"""Lotto frequency routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lotto_mirror.errors import NotFoundError
from lotto_mirror.schemas.lotto import (
    DrawListQuerySchema,
    DrawSchema,
    LottoFrequencySchema,
    LottoQuerySchema,
)
from lotto_mirror.services.frequency_service import build_ranking
from lotto_mirror.state import get_coordinator
from lotto_mirror.utils.responses import ok
from lotto_mirror.utils.timestamps import to_utc_datetime


lotto_bp = Blueprint("lotto", __name__)

_query_schema = LottoQuerySchema()
_list_query_schema = DrawListQuerySchema()
_frequency_schema = LottoFrequencySchema()
_draw_schema = DrawSchema()
_draws_schema = DrawSchema(many=True)

SOURCE = "dhlottery"


@lotto_bp.get("/api/lotto")
def get_lotto_frequency():
    """Return number frequencies over every cached draw.

    Query params:
    - includeBonus: count bonus numbers too (default false)

    Syncs with the upstream first when the cache is stale. Upstream trouble
    never turns into an error status; it shows up as ``missingDraws`` and
    ``apiBlockedUntil``.
    """

    params = _query_schema.load(request.args)
    include_bonus = bool(params["include_bonus"])

    coordinator = get_coordinator()
    snapshot = coordinator.ensure_fresh().snapshot()
    result = build_ranking(snapshot.draws.values(), include_bonus=include_bonus)
    latest_draw = snapshot.latest_draw

    return ok(
        _frequency_schema.dump(
            {
                "source": SOURCE,
                "updated_at": to_utc_datetime(snapshot.updated_at),
                "latest_draw": snapshot.latest,
                "latest_date": latest_draw.draw_date if latest_draw else None,
                "total_draws": snapshot.total_draws,
                "include_bonus": include_bonus,
                "counts": result.counts,
                "ranking": result.ranking,
                "top6": result.top6,
                "next6": result.next6,
                "top18": result.top18,
                "has_data": result.has_data,
                "missing_draws": list(snapshot.missing),
                "api_blocked_until": to_utc_datetime(coordinator.active_block_until()),
            }
        ),
        headers={"Cache-Control": "no-store"},
    )


@lotto_bp.get("/api/lotto/draws")
def list_cached_draws():
    """Most recent cached draws, newest first. Never triggers a sync."""

    params = _list_query_schema.load(request.args)
    draws = get_coordinator().cache.snapshot().ordered_draws()
    newest = draws[::-1][: int(params["limit"])]
    return ok(_draws_schema.dump(newest))


@lotto_bp.get("/api/lotto/draws/<int:draw_no>")
def get_cached_draw(draw_no: int):
    """One cached draw. Never triggers a sync."""

    draw = get_coordinator().cache.snapshot().draws.get(draw_no)
    if draw is None:
        raise NotFoundError(message=f"Draw {draw_no} is not cached")
    return ok(_draw_schema.dump(draw))
