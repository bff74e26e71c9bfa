"""Sync stack construction + per-app access.

The cache lives in ``app.extensions`` rather than a module global, so every
app (and every test) gets its own.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping

import requests
from flask import Flask, current_app

from lotto_mirror.clients.upstream_client import UpstreamClient, build_http_session
from lotto_mirror.models.cache import DrawCache
from lotto_mirror.services.cache_coordinator import CacheCoordinator
from lotto_mirror.services.draw_fetcher import DrawFetcher
from lotto_mirror.services.latest_draw_locator import LatestDrawLocator
from lotto_mirror.services.range_fetcher import RangeFetcher


EXTENSION_KEY = "draw_coordinator"


def build_coordinator(
    config: Mapping[str, Any],
    *,
    session: requests.Session | None = None,
    on_progress: Callable[[int], None] | None = None,
    clock: Callable[[], float] = time.time,
) -> CacheCoordinator:
    """Wire client -> fetcher -> locator/range fetcher -> coordinator from config."""

    workers = int(config["FETCH_CONCURRENCY"])
    http = session or build_http_session(str(config["USER_AGENT"]), pool_size=max(workers, 1))
    client = UpstreamClient(
        http,
        base_url=str(config["LOTTO_API_BASE"]),
        timeout_seconds=float(config["REQUEST_TIMEOUT_SECONDS"]),
    )
    fetcher = DrawFetcher(
        client,
        retries=int(config["FETCH_RETRIES"]),
        backoff_seconds=float(config["RETRY_BACKOFF_SECONDS"]),
    )
    locator = LatestDrawLocator(
        fetcher,
        max_guess=int(config["MAX_DRAW_GUESS"]),
        default_guess=int(config["DEFAULT_LATEST_GUESS"]),
    )
    range_fetcher = RangeFetcher(fetcher, workers=workers, on_progress=on_progress)
    return CacheCoordinator(
        DrawCache(),
        locator,
        range_fetcher,
        ttl_seconds=float(config["CACHE_TTL_SECONDS"]),
        block_ttl_seconds=float(config["BLOCK_TTL_SECONDS"]),
        clock=clock,
    )


def init_draw_cache(app: Flask) -> None:
    """Create the app's cache and coordinator. Nothing is fetched here."""

    app.extensions[EXTENSION_KEY] = build_coordinator(app.config)


def get_coordinator() -> CacheCoordinator:
    """Get the current app's cache coordinator."""

    coordinator: CacheCoordinator | None = current_app.extensions.get(EXTENSION_KEY)
    if coordinator is None:
        raise RuntimeError("Draw cache not initialized")
    return coordinator
