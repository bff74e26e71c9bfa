"""Shared fakes: draws, an in-memory upstream, a clock and a Flask app."""

from __future__ import annotations

import json
import threading
from typing import Callable, Iterable

import pytest
import requests

from lotto_mirror import create_app
from lotto_mirror.errors import AnomalousResponseError
from lotto_mirror.models.cache import DrawCache
from lotto_mirror.models.draw import Draw
from lotto_mirror.services.cache_coordinator import CacheCoordinator
from lotto_mirror.services.latest_draw_locator import LatestDrawLocator
from lotto_mirror.services.range_fetcher import RangeFetcher
from lotto_mirror.state import EXTENSION_KEY


def numbers_for(draw_no: int) -> tuple[int, int, int, int, int, int]:
    base = draw_no * 7
    return tuple((base + k * 11) % 45 + 1 for k in range(6))  # type: ignore[return-value]


def bonus_for(draw_no: int) -> int:
    return (draw_no * 7 + 21) % 45 + 1


def make_draw(draw_no: int) -> Draw:
    return Draw(
        draw_no=draw_no,
        draw_date=f"2020-01-{draw_no % 28 + 1:02d}",
        numbers=numbers_for(draw_no),
        bonus=bonus_for(draw_no),
    )


def success_payload(draw_no: int) -> dict:
    nums = numbers_for(draw_no)
    payload = {
        "returnValue": "success",
        "drwNo": draw_no,
        "drwNoDate": make_draw(draw_no).draw_date,
        "bnusNo": bonus_for(draw_no),
        "totSellamnt": 100_000_000,
    }
    for i, n in enumerate(nums, start=1):
        payload[f"drwtNo{i}"] = n
    return payload


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Draw-level fake upstream: draws ``1..latest`` exist.

    ``failing`` numbers always come back as None (retries exhausted),
    ``anomalous`` numbers raise ``AnomalousResponseError``.
    """

    def __init__(
        self,
        latest: int,
        failing: Iterable[int] = (),
        anomalous: Iterable[int] = (),
    ) -> None:
        self.latest = latest
        self.failing = set(failing)
        self.anomalous = set(anomalous)
        self.calls: list[int] = []
        self._lock = threading.Lock()

    def fetch_draw(self, draw_no: int) -> Draw | None:
        with self._lock:
            self.calls.append(draw_no)
        if draw_no in self.anomalous:
            raise AnomalousResponseError(draw_no)
        if draw_no in self.failing or draw_no < 1 or draw_no > self.latest:
            return None
        return make_draw(draw_no)

    def exists(self, draw_no: int) -> bool:
        return self.fetch_draw(draw_no) is not None


def make_response(status_code: int, body: str, content_type: str = "application/json") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = content_type
    return resp


class FakeSession:
    """Stands in for ``requests.Session``; ``handler(draw_no)`` builds the reply."""

    def __init__(self, handler: Callable[[int], requests.Response]) -> None:
        self.handler = handler
        self.requested: list[tuple[str, float]] = []
        self._lock = threading.Lock()

    def get(self, url: str, timeout: float | None = None) -> requests.Response:
        with self._lock:
            self.requested.append((url, timeout))
        draw_no = int(url.rsplit("=", 1)[-1])
        return self.handler(draw_no)


def upstream_handler(latest: int, html_for: set[int] | None = None) -> Callable[[int], requests.Response]:
    """Serve draws ``1..latest``; numbers in ``html_for`` get a block page.

    ``html_for`` is read on every call, so callers can add to it mid-test.
    """

    html = html_for if html_for is not None else set()

    def handle(draw_no: int) -> requests.Response:
        if draw_no in html:
            return make_response(200, "\n  <!DOCTYPE html><html><body>blocked</body></html>", "text/html")
        if 1 <= draw_no <= latest:
            return make_response(200, json.dumps(success_payload(draw_no)))
        return make_response(200, json.dumps({"returnValue": "fail"}))

    return handle


def make_coordinator(
    fetcher: FakeFetcher,
    clock: FakeClock,
    *,
    workers: int = 4,
    ttl_seconds: float = 12 * 60 * 60,
    block_ttl_seconds: float = 15 * 60,
    max_guess: int = 10_000,
    default_guess: int = 1100,
) -> CacheCoordinator:
    return CacheCoordinator(
        DrawCache(),
        LatestDrawLocator(fetcher, max_guess=max_guess, default_guess=default_guess),
        RangeFetcher(fetcher, workers=workers),
        ttl_seconds=ttl_seconds,
        block_ttl_seconds=block_ttl_seconds,
        clock=clock,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "RETRY_BACKOFF_SECONDS": 0.0, "LOG_LEVEL": "WARNING"})
    yield app


@pytest.fixture
def install_coordinator(app):
    def install(coordinator: CacheCoordinator) -> CacheCoordinator:
        app.extensions[EXTENSION_KEY] = coordinator
        return coordinator

    return install


@pytest.fixture
def client(app):
    return app.test_client()
