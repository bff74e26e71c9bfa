"""UpstreamClient: one attempt, raw response classified into the error taxonomy."""

from __future__ import annotations

import json

import pytest
import requests

from conftest import FakeSession, make_response, success_payload
from lotto_mirror.clients.upstream_client import UpstreamClient, build_http_session
from lotto_mirror.errors import (
    AnomalousResponseError,
    MalformedResponseError,
    UpstreamConnectionError,
    UpstreamErrorKind,
    UpstreamHTTPError,
    UpstreamTimeoutError,
)

BASE = "https://example.test/common.do?method=getLottoNumber&drwNo="


def _client(handler) -> tuple[UpstreamClient, FakeSession]:
    session = FakeSession(handler)
    return UpstreamClient(session, base_url=BASE, timeout_seconds=3.5), session


def test_returns_decoded_object_and_uses_timeout():
    client, session = _client(lambda n: make_response(200, json.dumps(success_payload(n))))

    payload = client.fetch(1001)

    assert payload["drwNo"] == 1001
    assert payload["returnValue"] == "success"
    assert session.requested == [(BASE + "1001", 3.5)]


def test_timeout_is_classified():
    def handler(n):
        raise requests.ReadTimeout("slow")

    client, _ = _client(handler)
    with pytest.raises(UpstreamTimeoutError) as excinfo:
        client.fetch(7)
    assert excinfo.value.kind is UpstreamErrorKind.TIMEOUT
    assert excinfo.value.transient


def test_connection_failure_is_transient():
    def handler(n):
        raise requests.ConnectionError("reset by peer")

    client, _ = _client(handler)
    with pytest.raises(UpstreamConnectionError) as excinfo:
        client.fetch(7)
    assert excinfo.value.transient


def test_non_success_status():
    client, _ = _client(lambda n: make_response(503, "Service Unavailable", "text/plain"))
    with pytest.raises(UpstreamHTTPError) as excinfo:
        client.fetch(7)
    assert excinfo.value.status_code == 503
    assert excinfo.value.transient


def test_markup_body_is_anomalous_even_with_leading_whitespace():
    client, _ = _client(lambda n: make_response(200, "\r\n   <html><script>challenge()</script></html>", "text/html"))
    with pytest.raises(AnomalousResponseError) as excinfo:
        client.fetch(7)
    assert excinfo.value.kind is UpstreamErrorKind.ANOMALOUS
    assert not excinfo.value.transient
    assert excinfo.value.draw_no == 7


def test_markup_body_with_json_content_type_is_still_anomalous():
    client, _ = _client(lambda n: make_response(200, "<html></html>", "application/json"))
    with pytest.raises(AnomalousResponseError):
        client.fetch(7)


@pytest.mark.parametrize("body", ["not json at all", "{\"returnValue\": ", "[1, 2, 3]", "42"])
def test_unparsable_or_non_object_body_is_malformed(body):
    client, _ = _client(lambda n: make_response(200, body, "text/plain"))
    with pytest.raises(MalformedResponseError) as excinfo:
        client.fetch(7)
    assert excinfo.value.transient


def test_build_http_session_sets_headers_and_no_retries():
    session = build_http_session("test-agent/1.0", pool_size=3)

    assert session.headers["User-Agent"] == "test-agent/1.0"
    assert "application/json" in session.headers["Accept"]
    adapter = session.get_adapter("https://www.dhlottery.co.kr/")
    assert adapter.max_retries.total == 0
