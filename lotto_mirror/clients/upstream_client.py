"""Single-attempt HTTP access to the per-draw upstream endpoint."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from lotto_mirror.errors import (
    AnomalousResponseError,
    MalformedResponseError,
    UpstreamConnectionError,
    UpstreamHTTPError,
    UpstreamTimeoutError,
)


logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/json,text/plain;q=0.9,*/*;q=0.8"


def build_http_session(user_agent: str, pool_size: int = 10) -> requests.Session:
    """Create a pooled requests session.

    No urllib3 ``Retry`` is mounted; every ``get`` is a single attempt and
    retries are decided by ``DrawFetcher``.
    """

    adapter = HTTPAdapter(max_retries=0, pool_connections=pool_size, pool_maxsize=pool_size)

    session = requests.Session()
    session.headers.update({"User-Agent": user_agent, "Accept": ACCEPT_HEADER})
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class UpstreamClient:
    """Issue one GET per draw number and classify the raw response."""

    def __init__(self, session: requests.Session, base_url: str, timeout_seconds: float = 8.0) -> None:
        self._session = session
        self._base_url = base_url
        self._timeout = float(timeout_seconds)

    def url_for(self, draw_no: int) -> str:
        return f"{self._base_url}{int(draw_no)}"

    def fetch(self, draw_no: int) -> dict[str, Any]:
        """Return the decoded JSON object for ``draw_no``.

        Raises:
            UpstreamTimeoutError: no answer within the timeout.
            UpstreamConnectionError: the request failed below HTTP.
            UpstreamHTTPError: non-2xx status.
            AnomalousResponseError: body is a markup page, not JSON.
            MalformedResponseError: body is neither markup nor a JSON object.
        """

        url = self.url_for(draw_no)
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.Timeout as exc:
            raise UpstreamTimeoutError(draw_no, self._timeout) from exc
        except requests.RequestException as exc:
            raise UpstreamConnectionError(draw_no, str(exc)) from exc

        if not resp.ok:
            raise UpstreamHTTPError(draw_no, resp.status_code)

        raw = resp.text
        if raw.strip().startswith("<"):
            logger.warning("Markup response for draw %s (content-type=%s)", draw_no, resp.headers.get("content-type"))
            raise AnomalousResponseError(draw_no)

        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedResponseError(draw_no, "non-JSON response") from exc

        if not isinstance(payload, dict):
            raise MalformedResponseError(draw_no, f"expected JSON object, got {type(payload).__name__}")
        return payload
