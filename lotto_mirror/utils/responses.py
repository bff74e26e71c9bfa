"""Helpers for the ``{success, data, error}`` JSON envelope."""

from __future__ import annotations

from typing import Any, Mapping

from flask import jsonify
from flask.typing import ResponseReturnValue


def ok(data: Any, status_code: int = 200, headers: Mapping[str, str] | None = None) -> ResponseReturnValue:
    """Success response."""

    body = jsonify({"success": True, "data": data, "error": None})
    return body, status_code, dict(headers or {})


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> ResponseReturnValue:
    """Error response. Never used for upstream trouble, only for bad requests and bugs."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )
