"""Logging configuration."""

from __future__ import annotations

import logging
from flask import Flask


def configure_logging(app: Flask) -> None:
    """Configure process-wide logging for request handlers and sync workers.

    Worker threads log through the same root handler, so the thread name is
    included to tell concurrent draw fetches apart.
    """

    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
    )

    # One line per upstream connection is too chatty during a range fetch.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
