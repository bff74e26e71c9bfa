"""Flask application package."""

from __future__ import annotations

from typing import Any, Mapping

from dotenv import load_dotenv
from flask import Flask


def create_app(config_overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        config_overrides: applied on top of the environment's config class.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lotto_mirror.config import get_config
    from lotto_mirror.error_handlers import register_error_handlers
    from lotto_mirror.logging_config import configure_logging
    from lotto_mirror.routes.health import health_bp
    from lotto_mirror.routes.lotto import lotto_bp
    from lotto_mirror.state import init_draw_cache

    app = Flask(__name__)
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app)
    init_draw_cache(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(lotto_bp)

    return app
