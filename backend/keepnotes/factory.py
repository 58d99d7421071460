"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

import logging

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from keepnotes.core.config import PLACEHOLDER_JWT_SECRET, BaseConfig, get_config
from keepnotes.core.logger import configure_logging
from keepnotes.core.logger import init_app as init_logging

log = logging.getLogger(__name__)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application."""

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))
    _warn_insecure_defaults(app)

    # Trust one proxy hop for X-Forwarded-* (client ip, scheme)
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    from keepnotes.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from keepnotes.core import cors

    cors.init_app(app)

    from keepnotes.api import init_app as init_api

    init_api(app)

    from keepnotes.core import errors

    errors.init_app(app)

    return app


def _warn_insecure_defaults(app: Flask) -> None:
    if app.config.get("JWT_SECRET_KEY") == PLACEHOLDER_JWT_SECRET:
        log.warning("JWT_SECRET is not set; access tokens are signed with a placeholder key")
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        log.warning("DATABASE_URL is not set")
