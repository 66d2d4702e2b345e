"""Flask application factory for the kitchen prep tracker."""

import logging
import os

from flask import Flask

from kitchen_prep.extensions import db, ma


def create_app(config_class: type | None = None) -> Flask:
    """Create and configure the Flask application.

    Telemetry is skipped entirely when OTEL_SDK_DISABLED is set.

    Args:
        config_class: Configuration class to use. Defaults to Config.

    Returns:
        Configured Flask application instance.
    """
    telemetry_enabled = not os.getenv("OTEL_SDK_DISABLED")
    if telemetry_enabled:
        from kitchen_prep import telemetry

        telemetry.setup_telemetry()

    app = Flask(__name__)

    if config_class is None:
        from kitchen_prep.config import Config

        config_class = Config
    app.config.from_object(config_class)

    db.init_app(app)
    ma.init_app(app)

    from kitchen_prep.errors import register_error_handlers
    from kitchen_prep.routes import (
        admin_bp,
        health_bp,
        mep_api_bp,
        mep_page_bp,
        stations_bp,
        tasks_bp,
    )

    for blueprint in (health_bp, admin_bp, stations_bp, tasks_bp, mep_api_bp, mep_page_bp):
        app.register_blueprint(blueprint)
    register_error_handlers(app)

    if telemetry_enabled:
        from kitchen_prep.middleware import register_metrics_middleware

        telemetry.instrument_flask_app(app)
        register_metrics_middleware(app)
        _attach_log_handler(telemetry.get_otel_log_handler())

    _configure_logging()

    if app.config.get("AUTO_INIT_DB"):
        from kitchen_prep.services import init_database, seed_stations

        with app.app_context():
            init_database()
            seed_stations()

    return app


def _attach_log_handler(handler: logging.Handler | None) -> None:
    if handler is None:
        return
    root_logger = logging.getLogger()
    if handler not in root_logger.handlers:
        root_logger.addHandler(handler)


def _configure_logging() -> None:
    """Send kitchen_prep records to the root logger; quiet werkzeug and SQL."""
    app_logger = logging.getLogger("kitchen_prep")
    app_logger.setLevel(logging.DEBUG)
    app_logger.propagate = True

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").propagate = False
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
