"""
Umami - Web analytics data layer
Application factory and initialization
"""
import os
import sys
import logging

import flask.cli
flask.cli.show_server_banner = lambda *args: None

from flask import Flask
import structlog

from constants import BUILD_VERSION
from settings import load_settings, is_production
from db import db, init_db
from exceptions import register_exception_handlers
from metrics import init_metrics
from routes.system import system_bp
from routes.websites import websites_bp
from utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs


def use_json_logs(settings):
    """JSON when asked for, or in production unless LOG_FORMAT says otherwise"""
    return settings["logging"]["format"] == "json" or (
        is_production(settings) and not os.environ.get("LOG_FORMAT")
    )


def configure_logging(settings):
    """Colored stdlib logging to stderr with structlog layered on top"""
    level = getattr(logging, str(settings["logging"]["level"]).upper(), logging.INFO)

    formatter = ColoredFormatter(
        '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler]
    )

    json_logs = use_json_logs(settings)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Apply filter to hide date from http access logs
    logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())


def create_app(test_config=None):
    """Application factory"""
    settings = load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = settings["database"]["url"]
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["LOG_QUERY"] = settings["logging"]["log_query"]
    app.config["BUILD_VERSION"] = BUILD_VERSION
    if test_config:
        app.config.update(test_config)

    db.init_app(app)

    register_exception_handlers(app)

    app.register_blueprint(system_bp)
    app.register_blueprint(websites_bp)

    init_metrics(app)

    init_db(app)

    structlog.get_logger('main').info("Application initialized", version=BUILD_VERSION)
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=int(os.environ.get("PORT", "3000")))
