# debatehub/__init__.py
import os
from typing import Any, Dict, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from .config import Config, cors_origins
from .extensions import socketio

"""
Note on import ordering:
Socket.IO handlers must be registered before the first ``socketio.init_app``
so that every app created afterwards (one per test, for instance) gets them
re-attached to its fresh server. Importing the gateway here guarantees that.
"""
from .debate import gateway  # noqa: F401,E402  # registers debate socket events
from .debate import init_debate  # noqa: E402


def create_app(config_overrides: Optional[Mapping[str, Any]] = None, fact_checker=None):
    app = Flask(__name__, static_folder=Config.STATIC_DIR, static_url_path="/static")
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Under pytest run handlers synchronously on the test client
    testing = bool(app.config.get("TESTING")) or bool(os.environ.get("PYTEST_CURRENT_TEST"))
    if testing:
        app.config["TESTING"] = True

    origins = cors_origins(app.config.get("CORS_ORIGINS"))
    CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=origins != "*")

    # eventlet in production (gunicorn worker / run.py); threading under tests
    async_mode: str = "threading" if testing else os.environ.get("SOCKETIO_ASYNC_MODE", "eventlet")
    socketio_kwargs: Dict[str, Any] = {"cors_allowed_origins": origins, "async_mode": async_mode}
    if async_mode == "threading":
        socketio_kwargs["async_handlers"] = False
    socketio.init_app(app, **socketio_kwargs)

    if fact_checker is None and not testing:
        from .services.fact_check import FactChecker

        fact_checker = FactChecker(
            timeout_seconds=app.config.get("FACT_CHECK_TIMEOUT_SECONDS"),
            max_workers=app.config.get("FACT_CHECK_MAX_WORKERS"),
            max_tokens=app.config.get("FACT_CHECK_MAX_TOKENS"),
            temperature=app.config.get("FACT_CHECK_TEMPERATURE"),
        )
    init_debate(app, socketio, fact_checker)

    from .api import api_bp, main_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    app.logger.info(
        "%s ready (async_mode=%s, fact_checker=%s)",
        app.config.get("APP_NAME"),
        async_mode,
        type(fact_checker).__name__ if fact_checker is not None else None,
    )
    return app
