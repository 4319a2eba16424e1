# app.py

import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_login import LoginManager
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

# Load environment variables from .env file first
load_dotenv()

# Module imports after load_dotenv() - E402 is intentional
from config import get_config  # noqa: E402
from config.validation import validate_and_exit  # noqa: E402
from inkind_app.importer import init_importer  # noqa: E402
from inkind_app.models import User, db  # noqa: E402
from inkind_app.routes import init_routes  # noqa: E402
from inkind_app.utils.error_handler import init_error_handlers  # noqa: E402
from inkind_app.utils.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def _configure_sqlite_connection_factory(*, enable_foreign_keys: bool):
    """Return a connection hook applying concurrency-friendly pragmas."""

    def _configure_sqlite_connection(dbapi_connection, connection_record):  # pragma: no cover - instrumentation
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=5000")
            if enable_foreign_keys:
                cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    return _configure_sqlite_connection


def mask_database_url(uri):
    """Render a database URL for logs with any password hidden."""
    if not uri:
        return "<unset>"
    try:
        return make_url(uri).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable database url>"


def _load_user(user_id):
    try:
        return User.find_active(int(user_id))
    except (ValueError, TypeError):
        # Invalid user_id format
        return None


def create_app(config_object=None, **overrides):
    """
    Build the Flask application.

    ``config_object`` defaults to the class selected by FLASK_ENV; keyword
    ``overrides`` are applied on top before any extension is initialised.
    """
    app = Flask(__name__)

    flask_env = os.environ.get("FLASK_ENV", "development")
    if flask_env == "production":
        validate_and_exit(flask_env)

    app.config.from_object(config_object or get_config(flask_env))
    app.config.update(overrides)

    # Initialize extensions
    db.init_app(app)
    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.user_loader(_load_user)

    setup_logging(app)
    init_error_handlers(app)

    with app.app_context():
        engine = db.engine
        if engine.url.drivername.startswith("sqlite"):
            if not getattr(engine, "_sqlite_pragmas_configured", False):
                pragma_hook = _configure_sqlite_connection_factory(
                    enable_foreign_keys=app.config.get("SQLITE_ENFORCE_FOREIGN_KEYS", True)
                )
                event.listen(engine, "connect", pragma_hook)
                engine._sqlite_pragmas_configured = True  # type: ignore[attr-defined]
        app.logger.info(f"Database: {mask_database_url(app.config.get('SQLALCHEMY_DATABASE_URI'))}")
        # Create the database tables only if not in testing mode
        if not app.config.get("TESTING", False):
            db.create_all()

    init_routes(app)
    init_importer(app)

    return app


app = create_app()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.logger.info(f"Starting In-Kind Tracker API on port {port}")
    app.run(host="0.0.0.0", port=port)
