# inkind_app/utils/error_handler.py

"""
JSON error handlers.

Every error leaves the API as ``{"error": message}``. Unexpected exceptions
roll back the session, are logged with a traceback and become a 500.
"""

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from inkind_app.models import db

INTERNAL_ERROR_PREFIX = "Internal server error, "


def error_response(message, status=400):
    return jsonify({"error": message}), status


def internal_error_response(exc):
    """Roll back the session and return the generic 500 body for ``exc``."""
    db.session.rollback()
    return error_response(f"{INTERNAL_ERROR_PREFIX}{exc}", 500)


def init_error_handlers(app):
    """Register JSON handlers for HTTP errors and uncaught exceptions."""

    @app.errorhandler(404)
    def not_found_error(error):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return error_response("Method not allowed", 405)

    @app.errorhandler(413)
    def payload_too_large_error(error):
        return error_response("Request body is too large.", 413)

    @app.errorhandler(500)
    def internal_error(error):
        original = getattr(error, "original_exception", None) or error
        current_app.logger.error(f"Unhandled server error: {str(original)}")
        return internal_error_response(original)

    @app.errorhandler(HTTPException)
    def http_error(error):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def unhandled_exception(error):
        current_app.logger.error(f"Unhandled exception: {str(error)}", exc_info=True)
        return internal_error_response(error)
