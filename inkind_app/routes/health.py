# inkind_app/routes/health.py

from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import db


def register_health_routes(app):
    """Register health check route"""

    @app.route("/health", methods=["GET"])
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            db.session.rollback()
            current_app.logger.error(f"Health check failed: {str(e)}")
            return jsonify({"status": "error", "error": str(e)}), 503
        return jsonify({"status": "ok"})
