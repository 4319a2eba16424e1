# inkind_app/routes/auth.py

"""
User context routes.

Session handling is delegated to Flask-Login. These endpoints list the users
who may sign in and establish which user donations are attributed to,
along with that user's permissions.
"""

from flask import current_app, jsonify, request
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import USER_STATUSES, Permission, User
from inkind_app.routes.helpers import request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import ValidationError, validate_choice, validate_positive_id


def _user_context(user):
    return {"user": user.to_dict(), "permissions": user.permission_names()}


def register_auth_routes(app):
    """Register authentication routes"""

    @app.route("/auth/login", methods=["POST"])
    def login():
        try:
            user_id = validate_positive_id(request_payload().get("user_id"), "user_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        user = User.find_active(user_id)
        if user is None:
            current_app.logger.warning(f"Login rejected for user_id {user_id}")
            return error_response("Unknown or inactive user.", 401)

        login_user(user)
        current_app.logger.info(f"User {user.username} logged in")
        return jsonify(_user_context(user))

    @app.route("/auth/me", methods=["GET"])
    def me():
        if not current_user.is_authenticated:
            return error_response("Authentication required.", 401)
        return jsonify(_user_context(current_user))

    @app.route("/auth/logout", methods=["POST"])
    def logout():
        if current_user.is_authenticated:
            current_app.logger.info(f"User {current_user.username} logged out")
        logout_user()
        return "", 204

    @app.route("/auth/users", methods=["GET"])
    def list_login_users():
        statuses = [status.strip().lower() for status in request.args.getlist("status") if status.strip()]
        try:
            statuses = [validate_choice(status, "status", USER_STATUSES) for status in statuses or ["active"]]
            return jsonify([user.to_dict() for user in User.with_statuses(statuses)])
        except ValidationError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing users for login: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/permission", methods=["GET"])
    def list_permissions():
        try:
            permissions = Permission.query.order_by(Permission.name.asc()).all()
            return jsonify([permission.to_dict() for permission in permissions])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing permissions: {str(e)}", exc_info=True)
            return internal_error_response(e)
