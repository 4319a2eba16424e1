# inkind_app/routes/user.py

"""
User account administration routes.
"""

import json

from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import USER_STATUSES, ConflictError, ReferenceViolationError, StoreError, User, db
from inkind_app.routes.helpers import collect_updates, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import (
    ValidationError,
    validate_choice,
    validate_optional_email,
    validate_optional_string,
    validate_positive_id,
    validate_required_string,
)

DUPLICATE_USER_ERROR = "A user with that username or email already exists."
UNKNOWN_ROLE_ERROR = "role_id does not reference an existing role."

SORTABLE_USER_COLUMNS = {
    "user_id": User.id,
    "username": User.username,
    "name": User.name,
    "email": User.email,
    "status": User.status,
    "role_id": User.role_id,
    "created_at": User.created_at,
}
_SORT_DIRECTIONS = {1: "asc", -1: "desc", "asc": "asc", "desc": "desc"}


def validate_username(value):
    username = validate_required_string(value, "username", 80)
    return username.lower()


def validate_status(value):
    if value is None:
        raise ValidationError("status is required.")
    return validate_choice(str(value).strip().lower(), "status", USER_STATUSES)


def validate_role_reference(value):
    """``None``, ``""`` and ``"none"`` clear the role; anything else must be a positive id."""
    if value is None or str(value).strip().lower() in ("", "none"):
        return None
    return validate_positive_id(value, "role_id")


USER_FIELD_VALIDATORS = {
    "username": validate_username,
    "email": validate_optional_email,
    "name": lambda value: validate_optional_string(value, "name", 200),
    "status": validate_status,
    "profile_image_url": lambda value: validate_optional_string(value, "profile_image_url", 500),
    "role_id": validate_role_reference,
}


def _json_arg(name):
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError(f"{name} must be valid JSON.") from None


def _int_arg(name, minimum):
    raw = request.args.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        number = int(raw)
    except ValueError:
        number = None
    if number is None or number < minimum:
        raise ValidationError(f"{name} must be an integer of at least {minimum}.")
    return number


def _order_by(sort):
    """Translate ``{"field": 1 | -1 | "asc" | "desc"}`` into ORDER BY clauses."""
    if sort is None:
        return [User.username.asc()]
    if not isinstance(sort, dict):
        raise ValidationError("sort must be a JSON object.")
    clauses = []
    for field, direction in sort.items():
        column = SORTABLE_USER_COLUMNS.get(field)
        if column is None:
            raise ValidationError(f"Cannot sort users by {field}.")
        key = direction.lower() if isinstance(direction, str) else direction
        if isinstance(key, bool) or not isinstance(key, (int, str)) or key not in _SORT_DIRECTIONS:
            raise ValidationError(f"Sort direction for {field} must be 1, -1, asc or desc.")
        clauses.append(getattr(column, _SORT_DIRECTIONS[key])())
    return clauses or [User.username.asc()]


def _project(data, fields):
    if not fields:
        return data
    return {key: value for key, value in data.items() if key in fields or key == "user_id"}


def _store_error_response(error):
    if isinstance(error, ConflictError):
        return error_response(DUPLICATE_USER_ERROR, 409)
    if isinstance(error, ReferenceViolationError):
        return error_response(UNKNOWN_ROLE_ERROR, 400)
    return error_response(str(error), 400)


def register_user_routes(app):
    """Register user account routes"""

    @app.route("/user", methods=["GET"])
    def list_users():
        try:
            order_by = _order_by(_json_arg("sort"))
            limit = _int_arg("limit", 1)
            skip = _int_arg("skip", 0)
            fields = _json_arg("fields")
            if fields is not None and not isinstance(fields, list):
                raise ValidationError("fields must be a JSON array.")
        except ValidationError as e:
            return error_response(str(e), 400)

        try:
            query = User.query.order_by(*order_by)
            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)
            return jsonify([_project(user.to_dict(), fields) for user in query.all()])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing users: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/user/<user_id>", methods=["GET"])
    def get_user(user_id):
        try:
            user_id = validate_positive_id(user_id, "user_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        user = db.session.get(User, user_id)
        if user is None:
            return error_response("User not found", 404)
        return jsonify(user.to_dict())

    @app.route("/user", methods=["POST"])
    def create_user():
        payload = request_payload()
        try:
            fields = {
                name: validate(payload.get(name))
                for name, validate in USER_FIELD_VALIDATORS.items()
                if name != "status"
            }
            fields["status"] = validate_status(payload.get("status") or "active")
            user = User.insert(**fields)
        except ValidationError as e:
            return error_response(str(e), 400)
        except StoreError as e:
            return _store_error_response(e)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error creating user: {str(e)}", exc_info=True)
            return internal_error_response(e)

        current_app.logger.info(f"Created user {user.username}")
        return jsonify(user.to_dict()), 201

    @app.route("/user/<user_id>", methods=["PATCH"])
    def update_user(user_id):
        try:
            user_id = validate_positive_id(user_id, "user_id")
            updates = collect_updates(request_payload(), USER_FIELD_VALIDATORS)
        except ValidationError as e:
            return error_response(str(e), 400)
        if not updates:
            return error_response("No updatable fields provided.", 400)

        user = db.session.get(User, user_id)
        if user is None:
            return error_response("User not found", 404)

        try:
            user.apply_updates(**updates)
        except StoreError as e:
            return _store_error_response(e)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error updating user {user_id}: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(user.to_dict())

    @app.route("/user/<user_id>", methods=["DELETE"])
    def delete_user(user_id):
        try:
            user_id = validate_positive_id(user_id, "user_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        user = db.session.get(User, user_id)
        if user is None:
            return error_response("User not found", 404)

        try:
            user.delete_row()
        except StoreError as e:
            current_app.logger.warning(f"Refused to delete user {user_id}: {str(e)}")
            return error_response("User is still referenced by donations.", 400)
        return "", 204
