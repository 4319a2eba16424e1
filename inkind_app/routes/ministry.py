# inkind_app/routes/ministry.py

"""
Ministry routes
"""

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import ConflictError, Ministry, StoreError, db
from inkind_app.routes.helpers import collect_updates, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import ValidationError, normalize_bool, validate_code, validate_required_string

DUPLICATE_MINISTRY_ERROR = "A ministry with that code or name already exists."

MINISTRY_FIELD_VALIDATORS = {
    "ministry_name": lambda value: validate_required_string(value, "ministry_name", 255),
    "has_scale": lambda value: bool(normalize_bool(value)),
}


def register_ministry_routes(app):
    """Register ministry routes"""

    @app.route("/ministry", methods=["GET"])
    def list_ministries():
        try:
            ministries = Ministry.query.order_by(Ministry.ministry_name.asc()).all()
            return jsonify([ministry.to_dict() for ministry in ministries])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing ministries: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/ministry/<ministry_code>", methods=["GET"])
    def get_ministry(ministry_code):
        try:
            ministry_code = validate_code(ministry_code, "ministry_code")
        except ValidationError as e:
            return error_response(str(e), 400)

        ministry = db.session.get(Ministry, ministry_code)
        if ministry is None:
            return error_response("Ministry not found", 404)
        return jsonify(ministry.to_dict())

    @app.route("/ministry", methods=["POST"])
    def create_ministry():
        payload = request_payload()
        try:
            code = validate_code(payload.get("ministry_code"), "ministry_code")
            fields = {name: validate(payload.get(name)) for name, validate in MINISTRY_FIELD_VALIDATORS.items()}
            ministry = Ministry.insert(ministry_code=code, **fields)
        except ValidationError as e:
            return error_response(str(e), 400)
        except ConflictError:
            return error_response(DUPLICATE_MINISTRY_ERROR, 409)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error creating ministry: {str(e)}", exc_info=True)
            return internal_error_response(e)

        current_app.logger.info(f"Created ministry {ministry.ministry_code}")
        return jsonify(ministry.to_dict()), 201

    @app.route("/ministry/<ministry_code>", methods=["PATCH"])
    def update_ministry(ministry_code):
        try:
            ministry_code = validate_code(ministry_code, "ministry_code")
            updates = collect_updates(request_payload(), MINISTRY_FIELD_VALIDATORS)
        except ValidationError as e:
            return error_response(str(e), 400)
        if not updates:
            return error_response("No updatable fields provided.", 400)

        ministry = db.session.get(Ministry, ministry_code)
        if ministry is None:
            return error_response("Ministry not found", 404)

        try:
            ministry.apply_updates(**updates)
        except ConflictError:
            return error_response(DUPLICATE_MINISTRY_ERROR, 409)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error updating ministry {ministry_code}: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(ministry.to_dict())

    @app.route("/ministry/<ministry_code>", methods=["DELETE"])
    def delete_ministry(ministry_code):
        try:
            ministry_code = validate_code(ministry_code, "ministry_code")
        except ValidationError as e:
            return error_response(str(e), 400)

        ministry = db.session.get(Ministry, ministry_code)
        if ministry is None:
            return error_response("Ministry not found", 404)

        try:
            ministry.delete_row()
        except StoreError as e:
            current_app.logger.warning(f"Refused to delete ministry {ministry_code}: {str(e)}")
            return error_response("Ministry is still referenced by donations or wish-list items.", 400)
        return "", 204
