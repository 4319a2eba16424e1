# inkind_app/routes/organization.py

"""
Organization routes
"""

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import ConflictError, Organization, StoreError
from inkind_app.routes.helpers import collect_updates, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import (
    ValidationError,
    validate_code,
    validate_optional_email,
    validate_optional_string,
    validate_optional_zip,
    validate_required_string,
)

DUPLICATE_CODE_ERROR = "An organization with that code already exists."

ORGANIZATION_FIELD_VALIDATORS = {
    "organization_name": lambda value: validate_required_string(value, "organization_name", 255),
    "contact_first_name": lambda value: validate_optional_string(value, "contact_first_name", 100),
    "contact_last_name": lambda value: validate_optional_string(value, "contact_last_name", 100),
    "address": lambda value: validate_optional_string(value, "address", 255),
    "city": lambda value: validate_optional_string(value, "city", 120),
    "state": lambda value: validate_optional_string(value, "state", 50),
    "zip": validate_optional_zip,
    "contact_email": lambda value: validate_optional_email(value, "contact_email"),
}


def register_organization_routes(app):
    """Register organization routes"""

    @app.route("/organization", methods=["GET"])
    def list_organizations():
        try:
            organizations = Organization.query.order_by(Organization.organization_name.asc()).all()
            return jsonify([organization.to_dict() for organization in organizations])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing organizations: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/organization/<organization_code>", methods=["GET"])
    def get_organization(organization_code):
        try:
            organization_code = validate_code(organization_code, "organization_code")
        except ValidationError as e:
            return error_response(str(e), 400)

        organization = Organization.find_by_code(organization_code)
        if organization is None:
            return error_response("Organization not found", 404)
        return jsonify(organization.to_dict())

    @app.route("/organization", methods=["POST"])
    def create_organization():
        payload = request_payload()
        try:
            code = validate_code(payload.get("organization_code"), "organization_code")
            fields = {name: validate(payload.get(name)) for name, validate in ORGANIZATION_FIELD_VALIDATORS.items()}
            organization = Organization.insert(organization_code=code, **fields)
        except ValidationError as e:
            return error_response(str(e), 400)
        except ConflictError:
            return error_response(DUPLICATE_CODE_ERROR, 409)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error creating organization: {str(e)}", exc_info=True)
            return internal_error_response(e)

        current_app.logger.info(f"Created organization {organization.organization_code}")
        return jsonify(organization.to_dict()), 201

    @app.route("/organization/<organization_code>", methods=["PATCH"])
    def update_organization(organization_code):
        try:
            organization_code = validate_code(organization_code, "organization_code")
            updates = collect_updates(request_payload(), ORGANIZATION_FIELD_VALIDATORS)
        except ValidationError as e:
            return error_response(str(e), 400)
        if not updates:
            return error_response("No updatable fields provided.", 400)

        organization = Organization.find_by_code(organization_code)
        if organization is None:
            return error_response("Organization not found", 404)

        try:
            organization.apply_updates(**updates)
        except ConflictError:
            return error_response(DUPLICATE_CODE_ERROR, 409)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error updating organization {organization_code}: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(organization.to_dict())

    @app.route("/organization/<organization_code>", methods=["DELETE"])
    def delete_organization(organization_code):
        try:
            organization_code = validate_code(organization_code, "organization_code")
        except ValidationError as e:
            return error_response(str(e), 400)

        organization = Organization.find_by_code(organization_code)
        if organization is None:
            return error_response("Organization not found", 404)

        try:
            organization.delete_row()
        except StoreError as e:
            current_app.logger.warning(f"Refused to delete organization {organization_code}: {str(e)}")
            return error_response("Organization is still referenced by donations.", 400)
        return "", 204
