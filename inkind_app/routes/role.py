# inkind_app/routes/role.py

"""
Role administration routes.

Roles are addressed by numeric id; ``permission_ids`` replaces the role's
whole grant list whenever it is sent.
"""

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import ConflictError, Permission, Role, RolePermission, StoreError, db
from inkind_app.routes.helpers import collect_updates, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import (
    ValidationError,
    validate_optional_string,
    validate_positive_id,
    validate_required_string,
)

DUPLICATE_ROLE_ERROR = "A role with that name already exists."

ROLE_FIELD_VALIDATORS = {
    "role_name": lambda value: validate_required_string(value, "role_name", 50),
    "display_name": lambda value: validate_optional_string(value, "display_name", 100),
    "description": lambda value: validate_optional_string(value, "description", None),
    "default_route": lambda value: validate_optional_string(value, "default_route", 255),
}


def _role_columns(fields):
    columns = dict(fields)
    if "role_name" in columns:
        columns["name"] = columns.pop("role_name")
    if "display_name" in columns and columns["display_name"] is None:
        del columns["display_name"]
    return columns


def _permission_ids(value):
    """Distinct positive ids in request order; entries that are not positive integers are dropped."""
    ids = []
    for item in value:
        try:
            permission_id = validate_positive_id(item, "permission_id")
        except ValidationError:
            continue
        if permission_id not in ids:
            ids.append(permission_id)
    return ids


def _load_permissions(value):
    """Resolve a ``permission_ids`` list, raising ``ValidationError`` for ids that do not exist."""
    ids = _permission_ids(value)
    if not ids:
        return []
    permissions = Permission.query.filter(Permission.id.in_(ids)).all()
    missing = sorted(set(ids) - {permission.id for permission in permissions})
    if missing:
        raise ValidationError(f"Unknown permission_ids: {', '.join(str(i) for i in missing)}")
    return permissions


def register_role_routes(app):
    """Register role routes"""

    @app.route("/role", methods=["GET"])
    def list_roles():
        try:
            roles = Role.query.order_by(Role.name.asc()).all()
            return jsonify([role.to_dict() for role in roles])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing roles: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/role/<role_id>", methods=["GET"])
    def get_role(role_id):
        try:
            role_id = validate_positive_id(role_id, "role_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        role = db.session.get(Role, role_id)
        if role is None:
            return error_response("Role not found", 404)
        return jsonify(role.to_dict())

    @app.route("/role", methods=["POST"])
    def create_role():
        payload = request_payload()
        try:
            columns = _role_columns(
                {name: validate(payload.get(name)) for name, validate in ROLE_FIELD_VALIDATORS.items()}
            )
            permission_ids = payload.get("permission_ids")
            permissions = _load_permissions(permission_ids) if isinstance(permission_ids, list) else []
            columns.setdefault("display_name", columns["name"])
            role = Role.insert(
                permissions=[RolePermission(permission=permission) for permission in permissions], **columns
            )
        except ValidationError as e:
            return error_response(str(e), 400)
        except ConflictError:
            return error_response(DUPLICATE_ROLE_ERROR, 409)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error creating role: {str(e)}", exc_info=True)
            return internal_error_response(e)

        current_app.logger.info(f"Created role {role.name}")
        return jsonify(role.to_dict()), 201

    @app.route("/role/<role_id>", methods=["PATCH"])
    def update_role(role_id):
        payload = request_payload()
        try:
            role_id = validate_positive_id(role_id, "role_id")
            columns = _role_columns(collect_updates(payload, ROLE_FIELD_VALIDATORS))
            permission_ids = payload.get("permission_ids")
            permissions = _load_permissions(permission_ids) if isinstance(permission_ids, list) else None
        except ValidationError as e:
            return error_response(str(e), 400)
        if not columns and permissions is None:
            return error_response("No updatable fields provided.", 400)

        role = db.session.get(Role, role_id)
        if role is None:
            return error_response("Role not found", 404)

        try:
            if permissions is not None:
                role.replace_permissions(permissions)
            role.apply_updates(**columns)
        except ConflictError:
            return error_response(DUPLICATE_ROLE_ERROR, 409)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error updating role {role_id}: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(role.to_dict())

    @app.route("/role/<role_id>", methods=["DELETE"])
    def delete_role(role_id):
        try:
            role_id = validate_positive_id(role_id, "role_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        role = db.session.get(Role, role_id)
        if role is None:
            return error_response("Role not found", 404)

        try:
            role.delete_row()
        except StoreError as e:
            current_app.logger.warning(f"Refused to delete role {role_id}: {str(e)}")
            return error_response("Role is still assigned to users.", 400)
        return "", 204
