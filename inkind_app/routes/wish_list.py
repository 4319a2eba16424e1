# inkind_app/routes/wish_list.py

"""
Wish-list routes
"""

from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.models import (
    DEFAULT_WISH_LIST_STATUS,
    WISH_LIST_STATUSES,
    WISH_LIST_TYPES,
    ReferenceViolationError,
    StoreError,
    WishListItem,
    db,
)
from inkind_app.routes.helpers import collect_updates, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import (
    ValidationError,
    validate_choice,
    validate_code,
    validate_optional_string,
    validate_positive_id,
    validate_required_string,
)

INVALID_MINISTRY_ERROR = "Invalid ministry_code."

WISH_LIST_FIELD_VALIDATORS = {
    "item_name": lambda value: validate_required_string(value, "item_name", 255),
    "ministry_code": lambda value: validate_code(value, "ministry_code"),
    "type": lambda value: validate_choice(value, "type", WISH_LIST_TYPES),
    "description": lambda value: validate_optional_string(value, "description", None),
    "status": lambda value: validate_choice(value, "status", WISH_LIST_STATUSES),
}


def register_wish_list_routes(app):
    """Register wish-list routes"""

    @app.route("/wish-list", methods=["GET"])
    def list_wish_list_items():
        ministry_code = request.args.get("ministry_code")
        try:
            ministry_code = validate_code(ministry_code, "ministry_code") if ministry_code else None
        except ValidationError as e:
            return error_response(str(e), 400)

        try:
            query = WishListItem.query
            if ministry_code:
                query = query.filter(WishListItem.ministry_code == ministry_code)
            items = query.order_by(
                WishListItem.status.asc(),
                WishListItem.updated_at.desc(),
                WishListItem.wishlist_id.desc(),
            ).all()
            return jsonify([item.to_dict() for item in items])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing wish-list items: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/wish-list/<wishlist_id>", methods=["GET"])
    def get_wish_list_item(wishlist_id):
        try:
            wishlist_id = validate_positive_id(wishlist_id, "wishlist_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        item = db.session.get(WishListItem, wishlist_id)
        if item is None:
            return error_response("Wish list item not found", 404)
        return jsonify(item.to_dict())

    @app.route("/wish-list", methods=["POST"])
    def create_wish_list_item():
        payload = dict(request_payload())
        if payload.get("status") is None:
            payload["status"] = DEFAULT_WISH_LIST_STATUS
        try:
            fields = {name: validate(payload.get(name)) for name, validate in WISH_LIST_FIELD_VALIDATORS.items()}
            item = WishListItem.insert(**fields)
        except ValidationError as e:
            return error_response(str(e), 400)
        except ReferenceViolationError:
            return error_response(INVALID_MINISTRY_ERROR, 400)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error creating wish-list item: {str(e)}", exc_info=True)
            return internal_error_response(e)

        current_app.logger.info(f"Created wish-list item {item.wishlist_id} for {item.ministry_code}")
        return jsonify(item.to_dict()), 201

    @app.route("/wish-list/<wishlist_id>", methods=["PATCH"])
    def update_wish_list_item(wishlist_id):
        try:
            wishlist_id = validate_positive_id(wishlist_id, "wishlist_id")
            updates = collect_updates(request_payload(), WISH_LIST_FIELD_VALIDATORS)
        except ValidationError as e:
            return error_response(str(e), 400)
        if not updates:
            return error_response("No updatable fields provided.", 400)

        item = db.session.get(WishListItem, wishlist_id)
        if item is None:
            return error_response("Wish list item not found", 404)

        try:
            item.apply_updates(**updates)
        except ReferenceViolationError:
            return error_response(INVALID_MINISTRY_ERROR, 400)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error updating wish-list item {wishlist_id}: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(item.to_dict())

    @app.route("/wish-list/<wishlist_id>", methods=["DELETE"])
    def delete_wish_list_item(wishlist_id):
        try:
            wishlist_id = validate_positive_id(wishlist_id, "wishlist_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        item = db.session.get(WishListItem, wishlist_id)
        if item is None:
            return error_response("Wish list item not found", 404)

        deleted, error = item.safe_delete()
        if not deleted:
            return error_response(error, 400)
        return "", 204
