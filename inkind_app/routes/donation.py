# inkind_app/routes/donation.py

"""
Donation routes: CRUD plus the CSV import endpoint.
"""

from flask import current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.importer import CSVImportError, import_donations
from inkind_app.models import Donation, ReferenceViolationError, StoreError, db
from inkind_app.routes.helpers import collect_updates, current_user_id, read_csv_body, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import (
    ValidationError,
    validate_amount,
    validate_date,
    validate_gl_acct,
    validate_optional_code,
    validate_optional_id,
    validate_optional_string,
    validate_positive_id,
    validate_quantity,
)

API_DESCRIPTION_MAX_LENGTH = 500
REFERENCE_ERROR = "Referenced ministry, organization, individual, or user does not exist."

DONATION_FIELD_VALIDATORS = {
    "date_received": validate_date,
    "gl_acct": validate_gl_acct,
    "quantity": validate_quantity,
    "amount": validate_amount,
    "description": lambda value: validate_optional_string(value, "description", API_DESCRIPTION_MAX_LENGTH),
    "ministry_code": lambda value: validate_optional_code(value, "ministry_code"),
    "organization_code": lambda value: validate_optional_code(value, "organization_code"),
    "individual_id": lambda value: validate_optional_id(value, "individual_id"),
}


def register_donation_routes(app):
    """Register donation routes"""

    @app.route("/donation", methods=["GET"])
    def list_donations():
        try:
            individual_id = validate_optional_id(request.args.get("individual_id"), "individual_id")
            organization_code = validate_optional_code(request.args.get("organization_code"), "organization_code")
        except ValidationError as e:
            return error_response(str(e), 400)

        try:
            query = Donation.query
            if individual_id is not None:
                query = query.filter(Donation.individual_id == individual_id)
            if organization_code is not None:
                query = query.filter(Donation.organization_code == organization_code)
            donations = query.order_by(Donation.date_received.desc(), Donation.donation_id.desc()).all()
            return jsonify([donation.to_dict() for donation in donations])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing donations: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/donation/<donation_id>", methods=["GET"])
    def get_donation(donation_id):
        try:
            donation_id = validate_positive_id(donation_id, "donation_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        donation = db.session.get(Donation, donation_id)
        if donation is None:
            return error_response("Donation not found", 404)
        return jsonify(donation.to_dict())

    @app.route("/donation", methods=["POST"])
    def create_donation():
        payload = request_payload()
        try:
            fields = {name: validate(payload.get(name)) for name, validate in DONATION_FIELD_VALIDATORS.items()}
            donation = Donation.insert(**fields, user_id=current_user_id())
        except ValidationError as e:
            return error_response(str(e), 400)
        except ReferenceViolationError:
            return error_response(REFERENCE_ERROR, 400)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error creating donation: {str(e)}", exc_info=True)
            return internal_error_response(e)

        current_app.logger.info(f"Created donation {donation.donation_id}")
        return jsonify(donation.to_dict()), 201

    @app.route("/donation/<donation_id>", methods=["PATCH"])
    def update_donation(donation_id):
        try:
            donation_id = validate_positive_id(donation_id, "donation_id")
            updates = collect_updates(request_payload(), DONATION_FIELD_VALIDATORS)
        except ValidationError as e:
            return error_response(str(e), 400)
        if not updates:
            return error_response("No updatable fields provided.", 400)

        donation = db.session.get(Donation, donation_id)
        if donation is None:
            return error_response("Donation not found", 404)

        try:
            donation.apply_updates(**updates)
        except ReferenceViolationError:
            return error_response(REFERENCE_ERROR, 400)
        except StoreError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error updating donation {donation_id}: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(donation.to_dict())

    @app.route("/donation/<donation_id>", methods=["DELETE"])
    def delete_donation(donation_id):
        try:
            donation_id = validate_positive_id(donation_id, "donation_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        donation = db.session.get(Donation, donation_id)
        if donation is None:
            return error_response("Donation not found", 404)

        deleted, error = donation.safe_delete()
        if not deleted:
            return error_response(error, 400)
        return "", 204

    @app.route("/donation/import", methods=["POST"])
    def import_donation_csv():
        """
        Import donations from a CSV body or a multipart ``file`` upload.

        Returns 201 with the run summary even when some rows failed.
        """
        csv_text = read_csv_body(current_app.config["IMPORTER_DONATION_MAX_BYTES"])
        try:
            summary = import_donations(csv_text, user_id=current_user_id())
        except CSVImportError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error importing donations: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(summary.to_dict()), 201
