# inkind_app/routes/individual.py

"""
Individual donor routes: CRUD plus the CSV import endpoint.
"""

from flask import current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from inkind_app.importer import CSVImportError, import_individuals
from inkind_app.models import Individual, StoreError, db
from inkind_app.routes.helpers import collect_updates, read_csv_body, request_payload
from inkind_app.utils.error_handler import error_response, internal_error_response
from inkind_app.utils.validators import (
    ValidationError,
    validate_optional_email,
    validate_optional_state,
    validate_optional_string,
    validate_optional_zip,
    validate_positive_id,
    validate_required_string,
)

INDIVIDUAL_FIELD_VALIDATORS = {
    "individual_first_name": lambda value: validate_required_string(value, "individual_first_name", 100),
    "individual_last_name": lambda value: validate_required_string(value, "individual_last_name", 100),
    "address": lambda value: validate_optional_string(value, "address", 255),
    "city": lambda value: validate_optional_string(value, "city", 120),
    "state": validate_optional_state,
    "zip": validate_optional_zip,
    "email": validate_optional_email,
}


def register_individual_routes(app):
    """Register individual routes"""

    @app.route("/individual", methods=["GET"])
    def list_individuals():
        try:
            individuals = Individual.query.order_by(
                Individual.individual_last_name.asc(), Individual.individual_first_name.asc()
            ).all()
            return jsonify([individual.to_dict() for individual in individuals])
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error listing individuals: {str(e)}", exc_info=True)
            return internal_error_response(e)

    @app.route("/individual/<individual_id>", methods=["GET"])
    def get_individual(individual_id):
        try:
            individual_id = validate_positive_id(individual_id, "individual_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        individual = Individual.find_by_id(individual_id)
        if individual is None:
            return error_response("Individual not found", 404)
        return jsonify(individual.to_dict())

    @app.route("/individual", methods=["POST"])
    def create_individual():
        payload = request_payload()
        try:
            fields = {name: validate(payload.get(name)) for name, validate in INDIVIDUAL_FIELD_VALIDATORS.items()}
        except ValidationError as e:
            return error_response(str(e), 400)

        individual, error = Individual.safe_create(**fields)
        if error:
            return error_response(error, 400)
        current_app.logger.info(f"Created individual {individual.individual_id}")
        return jsonify(individual.to_dict()), 201

    @app.route("/individual/<individual_id>", methods=["PATCH"])
    def update_individual(individual_id):
        try:
            individual_id = validate_positive_id(individual_id, "individual_id")
            updates = collect_updates(request_payload(), INDIVIDUAL_FIELD_VALIDATORS)
        except ValidationError as e:
            return error_response(str(e), 400)
        if not updates:
            return error_response("No updatable fields provided.", 400)

        individual = Individual.find_by_id(individual_id)
        if individual is None:
            return error_response("Individual not found", 404)

        updated, error = individual.safe_update(**updates)
        if error:
            return error_response(error, 400)
        return jsonify(updated.to_dict())

    @app.route("/individual/<individual_id>", methods=["DELETE"])
    def delete_individual(individual_id):
        try:
            individual_id = validate_positive_id(individual_id, "individual_id")
        except ValidationError as e:
            return error_response(str(e), 400)

        individual = db.session.get(Individual, individual_id)
        if individual is None:
            return error_response("Individual not found", 404)

        try:
            individual.delete_row()
        except StoreError as e:
            current_app.logger.warning(f"Refused to delete individual {individual_id}: {str(e)}")
            return error_response("Individual is still referenced by donations.", 400)
        return "", 204

    @app.route("/individual/import", methods=["POST"])
    def import_individual_csv():
        """Import individuals from a CSV body or a multipart ``file`` upload."""
        csv_text = read_csv_body(current_app.config["IMPORTER_INDIVIDUAL_MAX_BYTES"])
        try:
            summary = import_individuals(csv_text)
        except CSVImportError as e:
            return error_response(str(e), 400)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Error importing individuals: {str(e)}", exc_info=True)
            return internal_error_response(e)
        return jsonify(summary.to_dict()), 201
