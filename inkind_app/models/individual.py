# inkind_app/models/individual.py

from flask import current_app
from sqlalchemy import Index
from sqlalchemy.exc import SQLAlchemyError

from .base import BaseModel, db


class Individual(BaseModel):
    """A person who donates outside of any organization."""

    __tablename__ = "individual"

    individual_id = db.Column(db.Integer, primary_key=True)
    individual_first_name = db.Column(db.String(100), nullable=False)
    individual_last_name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(120), nullable=True)
    state = db.Column(db.String(2), nullable=True)
    zip = db.Column(db.String(10), nullable=True)
    # Not unique at the database level; imports dedupe on it case-insensitively.
    email = db.Column(db.String(255), nullable=True, index=True)

    __table_args__ = (Index("idx_individual_name", "individual_last_name", "individual_first_name"),)

    serialize_fields = (
        "individual_id",
        "individual_first_name",
        "individual_last_name",
        "address",
        "city",
        "state",
        "zip",
        "email",
    )

    def __repr__(self):
        return f"<Individual {self.individual_id} {self.individual_first_name} {self.individual_last_name}>"

    @staticmethod
    def find_by_id(individual_id):
        """Find individual by ID with error handling"""
        try:
            return db.session.get(Individual, individual_id)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error finding individual by id {individual_id}: {str(e)}")
            return None
