# inkind_app/models/organization.py

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .base import BaseModel, db


class Organization(BaseModel):
    """Donor organization, keyed by a short upper-case code."""

    __tablename__ = "organization"

    organization_code = db.Column(db.String(50), primary_key=True)
    organization_name = db.Column(db.String(255), nullable=False, index=True)

    # Contact person
    contact_first_name = db.Column(db.String(100), nullable=True)
    contact_last_name = db.Column(db.String(100), nullable=True)
    contact_email = db.Column(db.String(255), nullable=True)

    # Mailing address
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(120), nullable=True)
    state = db.Column(db.String(50), nullable=True)
    zip = db.Column(db.String(10), nullable=True)

    serialize_fields = (
        "organization_code",
        "organization_name",
        "contact_first_name",
        "contact_last_name",
        "address",
        "city",
        "state",
        "zip",
        "contact_email",
    )

    def __repr__(self):
        return f"<Organization {self.organization_code}>"

    @staticmethod
    def find_by_code(code):
        """Find organization by code with error handling"""
        try:
            return db.session.get(Organization, code)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error finding organization by code {code}: {str(e)}")
            return None
