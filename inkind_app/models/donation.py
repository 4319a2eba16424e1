# inkind_app/models/donation.py

from sqlalchemy import Index

from .base import BaseModel, db


class Donation(BaseModel):
    """
    A single in-kind donation.

    ``total_fair_market_value`` is derived from ``quantity * amount`` on read
    and is never stored.
    """

    __tablename__ = "donation"

    donation_id = db.Column(db.Integer, primary_key=True)
    date_received = db.Column(db.Date, nullable=False, index=True)
    gl_acct = db.Column(db.String(4), nullable=False)
    quantity = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False)
    amount = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Donor / attribution
    ministry_code = db.Column(db.String(50), db.ForeignKey("ministry.ministry_code"), nullable=True)
    organization_code = db.Column(db.String(50), db.ForeignKey("organization.organization_code"), nullable=True)
    individual_id = db.Column(db.Integer, db.ForeignKey("individual.individual_id"), nullable=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        Index("idx_donation_organization", "organization_code"),
        Index("idx_donation_individual", "individual_id"),
    )

    serialize_fields = (
        "donation_id",
        "date_received",
        "gl_acct",
        "quantity",
        "amount",
        "description",
        "ministry_code",
        "organization_code",
        "individual_id",
        "user_id",
    )

    def __repr__(self):
        return f"<Donation {self.donation_id} {self.gl_acct} {self.date_received}>"

    @property
    def total_fair_market_value(self):
        if self.quantity is None or self.amount is None:
            return None
        return float(self.quantity) * float(self.amount)

    def to_dict(self):
        data = super().to_dict()
        data["total_fair_market_value"] = self.total_fair_market_value
        return data
