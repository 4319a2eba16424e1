# inkind_app/models/wish_list.py

from .base import BaseModel, db

# "Monitary Donation" is a legacy spelling that still exists in stored rows.
WISH_LIST_TYPES = (
    "Capital Item Over 10K",
    "In-kind Item",
    "Volunteer Needs",
    "Monetary Donation",
    "Monitary Donation",
)

WISH_LIST_STATUSES = ("Open Request", "In Progress", "Fulfilled")
DEFAULT_WISH_LIST_STATUS = "Open Request"


class WishListItem(BaseModel):
    """Item a ministry is asking donors for."""

    __tablename__ = "wish_list"

    wishlist_id = db.Column(db.Integer, primary_key=True)
    item_name = db.Column(db.String(255), nullable=False)
    ministry_code = db.Column(db.String(50), db.ForeignKey("ministry.ministry_code"), nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(20), default=DEFAULT_WISH_LIST_STATUS, nullable=False, index=True)

    ministry = db.relationship("Ministry", lazy="joined")

    serialize_fields = ("wishlist_id", "item_name", "ministry_code", "type", "description", "status")

    def __repr__(self):
        return f"<WishListItem {self.wishlist_id} {self.item_name}>"

    def to_dict(self):
        data = super().to_dict()
        data["ministry_name"] = self.ministry.ministry_name if self.ministry else None
        return data
