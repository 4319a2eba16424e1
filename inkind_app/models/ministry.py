# inkind_app/models/ministry.py

from .base import BaseModel, db


class Ministry(BaseModel):
    """Internal program that receives donations and publishes wish-list items."""

    __tablename__ = "ministry"

    ministry_code = db.Column(db.String(50), primary_key=True)
    ministry_name = db.Column(db.String(255), unique=True, nullable=False)
    has_scale = db.Column(db.Boolean, default=False, nullable=False)

    serialize_fields = ("ministry_code", "ministry_name", "has_scale")

    def __repr__(self):
        return f"<Ministry {self.ministry_code}>"
