# inkind_app/models/user.py

from flask import current_app
from flask_login import UserMixin
from sqlalchemy.exc import SQLAlchemyError

from .base import BaseModel, db

USER_STATUSES = ("active", "inactive")


class User(UserMixin, BaseModel):
    """Staff account; donations record which user entered them."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=True)
    name = db.Column(db.String(200), nullable=True)
    status = db.Column(db.String(20), default="active", nullable=False, index=True)
    profile_image_url = db.Column(db.String(500), nullable=True)
    role_id = db.Column(db.Integer, db.ForeignKey("roles.id"), nullable=True)

    role = db.relationship("Role")

    serialize_fields = ("id", "username", "email", "name", "status", "profile_image_url", "role_id")

    def __repr__(self):
        return f"<User {self.username}>"

    @property
    def is_active(self):
        # Flask-Login refuses to log in inactive users.
        return self.status == "active"

    def permission_names(self):
        if self.role is None:
            return []
        return self.role.permission_names()

    def to_dict(self):
        data = super().to_dict()
        data["user_id"] = self.id
        data["role_name"] = self.role.name if self.role else None
        return data

    @staticmethod
    def find_active(user_id):
        """Return the active user with ``user_id`` or None"""
        try:
            user = db.session.get(User, user_id)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error loading user {user_id}: {str(e)}")
            return None
        if user is None or not user.is_active:
            return None
        return user

    @staticmethod
    def with_statuses(statuses):
        """Users whose status is one of ``statuses``, ordered by username."""
        return User.query.filter(User.status.in_(statuses)).order_by(User.username.asc()).all()
