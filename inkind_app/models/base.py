# inkind_app/models/base.py

"""
Shared SQLAlchemy handle, base model and typed store errors.

Callers branch on ``ConflictError`` / ``ReferenceViolationError`` rather than
on driver-specific error codes; ``translate_integrity_error`` is the single
place that knows how each backend reports constraint failures.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from flask import current_app, has_app_context
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.exc import FlushError

db = SQLAlchemy()

_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"
_UNIQUE_MARKERS = ("unique constraint", "duplicate key", "conflicts with persistent instance")
_FOREIGN_KEY_MARKERS = ("foreign key",)


class StoreError(Exception):
    """Base class for persistence failures surfaced by the models."""


class ConflictError(StoreError):
    """A write violated a unique or primary key constraint."""


class ReferenceViolationError(StoreError):
    """A write referenced a row that does not exist."""


def utcnow():
    return datetime.now(timezone.utc)


def translate_integrity_error(exc):
    """Map a SQLAlchemy integrity/flush failure onto a typed ``StoreError``."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    message = str(orig if orig is not None else exc)
    lowered = message.lower()

    if code == _PG_UNIQUE_VIOLATION or any(marker in lowered for marker in _UNIQUE_MARKERS):
        return ConflictError(message)
    if code == _PG_FOREIGN_KEY_VIOLATION or any(marker in lowered for marker in _FOREIGN_KEY_MARKERS):
        return ReferenceViolationError(message)
    return StoreError(message)


def serialize_value(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def _commit_or_raise():
    try:
        db.session.commit()
    except (IntegrityError, FlushError) as exc:
        db.session.rollback()
        raise translate_integrity_error(exc) from exc
    except SQLAlchemyError:
        db.session.rollback()
        raise


class BaseModel(db.Model):
    """Abstract base adding timestamps, serialization and write helpers."""

    __abstract__ = True

    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Column names emitted by to_dict(), in order. Timestamps are appended.
    serialize_fields = ()

    def to_dict(self):
        data = {name: serialize_value(getattr(self, name)) for name in self.serialize_fields}
        data["created_at"] = serialize_value(self.created_at)
        data["updated_at"] = serialize_value(self.updated_at)
        return data

    @classmethod
    def insert(cls, **fields):
        """
        Add and commit a new row.

        Raises:
            ConflictError: unique/primary key violation.
            ReferenceViolationError: foreign key violation.
            StoreError: any other integrity failure.
        """
        instance = cls(**fields)
        db.session.add(instance)
        _commit_or_raise()
        return instance

    @classmethod
    def safe_create(cls, **fields):
        """Create a row, returning ``(instance, None)`` or ``(None, error_message)``."""
        try:
            return cls.insert(**fields), None
        except (StoreError, SQLAlchemyError) as e:
            if has_app_context():
                current_app.logger.error(f"Error creating {cls.__name__}: {str(e)}")
            return None, str(e)

    def apply_updates(self, **fields):
        """Set the given attributes and commit, raising typed store errors."""
        for name, value in fields.items():
            setattr(self, name, value)
        self.updated_at = utcnow()
        _commit_or_raise()
        return self

    def safe_update(self, **fields):
        """Update a row, returning ``(instance, None)`` or ``(None, error_message)``."""
        try:
            return self.apply_updates(**fields), None
        except (StoreError, SQLAlchemyError) as e:
            if has_app_context():
                current_app.logger.error(f"Error updating {type(self).__name__}: {str(e)}")
            return None, str(e)

    def delete_row(self):
        db.session.delete(self)
        _commit_or_raise()

    def safe_delete(self):
        """Delete a row, returning ``(True, None)`` or ``(False, error_message)``."""
        try:
            self.delete_row()
            return True, None
        except (StoreError, SQLAlchemyError) as e:
            if has_app_context():
                current_app.logger.error(f"Error deleting {type(self).__name__}: {str(e)}")
            return False, str(e)
