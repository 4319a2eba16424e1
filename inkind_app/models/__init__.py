# inkind_app/models/__init__.py
"""
Database models package
"""

from .base import (
    BaseModel,
    ConflictError,
    ReferenceViolationError,
    StoreError,
    db,
    translate_integrity_error,
)
from .donation import Donation
from .individual import Individual
from .ministry import Ministry
from .organization import Organization
from .role import Permission, Role, RolePermission
from .user import USER_STATUSES, User
from .wish_list import DEFAULT_WISH_LIST_STATUS, WISH_LIST_STATUSES, WISH_LIST_TYPES, WishListItem

__all__ = [
    "db",
    "BaseModel",
    "StoreError",
    "ConflictError",
    "ReferenceViolationError",
    "translate_integrity_error",
    "Donation",
    "Individual",
    "Ministry",
    "Organization",
    "WishListItem",
    "WISH_LIST_TYPES",
    "WISH_LIST_STATUSES",
    "DEFAULT_WISH_LIST_STATUS",
    "User",
    "USER_STATUSES",
    "Role",
    "Permission",
    "RolePermission",
]
