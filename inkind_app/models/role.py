# inkind_app/models/role.py

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from .base import BaseModel, db


class Role(BaseModel):
    """Model for user roles in the system"""

    __tablename__ = "roles"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    default_route = db.Column(db.String(255), nullable=True)

    # Relationships
    permissions = db.relationship("RolePermission", back_populates="role", cascade="all, delete-orphan")

    serialize_fields = ("id", "name", "display_name", "description", "default_route")

    def __repr__(self):
        return f"<Role {self.name}>"

    @staticmethod
    def find_by_name(name):
        """Find role by name with error handling"""
        try:
            return Role.query.filter_by(name=name).first()
        except SQLAlchemyError as e:
            current_app.logger.error(f"Database error finding role by name {name}: {str(e)}")
            return None

    def permission_names(self):
        return sorted(rp.permission.name for rp in self.permissions)

    def replace_permissions(self, permissions):
        """
        Make ``permissions`` the role's full grant list.

        Grants that survive are left in place so the unique (role, permission)
        pair is never inserted twice within one flush.
        """
        wanted = {permission.id: permission for permission in permissions}
        self.permissions = [rp for rp in self.permissions if rp.permission_id in wanted]
        held = {rp.permission_id for rp in self.permissions}
        for permission_id, permission in wanted.items():
            if permission_id not in held:
                self.permissions.append(RolePermission(permission=permission))

    def to_dict(self):
        data = super().to_dict()
        data["role_id"] = self.id
        data["role_name"] = self.name
        data["permissions"] = [
            {"permission_id": rp.permission.id, "permission": rp.permission.name}
            for rp in sorted(self.permissions, key=lambda rp: rp.permission.name)
        ]
        return data


class Permission(BaseModel):
    """Model for granular permissions"""

    __tablename__ = "permissions"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Relationships
    roles = db.relationship("RolePermission", back_populates="permission", cascade="all, delete-orphan")

    serialize_fields = ("id", "name", "display_name", "description")

    def __repr__(self):
        return f"<Permission {self.name}>"

    def to_dict(self):
        data = super().to_dict()
        data["permission_id"] = self.id
        return data


class RolePermission(BaseModel):
    """Junction table for Role and Permission many-to-many relationship"""

    __tablename__ = "role_permissions"

    id = db.Column(db.Integer, primary_key=True)
    role_id = db.Column(db.Integer, db.ForeignKey("roles.id"), nullable=False)
    permission_id = db.Column(db.Integer, db.ForeignKey("permissions.id"), nullable=False)

    # Relationships
    role = db.relationship("Role", back_populates="permissions")
    permission = db.relationship("Permission", back_populates="roles")

    __table_args__ = (db.UniqueConstraint("role_id", "permission_id", name="_role_permission_uc"),)

    def __repr__(self):
        return f"<RolePermission role={self.role_id} permission={self.permission_id}>"
