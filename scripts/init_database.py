# scripts/init_database.py

"""
Database initialization script.
This script creates all tables and seeds default data:
- Default roles (ADMIN, STAFF, VIEWER)
- Default permissions and role-permission mappings
- Default ministries
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from inkind_app.models import Ministry, Permission, Role, RolePermission, db  # noqa: E402

DEFAULT_ROLES = [
    {
        "name": "ADMIN",
        "display_name": "Administrator",
        "description": "Full access to donations, donors, ministries and wish lists",
    },
    {
        "name": "STAFF",
        "display_name": "Staff",
        "description": "Records donations and maintains donor records",
    },
    {
        "name": "VIEWER",
        "display_name": "Viewer",
        "description": "Read-only access",
    },
]

DEFAULT_PERMISSIONS = [
    {"name": "view_donations", "display_name": "View Donations"},
    {"name": "manage_donations", "display_name": "Manage Donations"},
    {"name": "import_donations", "display_name": "Import Donations"},
    {"name": "view_donors", "display_name": "View Individuals and Organizations"},
    {"name": "manage_donors", "display_name": "Manage Individuals and Organizations"},
    {"name": "import_individuals", "display_name": "Import Individuals"},
    {"name": "view_ministries", "display_name": "View Ministries"},
    {"name": "manage_ministries", "display_name": "Manage Ministries"},
    {"name": "view_wish_list", "display_name": "View Wish List"},
    {"name": "manage_wish_list", "display_name": "Manage Wish List"},
]

ROLE_PERMISSIONS = {
    "ADMIN": [perm["name"] for perm in DEFAULT_PERMISSIONS],
    "STAFF": [
        "view_donations",
        "manage_donations",
        "import_donations",
        "view_donors",
        "manage_donors",
        "import_individuals",
        "view_ministries",
        "view_wish_list",
        "manage_wish_list",
    ],
    "VIEWER": ["view_donations", "view_donors", "view_ministries", "view_wish_list"],
}

DEFAULT_MINISTRIES = [
    {"ministry_code": "FOOD_PANTRY", "ministry_name": "Food Pantry", "has_scale": True},
    {"ministry_code": "CLOTHING", "ministry_name": "Clothing Closet", "has_scale": False},
    {"ministry_code": "SHELTER", "ministry_name": "Shelter", "has_scale": False},
]


def create_default_roles():
    """Create default roles"""
    created_roles = {}
    for role_data in DEFAULT_ROLES:
        role = Role.find_by_name(role_data["name"])
        if not role:
            role = Role(**role_data)
            db.session.add(role)
            db.session.flush()
        created_roles[role_data["name"]] = role

    db.session.commit()
    return created_roles


def create_default_permissions():
    """Create default permissions"""
    created_permissions = {}
    for perm_data in DEFAULT_PERMISSIONS:
        perm = Permission.query.filter_by(name=perm_data["name"]).first()
        if not perm:
            perm = Permission(**perm_data)
            db.session.add(perm)
            db.session.flush()
        created_permissions[perm_data["name"]] = perm

    db.session.commit()
    return created_permissions


def assign_permissions_to_roles(roles, permissions):
    """Assign permissions to roles"""
    role_ids = [role.id for role in roles.values()]
    existing_pairs = {
        (rp.role_id, rp.permission_id)
        for rp in RolePermission.query.filter(RolePermission.role_id.in_(role_ids)).all()
    }

    for role_name, perm_names in ROLE_PERMISSIONS.items():
        role = roles[role_name]
        for perm_name in perm_names:
            perm = permissions.get(perm_name)
            key = (role.id, perm.id) if perm else None
            if perm and key not in existing_pairs:
                db.session.add(RolePermission(role_id=role.id, permission_id=perm.id))
                existing_pairs.add(key)

    db.session.commit()


def create_default_ministries():
    """Create default ministries, leaving existing ones untouched"""
    created = []
    for ministry_data in DEFAULT_MINISTRIES:
        if db.session.get(Ministry, ministry_data["ministry_code"]) is None:
            db.session.add(Ministry(**ministry_data))
            created.append(ministry_data["ministry_code"])

    db.session.commit()
    return created


def init_database(app):
    """Initialize database with all default data"""
    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("Database tables created")

        print("Creating default roles...")
        roles = create_default_roles()
        print(f"Created {len(roles)} default roles")

        print("Creating default permissions...")
        permissions = create_default_permissions()
        print(f"Created {len(permissions)} default permissions")

        print("Assigning permissions to roles...")
        assign_permissions_to_roles(roles, permissions)
        print("Permissions assigned to roles")

        print("Creating default ministries...")
        ministries = create_default_ministries()
        print(f"Created {len(ministries)} new ministries")

        print("\nDatabase initialization complete!")
        print("\nDefault roles created:")
        for role_name, role in roles.items():
            print(f"  - {role_name}: {role.display_name}")


if __name__ == "__main__":
    from app import app

    init_database(app)
