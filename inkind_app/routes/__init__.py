# inkind_app/routes/__init__.py
"""
Application routes package
"""

from .auth import register_auth_routes
from .donation import register_donation_routes
from .health import register_health_routes
from .individual import register_individual_routes
from .ministry import register_ministry_routes
from .organization import register_organization_routes
from .role import register_role_routes
from .user import register_user_routes
from .wish_list import register_wish_list_routes


def init_routes(app):
    """Initialize all application routes"""
    register_health_routes(app)
    register_auth_routes(app)
    register_role_routes(app)
    register_user_routes(app)
    register_donation_routes(app)
    register_individual_routes(app)
    register_organization_routes(app)
    register_ministry_routes(app)
    register_wish_list_routes(app)
