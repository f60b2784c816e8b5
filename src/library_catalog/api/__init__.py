"""
HTTP API of the library catalog.

- auth: bearer-token authentication and role checks
- routes: the /libros endpoints and their registration list
"""

from .auth import Principal, Role, create_access_token, require_roles
from .routes import catalog_routes, create_http_app

__all__ = [
    "Principal",
    "Role",
    "catalog_routes",
    "create_access_token",
    "create_http_app",
    "require_roles",
]
