"""
Catalog service layer.

The service applies the catalog's business rules on top of any object
implementing ``CatalogStore``. It knows nothing about HTTP, MCP or roles.
"""

from .catalog import BookNotFoundError, CatalogService, CatalogStore

__all__ = [
    "BookNotFoundError",
    "CatalogService",
    "CatalogStore",
]
