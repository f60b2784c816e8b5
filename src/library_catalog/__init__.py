"""
Library Catalog Package.

A library book catalog: lookup by id, availability checks and updates, and
free-text search, exposed over HTTP (/libros) and MCP.

Key Components:
- models: Pydantic models for the catalog aggregate
- database: SQLAlchemy schema, sessions and repositories
- services: the catalog service and its store protocol
- api: HTTP routes and bearer-token role checks
- resources / tools: the MCP surface
- config: Configuration management with Pydantic v2
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
]
