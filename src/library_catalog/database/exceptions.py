"""
Exceptions raised by the catalog persistence layer.

Kept in their own module so the session helpers and the repositories can
both raise them without importing each other.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""


class NotFoundError(RepositoryException):
    """Raised when an entity is not found."""


class DuplicateError(RepositoryException):
    """Raised when attempting to create a duplicate entity."""
