"""
Database package for the library catalog.

This package provides:
- SQLAlchemy schema definitions (schema.py)
- Session management and connection handling (session.py)
- Repositories that return Pydantic models (book_repository.py, author_repository.py)

The book repository is the catalog store behind ``CatalogService``; every
entry point opens a short-lived session per request with ``session_scope()``.
"""

from .author_repository import AuthorCreateSchema, AuthorRepository
from .book_repository import BookRepository
from .exceptions import DuplicateError, NotFoundError, RepositoryException
from .repository import BaseRepository
from .schema import Author, Base, Book, BookAuthor
from .session import (
    DatabaseManager,
    get_db_manager,
    safe_commit,
    safe_query,
    session_scope,
    set_db_manager,
)

__all__ = [
    "Author",
    "AuthorCreateSchema",
    "AuthorRepository",
    "Base",
    "BaseRepository",
    "Book",
    "BookAuthor",
    "BookRepository",
    "DatabaseManager",
    "DuplicateError",
    "NotFoundError",
    "RepositoryException",
    "get_db_manager",
    "safe_commit",
    "safe_query",
    "session_scope",
    "set_db_manager",
]
