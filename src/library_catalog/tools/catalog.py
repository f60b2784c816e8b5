"""
Catalog tools for the library catalog MCP server.

- search_catalog: free-text search over title, ISBN, category and author names
- set_book_availability: librarian-only update of a book's availability flag

MCP sessions carry no bearer token, so the role of a session comes from the
``mcp_role`` setting. Only ``LIBRARIAN`` sessions may change availability.
"""

import logging
from typing import Annotated, Any

from fastmcp.exceptions import ToolError
from pydantic import Field

from ..api.auth import Role
from ..config import get_config
from ..database.book_repository import BookRepository
from ..database.session import session_scope
from ..services.catalog import BookNotFoundError, CatalogService

logger = logging.getLogger(__name__)


async def search_catalog_handler(
    term: Annotated[
        str,
        Field(
            description="Text to look for in titles, ISBNs, categories and author names",
            max_length=200,
            examples=["Cien", "García Márquez", "978-0307474728"],
        ),
    ],
) -> dict[str, Any]:
    """
    Search the catalog.

    A blank term or a term that matches nothing returns an empty result,
    not an error.
    """
    try:
        with session_scope() as session:
            books = CatalogService(BookRepository(session)).search(term)
            books_data = [book.model_dump(mode="json") for book in books]
    except Exception as e:
        logger.exception("Search execution failed")
        raise ToolError(f"Search failed: {e!s}") from e

    return {"books": books_data, "total": len(books_data)}


async def set_book_availability_handler(
    book_id: Annotated[str, Field(description="Identifier of the book", min_length=1)],
    available: Annotated[bool, Field(description="New availability flag")],
) -> str:
    """Set a book's availability. Requires a LIBRARIAN session."""
    role = get_config().mcp_role
    if role != Role.LIBRARIAN.value:
        logger.warning("Availability change for %s refused for role %s", book_id, role)
        raise ToolError("Only librarians can change book availability")

    try:
        with session_scope() as session:
            CatalogService(BookRepository(session)).set_availability(book_id, available)
    except BookNotFoundError as e:
        raise ToolError(str(e)) from e
    except Exception as e:
        logger.exception("Availability update failed")
        raise ToolError(f"Failed to update availability: {e!s}") from e

    state = "available" if available else "unavailable"
    return f"Book {book_id} is now {state}"


search_catalog: dict[str, Any] = {
    "name": "search_catalog",
    "description": (
        "Search the library catalog. Matches the term case-insensitively against "
        "book titles, ISBNs, categories and author names. Results are ordered by title."
    ),
    "handler": search_catalog_handler,
}

set_book_availability: dict[str, Any] = {
    "name": "set_book_availability",
    "description": (
        "Mark a book as available or unavailable for lending. "
        "Only permitted for librarian sessions."
    ),
    "handler": set_book_availability_handler,
}

catalog_tools = [search_catalog, set_book_availability]
