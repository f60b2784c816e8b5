"""Book Resources - Library Catalog Access

Exposes catalog data to MCP clients as read-only resources.

Resources:
- library://books/{book_id} - Book details with resolved authors
- library://books/{book_id}/available - Availability flag (false for unknown books)
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..database.book_repository import BookRepository
from ..database.session import session_scope
from ..services.catalog import BookNotFoundError, CatalogService

logger = logging.getLogger(__name__)


async def get_book_handler(book_id: str) -> dict[str, Any]:
    """Returns details for a specific book.

    Client requests library://books/{book_id} to get the title, ISBN,
    category, availability and ordered author list.
    """
    try:
        logger.debug("MCP Resource Request - books/%s", book_id)

        with session_scope() as session:
            book = CatalogService(BookRepository(session)).get_book(book_id)
            return book.model_dump(mode="json")

    except BookNotFoundError as e:
        raise ResourceError(str(e)) from e
    except Exception as e:
        logger.exception("Error in books/{book_id} resource")
        raise ResourceError(f"Failed to retrieve book details: {e!s}") from e


async def get_book_availability_handler(book_id: str) -> bool:
    """Returns whether a book can currently be lent.

    An unknown book id reads as ``false`` rather than an error.
    """
    try:
        with session_scope() as session:
            try:
                return CatalogService(BookRepository(session)).is_available(book_id)
            except BookNotFoundError:
                return False

    except Exception as e:
        logger.exception("Error in books/{book_id}/available resource")
        raise ResourceError(f"Failed to check availability: {e!s}") from e


book_resources: list[dict[str, Any]] = [
    {
        "uri": "library://books/{book_id}",
        "name": "Book Details",
        "description": "Get a book by id, including ISBN, category, availability and authors",
        "mime_type": "application/json",
        "handler": get_book_handler,
    },
    {
        "uri": "library://books/{book_id}/available",
        "name": "Book Availability",
        "description": "Whether a book is available for lending (false if the id is unknown)",
        "mime_type": "application/json",
        "handler": get_book_availability_handler,
    },
]
