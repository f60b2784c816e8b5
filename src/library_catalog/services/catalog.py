"""
Catalog service for the library catalog.

``CatalogService`` exposes the four catalog operations (book lookup,
availability check, availability update and free-text search) over a
``CatalogStore``. ``BookRepository`` is the production store; tests may pass
any object with the same three methods.

The service keeps no state of its own, so a new instance per request (bound
to that request's session) is the normal way to use it:

```python
with session_scope() as session:
    book = CatalogService(BookRepository(session)).get_book("1")
```
"""

import logging
from typing import Protocol, runtime_checkable

from ..database.exceptions import NotFoundError
from ..models.book import Book
from ..models.identifiers import BookId, as_book_id
from ..observability.context import trace_catalog_operation
from ..observability.metrics import record_availability_change, record_search

logger = logging.getLogger(__name__)


class BookNotFoundError(NotFoundError):
    """Raised when no book exists with the requested identifier."""

    def __init__(self, book_id: BookId | str):
        self.book_id = as_book_id(book_id)
        super().__init__(f"Book not found: {self.book_id}")


@runtime_checkable
class CatalogStore(Protocol):
    """Persistence operations the catalog service depends on."""

    def find_by_id(self, book_id: BookId) -> Book | None: ...

    def save(self, book: Book) -> Book: ...

    def search_by_term(self, term: str) -> list[Book]: ...


class CatalogService:
    """Business operations of the library catalog."""

    def __init__(self, store: CatalogStore):
        self.store = store

    def get_book(self, book_id: BookId | str) -> Book:
        """
        Get a book with its authors resolved.

        Raises:
            BookNotFoundError: If no book has this id
        """
        book_id = as_book_id(book_id)

        with trace_catalog_operation("get_book", book_id=book_id.root):
            book = self.store.find_by_id(book_id)

        if book is None:
            logger.info("Book not found: %s", book_id)
            raise BookNotFoundError(book_id)

        return book

    def is_available(self, book_id: BookId | str) -> bool:
        """
        Report whether a book can currently be lent.

        Raises:
            BookNotFoundError: If no book has this id. Callers that want
                "unknown means unavailable" must catch it themselves.
        """
        return self.get_book(book_id).available

    def set_availability(self, book_id: BookId | str, available: bool) -> None:
        """
        Set a book's availability flag and persist it.

        Setting the flag to its current value is allowed and still persists.

        Raises:
            BookNotFoundError: If no book has this id
        """
        book = self.get_book(book_id)

        with trace_catalog_operation(
            "set_availability", book_id=book.id.root, available=available
        ):
            previous = book.available
            if available:
                book.mark_available()
            else:
                book.mark_unavailable()
            self.store.save(book)

        if previous != available:
            record_availability_change(available)
        logger.info("Book %s availability set to %s", book.id, available)

    def search(self, term: str) -> list[Book]:
        """Search the catalog. An unmatched or blank term yields an empty list."""
        with trace_catalog_operation("search", term=term) as span:
            books = self.store.search_by_term(term)
            span.set_attribute("catalog.result_count", len(books))

        record_search(len(books))
        logger.debug("Search %r matched %d book(s)", term, len(books))
        return books
