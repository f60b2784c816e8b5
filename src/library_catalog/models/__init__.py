"""
Library Catalog Models.

Pydantic models for the catalog aggregate:

- BookId, ISBN, Category: immutable value objects wrapping a string
- Author: named entity with a store-generated numeric identity
- Book: the aggregate root referencing an ordered list of authors
"""

from .author import Author
from .book import Book
from .identifiers import ISBN, BookId, Category, as_book_id

__all__ = [
    "ISBN",
    "Author",
    "Book",
    "BookId",
    "Category",
    "as_book_id",
]
