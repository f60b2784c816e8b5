"""
Identifier value objects for the library catalog.

``BookId``, ``ISBN`` and ``Category`` each wrap a single string. They are
frozen Pydantic root models, so they:
- compare and hash by value
- serialize to a bare JSON string (``"978-0307474728"``, not an object)
- accept a plain ``str`` wherever a model field is typed with them
"""

from pydantic import ConfigDict, RootModel


class _StringValue(RootModel[str]):
    """Immutable wrapper around a string value."""

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> str:
        return self.root

    def __str__(self) -> str:
        return self.root


class BookId(_StringValue):
    """Opaque primary key of a book, assigned by the caller (never generated)."""


class ISBN(_StringValue):
    """
    International Standard Book Number.

    Stored exactly as given. No checksum or format validation is applied, so
    both ``978-0307474728`` and ``9780307474728`` are kept verbatim.
    """


class Category(_StringValue):
    """Named label (genre) of a book. The empty label is a valid category."""

    root: str = ""


def as_book_id(book_id: "BookId | str") -> BookId:
    """Normalize a caller-supplied identifier to ``BookId``."""
    if isinstance(book_id, BookId):
        return book_id
    return BookId(book_id)
