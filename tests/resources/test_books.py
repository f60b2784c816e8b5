"""
Tests for the book resources.

These tests call the resource handlers directly against the seeded test
database installed by the ``db_manager`` fixture.
"""

import logging

import pytest
from fastmcp.exceptions import ResourceError

from library_catalog.database import BookRepository, RepositoryException
from library_catalog.resources import book_resources
from library_catalog.resources.books import get_book_availability_handler, get_book_handler


@pytest.mark.asyncio
class TestBookResource:
    async def test_returns_book(self, catalog_books):
        book = await get_book_handler("1")

        assert book["title"] == "Cien años de soledad"
        assert book["available"] is True
        assert book["authors"] == [catalog_books["1"].authors[0].model_dump()]

    async def test_unknown_book(self, catalog_books):
        with pytest.raises(ResourceError, match="999"):
            await get_book_handler("999")

    async def test_unknown_book_is_not_logged_as_error(self, catalog_books, caplog):
        with caplog.at_level(logging.ERROR), pytest.raises(ResourceError):
            await get_book_handler("999")

        assert [r for r in caplog.records if r.levelno >= logging.ERROR] == []

    async def test_repository_failure(self, catalog_books, monkeypatch):
        def broken(self, book_id):
            raise RepositoryException("database unavailable")

        monkeypatch.setattr(BookRepository, "find_by_id", broken)

        with pytest.raises(ResourceError, match="Failed to retrieve book details"):
            await get_book_handler("1")


@pytest.mark.asyncio
class TestAvailabilityResource:
    async def test_available(self, catalog_books):
        assert await get_book_availability_handler("1") is True

    async def test_unavailable(self, catalog_books):
        assert await get_book_availability_handler("4") is False

    async def test_unknown_book_is_false(self, catalog_books):
        assert await get_book_availability_handler("999") is False


def test_resource_registry():
    uris = [resource["uri"] for resource in book_resources]

    assert uris == ["library://books/{book_id}", "library://books/{book_id}/available"]
    for resource in book_resources:
        assert resource["mime_type"] == "application/json"
        assert callable(resource["handler"])
