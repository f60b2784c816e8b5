"""
Tests for the Author model.

These tests verify that the Author model correctly:
1. Validates identity and name
2. Keeps its identity immutable
3. Serializes to the JSON shape used by the API
"""

import pytest
from pydantic import ValidationError

from library_catalog.models import Author


class TestAuthorModel:
    """Test suite for the Author model."""

    def test_create_valid_author(self):
        author = Author(id=1, name="Gabriel García Márquez")

        assert author.id == 1
        assert author.name == "Gabriel García Márquez"

    def test_name_is_stripped(self):
        assert Author(id=2, name="  Isabel Allende ").name == "Isabel Allende"

    @pytest.mark.parametrize("name", ["", "   ", "x" * 201])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            Author(id=1, name=name)

    @pytest.mark.parametrize("author_id", [0, -3])
    def test_id_must_be_positive(self, author_id):
        with pytest.raises(ValidationError):
            Author(id=author_id, name="Someone")

    def test_id_is_immutable(self):
        author = Author(id=1, name="Gabriel García Márquez")

        with pytest.raises(ValidationError):
            author.id = 2

    def test_json_serialization(self):
        author = Author(id=7, name="Julio Cortázar")

        assert author.model_dump(mode="json") == {"id": 7, "name": "Julio Cortázar"}
        assert Author.model_validate_json(author.model_dump_json()) == author
