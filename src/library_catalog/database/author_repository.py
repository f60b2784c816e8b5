"""
Author repository implementation for the library catalog.

Authors are only ever referenced by books, so this repository is small:
creation with a generated id (used when loading the catalog) and lookups by
id or name. Author names are matched by book search through a join in
``BookRepository``, not here.
"""

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import func, select

from ..database.schema import Author as AuthorDB
from ..database.session import safe_commit, safe_query
from ..models.author import Author as AuthorModel
from ..observability.context import trace_repository_operation
from .repository import BaseRepository


class AuthorCreateSchema(BaseModel):
    """Schema for creating a new author."""

    name: str = Field(..., min_length=1, max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Author name cannot be empty")
        return v


class AuthorRepository(BaseRepository[AuthorDB, AuthorModel]):
    """
    Repository for author data access.

    - ``create`` assigns the numeric identity
    - ``find_by_name`` lets loaders reuse an existing author instead of duplicating it
    """

    @property
    def model_class(self):
        return AuthorDB

    @property
    def response_schema(self):
        return AuthorModel

    def create(self, data: AuthorCreateSchema) -> AuthorModel:
        """
        Create a new author with a generated id.

        Args:
            data: Author creation data

        Returns:
            Created author model
        """
        with trace_repository_operation("authors", "create"):
            db_author = AuthorDB(name=data.name)
            self.session.add(db_author)
            safe_commit(self.session, "create author")

        return self._to_response_model(db_author)

    def find_by_name(self, name: str) -> list[AuthorModel]:
        """
        Find authors whose name contains ``name``, ignoring case.

        Returns:
            Matching authors ordered by name, then id; empty for a blank name
        """
        name = name.strip()
        if not name:
            return []

        query = (
            select(AuthorDB)
            .where(func.lower(AuthorDB.name).contains(name.lower(), autoescape=True))
            .order_by(AuthorDB.name, AuthorDB.id)
        )

        results = safe_query(
            self.session,
            lambda s: s.execute(query).scalars().all(),
            "Failed to find authors by name",
        )
        return [self._to_response_model(author) for author in results]

    def get_or_create(self, name: str) -> AuthorModel:
        """Return the author called exactly ``name`` (ignoring case), creating it if needed."""
        wanted = name.strip().lower()
        for author in self.find_by_name(name):
            if author.name.lower() == wanted:
                return author
        return self.create(AuthorCreateSchema(name=name))
