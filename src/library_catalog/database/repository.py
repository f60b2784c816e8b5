"""
Repository pattern implementation for the library catalog.

Repositories are the persistence boundary of the catalog: they hide
SQLAlchemy sessions and rows behind methods that take and return the
Pydantic models from ``library_catalog.models``. This keeps the catalog
service free of database concerns and lets tests substitute any object with
the same methods.

The base repository provides the generic read helpers; the book and author
repositories add the catalog-specific queries and writes.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import asc, desc, func, select
from sqlalchemy.orm import Session

from .exceptions import DuplicateError, NotFoundError, RepositoryException
from .schema import Base
from .session import safe_query

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=Base)
ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)

__all__ = [
    "BaseRepository",
    "DuplicateError",
    "NotFoundError",
    "RepositoryException",
]


class BaseRepository(ABC, Generic[ModelType, ResponseSchemaType]):
    """
    Abstract base repository providing common read operations.

    All queries go through ``safe_query`` so database failures surface as
    ``RepositoryException`` rather than driver-specific errors.
    """

    def __init__(self, session: Session):
        """Initialize repository with database session."""
        self.session = session

    @property
    @abstractmethod
    def model_class(self) -> type[ModelType]:
        """Return the SQLAlchemy model class."""

    @property
    @abstractmethod
    def response_schema(self) -> type[ResponseSchemaType]:
        """Return the Pydantic response schema."""

    def _to_response_model(self, db_obj: ModelType) -> ResponseSchemaType:
        """Convert database model to Pydantic response model."""
        return self.response_schema.model_validate(db_obj, from_attributes=True)

    def get_by_id(self, id: int | str) -> ResponseSchemaType | None:
        """
        Get entity by ID.

        Returns:
            Pydantic model or None if not found

        Raises:
            RepositoryException: On database errors
        """
        db_obj = safe_query(
            self.session,
            lambda s: s.get(self.model_class, id),
            f"Failed to get {self.model_class.__name__} by ID",
        )

        if db_obj is None:
            return None

        return self._to_response_model(db_obj)

    def get_all(
        self,
        order_by: str | None = None,
        order_desc: bool = False,
    ) -> list[ResponseSchemaType]:
        """
        Get all entities with optional sorting.

        Args:
            order_by: Field name to order by (ignored if unknown)
            order_desc: Whether to order descending
        """
        query = select(self.model_class)

        if order_by and hasattr(self.model_class, order_by):
            order_field = getattr(self.model_class, order_by)
            query = query.order_by(desc(order_field) if order_desc else asc(order_field))

        results = safe_query(
            self.session, lambda s: s.execute(query).scalars().all(), "Failed to get all results"
        )
        return [self._to_response_model(item) for item in results]

    def exists(self, id: int | str) -> bool:
        """Check if entity exists by ID."""
        query = select(func.count()).select_from(self.model_class).where(self.model_class.id == id)
        count = safe_query(
            self.session, lambda s: s.execute(query).scalar(), "Failed to check existence"
        )
        return count > 0
