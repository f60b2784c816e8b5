"""
Book aggregate for the library catalog.

A ``Book`` is the consistency unit for reads: its identity, title, the
embedded ``ISBN`` and ``Category`` value objects, the availability flag and
the ordered list of referenced ``Author`` records.

The model serializes to JSON like:

    {"id": "1", "title": "Cien años de soledad", "isbn": "978-0307474728",
     "category": "Ficción", "available": true,
     "authors": [{"id": 1, "name": "Gabriel García Márquez"}]}
"""

from pydantic import BaseModel, ConfigDict, Field

from .author import Author
from .identifiers import ISBN, BookId, Category


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    Availability is a two-state flag with no intermediate (reserved, lost)
    states. It only changes through ``mark_available``/``mark_unavailable``,
    which the catalog service calls when a librarian updates it.
    """

    id: BookId = Field(
        ...,
        description="Primary key assigned by the caller; immutable after creation",
        frozen=True,
        examples=["1", "libro-0042"],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        max_length=500,
        examples=["Cien años de soledad", "La casa de los espíritus"],
    )

    isbn: ISBN = Field(
        default=ISBN(""),
        description="ISBN as recorded by the library (not checksum-validated)",
        examples=["978-0307474728"],
    )

    category: Category = Field(
        default=Category(""),
        description="Category or genre label; replaced as a whole, may be empty",
        examples=["Ficción", "Realismo mágico"],
    )

    available: bool = Field(
        default=True,
        description="Whether the book can currently be lent",
    )

    authors: list[Author] = Field(
        default_factory=list,
        description="Ordered author references (may be empty)",
    )

    def mark_available(self) -> None:
        """Mark the book as available for lending."""
        self.available = True

    def mark_unavailable(self) -> None:
        """Mark the book as not available for lending."""
        self.available = False

    def replace_category(self, category: Category | str) -> None:
        """Overwrite the category label as a whole (an empty label is allowed)."""
        self.category = category

    @property
    def author_ids(self) -> list[int]:
        """Identifiers of the referenced authors, in order."""
        return [author.id for author in self.authors]

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "title": "Cien años de soledad",
                "isbn": "978-0307474728",
                "category": "Ficción",
                "available": True,
                "authors": [{"id": 1, "name": "Gabriel García Márquez"}],
            }
        },
    )
