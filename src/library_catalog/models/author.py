"""
Author model for the library catalog.

Authors are shared between books: a book keeps an ordered list of author
references, while the author's own lifecycle (creation, numeric identity)
belongs to the persistence layer. The ``id`` is generated by the store and
never changes afterwards.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Author(BaseModel):
    """A named author with a store-generated numeric identity."""

    id: int = Field(
        ...,
        description="Unique identifier generated by the catalog store",
        ge=1,
        frozen=True,
        examples=[1, 42],
    )

    name: str = Field(
        ...,
        description="Full name of the author",
        min_length=1,
        max_length=200,
        examples=["Gabriel García Márquez", "Isabel Allende"],
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Trim surrounding whitespace from the author name."""
        v = v.strip()
        if not v:
            raise ValueError("Author name cannot be blank")
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Gabriel García Márquez",
            }
        }
    )
