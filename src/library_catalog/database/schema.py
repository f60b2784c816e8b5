"""
SQLAlchemy database schema for the library catalog.

Three tables back the catalog aggregate:

- ``authors``: one row per author, with a generated integer key
- ``books``: one row per book; ISBN and category are embedded columns
- ``book_authors``: the many-to-many link between them, with an explicit
  ``position`` so a book's author list keeps its order

Books reference authors but never own them: deleting a book removes its
links, not the authors.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import declarative_base, relationship

# Base class for all SQLAlchemy models
Base = declarative_base()


class Author(Base):
    """
    Authors table - stores the people credited on books.

    Usage:
    - Referenced by books through ``book_authors``
    - Identity is generated here and never reassigned
    """

    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)

    # Relationships
    book_links = relationship("BookAuthor", back_populates="author")

    __table_args__ = (Index("idx_author_name", "name"),)


class Book(Base):
    """
    Books table - stores the library's catalog.

    Usage:
    - Looked up by id for book details and availability checks
    - ``available`` is rewritten by availability updates
    - Title, ISBN, category and author names feed free-text search
    """

    __tablename__ = "books"

    # Caller-assigned key, never generated
    id = Column(String(64), primary_key=True)
    title = Column(String(500), nullable=False)
    isbn = Column(String(32), nullable=False, default="")
    category = Column(String(100), nullable=False, default="")
    available = Column(Boolean, nullable=False, default=True)

    # Relationships
    author_links = relationship(
        "BookAuthor",
        back_populates="book",
        order_by="BookAuthor.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_book_title", "title"),
        Index("idx_book_category", "category"),
        Index("idx_book_availability", "available"),
        CheckConstraint("length(id) > 0", name="check_book_id_not_empty"),
    )


class BookAuthor(Base):
    """
    Association table between books and authors.

    ``position`` is maintained by ``ordering_list`` on ``Book.author_links``
    and preserves the order in which authors are credited.
    """

    __tablename__ = "book_authors"

    book_id = Column(String(64), ForeignKey("books.id", ondelete="CASCADE"), primary_key=True)
    author_id = Column(Integer, ForeignKey("authors.id"), primary_key=True)
    position = Column(Integer, nullable=False)

    # Relationships
    book = relationship("Book", back_populates="author_links")
    author = relationship("Author", back_populates="book_links")

    __table_args__ = (
        Index("idx_book_authors_author", "author_id"),
        CheckConstraint("position >= 0", name="check_author_position_non_negative"),
    )
