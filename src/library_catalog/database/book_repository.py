"""
Book repository implementation for the library catalog.

This repository is the catalog store used by ``CatalogService``:

1. **find_by_id**: exact lookup returning the full aggregate
2. **save**: upsert of the whole aggregate, including the ordered author list
3. **search_by_term**: free-text search; the match policy lives here

Authors are always resolved explicitly (``selectinload`` on the link table)
and copied into the Pydantic aggregate, so callers never see lazy ORM
attributes.
"""

from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from ..models.author import Author as AuthorModel
from ..models.book import Book as BookModel
from ..models.identifiers import BookId, as_book_id
from ..observability.context import trace_repository_operation
from .exceptions import DuplicateError, NotFoundError
from .repository import BaseRepository
from .schema import Author as AuthorDB
from .schema import Book as BookDB
from .schema import BookAuthor
from .session import safe_commit, safe_query

LIKE_ESCAPE = "\\"


def _like_pattern(term: str) -> str:
    """Build a substring LIKE pattern, escaping the wildcard characters in ``term``."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


class BookRepository(BaseRepository[BookDB, BookModel]):
    """
    Repository for book data access.

    - Read methods back book lookups, availability checks and search
    - ``save`` backs availability updates and catalog loading
    - All methods return Pydantic models with authors already resolved
    """

    @property
    def model_class(self):
        return BookDB

    @property
    def response_schema(self):
        return BookModel

    def _to_response_model(self, db_obj: BookDB) -> BookModel:
        """Copy a book row and its linked authors into the aggregate."""
        return BookModel(
            id=db_obj.id,
            title=db_obj.title,
            isbn=db_obj.isbn or "",
            category=db_obj.category or "",
            available=db_obj.available,
            authors=[
                AuthorModel.model_validate(link.author, from_attributes=True)
                for link in db_obj.author_links
            ],
        )

    def _with_authors(self, query):
        return query.options(selectinload(BookDB.author_links).selectinload(BookAuthor.author))

    def find_by_id(self, book_id: BookId | str) -> BookModel | None:
        """
        Get a book by its exact identifier.

        Returns:
            The book aggregate, or None if no book has this id
        """
        key = as_book_id(book_id).root

        with trace_repository_operation("books", "find_by_id"):
            query = self._with_authors(select(BookDB).where(BookDB.id == key))
            result = safe_query(
                self.session,
                lambda s: s.execute(query).scalar_one_or_none(),
                "Failed to get book by id",
            )

        if result is None:
            return None

        return self._to_response_model(result)

    def get_by_id(self, id: BookId | str) -> BookModel | None:
        """Alias of ``find_by_id`` so the generic helper resolves authors too."""
        return self.find_by_id(id)

    def save(self, book: BookModel) -> BookModel:
        """
        Insert or update a book, including its ordered author references.

        The stored author list is replaced only when it differs from the one
        on ``book``. Every referenced author must already exist.

        Returns:
            The stored book as read back from the database

        Raises:
            NotFoundError: If an author id does not exist
            DuplicateError: If the same author is listed twice
            RepositoryException: On other database errors
        """
        wanted_ids = book.author_ids
        if len(set(wanted_ids)) != len(wanted_ids):
            raise DuplicateError(f"Book {book.id} lists the same author more than once")

        with trace_repository_operation("books", "save"):
            db_book = safe_query(
                self.session,
                lambda s: s.get(BookDB, book.id.root),
                "Failed to load book for save",
            )

            current_ids = [link.author_id for link in db_book.author_links] if db_book else []
            authors = self._resolve_authors(wanted_ids) if current_ids != wanted_ids else None

            if db_book is None:
                db_book = BookDB(id=book.id.root)
                self.session.add(db_book)

            db_book.title = book.title
            db_book.isbn = book.isbn.root
            db_book.category = book.category.root
            db_book.available = book.available

            if authors is not None:
                db_book.author_links.clear()
                self.session.flush()
                for author in authors:
                    db_book.author_links.append(BookAuthor(author=author))

            safe_commit(self.session, "save book")

        return self._to_response_model(db_book)

    def search_by_term(self, term: str) -> list[BookModel]:
        """
        Free-text search over the catalog.

        Matches ``term`` as a case-insensitive substring of the title, the
        ISBN, the category label or any author's name. A blank term matches
        nothing. Results are ordered by title, then id.
        """
        term = (term or "").strip()
        if not term:
            return []

        pattern = _like_pattern(term)
        by_author = (
            select(BookAuthor.book_id)
            .join(AuthorDB, BookAuthor.author_id == AuthorDB.id)
            .where(AuthorDB.name.ilike(pattern, escape=LIKE_ESCAPE))
        )
        query = self._with_authors(
            select(BookDB)
            .where(
                or_(
                    BookDB.title.ilike(pattern, escape=LIKE_ESCAPE),
                    BookDB.isbn.ilike(pattern, escape=LIKE_ESCAPE),
                    BookDB.category.ilike(pattern, escape=LIKE_ESCAPE),
                    BookDB.id.in_(by_author),
                )
            )
            .order_by(BookDB.title.asc(), BookDB.id.asc())
        )

        with trace_repository_operation("books", "search_by_term") as span:
            results = safe_query(
                self.session,
                lambda s: s.execute(query).scalars().all(),
                "Failed to search books",
            )
            span.set_attribute("db.result_count", len(results))

        return [self._to_response_model(book) for book in results]

    def _resolve_authors(self, author_ids: list[int]) -> list[AuthorDB]:
        """Load author rows in the requested order, failing on unknown ids."""
        if not author_ids:
            return []

        rows = safe_query(
            self.session,
            lambda s: s.execute(select(AuthorDB).where(AuthorDB.id.in_(author_ids)))
            .scalars()
            .all(),
            "Failed to resolve authors",
        )
        by_id = {row.id: row for row in rows}

        missing = [author_id for author_id in author_ids if author_id not in by_id]
        if missing:
            raise NotFoundError(f"Author(s) not found: {', '.join(map(str, missing))}")

        return [by_id[author_id] for author_id in author_ids]
