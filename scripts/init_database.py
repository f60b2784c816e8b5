#!/usr/bin/env python3
"""
Initialize the library catalog database.

This script:
1. Creates all database tables
2. Optionally loads sample data (a fixed reference book plus Faker filler)
3. Verifies the database is ready for the catalog server

Usage:
    python scripts/init_database.py [--drop-existing] [--sample-data] [--books N]
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from faker import Faker
from sqlalchemy import text

from library_catalog.database import (
    AuthorRepository,
    BookRepository,
    DatabaseManager,
    get_db_manager,
)
from library_catalog.models import Book

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

EXPECTED_TABLES = {"authors", "books", "book_authors"}

CATEGORIES = [
    "Ficción",
    "Realismo mágico",
    "Poesía",
    "Ensayo",
    "Historia",
    "Ciencia",
    "Biografía",
    "Infantil",
]

# Always present so the catalog has a known entry to look up
REFERENCE_BOOKS = [
    {
        "id": "1",
        "title": "Cien años de soledad",
        "isbn": "978-0307474728",
        "category": "Realismo mágico",
        "authors": ["Gabriel García Márquez"],
    },
    {
        "id": "2",
        "title": "El amor en los tiempos del cólera",
        "isbn": "978-0307389732",
        "category": "Ficción",
        "authors": ["Gabriel García Márquez"],
    },
    {
        "id": "3",
        "title": "La casa de los espíritus",
        "isbn": "978-1501117015",
        "category": "Ficción",
        "authors": ["Isabel Allende"],
    },
]


def generate_isbn13() -> str:
    """Generate an ISBN-13 with a correct check digit."""
    body = "978" + "".join(str(random.randint(0, 9)) for _ in range(9))
    total = sum(int(digit) * (3 if i % 2 else 1) for i, digit in enumerate(body))
    return f"{body}{(10 - total % 10) % 10}"


def load_sample_data(db_manager: DatabaseManager, num_books: int = 50, seed: int = 42) -> int:
    """
    Load the reference books plus ``num_books`` generated ones.

    Authors are reused by name, so running this twice does not duplicate them.
    Books are upserted by id.

    Returns:
        Number of books saved
    """
    fake = Faker("es_ES")
    Faker.seed(seed)
    random.seed(seed)

    generated = [
        {
            "id": f"libro-{i:04d}",
            "title": fake.sentence(nb_words=4).rstrip("."),
            "isbn": generate_isbn13(),
            "category": random.choice(CATEGORIES),
            "available": random.random() > 0.25,
            "authors": [fake.name() for _ in range(random.choice([1, 1, 1, 2]))],
        }
        for i in range(1, num_books + 1)
    ]

    saved = 0
    with db_manager.session_scope() as session:
        authors = AuthorRepository(session)
        books = BookRepository(session)

        for entry in REFERENCE_BOOKS + generated:
            book_authors = []
            for name in entry["authors"]:
                author = authors.get_or_create(name)
                if author not in book_authors:
                    book_authors.append(author)

            books.save(
                Book(
                    id=entry["id"],
                    title=entry["title"],
                    isbn=entry["isbn"],
                    category=entry["category"],
                    available=entry.get("available", True),
                    authors=book_authors,
                )
            )
            saved += 1

    return saved


def main():
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the library catalog database")
    parser.add_argument(
        "--drop-existing",
        action="store_true",
        help="Drop existing tables before creating new ones",
    )
    parser.add_argument(
        "--sample-data",
        action="store_true",
        help="Load sample data after creating tables",
    )
    parser.add_argument(
        "--books",
        type=int,
        default=50,
        help="Number of generated books to add with --sample-data",
    )
    parser.add_argument(
        "--database-path",
        type=Path,
        help="SQLite file to initialize (defaults to the configured database path)",
    )

    args = parser.parse_args()

    logger.info("Initializing database manager...")
    database_url = f"sqlite:///{args.database_path}" if args.database_path else None
    db_manager = get_db_manager(database_url)

    if not db_manager.verify_connection():
        logger.error("Failed to connect to database")
        sys.exit(1)

    try:
        logger.info("Creating database schema...")
        db_manager.init_database(drop_existing=args.drop_existing)

        if args.sample_data:
            logger.info("Loading sample data...")
            count = load_sample_data(db_manager, num_books=args.books)
            logger.info("Saved %d books", count)

        with db_manager.session_scope() as session:
            result = session.execute(
                text("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
            )
            tables = [row[0] for row in result]

        logger.info("Created tables: %s", ", ".join(tables))

        missing_tables = EXPECTED_TABLES - set(tables)
        if missing_tables:
            logger.error("Missing expected tables: %s", missing_tables)
            sys.exit(1)

        logger.info("Database initialization complete")

    except Exception:
        logger.exception("Database initialization failed")
        sys.exit(1)
    finally:
        db_manager.close()


if __name__ == "__main__":
    main()
