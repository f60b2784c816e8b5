"""Test configuration and fixtures for the library catalog.

1. Isolated test databases - each test gets its own SQLite file
2. Configuration overrides - a test ``ServerConfig`` installed globally
3. Seeded catalog data shared by service, HTTP and MCP tests
4. Bearer tokens for each role
"""

import os
from collections.abc import Generator
from pathlib import Path

import logfire
import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from library_catalog.api.auth import Role, create_access_token
from library_catalog.api.routes import create_http_app
from library_catalog.config import ServerConfig, reset_config, set_config
from library_catalog.database.author_repository import AuthorCreateSchema, AuthorRepository
from library_catalog.database.book_repository import BookRepository
from library_catalog.database.session import DatabaseManager, set_db_manager
from library_catalog.models import Book

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


# === Configuration Fixtures ===


@pytest.fixture(scope="session", autouse=True)
def local_logfire():
    """Keep spans and metrics in-process for the whole test run."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for each test."""
    return tmp_path / "test_catalog.db"


@pytest.fixture
def test_config(test_db_path: Path) -> Generator[ServerConfig, None, None]:
    """Install a test-specific configuration as the global one."""
    reset_config()

    config = ServerConfig(
        server_name="test-library-catalog",
        server_version="0.0.1-test",
        database_path=test_db_path,
        jwt_secret_key=TEST_JWT_SECRET,
        debug=True,
        log_level="DEBUG",
    )
    set_config(config)

    yield config

    reset_config()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide an environment without LIBRARY_CATALOG_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_CATALOG_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# === Database Fixtures ===


@pytest.fixture
def db_manager(test_config: ServerConfig) -> Generator[DatabaseManager, None, None]:
    """Provide a database manager on a fresh schema, installed as the global one."""
    manager = DatabaseManager(test_config.get_database_url())
    manager.init_database()
    set_db_manager(manager)

    yield manager

    set_db_manager(None)
    manager.close()


@pytest.fixture
def db_session(db_manager: DatabaseManager) -> Generator[Session, None, None]:
    """Provide a database session for repository tests."""
    with db_manager.session_scope() as session:
        yield session


@pytest.fixture
def catalog_books(db_manager: DatabaseManager) -> dict[str, Book]:
    """
    Seed a small catalog and return its books keyed by id.

    - "1" Cien años de soledad (García Márquez), available
    - "2" El amor en los tiempos del cólera (García Márquez), available
    - "3" La casa de los espíritus (Allende), available
    - "4" Crónica de una muerte anunciada (García Márquez), not available
    - "5" Antología (Allende, García Márquez), no ISBN, empty category
    """
    with db_manager.session_scope() as session:
        authors = AuthorRepository(session)
        gabo = authors.create(AuthorCreateSchema(name="Gabriel García Márquez"))
        allende = authors.create(AuthorCreateSchema(name="Isabel Allende"))

        repo = BookRepository(session)
        books = [
            Book(
                id="1",
                title="Cien años de soledad",
                isbn="978-0307474728",
                category="Realismo mágico",
                authors=[gabo],
            ),
            Book(
                id="2",
                title="El amor en los tiempos del cólera",
                isbn="978-0307389732",
                category="Ficción",
                authors=[gabo],
            ),
            Book(
                id="3",
                title="La casa de los espíritus",
                isbn="978-1501117015",
                category="Ficción",
                authors=[allende],
            ),
            Book(
                id="4",
                title="Crónica de una muerte anunciada",
                isbn="978-1400034710",
                category="Novela corta",
                available=False,
                authors=[gabo],
            ),
            Book(id="5", title="Antología", authors=[allende, gabo]),
        ]
        return {book.id.root: repo.save(book) for book in books}


# === HTTP Fixtures ===


@pytest.fixture
def client(catalog_books) -> Generator[TestClient, None, None]:
    """Provide a test client for the catalog HTTP routes over the seeded catalog."""
    with TestClient(create_http_app()) as test_client:
        yield test_client


@pytest.fixture
def librarian_headers(test_config) -> dict[str, str]:
    token = create_access_token("ana", [Role.LIBRARIAN])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(test_config) -> dict[str, str]:
    token = create_access_token("luis", [Role.USER])
    return {"Authorization": f"Bearer {token}"}


# === Cleanup Fixtures ===


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Reset process-wide state so tests don't interfere with each other."""
    yield

    reset_config()
    set_db_manager(None)
