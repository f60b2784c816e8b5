"""HTTP routes of the library catalog.

Routes:
- GET  /libros/public/status          - Service status text (public)
- GET  /libros/public/info            - Service metadata (public)
- GET  /libros/buscar?criterio=...    - Free-text search (LIBRARIAN/USER)
- GET  /libros/{book_id}              - Book details (LIBRARIAN/USER)
- GET  /libros/{book_id}/disponible   - Availability flag (LIBRARIAN/USER)
- PUT  /libros/{book_id}/disponibilidad - Set availability (LIBRARIAN)

The routes are registered on the FastMCP server with ``custom_route`` so they
are served next to the MCP endpoint by the HTTP transport.
``create_http_app`` mounts the same routes on a bare Starlette app.
"""

import functools
import json
import logging
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from ..config import get_config
from ..database.book_repository import BookRepository
from ..database.session import session_scope
from ..services.catalog import BookNotFoundError, CatalogService
from .auth import Endpoint, Role, require_roles

logger = logging.getLogger(__name__)

STATUS_MESSAGE = "El servicio de catálogo está funcionando correctamente"
AVAILABILITY_UPDATED_MESSAGE = "Disponibilidad actualizada exitosamente"
INVALID_BODY_MESSAGE = "Datos de entrada inválidos"
MISSING_CRITERIA_MESSAGE = "El parámetro 'criterio' es obligatorio"

SERVICE_ENDPOINTS = [
    "GET /libros/{id} - Obtener libro por ID (ROLE_LIBRARIAN/ROLE_USER)",
    "GET /libros/{id}/disponible - Verificar disponibilidad (ROLE_LIBRARIAN/ROLE_USER)",
    "PUT /libros/{id}/disponibilidad - Actualizar disponibilidad (ROLE_LIBRARIAN)",
    "GET /libros/buscar - Buscar libros (ROLE_LIBRARIAN/ROLE_USER)",
    "GET /libros/public/status - Estado del servicio (PÚBLICO)",
    "GET /libros/public/info - Información del servicio (PÚBLICO)",
]

SERVICE_ROLES = [
    "ROLE_LIBRARIAN - Acceso completo a catálogo y actualizaciones",
    "ROLE_USER - Acceso solo a consultas del catálogo",
]


def _error(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse({"detail": detail}, status_code=status_code)


def catalog_errors(endpoint: Endpoint) -> Endpoint:
    """Map catalog failures to HTTP responses (404 for unknown books, 500 otherwise)."""

    @functools.wraps(endpoint)
    async def wrapper(request: Request) -> Response:
        try:
            return await endpoint(request)
        except BookNotFoundError as e:
            return _error(404, str(e))
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.url.path)
            return _error(500, "Internal server error")

    return wrapper


async def status_handler(request: Request) -> Response:  # noqa: ARG001
    """Liveness text, no authentication."""
    return PlainTextResponse(STATUS_MESSAGE)


async def info_handler(request: Request) -> Response:  # noqa: ARG001
    """Static description of the service and its endpoints."""
    return JSONResponse(
        {
            "service": "Catálogo Service",
            "version": get_config().server_version,
            "description": "Microservicio para gestión del catálogo de libros",
            "status": "ACTIVE",
            "endpoints": SERVICE_ENDPOINTS,
            "roles": SERVICE_ROLES,
        }
    )


@require_roles(Role.LIBRARIAN, Role.USER)
@catalog_errors
async def get_book_handler(request: Request) -> Response:
    book_id = request.path_params["book_id"]
    logger.debug("HTTP GET book %s", book_id)

    with session_scope() as session:
        book = CatalogService(BookRepository(session)).get_book(book_id)
        return JSONResponse(book.model_dump(mode="json"))


@require_roles(Role.LIBRARIAN, Role.USER)
@catalog_errors
async def availability_handler(request: Request) -> Response:
    """Availability flag; an unknown book reads as not available."""
    book_id = request.path_params["book_id"]

    with session_scope() as session:
        try:
            available = CatalogService(BookRepository(session)).is_available(book_id)
        except BookNotFoundError:
            available = False

    return JSONResponse(available)


@require_roles(Role.LIBRARIAN)
@catalog_errors
async def set_availability_handler(request: Request) -> Response:
    """Body must be a bare JSON boolean (``true`` or ``false``)."""
    book_id = request.path_params["book_id"]

    try:
        available = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, INVALID_BODY_MESSAGE)
    if not isinstance(available, bool):
        return _error(400, INVALID_BODY_MESSAGE)

    with session_scope() as session:
        CatalogService(BookRepository(session)).set_availability(book_id, available)

    logger.info(
        "Availability of book %s set to %s by %s",
        book_id,
        available,
        request.state.principal.subject,
    )
    return PlainTextResponse(AVAILABILITY_UPDATED_MESSAGE)


@require_roles(Role.LIBRARIAN, Role.USER)
@catalog_errors
async def search_handler(request: Request) -> Response:
    term = request.query_params.get("criterio")
    if term is None:
        return _error(400, MISSING_CRITERIA_MESSAGE)

    with session_scope() as session:
        books = CatalogService(BookRepository(session)).search(term)
        return JSONResponse([book.model_dump(mode="json") for book in books])


# Literal paths come before /libros/{book_id} so they are matched first
catalog_routes: list[dict[str, Any]] = [
    {
        "path": "/libros/public/status",
        "methods": ["GET"],
        "name": "catalog_status",
        "handler": status_handler,
    },
    {
        "path": "/libros/public/info",
        "methods": ["GET"],
        "name": "catalog_info",
        "handler": info_handler,
    },
    {
        "path": "/libros/buscar",
        "methods": ["GET"],
        "name": "search_books",
        "handler": search_handler,
    },
    {
        "path": "/libros/{book_id}/disponible",
        "methods": ["GET"],
        "name": "book_available",
        "handler": availability_handler,
    },
    {
        "path": "/libros/{book_id}/disponibilidad",
        "methods": ["PUT"],
        "name": "set_book_availability",
        "handler": set_availability_handler,
    },
    {
        "path": "/libros/{book_id}",
        "methods": ["GET"],
        "name": "get_book",
        "handler": get_book_handler,
    },
]


def create_http_app(debug: bool = False) -> Starlette:
    """Build a standalone Starlette app serving only the catalog routes."""
    routes = [
        Route(route["path"], route["handler"], methods=route["methods"], name=route["name"])
        for route in catalog_routes
    ]
    return Starlette(debug=debug, routes=routes)
