"""Library Catalog Server - Core Server Implementation

This module wires the catalog together:

- a FastMCP server exposing the book resources and catalog tools
- the /libros HTTP routes, registered as custom routes on the same server
- Logfire instrumentation for every MCP message

With the ``stdio`` transport only the MCP surface is reachable. With
``streamable_http`` the MCP endpoint and the /libros routes share one
HTTP listener.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .api.routes import catalog_routes
from .config import ServerConfig, get_config
from .database.session import get_db_manager
from .observability import initialize_observability
from .observability.middleware import CatalogInstrumentationMiddleware
from .resources import all_resources
from .tools import all_tools

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Library Catalog - lookup, availability and free-text search over a library's "
    "book catalog. Read library://books/{book_id} for book details and "
    "library://books/{book_id}/available for availability. Use search_catalog to find "
    "books by title, ISBN, category or author, and set_book_availability (librarians "
    "only) to change whether a book can be lent."
)


def configure_logging(config: ServerConfig) -> None:
    """Send logs to stderr so stdout stays free for the stdio transport."""
    level = logging.DEBUG if config.debug else getattr(logging, config.log_level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """Build the FastMCP server with resources, tools, HTTP routes and middleware."""
    config = config or get_config()

    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=INSTRUCTIONS,
    )
    mcp.add_middleware(CatalogInstrumentationMiddleware())

    for resource in all_resources:
        mcp.resource(
            resource["uri"],
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])
    logger.info("Registered %d resources", len(all_resources))

    for tool in all_tools:
        mcp.tool(name=tool["name"], description=tool["description"])(tool["handler"])
    logger.info("Registered %d tools", len(all_tools))

    for route in catalog_routes:
        mcp.custom_route(route["path"], methods=route["methods"], name=route["name"])(
            route["handler"]
        )
    logger.info("Registered %d HTTP routes", len(catalog_routes))

    return mcp


def run_server(mcp: FastMCP, config: ServerConfig) -> None:
    """Run the server on the configured transport."""

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if config.transport == "stdio":
        logger.info("Starting %s v%s on stdio", config.server_name, config.server_version)
        mcp.run(transport="stdio", show_banner=False)
    else:
        logger.info(
            "Starting %s v%s on http://%s:%d",
            config.server_name,
            config.server_version,
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
            show_banner=False,
        )


def main() -> None:
    """Entry point of the ``library-catalog`` command."""
    config = get_config()
    configure_logging(config)

    db_manager = get_db_manager(config.get_database_url())
    try:
        logger.info("Library Catalog v%s (transport=%s)", config.server_version, config.transport)

        initialize_observability()
        db_manager.init_database()

        run_server(create_server(config), config)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start library catalog server")
        sys.exit(1)
    finally:
        db_manager.close()


if __name__ == "__main__":
    main()
