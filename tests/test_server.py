"""
Tests for server assembly.

The FastMCP server must expose the book resources, the catalog tools and
the /libros HTTP routes.
"""

import pytest
from fastmcp import Client
from starlette.testclient import TestClient

from library_catalog.server import create_server


@pytest.fixture
def server(test_config):
    return create_server(test_config)


def test_server_metadata(server, test_config):
    assert server.name == test_config.server_name


@pytest.mark.asyncio
async def test_tools_and_resources_are_listed(server):
    async with Client(server) as client:
        tools = {tool.name for tool in await client.list_tools()}
        templates = {t.name for t in await client.list_resource_templates()}

    assert tools == {"search_catalog", "set_book_availability"}
    assert templates == {"Book Details", "Book Availability"}


@pytest.mark.asyncio
async def test_search_tool_over_mcp(server, catalog_books):
    async with Client(server) as client:
        result = await client.call_tool("search_catalog", {"term": "Cien"})

    assert result.structured_content["total"] == 1


def test_http_routes_are_mounted(server, catalog_books):
    with TestClient(server.http_app()) as client:
        response = client.get("/libros/public/status")

    assert response.status_code == 200
