"""Library Catalog MCP Resources Package

Resources are the read-only side of the MCP surface: clients read
``library://books/...`` URIs to inspect the catalog. Changes go through
tools instead.
"""

from .books import book_resources

all_resources = book_resources

__all__ = [
    "all_resources",
    "book_resources",
]
