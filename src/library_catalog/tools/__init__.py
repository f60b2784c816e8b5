"""
MCP Tools for the library catalog.

Tools are the actions MCP clients can invoke. Searching is exposed as a
tool (it takes free text), and so is the availability update, which is the
only operation with side effects.
"""

from .catalog import catalog_tools, search_catalog, set_book_availability

# Single list used by the server at startup
all_tools = catalog_tools

__all__ = [
    "all_tools",
    "search_catalog",
    "set_book_availability",
]
