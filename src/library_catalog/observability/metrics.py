"""Custom metrics for the library catalog."""

import logfire

# MCP Protocol Metrics
mcp_request_counter = logfire.metric_counter(
    "mcp.requests.total", description="Total MCP requests by method"
)

# Catalog Business Metrics
availability_changes = logfire.metric_counter(
    "catalog.books.availability_changes",
    description="Book availability transitions (available/unavailable)",
)

catalog_searches = logfire.metric_counter(
    "catalog.searches.total", description="Catalog searches by outcome"
)


def record_availability_change(available: bool) -> None:
    """Record a book moving to the available or unavailable state."""
    availability_changes.add(1, {"state": "available" if available else "unavailable"})


def record_search(result_count: int) -> None:
    """Record a catalog search and whether it matched anything."""
    catalog_searches.add(1, {"outcome": "hit" if result_count else "miss"})
