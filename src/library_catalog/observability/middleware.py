"""FastMCP middleware for instrumentation."""

from typing import Any

from fastmcp.server.middleware import Middleware, MiddlewareContext

from . import logfire
from .config import ObservabilityConfig
from .metrics import mcp_request_counter


class CatalogInstrumentationMiddleware(Middleware):
    """Middleware to trace all MCP protocol operations."""

    def __init__(self):
        self.enabled = ObservabilityConfig().enabled

    async def on_message(self, context: MiddlewareContext, call_next) -> Any:
        """Instrument all MCP messages."""
        if not self.enabled:
            return await call_next(context)

        method = context.method or "unknown"
        operation_type = self._get_operation_type(method)
        mcp_request_counter.add(1, {"method": method})

        with logfire.span(
            f"mcp.{operation_type}.{method}",
            _span_name=f"MCP {method}",
            mcp_method=method,
            mcp_operation_type=operation_type,
            mcp_source=getattr(context, "source", "unknown"),
        ) as span:
            message = getattr(context, "message", None)
            # Tool calls carry a name, resource reads a uri
            if hasattr(message, "name"):
                span.set_attribute("tool.name", str(message.name))
            elif hasattr(message, "uri"):
                span.set_attribute("resource.uri", str(message.uri))

            try:
                result = await call_next(context)
                span.set_attribute("mcp.status", "success")
                return result
            except Exception as e:
                span.set_attribute("mcp.status", "error")
                span.set_attribute("error.type", type(e).__name__)
                span.set_attribute("error.message", str(e))
                raise

    def _get_operation_type(self, method: str) -> str:
        """Categorize MCP method into operation type."""
        if method.startswith("resources/"):
            return "resource"
        if method.startswith("tools/"):
            return "tool"
        return "system"
