"""Logfire settings for the catalog server.

Values come from ``LOGFIRE_*`` and ``ENVIRONMENT``. The service name and
version default to the catalog's own ``ServerConfig`` so spans are tagged
with the deployed server.
"""

import os

from pydantic import BaseModel, Field

from ..config import get_config as get_server_config


def _flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() == "true"


def _environment() -> str:
    return os.getenv("ENVIRONMENT", "development")


class ObservabilityConfig(BaseModel):
    """Configuration for Logfire observability."""

    token: str = Field(default_factory=lambda: os.getenv("LOGFIRE_TOKEN", ""))
    service_name: str = Field(default_factory=lambda: get_server_config().server_name)
    service_version: str = Field(default_factory=lambda: get_server_config().server_version)
    environment: str = Field(default_factory=_environment)

    enabled: bool = Field(default_factory=lambda: _flag("LOGFIRE_ENABLED", True))
    console_output: bool = Field(default_factory=lambda: _flag("LOGFIRE_CONSOLE", False))
    # Only production exports spans unless LOGFIRE_SEND says otherwise
    send_to_logfire: bool = Field(
        default_factory=lambda: _flag("LOGFIRE_SEND", _environment() == "production")
    )
