"""Configuration management for the Library Catalog service.

Settings are loaded from ``LIBRARY_CATALOG_*`` environment variables (or a
``.env`` file) and validated with Pydantic v2:
1. Server metadata used by the MCP handshake and the public info endpoint
2. Persistence location
3. Transport selection for MCP and the HTTP routes
4. Token verification settings for the role-checked HTTP routes
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """Catalog service configuration.

    One instance is shared by the HTTP routes, the MCP resources and tools,
    and the database manager (see ``get_config``).
    """

    model_config = SettingsConfigDict(
        # Use LIBRARY_CATALOG_ prefix for all env vars
        env_prefix="LIBRARY_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="library-catalog",
        description="Server name used in the MCP handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="1.0.0",
        description="Service version reported by the MCP handshake and /libros/public/info",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Database Configuration ===

    database_path: Path = Field(
        default=Path("data/catalog.db"),
        description="SQLite database file path",
    )

    # === Transport Configuration ===

    transport: str = Field(
        default="stdio",
        description="Primary transport mechanism",
        # The HTTP catalog routes are only served by streamable_http
        pattern=r"^(stdio|streamable_http)$",
    )

    http_host: str = Field(
        default="127.0.0.1",
        description="Host for the streamable HTTP transport",
    )

    http_port: int = Field(
        default=8080,
        description="Port for the streamable HTTP transport",
        ge=1024,
        le=65535,
    )

    # === Security Configuration ===

    jwt_secret_key: str = Field(
        default="development-secret-key-change-in-production",
        description="Shared secret used to verify bearer tokens",
        repr=False,
    )

    jwt_algorithm: str = Field(
        default="HS256",
        description="Signing algorithm for bearer tokens",
        pattern=r"^(HS256|HS384|HS512)$",
    )

    access_token_expire_minutes: int = Field(
        default=60,
        description="Lifetime of tokens issued by create_access_token",
        ge=1,
    )

    mcp_role: str = Field(
        default="USER",
        description="Role granted to MCP sessions (LIBRARIAN may change availability)",
        pattern=r"^(LIBRARIAN|USER)$",
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Validation Methods ===

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: Path) -> Path:
        """Resolve the database path and make sure its directory exists."""
        abs_path = v.absolute()

        abs_path.parent.mkdir(parents=True, exist_ok=True)

        if not abs_path.parent.is_dir():
            raise ValueError(f"Database directory {abs_path.parent} is not accessible")

        return abs_path

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Server names must stay short enough to be readable in client UIs."""
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @field_validator("http_port")
    @classmethod
    def validate_http_port(cls, v: int) -> int:
        """Reject ports that are commonly taken by other services."""
        reserved_ports = {3306, 5432, 6379, 8443}
        if v in reserved_ports:
            raise ValueError(f"Port {v} is commonly reserved, choose another")
        return v

    def get_database_url(self) -> str:
        """Get SQLAlchemy database URL."""
        return f"sqlite:///{self.database_path}"


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = ServerConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def set_config(config: ServerConfig) -> None:
    """Install an explicit configuration (tests and embedding applications)."""
    _ConfigStore._instance = config  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration so the next ``get_config`` reloads the environment."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
