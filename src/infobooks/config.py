"""Configuration management for the InfoBooks loan service.

Settings are loaded with pydantic-settings from ``INFOBOOKS_*`` environment
variables (or a ``.env`` file) and validated on construction:
1. Server Metadata - name and version announced to MCP clients
2. Transport - stdio or streamable HTTP
3. Circulation Policy - loan period length
4. Development - sample data, debug logging
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceConfig(BaseSettings):
    """Loan service configuration.

    Only the entry point reads this object. The store, the lifecycle engine
    and the library facade receive the values they need through their
    constructors, so tests can build them without touching the environment.
    """

    model_config = SettingsConfigDict(
        # Use INFOBOOKS_ prefix for all env vars
        env_prefix="INFOBOOKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="infobooks",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Transport Configuration ===

    transport: str = Field(
        default="stdio",
        description="Transport the MCP server listens on",
        pattern=r"^(stdio|streamable_http)$",
    )

    http_host: str = Field(
        default="127.0.0.1",
        description="HTTP server host for Streamable HTTP transport",
    )

    http_port: int = Field(
        default=8080,
        description="HTTP server port for Streamable HTTP transport",
        ge=1024,
        le=65535,
    )

    # === Circulation Policy ===

    loan_period_days: int = Field(
        default=14,
        description="Days between the borrow date and the due date of a loan",
        ge=1,
        le=365,
    )

    # === Development Configuration ===

    seed_sample_data: bool = Field(
        default=True,
        description="Load the sample users, books and loan at startup",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug logging for protocol messages",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Validate server name length; clients display it to users."""
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @field_validator("http_port")
    @classmethod
    def validate_http_port(cls, v: int) -> int:
        """Reject ports that commonly belong to other services."""
        reserved_ports = {3306, 5432, 6379, 27017}
        if v in reserved_ports:
            raise ValueError(f"Port {v} is commonly reserved, choose another")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def is_development(self) -> bool:
        return self.debug or self.log_level == "DEBUG"

    @property
    def server_info(self) -> dict[str, str]:
        """Server information announced during the MCP handshake."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }


class _ConfigStore:
    """Internal storage for the configuration instance."""

    _instance: ServiceConfig | None = None


def get_config() -> ServiceConfig:
    """Get or create the process configuration used by the entry point."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = ServiceConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
