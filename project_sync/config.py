"""Configuration management for project-sync."""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_prefix="PROJECT_SYNC_")

    # PostgreSQL connection configuration
    postgres_dsn: str = ""
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_database: str = "postgres"
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_ssl: bool = False

    # Pool configuration
    pool_min_size: int = 1
    pool_max_size: int = 10
    query_timeout: int = 30

    # Reconciliation configuration
    db_schema: str = "public"
    workspace_root: Optional[Path] = Field(
        default=None,
        description="Root directory scanned for scaffolding artifacts"
    )
    ddl_strict_identifiers: bool = True
    strict_schema_probe: bool = False

    # Snapshot cache configuration
    cache_backend: Literal["memory", "redis", "none"] = "memory"
    cache_ttl: int = 300
    cache_max_entries: int = 256
    redis_url: str = "redis://localhost:6379/0"

    # MCP configuration
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8990

    def get_dsn(self) -> str:
        """Get the database connection string.

        Returns:
            The DSN string for connecting to PostgreSQL.
        """
        if self.postgres_dsn and not self.postgres_dsn.startswith("${"):
            return self.postgres_dsn
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_database}"
        )

    def get_workspace_root(self) -> Path:
        """Resolve the workspace root used for artifact detection.

        Returns:
            The configured root, or the current working directory.
        """
        if self.workspace_root is not None:
            return Path(self.workspace_root).resolve()
        return Path.cwd().resolve()
