"""Runtime configuration for the artifact publishing agent."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONNECTION_TIMEOUT = 300  # 5 minutes


class Settings(BaseSettings):
    """Configuration values mapped from ``ARTIPUB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ARTIPUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Artipub Agent"
    version: str = "1.0.0"
    log_level: str = "INFO"

    # Repository server connection
    server_url: str = "http://localhost:8081/artifactory"
    timeout: int = Field(DEFAULT_CONNECTION_TIMEOUT, description="Connection and read timeout in seconds")
    bypass_proxy: bool = False

    # Deployer / resolver credentials configured on the server entry
    deployer_username: Optional[str] = None
    deployer_password: Optional[str] = None
    resolver_username: Optional[str] = None
    resolver_password: Optional[str] = None

    # Outbound proxy
    proxy_host: Optional[str] = None
    proxy_port: int = 0
    proxy_username: Optional[str] = None
    proxy_password: Optional[str] = None

    # Publish defaults
    repository_key: Optional[str] = None
    deploy_pattern: str = ""
    matrix_params: str = ""
    property_encoding: str = "matrix"

    # Remote agent owning the workspace; empty means publish in-process
    agent_url: Optional[str] = None
    agent_timeout: float = 600.0


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
