"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Connection strings come from environment variables (never hardcoded credentials)
    - get_settings() is cached (lru_cache): single instance per process
    - server_addr is "host:port"; host and port derived, never configured twice

Design Decisions:
    - Field names match the deployed env vars: SERVER_ADDR, DB_CONN,
      DB_MAX_OPEN_CONNS, DB_MAX_IDLE_CONNS, LOG_LEVEL, LOG_CALLER, LOG_STACK_TRACE
    - Defaults provided for all settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def to_async_url(url: str) -> str:
    """postgres:// and postgresql:// URLs need the asyncpg driver suffix."""
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return url.replace(prefix, "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    server_addr: str = "0.0.0.0:8080"
    version: str = "not_specified"

    # Database
    db_conn: str = "postgresql+asyncpg://users:users@db:5432/users"
    db_max_open_conns: int = 10
    db_max_idle_conns: int = 10

    @field_validator("db_conn", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return to_async_url(v) if isinstance(v, str) else v

    @field_validator("server_addr")
    @classmethod
    def check_server_addr(cls, v: str) -> str:
        _, sep, port = v.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError("server_addr must be host:port")
        return v

    # Observability
    log_level: str = "info"
    log_format: Literal["json", "text"] = "json"
    log_caller: bool = False
    log_stack_trace: bool = False

    @property
    def server_host(self) -> str:
        return self.server_addr.rpartition(":")[0] or "0.0.0.0"

    @property
    def server_port(self) -> int:
        return int(self.server_addr.rpartition(":")[2])


@lru_cache
def get_settings() -> Settings:
    return Settings()
