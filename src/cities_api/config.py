"""Application configuration."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CITIES_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "sqlite+aiosqlite:///./cities.db"

    # Size of the store connection pool (ignored for SQLite)
    pool_size: int = 10

    host: str = "0.0.0.0"
    port: int = 8443

    # TLS is enabled only when both paths are set
    tls_cert: str | None = None
    tls_key: str | None = None

    # Seconds granted to in-flight requests on shutdown
    shutdown_timeout: int = 30

    log_level: str = "info"

    @field_validator("pool_size")
    @classmethod
    def check_pool_size(cls, v: int) -> int:
        """A pool needs at least one connection."""
        if v < 1:
            raise ValueError("pool_size must be at least 1")
        return v

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert and self.tls_key)


settings = Settings()
