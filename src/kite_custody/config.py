"""Client configuration using pydantic-settings.

Values are read from ``KITE_*`` environment variables or a local ``.env`` file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """KITE client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Orchestrator
    # ======================
    base_url: str = Field(
        default="http://localhost:3000",
        description="KITE Custody Orchestrator base URL",
    )
    api_key: str = Field(default="", description="Organization API key")

    # ======================
    # Client behaviour
    # ======================
    log_level: str = Field(default="info", description="SDK log level: debug, info, warn, error")
    timeout: int = Field(default=30000, description="Request timeout in milliseconds")

    @property
    def has_api_key(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key.strip())

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "base_url": self.base_url,
            "api_key": "***" if self.has_api_key else "(not set)",
            "log_level": self.log_level,
            "timeout": self.timeout,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
