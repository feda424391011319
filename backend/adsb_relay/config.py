"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - The upstream scheme is not configurable (always https); `protocol` only
      labels the deployment in logs and the health probe

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: runs out-of-the-box
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    port: int = 3000
    host: str = "0.0.0.0"
    environment: str = "development"

    # Upstream
    upstream_host: str = "public-api.adsbexchange.com"
    upstream_path: str = "/VirtualRadar/AircraftList.json"
    upstream_timeout_seconds: float = 30.0

    @field_validator("upstream_timeout_seconds")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("upstream_timeout_seconds must be positive")
        return v

    # Responses
    jsonp_callback_name: str = "callback"

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def protocol(self) -> str:
        return "https" if self.environment == "prod" else "http"


@lru_cache
def get_settings() -> Settings:
    return Settings()
