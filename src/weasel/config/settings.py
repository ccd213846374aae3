"""Application settings loaded from environment variables.

Hey future me - every section can be built standalone (handy in tests) AND is nested
under Settings. Environment layout:

    WEASEL_IMGUR__CLIENT_ID=abc123
    WEASEL_DETECTION__REQUEST_TIMEOUT_SECONDS=5
    WEASEL_OBSERVABILITY__LOG_LEVEL=DEBUG

Standalone sections read the single-underscore form (WEASEL_IMGUR_CLIENT_ID).
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImgurSettings(BaseSettings):
    """Imgur API configuration."""

    model_config = SettingsConfigDict(env_prefix="WEASEL_IMGUR_", extra="ignore")

    client_id: str = Field(default="", description="Imgur API Client ID")
    api_base_url: str = Field(default="https://api.imgur.com/3")
    image_base_url: str = Field(
        default="http://i.imgur.com",
        description="Direct-image host used for single image lookups",
    )
    hosts: frozenset[str] = Field(
        default=frozenset({"imgur.com", "www.imgur.com", "i.imgur.com", "m.imgur.com"}),
        description="Hostnames a page URL must have to be processed",
    )

    @field_validator("api_base_url", "image_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_configured(self) -> bool:
        """Whether a client id has been provided."""
        return bool(self.client_id)


class DetectionSettings(BaseSettings):
    """Resilience settings shared by all detectors."""

    model_config = SettingsConfigDict(env_prefix="WEASEL_DETECTION_", extra="ignore")

    initial_backoff_seconds: float = Field(default=0.002, gt=0)
    max_backoff_seconds: float = Field(default=600.0, gt=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    # Alternative behaviour: Broken is terminal and adapter faults are only logged.
    broken_is_permanent: bool = False


class ObservabilitySettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="WEASEL_OBSERVABILITY_", extra="ignore")

    log_level: str = "INFO"
    log_json_format: bool = False
    logging_enabled: bool = True


class HttpSettings(BaseSettings):
    """Shared HTTP client pool settings."""

    model_config = SettingsConfigDict(env_prefix="WEASEL_HTTP_", extra="ignore")

    timeout: float = 30.0
    max_keepalive: int = 20
    max_connections: int = 50


class Settings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="WEASEL_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    imgur: ImgurSettings = Field(default_factory=ImgurSettings)
    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
    http: HttpSettings = Field(default_factory=HttpSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
