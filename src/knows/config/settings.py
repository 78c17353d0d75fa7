import json
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from knows.config.constants import (
    DEFAULT_BATCH_CONCURRENCY,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_TTL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BACKOFF,
)


class ConfigurationError(Exception):
    """Raised when the adapter cannot be built from its settings."""


class KnowsSettings(BaseSettings):
    """KnowS adapter settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="KNOWS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # KnowS API
    api_key: str = Field(
        default="",
        description="API key sent in the x-api-key header",
    )
    api_base_url: str = Field(
        default="",
        description="Base URL of the KnowS API",
    )
    default_data_scope: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Data scopes used when a search omits data_scope",
    )

    # HTTP
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Per-request timeout in seconds",
    )
    max_retries: int = Field(
        default=DEFAULT_MAX_RETRIES,
        description="Retries after the first attempt for transient failures",
    )
    retry_backoff: float = Field(
        default=DEFAULT_RETRY_BACKOFF,
        description="Base delay in seconds for exponential backoff",
    )

    # Batch / cache
    batch_concurrency: int = Field(
        default=DEFAULT_BATCH_CONCURRENCY,
        description="Maximum in-flight requests for batch tools",
    )
    cache_ttl: float = Field(
        default=DEFAULT_CACHE_TTL,
        description="Evidence detail cache TTL in seconds",
    )
    cache_max_entries: int = Field(
        default=DEFAULT_CACHE_MAX_ENTRIES,
        description="Maximum number of cached evidence details",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("default_data_scope", mode="before")
    @classmethod
    def split_data_scope(cls, value: Any) -> Any:
        """Accept a comma separated string as well as a list."""
        if value is None:
            return []
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                return json.loads(text)
            return [part.strip() for part in text.split(",") if part.strip()]
        return value

    @field_validator("request_timeout", "retry_backoff", "cache_ttl", mode="before")
    @classmethod
    def positive_float(cls, value: Any, info: ValidationInfo) -> float:
        """Fall back to the default for non-positive or invalid values."""
        default = cls.model_fields[info.field_name].default
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
        return number if number > 0 else default

    @field_validator("batch_concurrency", "cache_max_entries", mode="before")
    @classmethod
    def positive_int(cls, value: Any, info: ValidationInfo) -> int:
        """Fall back to the default for non-positive or invalid values."""
        default = cls.model_fields[info.field_name].default
        number = _coerce_int(value)
        if number is None or number <= 0:
            return default
        return number

    @field_validator("max_retries", mode="before")
    @classmethod
    def non_negative_retries(cls, value: Any) -> int:
        """Zero disables retries; negative or invalid values use the default."""
        number = _coerce_int(value)
        if number is None or number < 0:
            return DEFAULT_MAX_RETRIES
        return number

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip() and self.api_base_url.strip())


def _coerce_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


@lru_cache
def get_settings() -> KnowsSettings:
    """Get cached settings instance."""
    return KnowsSettings()
