from knows.config.settings import ConfigurationError, KnowsSettings, get_settings
from knows.config.constants import (
    DEFAULT_BATCH_CONCURRENCY,
    DEFAULT_CACHE_MAX_ENTRIES,
    DEFAULT_CACHE_TTL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_BACKOFF,
)

__all__ = [
    "ConfigurationError",
    "KnowsSettings",
    "get_settings",
    "DEFAULT_BATCH_CONCURRENCY",
    "DEFAULT_CACHE_MAX_ENTRIES",
    "DEFAULT_CACHE_TTL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_RETRY_BACKOFF",
]
