"""Core infrastructure components."""
from .cache import CacheInterface, InMemoryCache
from .exceptions import (
    AppException,
    ConfigurationError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "AppException",
    "CacheInterface",
    "ConfigurationError",
    "InMemoryCache",
    "NotFoundError",
    "ValidationError",
]
