from __future__ import annotations


class CacheServerError(Exception):
    """Base error for the cache server."""


class InvalidConfiguration(CacheServerError, ValueError):
    """Raised when a cache or sweeper is built with out-of-range settings."""


class ValidationError(CacheServerError):
    """Raised when user input is invalid."""
