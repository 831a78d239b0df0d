"""Baseline Scout exception hierarchy.

All public exceptions inherit from BaselineScoutError, giving callers a single
base class to catch when they want to handle any Baseline Scout failure
without swallowing unrelated errors.

Most of these never reach a scan caller: the catalog accessor and the
scanners catch them at their boundary and degrade to stale data, partial
results or an empty list.
"""


class BaselineScoutError(Exception):
    """Base exception for all Baseline Scout errors."""


class CatalogUnavailableError(BaselineScoutError):
    """Raised when the feature catalog cannot be fetched.

    Covers timeouts, HTTP error statuses, transport failures and
    undecodable response bodies. The catalog accessor retries on this
    error and falls back to cached data once retries are exhausted.
    """


class CacheError(BaselineScoutError):
    """Raised when the catalog cache cannot be read or written."""


class ScanParseError(BaselineScoutError):
    """Raised when a language parser cannot run over a source file at all.

    Scanners catch this at their boundary, log it and return whatever
    issues were collected before the failure.
    """


class ConfigError(BaselineScoutError):
    """Raised for invalid configuration values."""
