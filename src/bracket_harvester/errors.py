"""Custom exceptions for the harvester domain."""


class HarvesterError(Exception):
    """Base exception for this project."""


class ConfigError(HarvesterError):
    """Raised when runtime configuration is invalid."""


class InputError(HarvesterError):
    """Raised when the input file or stream cannot be read."""


class FetchError(HarvesterError):
    """Raised when fetching a URL fails."""


class QueueClosedError(HarvesterError):
    """Raised when a URL is enqueued after the input source was closed."""
