"""
Error types raised by the file hasher.

ConfigurationError and its PathResolutionError subclass are fatal for the whole
run and are raised before any file is touched. FileAccessError and
EncodingMismatchError are scoped to a single file and are converted into
diagnostics by the hash coordinator.
"""


class HasherError(Exception):
    """Base class for all file hasher errors."""


class ConfigurationError(HasherError):
    """Raised when algorithm, encoding or other settings are invalid."""


class FileAccessError(HasherError):
    """Raised when a file cannot be stat'ed, opened or read."""

    def __init__(self, path: str, reason: str):
        super().__init__(reason)
        self.path = path
        self.reason = reason


class EncodingMismatchError(HasherError):
    """Raised when a raw digest cannot be rendered in the requested encoding."""


class PathResolutionError(ConfigurationError):
    """Raised when a supplied literal path does not exist. Fatal before any hashing starts."""
