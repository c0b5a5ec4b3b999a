"""Exceptions for filematch."""


class FileMatchError(Exception):
    """Base exception for all filematch errors."""


class ResolutionError(FileMatchError):
    """Raised when a glob pattern cannot be resolved against its root.

    Covers malformed patterns and missing or inaccessible root directories.
    The original exception, if any, is chained as ``__cause__``.
    """


class ConcurrentUpdateError(FileMatchError):
    """Raised when an update is requested while another one is in flight.

    The running update is not affected. Retry once ``Match.is_updating``
    is ``False`` again.
    """


class UninitializedStateError(FileMatchError):
    """Raised when a match is browsed or hashed before its first update."""


class MatchConfigError(FileMatchError):
    """Raised when a match configuration is invalid or cannot be loaded."""
