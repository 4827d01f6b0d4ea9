"""Error taxonomy for path validation and scan failures."""

from __future__ import annotations


class AccessError(RuntimeError):
    """Base class for failures that terminate a single tool invocation."""

    kind = "access_error"


class OutOfScopeError(AccessError):
    """Raised when a path resolves outside the scan root."""

    kind = "out_of_scope"


class DisallowedTypeError(AccessError):
    """Raised when a file extension is not in the allowed set."""

    kind = "disallowed_type"


class NotAccessibleError(AccessError):
    """Raised when a path is missing, unreadable, or not a regular file."""

    kind = "not_accessible"


class DirectoryUnavailableError(AccessError):
    """Raised when the directory a scan starts from cannot be used."""

    kind = "directory_unavailable"


__all__ = [
    "AccessError",
    "DirectoryUnavailableError",
    "DisallowedTypeError",
    "NotAccessibleError",
    "OutOfScopeError",
]
