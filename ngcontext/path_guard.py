"""Validation of caller-supplied paths against the scan root."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Sequence, Tuple

from .errors import (
    DirectoryUnavailableError,
    DisallowedTypeError,
    NotAccessibleError,
    OutOfScopeError,
)
from .logging import get_logger

_logger = get_logger("path_guard")


class PathGuard:
    """Keeps every read inside a fixed scan root with an allowed extension."""

    def __init__(self, root: Path | str, allowed_extensions: Sequence[str]) -> None:
        self.root = Path(root).expanduser().resolve()
        self.allowed_extensions: Tuple[str, ...] = tuple(allowed_extensions)

    def resolve(self, relative_path: str) -> Path:
        """Resolve ``relative_path`` against the root, rejecting escapes.

        Containment is segment-aware: ``/srv/app-old`` is not inside ``/srv/app``.
        Symlinks are resolved first, so a link pointing outside the root is rejected.
        """
        try:
            candidate = (self.root / relative_path).resolve()
        except (ValueError, OSError, RuntimeError) as exc:
            # NUL bytes raise ValueError; symlink loops raise on older interpreters.
            raise NotAccessibleError(f"Path '{relative_path}' cannot be resolved: {exc}") from exc
        if not candidate.is_relative_to(self.root):
            _logger.debug("Rejected out-of-scope path %s", relative_path)
            raise OutOfScopeError(f"Path '{relative_path}' is outside the project directory")
        return candidate

    def validate_file(self, relative_path: str) -> Path:
        """Return the absolute path of a readable, allowed, in-scope regular file."""
        full_path = self.resolve(relative_path)

        extension = full_path.suffix
        if extension not in self.allowed_extensions:
            allowed = ", ".join(self.allowed_extensions)
            shown = extension or "(none)"
            raise DisallowedTypeError(
                f"File type {shown} not allowed. Allowed types: {allowed}"
            )

        if not full_path.exists():
            raise NotAccessibleError(f"File not accessible: '{relative_path}' does not exist")
        if not full_path.is_file():
            raise NotAccessibleError(f"File not accessible: '{relative_path}' is not a file")
        if not os.access(full_path, os.R_OK):
            raise NotAccessibleError(f"File not accessible: '{relative_path}' is not readable")

        return full_path

    def resolve_directory(self, relative_path: str | None) -> Path:
        """Return an in-scope directory to start a scan from (the root when omitted)."""
        directory = self.root if not relative_path else self.resolve(relative_path)
        if not directory.is_dir():
            raise DirectoryUnavailableError(
                f"Directory '{relative_path or '.'}' does not exist in the project"
            )
        return directory

    def filter_extensions(self, requested: Iterable[str] | None) -> Tuple[str, ...]:
        """Intersect ``requested`` with the allowed set, keeping the caller's order."""
        if requested is None:
            return self.allowed_extensions
        requested = list(requested)
        if not requested:
            return self.allowed_extensions
        selected = tuple(ext for ext in dict.fromkeys(requested) if ext in self.allowed_extensions)
        if not selected:
            allowed = ", ".join(self.allowed_extensions)
            raise DisallowedTypeError(
                f"None of the requested file types are allowed. Allowed types: {allowed}"
            )
        return selected

    def relative(self, path: Path) -> str:
        """Return ``path`` relative to the root in POSIX form."""
        return path.relative_to(self.root).as_posix()


__all__ = ["PathGuard"]
