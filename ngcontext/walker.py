"""Depth-first traversal of a project tree."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

from .logging import get_logger
from .models import SkippedEntry, WalkReport

_EXCLUDED_DIRS = {
    "node_modules",
    "dist",
}

_logger = get_logger("walker")

Visitor = Callable[[Path], None]


def is_excluded_dir(name: str) -> bool:
    return name.startswith(".") or name in _EXCLUDED_DIRS


def read_source(path: Path) -> str:
    """Read a project file as UTF-8, replacing undecodable bytes with U+FFFD."""
    return path.read_text(encoding="utf-8", errors="replace")


def walk(root: Path, visitor: Visitor) -> WalkReport:
    """Visit every regular file under ``root`` in depth-first pre-order.

    Entries are visited in name order. Hidden, ``node_modules`` and ``dist``
    directories are pruned. Symlinks are neither followed nor visited, so the
    walk cannot cycle. Unreadable directories and files whose visit raises
    ``OSError`` or ``UnicodeDecodeError`` are recorded in the report and skipped.
    """
    report = WalkReport(root=str(root))
    _walk_directory(Path(root), visitor, report)
    _logger.debug(
        "Walked %s: %d files visited, %d skipped",
        root,
        report.visited,
        len(report.skipped),
    )
    return report


def _walk_directory(directory: Path, visitor: Visitor, report: WalkReport) -> None:
    try:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        _logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        report.skipped.append(SkippedEntry(path=str(directory), reason=_describe(exc)))
        return

    for entry in entries:
        path = directory / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = entry.is_file(follow_symlinks=False)
        except OSError as exc:
            report.skipped.append(SkippedEntry(path=str(path), reason=_describe(exc)))
            continue

        if is_dir:
            if not is_excluded_dir(entry.name):
                _walk_directory(path, visitor, report)
        elif is_file:
            try:
                visitor(path)
            except (OSError, UnicodeDecodeError) as exc:
                _logger.debug("Skipping unreadable file %s: %s", path, exc)
                report.skipped.append(SkippedEntry(path=str(path), reason=_describe(exc)))
                continue
            report.visited += 1


def _describe(exc: Exception) -> str:
    return f"{exc.__class__.__name__}: {exc}"


__all__ = ["Visitor", "is_excluded_dir", "read_source", "walk"]
