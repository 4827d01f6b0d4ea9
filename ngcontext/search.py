"""Case-insensitive substring search across project files."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .logging import get_logger
from .models import SearchHit, WalkReport
from .walker import read_source, walk

SEARCH_RESULT_LIMIT = 50
EXCERPT_RADIUS = 2

_logger = get_logger("search")


def search(
    root: Path,
    query: str,
    allowed_extensions: Sequence[str],
    *,
    scan_root: Path | None = None,
) -> List[SearchHit]:
    """Return up to ``SEARCH_RESULT_LIMIT`` line hits for ``query`` under ``root``.

    The query is a literal, case-insensitive substring. Hits are ordered by
    traversal order, then by line number; anything past the limit is dropped.
    File paths are reported relative to ``scan_root`` (``root`` by default).
    """
    hits, _ = search_with_report(root, query, allowed_extensions, scan_root=scan_root)
    return hits


def search_with_report(
    root: Path,
    query: str,
    allowed_extensions: Sequence[str],
    *,
    scan_root: Path | None = None,
) -> tuple[List[SearchHit], WalkReport]:
    root = Path(root).resolve()
    base = Path(scan_root).resolve() if scan_root is not None else root
    extensions = tuple(allowed_extensions)
    needle = query.lower()
    hits: List[SearchHit] = []

    def _visit(path: Path) -> None:
        if path.suffix not in extensions:
            return
        # Files past the cap could only contribute dropped hits.
        if len(hits) >= SEARCH_RESULT_LIMIT:
            return
        content = read_source(path)
        lines = content.split("\n")
        relative = path.relative_to(base).as_posix()
        for index, line in enumerate(lines):
            if needle in line.lower():
                hits.append(
                    SearchHit(
                        file=relative,
                        line=index + 1,
                        context=line.strip(),
                        excerpt="\n".join(
                            lines[max(0, index - EXCERPT_RADIUS) : index + EXCERPT_RADIUS + 1]
                        ),
                    )
                )

    report = walk(root, _visit)
    _logger.debug("Search for %r collected %d hits", query, len(hits))
    return hits[:SEARCH_RESULT_LIMIT], report


def count_searchable_files(root: Path, allowed_extensions: Sequence[str]) -> int:
    """Count files under ``root`` whose extension is allowed, without reading them."""
    extensions = tuple(allowed_extensions)
    count = 0

    def _visit(path: Path) -> None:
        nonlocal count
        if path.suffix in extensions:
            count += 1

    walk(Path(root), _visit)
    return count


__all__ = [
    "EXCERPT_RADIUS",
    "SEARCH_RESULT_LIMIT",
    "count_searchable_files",
    "search",
    "search_with_report",
]
