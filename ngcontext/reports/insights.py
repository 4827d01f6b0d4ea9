"""Derived facts used by the markdown reports."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, List, Sequence

from ..models import SearchHit

MAX_RELATED_SEARCHES = 5

_EXTENSION_DESCRIPTIONS: Dict[str, str] = {
    ".ts": "TypeScript source file",
    ".html": "Angular template file",
    ".scss": "SCSS stylesheet",
    ".css": "CSS stylesheet",
    ".json": "JSON configuration or data file",
    ".md": "Markdown documentation file",
    ".js": "JavaScript file (build configuration or utility script)",
}

_TOPIC_SUGGESTIONS: Sequence[tuple[str, Sequence[str]]] = (
    ("component", ("selector", "template", "standalone")),
    ("service", ("inject", "injectable", "provider")),
    ("signal", ("computed", "effect", "set")),
    ("interface", ("type", "export", "extends")),
)

_CONTEXT_MARKERS: Sequence[tuple[str, str]] = (
    ("import", "Found in import statements"),
    ("@", "Found in decorators/annotations"),
    ("class", "Found in class definitions"),
    ("interface", "Found in interface definitions"),
)


@dataclass
class SearchInsights:
    """Distribution of search hits across file types and directories."""

    file_types: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)
    most_common_directory: str = "Unknown"
    usage_contexts: List[str] = field(default_factory=list)


def describe_extension(extension: str) -> str:
    return _EXTENSION_DESCRIPTIONS.get(extension, "Project file")


def _top_level(path: str) -> str:
    return path.split("/")[0]


def search_insights(hits: Sequence[SearchHit]) -> SearchInsights:
    if not hits:
        return SearchInsights()

    file_types = list(dict.fromkeys(PurePosixPath(hit.file).suffix for hit in hits))
    directories = list(dict.fromkeys(_top_level(hit.file) for hit in hits))
    most_common = Counter(_top_level(hit.file) for hit in hits).most_common(1)[0][0]

    contexts = [hit.context for hit in hits[:5]]
    usage_contexts = [
        label for needle, label in _CONTEXT_MARKERS if any(needle in context for context in contexts)
    ]

    return SearchInsights(
        file_types=file_types,
        directories=directories,
        most_common_directory=most_common,
        usage_contexts=usage_contexts,
    )


def related_searches(query: str) -> List[str]:
    lowered = query.lower()
    suggestions: List[str] = []
    for topic, related in _TOPIC_SUGGESTIONS:
        if topic in lowered:
            suggestions.extend(related)
            break
    suggestions.extend((f"{query} component", f"{query} service", f"{query} interface"))
    return suggestions[:MAX_RELATED_SEARCHES]


__all__ = [
    "SearchInsights",
    "describe_extension",
    "related_searches",
    "search_insights",
]
