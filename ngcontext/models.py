"""Core data models shared across ngcontext components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class SearchHit:
    """One line-level substring match."""

    file: str
    line: int
    context: str
    excerpt: str


@dataclass
class UsageLocation:
    """A single place where a declared component is referenced."""

    file: str
    kind: str
    line: int
    context: str
    description: str


@dataclass
class DeclaredComponent:
    """Component discovered from a ``*.component.ts`` declaration file."""

    name: str
    selector: str
    source_path: str
    category: str
    used_in: List[UsageLocation] = field(default_factory=list)

    @property
    def total_usages(self) -> int:
        return len(self.used_in)

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["total_usages"] = self.total_usages
        return payload


@dataclass
class FileStructureSummary:
    """Declarative facts extracted from a single file's text."""

    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    interfaces: List[str] = field(default_factory=list)
    methods: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    component_refs: List[str] = field(default_factory=list)
    service_refs: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(
            (
                self.imports,
                self.exports,
                self.interfaces,
                self.methods,
                self.dependencies,
                self.component_refs,
                self.service_refs,
            )
        )


@dataclass
class SkippedEntry:
    """A file or directory the walker could not process."""

    path: str
    reason: str


@dataclass
class WalkReport:
    """Outcome of a directory walk."""

    root: str
    visited: int = 0
    skipped: List[SkippedEntry] = field(default_factory=list)


@dataclass
class UsageAnalysis:
    """Result of a usage-graph build."""

    components: List[DeclaredComponent]
    discovery: WalkReport
    usage_scan: WalkReport


@dataclass
class ComponentInfo:
    """Inventory entry for a component declaration file."""

    name: str
    path: str
    type: str
    size_kb: float
    features: List[str]


@dataclass
class ServiceInfo:
    """Inventory entry for a service declaration file."""

    name: str
    path: str
    category: str
    patterns: List[str]
    dependencies: List[str]


@dataclass
class FileContent:
    """A file read through the path guard."""

    relative_path: str
    absolute_path: str
    size: int
    extension: str
    content: str
