"""Tool operations shared by the MCP server, HTTP service and CLI."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .analyzers.inventory import find_components, find_services
from .analyzers.structure import extract_for_kind
from .analyzers.usage import (
    UsageGraphBuilder,
    group_by_category,
    group_by_file,
    health_rating,
)
from .config import CATEGORIES, ProjectConfig
from .errors import AccessError, NotAccessibleError
from .logging import get_logger
from .models import (
    ComponentInfo,
    FileContent,
    FileStructureSummary,
    SearchHit,
    ServiceInfo,
    SkippedEntry,
    UsageAnalysis,
)
from .path_guard import PathGuard
from .reports import ReportRenderer, describe_extension, related_searches, search_insights
from .search import count_searchable_files, search_with_report
from .walker import read_source

GROUP_BY_CHOICES = ("component", "file", "category")
FOCUS_CHOICES = ("components", "services", "all")
SEARCH_DISPLAY_LIMIT = 20
USAGE_LOCATION_LIMIT = 5

_ERROR_TIPS = {
    "search": [
        "Use simple text patterns",
        "Ensure the directory exists within the project",
        "Check file type extensions are valid",
    ],
    "read_file": [
        "Pass a path relative to the project root (e.g. `src/app/app.component.ts`)",
        "Only files with an allowed extension can be read",
    ],
    "usage": [
        "Use without parameters to see all component usage",
        "Specify a component: `ButtonComponent` or `app-button`",
        "Group by `file` or `category`, or include unused components",
    ],
    "structure": [
        "Pass a path relative to the project root",
        "Supported kinds: component, service, typescript, script, template, interface",
    ],
    "architecture": [
        "Ensure the project source directory exists",
        "Focus on `components`, `services` or `all`",
    ],
}


@dataclass
class SearchOutcome:
    """Search hits together with the corpus statistics reported alongside them."""

    query: str
    directory: Optional[str]
    file_types: List[str]
    files_searched: int
    hits: List[SearchHit] = field(default_factory=list)
    skipped: List[SkippedEntry] = field(default_factory=list)

    @property
    def matched_files(self) -> int:
        return len({hit.file for hit in self.hits})


@dataclass
class Inventory:
    """Component and/or service inventory for a focus area."""

    focus: str
    components: Optional[List[ComponentInfo]] = None
    services: Optional[List[ServiceInfo]] = None


class ProjectTools:
    """Runs scans against a single configured project root."""

    def __init__(self, config: ProjectConfig, renderer: ReportRenderer | None = None) -> None:
        self.config = config
        self.guard = PathGuard(config.root, config.allowed_extensions)
        self.renderer = renderer or ReportRenderer()
        self.logger = get_logger("tools")

    @property
    def root(self) -> Path:
        return self.guard.root

    # Structured operations

    def search_codebase(
        self,
        query: str,
        file_types: Sequence[str] | None = None,
        directory: str | None = None,
    ) -> SearchOutcome:
        search_dir = self.guard.resolve_directory(directory)
        extensions = self.guard.filter_extensions(file_types)
        self.logger.info("Searching %s for %r", search_dir, query)
        hits, report = search_with_report(search_dir, query, extensions, scan_root=self.root)
        if report.skipped:
            self.logger.debug("Search skipped %d unreadable entries", len(report.skipped))
        return SearchOutcome(
            query=query,
            directory=directory,
            file_types=list(extensions),
            files_searched=count_searchable_files(search_dir, extensions),
            hits=hits,
            skipped=report.skipped,
        )

    def read_file(self, file_path: str) -> FileContent:
        full_path = self.guard.validate_file(file_path)
        try:
            content = read_source(full_path)
            size = full_path.stat().st_size
        except OSError as exc:
            raise NotAccessibleError(f"File not accessible: {exc}") from exc
        return FileContent(
            relative_path=self.guard.relative(full_path),
            absolute_path=str(full_path),
            size=size,
            extension=full_path.suffix,
            content=content,
        )

    def analyze_component_usage(
        self, component: str | None = None, *, include_context: bool = True
    ) -> UsageAnalysis:
        source_dir = self._source_dir()
        builder = UsageGraphBuilder(
            self.root,
            allowed_extensions=self.config.allowed_extensions,
            category_rules=self.config.usage.categories,
            include_context=include_context,
        )
        self.logger.info("Analyzing component usage under %s", source_dir)
        analysis = builder.build(source_dir, target=component or None)
        skipped = len(analysis.discovery.skipped) + len(analysis.usage_scan.skipped)
        if skipped:
            self.logger.debug("Usage analysis skipped %d unreadable entries", skipped)
        return analysis

    def extract_file_structure(self, file_path: str, kind: str) -> FileStructureSummary:
        content = self.read_file(file_path).content
        return extract_for_kind(content, kind)

    def inventory(self, focus: str = "all") -> Inventory:
        if focus not in FOCUS_CHOICES:
            raise ValueError(f"Unknown focus area '{focus}' (expected one of {', '.join(FOCUS_CHOICES)})")
        source_dir = self._source_dir()
        inventory = Inventory(focus=focus)
        if focus in ("components", "all"):
            inventory.components = find_components(source_dir, self.root)
        if focus in ("services", "all"):
            inventory.services = find_services(source_dir, self.root)
        return inventory

    def _source_dir(self) -> Path:
        """The usage and inventory scan root; an empty ``usage.source_dir`` means the project root."""
        return self.guard.resolve_directory(self.config.usage.source_dir or None)

    # Markdown reports

    def search_report(
        self,
        query: str,
        file_types: Sequence[str] | None = None,
        directory: str | None = None,
    ) -> str:
        try:
            outcome = self.search_codebase(query, file_types, directory)
        except AccessError as exc:
            return self._error("Search Error", exc, "search")
        return self.renderer.render(
            "search",
            query=outcome.query,
            directory=outcome.directory,
            file_types=outcome.file_types,
            files_searched=outcome.files_searched,
            matched_files=outcome.matched_files,
            hits=outcome.hits,
            skipped=outcome.skipped,
            display_limit=SEARCH_DISPLAY_LIMIT,
            insights=search_insights(outcome.hits),
            related=related_searches(query),
        )

    def read_file_report(self, file_path: str) -> str:
        try:
            file = self.read_file(file_path)
        except AccessError as exc:
            return self._error(f"Error reading file `{file_path}`", exc, "read_file")
        return self.renderer.render(
            "read_file", file=file, description=describe_extension(file.extension)
        )

    def component_usage_report(
        self,
        component: str | None = None,
        *,
        include_context: bool = True,
        group_by: str = "component",
        show_unused: bool = False,
    ) -> str:
        if group_by not in GROUP_BY_CHOICES:
            raise ValueError(f"Unknown grouping '{group_by}' (expected one of {', '.join(GROUP_BY_CHOICES)})")
        try:
            analysis = self.analyze_component_usage(component, include_context=include_context)
        except AccessError as exc:
            return self._error("Component Usage Analysis Error", exc, "usage")

        components = analysis.components
        used = [item for item in components if item.total_usages > 0]
        unused = [item for item in components if item.total_usages == 0]
        total_usages = sum(item.total_usages for item in components)
        counts = Counter(item.category for item in components)
        average = round(total_usages / len(components), 2) if components else 0
        return self.renderer.render(
            "component_usage",
            components=components,
            listed=components if show_unused else used,
            used=used,
            unused=unused,
            total_usages=total_usages,
            group_by=group_by,
            include_context=include_context,
            by_file=group_by_file(components),
            by_category=group_by_category(components),
            category_counts={category: counts.get(category, 0) for category in CATEGORIES},
            average_usages=average,
            health=health_rating(len(unused)),
            location_limit=USAGE_LOCATION_LIMIT,
        )

    def file_structure_report(self, file_path: str, kind: str) -> str:
        try:
            summary = self.extract_file_structure(file_path, kind)
        except AccessError as exc:
            return self._error("File Structure Error", exc, "structure")
        sections = [
            ("Imports", summary.imports),
            ("Exports", summary.exports),
            ("Interfaces & Types", summary.interfaces),
            ("Methods", summary.methods),
            ("Dependencies", summary.dependencies),
            ("Component References", summary.component_refs),
            ("Service References", summary.service_refs),
        ]
        return self.renderer.render(
            "file_structure", path=file_path, kind=kind, summary=summary, sections=sections
        )

    def architecture_report(self, focus: str = "all") -> str:
        try:
            inventory = self.inventory(focus)
        except AccessError as exc:
            return self._error("Architecture Analysis Error", exc, "architecture")
        component_types = Counter(item.type for item in inventory.components or [])
        return self.renderer.render(
            "inventory",
            focus=inventory.focus,
            components=inventory.components,
            services=inventory.services,
            component_types=dict(component_types),
        )

    def _error(self, title: str, exc: AccessError, topic: str) -> str:
        self.logger.warning("%s (%s): %s", title, exc.kind, exc)
        return self.renderer.render(
            "error",
            title=title,
            message=str(exc),
            tips=_ERROR_TIPS[topic],
            root=str(self.root),
            allowed_extensions=self.config.allowed_extensions,
        )


__all__ = [
    "FOCUS_CHOICES",
    "GROUP_BY_CHOICES",
    "Inventory",
    "ProjectTools",
    "SearchOutcome",
]
