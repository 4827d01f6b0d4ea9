"""Two-pass builder relating component declarations to their usages."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Sequence

from ..config import (
    CATEGORIES,
    DEFAULT_ALLOWED_EXTENSIONS,
    DEFAULT_CATEGORY_RULES,
    FALLBACK_CATEGORY,
    CategoryRule,
)
from ..logging import get_logger
from ..models import DeclaredComponent, UsageAnalysis, UsageLocation, WalkReport
from ..walker import read_source, walk
from .structure import extract_component_name, extract_selector

COMPONENT_FILE_SUFFIX = ".component.ts"
SCRIPT_CONTEXT_RADIUS = 2
TEMPLATE_CONTEXT_RADIUS = 1

_LINE_IMPORT = re.compile(r"import\s+\{([^}]+)\}\s+from\s+['\"]([^'\"]+)['\"]")
_LINE_IMPORTS_ARRAY = re.compile(r"imports:\s*\[([^\]]+)\]")


def categorize(relative_path: str, rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES) -> str:
    """Return the category of the first rule whose marker occurs in the path."""
    for rule in rules:
        if rule.matches(relative_path):
            return rule.category
    return FALLBACK_CATEGORY


def context_lines(lines: Sequence[str], index: int, radius: int) -> str:
    """Numbered excerpt around ``index`` with the target line marked by an arrow."""
    start = max(0, index - radius)
    end = min(len(lines), index + radius + 1)
    rendered = []
    for offset, line in enumerate(lines[start:end]):
        position = start + offset
        marker = "→ " if position == index else "  "
        rendered.append(f"{marker}{position + 1}: {line}")
    return "\n".join(rendered)


class ComponentIndex:
    """Components keyed by class name; frozen against new keys once discovery ends."""

    def __init__(self) -> None:
        self._components: Dict[str, DeclaredComponent] = {}
        self._frozen = False

    def register(self, component: DeclaredComponent) -> None:
        if self._frozen:
            raise RuntimeError("Component index is frozen; discovery has finished")
        # Same class name in two files: the later file wins.
        self._components[component.name] = component

    def freeze(self) -> None:
        self._frozen = True

    def record(self, name: str, location: UsageLocation) -> None:
        self._components[name].used_in.append(location)

    def __contains__(self, name: object) -> bool:
        return name in self._components

    def __iter__(self) -> Iterator[DeclaredComponent]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)


class UsageGraphBuilder:
    """Discovers declared components, then scans scripts and templates for usages."""

    def __init__(
        self,
        scan_root: Path | str,
        *,
        allowed_extensions: Sequence[str] = DEFAULT_ALLOWED_EXTENSIONS,
        category_rules: Sequence[CategoryRule] = DEFAULT_CATEGORY_RULES,
        include_context: bool = True,
    ) -> None:
        self.scan_root = Path(scan_root).resolve()
        self.allowed_extensions = tuple(allowed_extensions)
        self.category_rules = tuple(category_rules)
        self.include_context = include_context
        self.logger = get_logger("usage")

    def build(self, root: Path | str, target: str | None = None) -> UsageAnalysis:
        """Run discovery and the usage scan under ``root``, then sort and filter.

        Components are sorted by usage count, descending; ties keep discovery
        order. ``target`` filters afterwards by case-insensitive substring of
        name or selector; it never narrows the scan itself.
        """
        root_path = Path(root).resolve()
        index = ComponentIndex()

        discovery = self._discover(root_path, index)
        index.freeze()
        self.logger.debug("Discovered %d components under %s", len(index), root_path)

        usage_scan = self._scan_usages(root_path, index)

        components = sorted(index, key=lambda component: -component.total_usages)
        if target:
            components = filter_components(components, target)

        return UsageAnalysis(components=components, discovery=discovery, usage_scan=usage_scan)

    def _relative(self, path: Path) -> str:
        return path.relative_to(self.scan_root).as_posix()

    def _discover(self, root: Path, index: ComponentIndex) -> WalkReport:
        def _visit(path: Path) -> None:
            if not path.name.endswith(COMPONENT_FILE_SUFFIX):
                return
            content = read_source(path)
            name = extract_component_name(content)
            if not name:
                return
            relative = self._relative(path)
            index.register(
                DeclaredComponent(
                    name=name,
                    selector=extract_selector(content),
                    source_path=relative,
                    category=categorize(relative, self.category_rules),
                )
            )

        return walk(root, _visit)

    def _scan_usages(self, root: Path, index: ComponentIndex) -> WalkReport:
        def _visit(path: Path) -> None:
            extension = path.suffix
            if extension not in self.allowed_extensions:
                return
            if extension == ".ts":
                content = read_source(path)
                self._scan_script(content.split("\n"), self._relative(path), index)
            elif extension == ".html":
                content = read_source(path)
                self._scan_template(content.split("\n"), self._relative(path), index)

        return walk(root, _visit)

    def _context(self, lines: Sequence[str], index: int, radius: int) -> str:
        if not self.include_context:
            return ""
        return context_lines(lines, index, radius)

    def _scan_script(self, lines: Sequence[str], relative: str, index: ComponentIndex) -> None:
        for line_index, line in enumerate(lines):
            import_match = _LINE_IMPORT.search(line)
            if import_match:
                for name in _split_refs(import_match.group(1)):
                    if name in index:
                        index.record(
                            name,
                            UsageLocation(
                                file=relative,
                                kind="script",
                                line=line_index + 1,
                                context=self._context(lines, line_index, SCRIPT_CONTEXT_RADIUS),
                                description=f"Import: {line.strip()}",
                            ),
                        )

            array_match = _LINE_IMPORTS_ARRAY.search(line)
            if array_match:
                for name in _split_refs(array_match.group(1)):
                    if name in index:
                        index.record(
                            name,
                            UsageLocation(
                                file=relative,
                                kind="script",
                                line=line_index + 1,
                                context=self._context(lines, line_index, SCRIPT_CONTEXT_RADIUS),
                                description=f"Component Import: {name}",
                            ),
                        )

    def _scan_template(self, lines: Sequence[str], relative: str, index: ComponentIndex) -> None:
        patterns = [
            (component, re.compile(rf"<{re.escape(component.selector)}[\s>]"))
            for component in index
        ]
        for line_index, line in enumerate(lines):
            for component, pattern in patterns:
                if pattern.search(line):
                    index.record(
                        component.name,
                        UsageLocation(
                            file=relative,
                            kind="template",
                            line=line_index + 1,
                            context=self._context(lines, line_index, TEMPLATE_CONTEXT_RADIUS),
                            description=f"Template: <{component.selector}>",
                        ),
                    )


def _split_refs(group: str) -> List[str]:
    return [ref.strip() for ref in group.split(",")]


def filter_components(components: Iterable[DeclaredComponent], target: str) -> List[DeclaredComponent]:
    needle = target.lower()
    return [
        component
        for component in components
        if needle in component.name.lower() or needle in component.selector.lower()
    ]


def group_by_file(components: Iterable[DeclaredComponent]) -> Dict[str, List[tuple[DeclaredComponent, UsageLocation]]]:
    """Usages keyed by file, files with the most usages first."""
    grouped: Dict[str, List[tuple[DeclaredComponent, UsageLocation]]] = {}
    for component in components:
        for location in component.used_in:
            grouped.setdefault(location.file, []).append((component, location))
    ordered = sorted(grouped.items(), key=lambda item: -len(item[1]))
    return dict(ordered)


def group_by_category(components: Iterable[DeclaredComponent]) -> Mapping[str, List[DeclaredComponent]]:
    """Components keyed by category in canonical order, empty categories omitted."""
    grouped: Dict[str, List[DeclaredComponent]] = {category: [] for category in CATEGORIES}
    for component in components:
        grouped.setdefault(component.category, []).append(component)
    return {category: members for category, members in grouped.items() if members}


def health_rating(unused: int) -> str:
    if unused == 0:
        return "Excellent"
    if unused < 3:
        return "Good"
    return "Needs attention"


__all__ = [
    "COMPONENT_FILE_SUFFIX",
    "ComponentIndex",
    "UsageGraphBuilder",
    "categorize",
    "context_lines",
    "filter_components",
    "group_by_category",
    "group_by_file",
    "health_rating",
]
