"""Inventory of component and service declaration files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple

from ..logging import get_logger
from ..models import ComponentInfo, ServiceInfo
from ..walker import read_source, walk
from .usage import COMPONENT_FILE_SUFFIX

SERVICE_FILE_SUFFIX = ".service.ts"

_COMPONENT_TYPE_RULES: Tuple[Tuple[str, str], ...] = (
    ("shared/components/ui", "UI Component"),
    ("layout/", "Layout Component"),
    ("features/", "Feature Component"),
    ("app.component", "Root Component"),
)

_COMPONENT_FEATURES: Tuple[Tuple[str, str], ...] = (
    ("standalone: true", "Standalone"),
    ("signal(", "Signals"),
    ("computed(", "Computed"),
    ("inject(", "inject()"),
    ("@Input", "Inputs"),
    ("@Output", "Outputs"),
    ("OnInit", "Lifecycle"),
    ("aria-", "Accessibility"),
)

_SERVICE_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("Injectable", "Injectable"),
    ("signal(", "Signals"),
    ("BehaviorSubject", "Reactive"),
    ("inject(", "Modern DI"),
    ("computed(", "Computed"),
    ("providedIn: 'root'", "Singleton"),
)

_SERVICE_CATEGORY_RULES: Tuple[Tuple[str, str], ...] = (
    ("core/services", "core"),
    ("shared/services", "utility"),
    ("storage", "data"),
)

_IMPORT_STATEMENT = re.compile(r"import.*from ['\"].*['\"];")

_logger = get_logger("inventory")


def component_type(relative_path: str) -> str:
    for marker, label in _COMPONENT_TYPE_RULES:
        if marker in relative_path:
            return label
    return "Component"


def component_features(content: str) -> List[str]:
    return [label for needle, label in _COMPONENT_FEATURES if needle in content]


def service_category(relative_path: str) -> str:
    for marker, category in _SERVICE_CATEGORY_RULES:
        if marker in relative_path:
            return category
    return "utility"


def service_patterns(content: str) -> List[str]:
    return [label for needle, label in _SERVICE_PATTERNS if needle in content]


def service_dependencies(content: str) -> List[str]:
    """Coarse dependency kinds derived from import statements."""
    kinds: List[str] = []
    for statement in _IMPORT_STATEMENT.findall(content):
        if "@angular/core" in statement:
            kinds.append("Angular Core")
        if "rxjs" in statement:
            kinds.append("RxJS")
        if "./" in statement:
            kinds.append("Local Service")
    return list(dict.fromkeys(kinds))


def find_components(root: Path, scan_root: Path) -> List[ComponentInfo]:
    """Return an inventory entry for every ``*.component.ts`` file under ``root``."""
    root, scan_root = Path(root).resolve(), Path(scan_root).resolve()
    components: List[ComponentInfo] = []

    def _visit(path: Path) -> None:
        if not path.name.endswith(COMPONENT_FILE_SUFFIX):
            return
        content = read_source(path)
        size = path.stat().st_size
        relative = path.relative_to(scan_root).as_posix()
        components.append(
            ComponentInfo(
                name=path.name[: -len(COMPONENT_FILE_SUFFIX)],
                path=relative,
                type=component_type(relative),
                size_kb=round(size / 1024, 2),
                features=component_features(content),
            )
        )

    walk(root, _visit)
    _logger.debug("Found %d component files under %s", len(components), root)
    return components


def find_services(root: Path, scan_root: Path) -> List[ServiceInfo]:
    """Return an inventory entry for every ``*.service.ts`` file under ``root``."""
    root, scan_root = Path(root).resolve(), Path(scan_root).resolve()
    services: List[ServiceInfo] = []

    def _visit(path: Path) -> None:
        if not path.name.endswith(SERVICE_FILE_SUFFIX):
            return
        content = read_source(path)
        relative = path.relative_to(scan_root).as_posix()
        services.append(
            ServiceInfo(
                name=path.name[: -len(SERVICE_FILE_SUFFIX)],
                path=relative,
                category=service_category(relative),
                patterns=service_patterns(content),
                dependencies=service_dependencies(content),
            )
        )

    walk(root, _visit)
    _logger.debug("Found %d service files under %s", len(services), root)
    return services


__all__ = [
    "component_features",
    "component_type",
    "find_components",
    "find_services",
    "service_category",
    "service_dependencies",
    "service_patterns",
]
