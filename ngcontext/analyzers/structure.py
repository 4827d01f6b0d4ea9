"""Regex-based extraction of declarative facts from TypeScript and template text.

Each rule is a pure function of text in, names out. These are heuristics and
not a parser: multi-line signatures, nested braces and arrow-function
properties can be missed or over-matched (``if (x) {`` looks like a method).
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, List, Optional

from ..models import FileStructureSummary

_IMPORT = re.compile(
    r"import\s+(?:\{([^}]+)\}|\*\s+as\s+(\w+)|(\w+))\s+from\s+['\"]([^'\"]+)['\"]"
)
_EXPORT_DECLARATION = re.compile(
    r"export\s+(?:class|interface|function|const|let|var|enum|type)\s+(\w+)"
)
_EXPORT_LIST = re.compile(r"export\s+\{([^}]+)\}")
_INTERFACE = re.compile(r"(?:export\s+)?\binterface\s+(\w+)")
_TYPE_ALIAS = re.compile(r"(?:export\s+)?\btype\s+(\w+)")
_METHOD = re.compile(
    r"(?:public\s+)?(?:readonly\s+)?(?:get\s+|set\s+)?(\w+)\s*\([^)]*\)\s*(?::\s*[^{]+)?\{"
)
_IMPORTS_ARRAY = re.compile(r"imports:\s*\[([\s\S]*?)\]")
_DECLARABLE = re.compile(r"(\w+Component|\w+Directive|\w+Pipe)")
_INJECT_CALL = re.compile(r"inject\((\w+)\)")
_CONSTRUCTOR_PARAMS = re.compile(r"constructor\(([\s\S]*?)\)")
_INJECTED_PARAM = re.compile(r":\s*(\w+Service|\w+Client)")
_COMPONENT_TAG = re.compile(r"<(app-[\w-]+)")
_COMPONENT_TYPE = re.compile(r"(\w+Component)")
_SERVICE_TYPE = re.compile(r"(\w+Service|\w+Client)")
_SELECTOR = re.compile(r"selector:\s*['\"`]([^'\"`]+)['\"`]")
_COMPONENT_CLASS = re.compile(r"export\s+class\s+(\w+Component)")

LIFECYCLE_METHODS = frozenset({"constructor", "ngOnInit", "ngOnDestroy", "ngOnChanges"})
UNKNOWN_SELECTOR = "unknown-selector"


def _unique(values: Iterable[str]) -> List[str]:
    return [value for value in dict.fromkeys(values) if value]


def _split_names(group: str) -> List[str]:
    return [name.strip() for name in group.split(",")]


def extract_imports(text: str) -> List[str]:
    """Named (``{ A, B }``), namespace (``* as X``) and default import names."""
    names: List[str] = []
    for match in _IMPORT.finditer(text):
        named, namespace, default, _module = match.groups()
        if named:
            names.extend(_split_names(named))
        elif namespace:
            names.append(namespace)
        elif default:
            names.append(default)
    return _unique(names)


def extract_exports(text: str) -> List[str]:
    names = [match.group(1) for match in _EXPORT_DECLARATION.finditer(text)]
    for match in _EXPORT_LIST.finditer(text):
        names.extend(_split_names(match.group(1)))
    return _unique(names)


def extract_interfaces(text: str) -> List[str]:
    names = [match.group(1) for match in _INTERFACE.finditer(text)]
    names.extend(match.group(1) for match in _TYPE_ALIAS.finditer(text))
    return _unique(names)


def extract_methods(text: str) -> List[str]:
    names = (match.group(1) for match in _METHOD.finditer(text))
    return _unique(name for name in names if name not in LIFECYCLE_METHODS)


def extract_dependencies(text: str) -> List[str]:
    """Declarables from the first ``imports: [...]`` block plus injected types."""
    names: List[str] = []

    imports_block = _IMPORTS_ARRAY.search(text)
    if imports_block:
        names.extend(_DECLARABLE.findall(imports_block.group(1)))

    names.extend(_INJECT_CALL.findall(text))

    constructor = _CONSTRUCTOR_PARAMS.search(text)
    if constructor:
        names.extend(_INJECTED_PARAM.findall(constructor.group(1)))

    return _unique(names)


def extract_component_refs(text: str) -> List[str]:
    """``<app-*>`` tags and ``*Component`` identifiers, unioned."""
    names = _COMPONENT_TAG.findall(text)
    names.extend(_COMPONENT_TYPE.findall(text))
    return _unique(names)


def extract_service_refs(text: str) -> List[str]:
    return _unique(_SERVICE_TYPE.findall(text))


def extract_selector(text: str) -> str:
    match = _SELECTOR.search(text)
    return match.group(1) if match else UNKNOWN_SELECTOR


def extract_component_name(text: str) -> Optional[str]:
    match = _COMPONENT_CLASS.search(text)
    return match.group(1) if match else None


def extract(text: str) -> FileStructureSummary:
    """Run every rule over ``text``."""
    return FileStructureSummary(
        imports=extract_imports(text),
        exports=extract_exports(text),
        interfaces=extract_interfaces(text),
        methods=extract_methods(text),
        dependencies=extract_dependencies(text),
        component_refs=extract_component_refs(text),
        service_refs=extract_service_refs(text),
    )


def _extract_template(text: str) -> FileStructureSummary:
    return FileStructureSummary(component_refs=extract_component_refs(text))


def _extract_interface_file(text: str) -> FileStructureSummary:
    return FileStructureSummary(
        imports=extract_imports(text),
        exports=extract_exports(text),
        interfaces=extract_interfaces(text),
    )


_KIND_EXTRACTORS: Dict[str, Callable[[str], FileStructureSummary]] = {
    "component": extract,
    "service": extract,
    "typescript": extract,
    "script": extract,
    "template": _extract_template,
    "interface": _extract_interface_file,
}

STRUCTURE_KINDS = tuple(_KIND_EXTRACTORS)


def extract_for_kind(text: str, kind: str) -> FileStructureSummary:
    """Dispatch on file kind; unrecognised kinds yield an empty summary."""
    extractor = _KIND_EXTRACTORS.get(kind)
    if extractor is None:
        return FileStructureSummary()
    return extractor(text)


__all__ = [
    "LIFECYCLE_METHODS",
    "STRUCTURE_KINDS",
    "UNKNOWN_SELECTOR",
    "extract",
    "extract_component_name",
    "extract_component_refs",
    "extract_dependencies",
    "extract_exports",
    "extract_for_kind",
    "extract_imports",
    "extract_interfaces",
    "extract_methods",
    "extract_selector",
    "extract_service_refs",
]
