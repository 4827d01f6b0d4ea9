"""Static analysis over project source text."""

from __future__ import annotations

from .inventory import find_components, find_services
from .structure import extract, extract_for_kind
from .usage import UsageGraphBuilder

__all__ = [
    "UsageGraphBuilder",
    "extract",
    "extract_for_kind",
    "find_components",
    "find_services",
]
