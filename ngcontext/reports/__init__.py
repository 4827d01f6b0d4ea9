"""Markdown reports built from scan results."""

from .insights import SearchInsights, describe_extension, related_searches, search_insights
from .renderer import ReportRenderer

__all__ = [
    "ReportRenderer",
    "SearchInsights",
    "describe_extension",
    "related_searches",
    "search_insights",
]
