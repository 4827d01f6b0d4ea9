"""Jinja-backed markdown rendering for tool responses."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_TEMPLATES_DIR = Path(__file__).with_name("templates")

CATEGORY_EMOJI = {
    "ui": "🎨",
    "layout": "🏗️",
    "feature": "⚡",
    "external": "📦",
}


def _fence(path: str) -> str:
    suffix = PurePosixPath(path).suffix
    return suffix[1:] if suffix else "text"


def _category_emoji(category: str) -> str:
    return CATEGORY_EMOJI.get(category, "🧩")


class ReportRenderer:
    """Renders named templates from ``reports/templates``."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = []
        if templates_dir is not None:
            directories.append(str(templates_dir))
        directories.append(str(_TEMPLATES_DIR))
        self.env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["fence"] = _fence
        self.env.filters["category_emoji"] = _category_emoji

    def render(self, name: str, **context: object) -> str:
        template = self.env.get_template(f"{name}.md.j2")
        return template.render(**context)


__all__ = ["CATEGORY_EMOJI", "ReportRenderer"]
