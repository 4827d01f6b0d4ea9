"""Configuration loading for ngcontext (.ngcontext.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".ngcontext.yml"

DEFAULT_ALLOWED_EXTENSIONS: Tuple[str, ...] = (
    ".ts",
    ".html",
    ".scss",
    ".css",
    ".json",
    ".md",
    ".js",
)

CATEGORIES: Tuple[str, ...] = ("ui", "layout", "feature", "external")
FALLBACK_CATEGORY = "external"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class CategoryRule:
    """Assigns ``category`` to components whose path contains ``marker``."""

    category: str
    marker: str

    def matches(self, relative_path: str) -> bool:
        return self.marker in relative_path


DEFAULT_CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule("ui", "shared/components/ui"),
    CategoryRule("layout", "layout/"),
    CategoryRule("feature", "features/"),
)


@dataclass
class UsageConfig:
    """Settings for the usage graph builder and component inventory."""

    source_dir: str = "src"
    categories: List[CategoryRule] = field(
        default_factory=lambda: list(DEFAULT_CATEGORY_RULES)
    )


@dataclass
class ProjectConfig:
    """Represents the settings defined in .ngcontext.yml."""

    root: Path
    allowed_extensions: Tuple[str, ...] = DEFAULT_ALLOWED_EXTENSIONS
    usage: UsageConfig = field(default_factory=UsageConfig)


def load_config(config_path: Path) -> ProjectConfig:
    """Load configuration from disk; the config file's directory is the scan root."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProjectConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    extensions = _as_str_list(data.get("allowed_extensions"))
    allowed = (
        tuple(_normalise_extension(ext) for ext in extensions)
        if extensions
        else DEFAULT_ALLOWED_EXTENSIONS
    )

    usage = UsageConfig()
    usage_data = _as_dict(data.get("usage"))
    if usage_data:
        source_dir = usage_data.get("source_dir")
        if source_dir is not None:
            if not isinstance(source_dir, str):
                raise ConfigError("usage.source_dir must be a string")
            usage.source_dir = source_dir.strip().strip("/")
        if "categories" in usage_data:
            usage.categories = _parse_category_rules(usage_data.get("categories"))

    return ProjectConfig(root=root, allowed_extensions=allowed, usage=usage)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if not config_path.exists() and config_path.name != CONFIG_FILENAME:
        raise ConfigError(f"Project root {config_path} does not exist")
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_category_rules(value: Any) -> List[CategoryRule]:
    if not isinstance(value, list):
        raise ConfigError("usage.categories must be a list of {category, marker} entries")
    rules: List[CategoryRule] = []
    for entry in value:
        entry_data = _as_dict(entry)
        category = entry_data.get("category")
        marker = entry_data.get("marker")
        if not isinstance(category, str) or not isinstance(marker, str) or not marker:
            raise ConfigError("Each usage.categories entry needs a category and a marker")
        if category not in CATEGORIES:
            allowed = ", ".join(CATEGORIES)
            raise ConfigError(f"Unknown component category '{category}' (expected one of {allowed})")
        rules.append(CategoryRule(category=category, marker=marker))
    return rules


def _normalise_extension(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CATEGORIES",
    "CONFIG_FILENAME",
    "CategoryRule",
    "ConfigError",
    "DEFAULT_ALLOWED_EXTENSIONS",
    "DEFAULT_CATEGORY_RULES",
    "FALLBACK_CATEGORY",
    "ProjectConfig",
    "UsageConfig",
    "load_config",
]
