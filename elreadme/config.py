"""Configuration loading for elreadme (.elreadme.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".elreadme.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BadgeConfig:
    """Which badges to render and how the network lookups behave."""

    license: bool = True
    network: bool = True
    timeout: float = 5.0
    melpa: bool = True
    ci_image: Optional[str] = "https://github.com/{repo}/actions/workflows/test.yml/badge.svg"
    ci_link: Optional[str] = "https://github.com/{repo}/actions"


@dataclass
class ElReadmeConfig:
    """Represents the settings defined in .elreadme.yml."""

    root: Path
    badges: BadgeConfig = field(default_factory=BadgeConfig)
    footer: Optional[str] = None
    templates_dir: Optional[Path] = None


def load_config(config_path: Path) -> ElReadmeConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ElReadmeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    badges = BadgeConfig()
    badge_data = _as_dict(data.get("badges"))
    if badge_data:
        badges.license = _as_bool(badge_data.get("license"), badges.license)
        badges.network = _as_bool(badge_data.get("network"), badges.network)
        badges.melpa = _as_bool(badge_data.get("melpa"), badges.melpa)
        timeout = _as_float(badge_data.get("timeout"))
        if timeout is not None:
            badges.timeout = timeout
        if "ci_image" in badge_data:
            badges.ci_image = _as_str(badge_data.get("ci_image"))
        if "ci_link" in badge_data:
            badges.ci_link = _as_str(badge_data.get("ci_link"))

    templates_dir_str = _as_str(data.get("templates"))
    templates_dir = root / templates_dir_str if templates_dir_str else None

    return ElReadmeConfig(
        root=root,
        badges=badges,
        footer=_as_str(data.get("footer")),
        templates_dir=templates_dir,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return default
