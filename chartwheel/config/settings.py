"""Configuration models and helpers for chartwheel settings."""

from __future__ import annotations

import logging
import os
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

LOG = logging.getLogger(__name__)

CURRENT_SETTINGS_SCHEMA_VERSION = 2
CONFIG_FILENAME = "config.yaml"

_VALID_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})

# -------------------- Settings Schema --------------------


class RenderingCfg(BaseModel):
    """Canvas and orientation defaults for rendered wheels."""

    width: int = 800
    height: int = 800
    rotation_offset: float = 0.0
    margin: float = 20.0
    theme: Optional[Literal["traditional", "modern"]] = None
    show_aspects: bool = True
    pretty_svg: bool = True

    @field_validator("width", "height", mode="before")
    @classmethod
    def _cap_canvas(cls, value: int) -> int:
        return max(100, min(4000, int(value)))

    @field_validator("rotation_offset", mode="before")
    @classmethod
    def _wrap_rotation(cls, value: float) -> float:
        return float(value) % 360.0

    @field_validator("theme", mode="before")
    @classmethod
    def _normalise_theme(cls, value: object) -> object:
        if isinstance(value, str):
            cleaned = value.strip().lower()
            return cleaned or None
        return value


class Settings(BaseModel):
    """Top-level settings model persisted on disk.

    ``visual`` and ``glyphs`` hold explicit overrides in the same shape the
    config merger accepts (camelCase or snake_case keys); they sit above the
    selected theme and the built-in defaults.
    """

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    rendering: RenderingCfg = Field(default_factory=RenderingCfg)
    visual: Dict[str, Any] = Field(default_factory=dict)
    glyphs: Dict[str, Any] = Field(default_factory=dict)
    logging_level: str = "WARNING"

    @field_validator("logging_level", mode="before")
    @classmethod
    def _validate_logging_level(cls, value: object) -> str:
        level = str(value or "WARNING").strip().upper()
        if level not in _VALID_LOG_LEVELS:
            raise ValueError(f"Unsupported logging level: {value}")
        return level


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("CHARTWHEEL_HOME", str(Path.home() / ".chartwheel")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply in-place upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        # v1 kept the theme at the top level.
        legacy_theme = upgraded.pop("theme", None)
        if legacy_theme is not None:
            rendering = dict(upgraded.get("rendering") or {})
            rendering.setdefault("theme", legacy_theme)
            upgraded["rendering"] = rendering
        version = 2
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        LOG.info("No settings at %s; writing defaults", source_path)
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        LOG.warning("Ignoring malformed settings file %s", source_path)
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    settings = Settings(**data)
    if upgraded:
        save_settings(settings, source_path)
    return settings


__all__ = [
    "CONFIG_FILENAME",
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "RenderingCfg",
    "Settings",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
]
