"""Visual configuration: palettes, stroke and ring metrics, theme presets."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Optional, Sequence, Union

from .merge import camel_to_snake, resolve_fields

LOG = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_VISUAL_CONFIG",
    "FullVisualConfig",
    "MODERN_THEME",
    "THEME_PRESETS",
    "TRADITIONAL_THEME",
    "VisualConfig",
    "merge_visual_config",
    "theme_preset",
]

_SCALAR_FIELDS = (
    "background_color",
    "stroke_color",
    "stroke_width",
    "aspect_stroke_width",
    "ring_width",
    "ring_spacing",
)
_ARRAY_FIELDS = ("sign_colors", "house_colors", "planet_colors")
_MAP_FIELDS = ("aspect_colors",)
_NUMERIC_FIELDS = frozenset({"stroke_width", "aspect_stroke_width", "ring_width", "ring_spacing"})


@dataclass(frozen=True)
class VisualConfig:
    """A possibly partial visual configuration; ``None`` means "not set".

    Color arrays are indexed by zodiac ordinal (0 = Aries), house number
    minus one, or planet ordinal (0 = Sun). ``aspect_colors`` is keyed by
    aspect type name.
    """

    sign_colors: Optional[Sequence[str]] = None
    house_colors: Optional[Sequence[str]] = None
    planet_colors: Optional[Sequence[str]] = None
    aspect_colors: Optional[Mapping[str, str]] = None
    background_color: Optional[str] = None
    stroke_color: Optional[str] = None
    stroke_width: Optional[float] = None
    aspect_stroke_width: Optional[float] = None
    ring_width: Optional[float] = None
    ring_spacing: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "VisualConfig":
        """Build a config from a mapping with camelCase or snake_case keys."""

        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for raw_key, value in payload.items():
            key = camel_to_snake(str(raw_key))
            if key not in known:
                LOG.debug("Ignoring unknown visual config key %r", raw_key)
                continue
            if value is None:
                continue
            if key in _ARRAY_FIELDS:
                if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
                    LOG.debug("Ignoring visual config %r: expected a list of colors", raw_key)
                    continue
                values[key] = tuple(str(color) for color in value)
            elif key in _MAP_FIELDS:
                if not isinstance(value, Mapping):
                    LOG.debug("Ignoring visual config %r: expected a mapping", raw_key)
                    continue
                values[key] = {str(name): str(color) for name, color in value.items()}
            elif key in _NUMERIC_FIELDS:
                try:
                    values[key] = float(value)
                except (TypeError, ValueError):
                    LOG.debug("Ignoring visual config %r: %r is not numeric", raw_key, value)
            else:
                values[key] = str(value)
        return cls(**values)


@dataclass(frozen=True)
class FullVisualConfig:
    """Fully populated, immutable result of :func:`merge_visual_config`."""

    sign_colors: tuple[str, ...]
    house_colors: tuple[str, ...]
    planet_colors: tuple[str, ...]
    aspect_colors: Mapping[str, str]
    background_color: str
    stroke_color: str
    stroke_width: float
    aspect_stroke_width: float
    ring_width: float
    ring_spacing: float

    def sign_color(self, index: Optional[int]) -> Optional[str]:
        return _indexed(self.sign_colors, index)

    def house_color(self, house_index: Optional[int]) -> Optional[str]:
        """Color for a 1-based house number."""

        if house_index is None:
            return None
        return _indexed(self.house_colors, house_index - 1)

    def planet_color(self, index: Optional[int]) -> Optional[str]:
        return _indexed(self.planet_colors, index)

    def aspect_color(self, aspect_type: str) -> Optional[str]:
        return self.aspect_colors.get(aspect_type)

    def to_payload(self) -> Dict[str, object]:
        return {
            "signColors": list(self.sign_colors),
            "houseColors": list(self.house_colors),
            "planetColors": list(self.planet_colors),
            "aspectColors": dict(self.aspect_colors),
            "backgroundColor": self.background_color,
            "strokeColor": self.stroke_color,
            "strokeWidth": self.stroke_width,
            "aspectStrokeWidth": self.aspect_stroke_width,
            "ringWidth": self.ring_width,
            "ringSpacing": self.ring_spacing,
        }


def _indexed(values: Sequence[str], index: Optional[int]) -> Optional[str]:
    if index is None or index < 0 or index >= len(values):
        return None
    return values[index] or None


# Dark traditional: warm earth tones with gold strokes.
TRADITIONAL_THEME = VisualConfig(
    sign_colors=(
        "#C0392B",
        "#D68910",
        "#F39C12",
        "#85C1E2",
        "#F7DC6F",
        "#82E0AA",
        "#F8C471",
        "#8B4513",
        "#F1C40F",
        "#5D6D7E",
        "#3498DB",
        "#9B59B6",
    ),
    house_colors=(
        "#3A3A3A",
        "#404040",
        "#454545",
        "#4A4A4A",
        "#505050",
        "#555555",
        "#3A3A3A",
        "#404040",
        "#454545",
        "#4A4A4A",
        "#505050",
        "#555555",
    ),
    planet_colors=(
        "#F39C12",
        "#F7DC6F",
        "#D68910",
        "#F8C471",
        "#C0392B",
        "#F1C40F",
        "#5D6D7E",
        "#85C1E2",
        "#3498DB",
        "#8B4513",
    ),
    aspect_colors=MappingProxyType(
        {
            "conjunction": "#C0392B",
            "opposition": "#3498DB",
            "trine": "#27AE60",
            "square": "#E74C3C",
            "sextile": "#F39C12",
            "semisextile": "#D68910",
            "semisquare": "#E67E22",
            "sesquiquadrate": "#E67E22",
            "quincunx": "#8B4513",
        }
    ),
    background_color="#1a1a1a",
    stroke_color="#d4af37",
    stroke_width=1.0,
    aspect_stroke_width=2.0,
)

# Dark modern: cooler contemporary palette.
MODERN_THEME = VisualConfig(
    sign_colors=(
        "#E63946",
        "#F77F00",
        "#FCBF49",
        "#06A77D",
        "#D62828",
        "#A8DADC",
        "#A8DADC",
        "#457B9D",
        "#1D3557",
        "#2A2D34",
        "#4A90E2",
        "#E91E63",
    ),
    house_colors=(
        "#2A2A2A",
        "#333333",
        "#3A3A3A",
        "#404040",
        "#474747",
        "#4D4D4D",
        "#2A2A2A",
        "#333333",
        "#3A3A3A",
        "#404040",
        "#474747",
        "#4D4D4D",
    ),
    planet_colors=(
        "#FFB800",
        "#E0E0E0",
        "#FF6B6B",
        "#4ECDC4",
        "#FF4757",
        "#FFA502",
        "#5F27CD",
        "#00D2D3",
        "#3742FA",
        "#2F3542",
    ),
    aspect_colors=MappingProxyType(
        {
            "conjunction": "#FF4757",
            "opposition": "#4A90E2",
            "trine": "#06A77D",
            "square": "#E63946",
            "sextile": "#FCBF49",
            "semisextile": "#F77F00",
            "semisquare": "#FF6B6B",
            "sesquiquadrate": "#FF6B6B",
            "quincunx": "#5F27CD",
        }
    ),
    background_color="#0f0f0f",
    stroke_color="#e0e0e0",
    stroke_width=1.0,
    aspect_stroke_width=2.0,
)

THEME_PRESETS: Mapping[str, VisualConfig] = MappingProxyType(
    {
        "traditional": TRADITIONAL_THEME,
        "modern": MODERN_THEME,
    }
)

DEFAULT_VISUAL_CONFIG = replace(TRADITIONAL_THEME, ring_width=30.0, ring_spacing=10.0)


def theme_preset(name: str) -> Optional[VisualConfig]:
    """Return the preset registered as ``name`` (case insensitive)."""

    return THEME_PRESETS.get(name.strip().lower())


def _coerce(config: Union[VisualConfig, Mapping[str, Any], None]) -> Optional[VisualConfig]:
    if config is None or isinstance(config, VisualConfig):
        return config
    if not isinstance(config, Mapping):
        LOG.warning("Ignoring visual config of type %s", type(config).__name__)
        return None
    return VisualConfig.from_payload(config)


def merge_visual_config(
    explicit: Union[VisualConfig, Mapping[str, Any], None] = None,
    theme: Union[str, VisualConfig, Mapping[str, Any], None] = None,
) -> FullVisualConfig:
    """Resolve explicit → theme → built-in default into a full config.

    ``theme`` is a preset name or a config object. Unknown preset names are
    logged and skipped; this function never raises for configuration input.
    """

    theme_layer: Optional[VisualConfig]
    if isinstance(theme, str):
        theme_layer = theme_preset(theme)
        if theme_layer is None:
            LOG.warning("Unknown theme %r; falling back to defaults", theme)
    else:
        theme_layer = _coerce(theme)

    resolved = resolve_fields(
        (_coerce(explicit), theme_layer, DEFAULT_VISUAL_CONFIG),
        scalars=_SCALAR_FIELDS,
        arrays=_ARRAY_FIELDS,
        maps=_MAP_FIELDS,
    )
    for name in _NUMERIC_FIELDS:
        resolved[name] = float(resolved[name])
    return FullVisualConfig(**resolved)
