"""Glyph configuration and the object/sign catalogue used for lookups."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Any, Dict, Optional, Union

from .merge import camel_to_snake, resolve_fields

LOG = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_GLYPH_CONFIG",
    "FullGlyphConfig",
    "GlyphConfig",
    "ObjectInfo",
    "PLANET_OBJECTS",
    "SIGN_NAMES",
    "SPECIAL_OBJECTS",
    "lookup_object",
    "merge_glyph_config",
    "sign_index_for",
]

_SCALAR_FIELDS = ("glyph_size", "glyph_font")
_MAP_FIELDS = ("sign_glyphs", "planet_glyphs", "aspect_glyphs")
_ORDINAL_MAPS = frozenset({"sign_glyphs", "planet_glyphs"})


@dataclass(frozen=True)
class GlyphConfig:
    """A possibly partial glyph configuration; ``None`` means "not set"."""

    sign_glyphs: Optional[Mapping[int, str]] = None
    planet_glyphs: Optional[Mapping[int, str]] = None
    aspect_glyphs: Optional[Mapping[str, str]] = None
    glyph_size: Optional[float] = None
    glyph_font: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GlyphConfig":
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for raw_key, value in payload.items():
            key = camel_to_snake(str(raw_key))
            if key not in known:
                LOG.debug("Ignoring unknown glyph config key %r", raw_key)
                continue
            if value is None:
                continue
            if key in _SCALAR_FIELDS:
                if key == "glyph_size":
                    try:
                        values[key] = float(value)
                    except (TypeError, ValueError):
                        LOG.debug("Ignoring non-numeric glyph size %r", value)
                else:
                    values[key] = str(value)
                continue
            if not isinstance(value, Mapping):
                LOG.debug("Ignoring glyph config %r: expected a mapping", raw_key)
                continue
            if key in _ORDINAL_MAPS:
                values[key] = _ordinal_map(raw_key, value)
            else:
                values[key] = {str(name): str(glyph) for name, glyph in value.items()}
        return cls(**values)


def _ordinal_map(raw_key: object, value: Mapping[Any, Any]) -> Dict[int, str]:
    glyphs: Dict[int, str] = {}
    for ordinal, glyph in value.items():
        try:
            glyphs[int(ordinal)] = str(glyph)
        except (TypeError, ValueError):
            LOG.debug("Ignoring %r entry %r: not an ordinal", raw_key, ordinal)
    return glyphs


@dataclass(frozen=True)
class FullGlyphConfig:
    sign_glyphs: Mapping[int, str]
    planet_glyphs: Mapping[int, str]
    aspect_glyphs: Mapping[str, str]
    glyph_size: float
    glyph_font: str

    def to_payload(self) -> Dict[str, object]:
        return {
            "signGlyphs": {str(k): v for k, v in self.sign_glyphs.items()},
            "planetGlyphs": {str(k): v for k, v in self.planet_glyphs.items()},
            "aspectGlyphs": dict(self.aspect_glyphs),
            "glyphSize": self.glyph_size,
            "glyphFont": self.glyph_font,
        }


DEFAULT_GLYPH_CONFIG = GlyphConfig(
    sign_glyphs=MappingProxyType(
        {
            0: "♈",
            1: "♉",
            2: "♊",
            3: "♋",
            4: "♌",
            5: "♍",
            6: "♎",
            7: "♏",
            8: "♐",
            9: "♑",
            10: "♒",
            11: "♓",
        }
    ),
    planet_glyphs=MappingProxyType(
        {
            0: "☉",
            1: "☽",
            2: "☿",
            3: "♀",
            4: "♂",
            5: "♃",
            6: "♄",
            7: "♅",
            8: "♆",
            9: "♇",
        }
    ),
    aspect_glyphs=MappingProxyType({}),
    glyph_size=12.0,
    glyph_font="Arial",
)


def merge_glyph_config(
    explicit: Union[GlyphConfig, Mapping[str, Any], None] = None,
) -> FullGlyphConfig:
    """Resolve explicit → built-in default; glyph maps merge key by key."""

    if isinstance(explicit, Mapping):
        explicit = GlyphConfig.from_payload(explicit)
    elif explicit is not None and not isinstance(explicit, GlyphConfig):
        LOG.warning("Ignoring glyph config of type %s", type(explicit).__name__)
        explicit = None
    resolved = resolve_fields(
        (explicit, DEFAULT_GLYPH_CONFIG),
        scalars=_SCALAR_FIELDS,
        arrays=(),
        maps=_MAP_FIELDS,
    )
    resolved["glyph_size"] = float(resolved["glyph_size"])
    return FullGlyphConfig(**resolved)


# ---------------------------------------------------------------------------
# Object and sign catalogue


@dataclass(frozen=True)
class ObjectInfo:
    """Display metadata for a chart object.

    ``index`` is the planet ordinal used for indexed colors and glyphs;
    special points (nodes, angles, Chiron) have a label and glyph but no
    ordinal.
    """

    object_id: str
    label: str
    glyph: Optional[str]
    index: Optional[int] = None


PLANET_OBJECTS: Mapping[str, ObjectInfo] = MappingProxyType(
    {
        "sun": ObjectInfo("sun", "Sun", "☉", 0),
        "moon": ObjectInfo("moon", "Moon", "☽", 1),
        "mercury": ObjectInfo("mercury", "Mercury", "☿", 2),
        "venus": ObjectInfo("venus", "Venus", "♀", 3),
        "mars": ObjectInfo("mars", "Mars", "♂", 4),
        "jupiter": ObjectInfo("jupiter", "Jupiter", "♃", 5),
        "saturn": ObjectInfo("saturn", "Saturn", "♄", 6),
        "uranus": ObjectInfo("uranus", "Uranus", "♅", 7),
        "neptune": ObjectInfo("neptune", "Neptune", "♆", 8),
        "pluto": ObjectInfo("pluto", "Pluto", "♇", 9),
    }
)

SPECIAL_OBJECTS: Mapping[str, ObjectInfo] = MappingProxyType(
    {
        "chiron": ObjectInfo("chiron", "Chiron", "⚷"),
        "north_node": ObjectInfo("north_node", "North Node", "☊"),
        "south_node": ObjectInfo("south_node", "South Node", "☋"),
        "asc": ObjectInfo("asc", "Asc", "Asc"),
        "mc": ObjectInfo("mc", "MC", "MC"),
        "ic": ObjectInfo("ic", "IC", "IC"),
        "dc": ObjectInfo("dc", "DC", "DC"),
    }
)

SIGN_NAMES = (
    "aries",
    "taurus",
    "gemini",
    "cancer",
    "leo",
    "virgo",
    "libra",
    "scorpio",
    "sagittarius",
    "capricorn",
    "aquarius",
    "pisces",
)
_SIGN_ORDINALS: Mapping[str, int] = MappingProxyType(
    {name: ordinal for ordinal, name in enumerate(SIGN_NAMES)}
)


def lookup_object(object_id: str) -> Optional[ObjectInfo]:
    """Return catalogue info for ``object_id`` or ``None`` when unknown."""

    key = object_id.strip().lower()
    return PLANET_OBJECTS.get(key) or SPECIAL_OBJECTS.get(key)


def sign_index_for(name: str) -> Optional[int]:
    """Zodiac ordinal for a sign name or ``sign-<name>`` id, else ``None``."""

    key = name.strip().lower()
    if key.startswith("sign-"):
        key = key[len("sign-"):]
    return _SIGN_ORDINALS.get(key)
