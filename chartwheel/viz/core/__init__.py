"""Rendering primitives shared by the wheel backends."""

from .glyphs import (
    DEFAULT_GLYPH_CONFIG,
    FullGlyphConfig,
    GlyphConfig,
    ObjectInfo,
    lookup_object,
    merge_glyph_config,
    sign_index_for,
)
from .svg import SvgDocument, SvgElement, format_number
from .theme import (
    DEFAULT_VISUAL_CONFIG,
    FullVisualConfig,
    THEME_PRESETS,
    VisualConfig,
    merge_visual_config,
    theme_preset,
)

__all__ = [
    "DEFAULT_GLYPH_CONFIG",
    "DEFAULT_VISUAL_CONFIG",
    "FullGlyphConfig",
    "FullVisualConfig",
    "GlyphConfig",
    "ObjectInfo",
    "SvgDocument",
    "SvgElement",
    "THEME_PRESETS",
    "VisualConfig",
    "format_number",
    "lookup_object",
    "merge_glyph_config",
    "merge_visual_config",
    "sign_index_for",
    "theme_preset",
]
