"""chartwheel package bootstrap and curated public API surface."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

from .chart import ChartSnapshot, Indexes, build_indexes, load_snapshot, snapshot_from_json
from .core import astro_to_svg_angle, polar_to_cartesian, sign_arc
from .errors import ChartwheelError, SnapshotStructureError
from .viz import LayoutOptions, WheelLayout, build_wheel_layout, export_wheel, render_wheel_png, render_wheel_svg
from .viz.core import merge_glyph_config, merge_visual_config

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("chartwheel")
except PackageNotFoundError:  # pragma: no cover - metadata may be unavailable when running from source
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved chartwheel package version."""

    return __version__


__all__ = [
    "ChartSnapshot",
    "ChartwheelError",
    "Indexes",
    "LayoutOptions",
    "SnapshotStructureError",
    "WheelLayout",
    "__version__",
    "astro_to_svg_angle",
    "build_indexes",
    "build_wheel_layout",
    "export_wheel",
    "get_version",
    "load_snapshot",
    "merge_glyph_config",
    "merge_visual_config",
    "polar_to_cartesian",
    "render_wheel_png",
    "render_wheel_svg",
    "sign_arc",
    "snapshot_from_json",
]
