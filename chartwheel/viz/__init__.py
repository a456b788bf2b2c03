"""Wheel layout and rendering."""

from .layout import (
    AspectLine,
    ItemDescriptor,
    LayoutOptions,
    RingDescriptor,
    WheelLayout,
    build_wheel_layout,
)
from .render import export_wheel, render_wheel_png, render_wheel_svg

__all__ = [
    "AspectLine",
    "ItemDescriptor",
    "LayoutOptions",
    "RingDescriptor",
    "WheelLayout",
    "build_wheel_layout",
    "export_wheel",
    "render_wheel_png",
    "render_wheel_svg",
]
