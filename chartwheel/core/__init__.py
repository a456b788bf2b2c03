"""Pure numeric helpers: angle conventions and arc geometry."""

from .angles import (
    astro_to_svg_angle,
    format_degrees_minutes,
    format_sign_degrees_minutes,
    normalize_degrees,
    polar_to_cartesian,
)
from .arcs import SignArc, point_angle, sign_arc

__all__ = [
    "SignArc",
    "astro_to_svg_angle",
    "format_degrees_minutes",
    "format_sign_degrees_minutes",
    "normalize_degrees",
    "point_angle",
    "polar_to_cartesian",
    "sign_arc",
]
