"""Angle conventions shared by the wheel geometry.

Chart payloads express positions as ecliptic longitude: degrees measured
from 0° Aries along the zodiac. The drawing surface works with *screen
angles* instead, and finally with planar coordinates whose y axis grows
downward. The helpers here are the only place those conventions meet;
everything that positions a glyph, line or arc goes through
:func:`astro_to_svg_angle` first and :func:`polar_to_cartesian` second.
Swapping the order of the two steps produces a mirrored wheel.
"""

from __future__ import annotations

import math
from typing import Final, Tuple

__all__ = [
    "FULL_TURN",
    "SIGN_SPAN",
    "astro_to_svg_angle",
    "format_degrees_minutes",
    "format_sign_degrees_minutes",
    "normalize_degrees",
    "polar_to_cartesian",
]


FULL_TURN: Final[float] = 360.0
SIGN_SPAN: Final[float] = 30.0


def normalize_degrees(angle: float) -> float:
    """Return ``angle`` wrapped into the ``[0, 360)`` interval.

    Parameters
    ----------
    angle:
        Value in **degrees**, any sign and magnitude.

    Returns
    -------
    float
        The equivalent angle in ``[0, 360)``. Float residue that would
        otherwise yield exactly ``360.0`` (``-1e-15 % 360``) is folded
        back to ``0.0``.
    """

    wrapped = float(angle) % FULL_TURN
    if wrapped >= FULL_TURN:
        wrapped -= FULL_TURN
    return wrapped if wrapped >= 0.0 else wrapped + FULL_TURN


def astro_to_svg_angle(astro_deg: float, rotation_offset_deg: float = 0.0) -> float:
    """Convert an ecliptic longitude into a screen angle.

    ``screen = 90 - (astro + rotation)``, brought into ``[0, 360)`` by
    adding or subtracting whole turns. The rotation offset turns the whole
    wheel without touching the underlying positions.

    The function is periodic: ``astro_to_svg_angle(a + 360, r)`` equals
    ``astro_to_svg_angle(a, r)``.
    """

    angle = 90.0 - (float(astro_deg) + float(rotation_offset_deg))
    if angle < 0.0 or angle >= FULL_TURN:
        # Jump most of the way in one step, then settle with single turns.
        angle -= math.floor(angle / FULL_TURN) * FULL_TURN
    while angle < 0.0:
        angle += FULL_TURN
    while angle >= FULL_TURN:
        angle -= FULL_TURN
    return angle


def polar_to_cartesian(screen_deg: float, radius: float) -> Tuple[float, float]:
    """Return ``(x, y)`` for a screen angle and radius around the origin.

    The screen angle is converted to a mathematical angle with
    ``(90 - screen)`` and then projected; ``y`` follows the screen
    convention and grows downward.
    """

    math_rad = (90.0 - float(screen_deg)) * (math.pi / 180.0)
    return radius * math.cos(math_rad), radius * math.sin(math_rad)


def _degrees_minutes(value: float, show_minutes: bool) -> str:
    degrees = math.floor(value)
    if not show_minutes:
        return f"{degrees}°"
    minutes = math.floor(round((value - degrees) * 60.0, 9))
    if minutes == 0:
        return f"{degrees}°"
    return f"{degrees}°{minutes:02d}'"


def format_degrees_minutes(lon: float, show_minutes: bool = True) -> str:
    """Format a longitude as ``"15°23'"`` (or ``"15°"`` on whole degrees)."""

    return _degrees_minutes(normalize_degrees(lon), show_minutes)


def format_sign_degrees_minutes(lon: float, show_minutes: bool = True) -> str:
    """Format the position *within its sign*: ``45.5`` becomes ``"15°30'"``."""

    return _degrees_minutes(normalize_degrees(lon) % SIGN_SPAN, show_minutes)
