"""Arc geometry for zodiac sign segments."""

from __future__ import annotations

from dataclasses import dataclass

from .angles import FULL_TURN, astro_to_svg_angle, normalize_degrees

__all__ = ["SignArc", "point_angle", "sign_arc", "unwrap_span"]


@dataclass(frozen=True)
class SignArc:
    """Screen-space description of one sign segment.

    ``start_angle``/``end_angle`` bound the sweep in ascending screen order
    and always satisfy ``start_angle <= end_angle``. Screen angles fall as
    longitude grows, so ``start_angle`` is where ``end_lon`` lands and
    ``end_angle`` is where ``start_lon`` lands. ``end_angle`` may exceed 360
    when the segment straddles the 0°/360° seam (``wrapped`` is then true).
    Use :attr:`start_lon_angle` and :attr:`end_lon_angle` to look angles up
    by longitude. ``mid_angle`` is the anchor for the glyph or label.
    """

    start_lon: float
    end_lon: float
    start_angle: float
    end_angle: float
    mid_angle: float
    wrapped: bool

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def start_lon_angle(self) -> float:
        """Screen angle of ``start_lon`` (the sign's cusp), in ``[0, 360)``."""

        return normalize_degrees(self.end_angle)

    @property
    def end_lon_angle(self) -> float:
        return self.start_angle


def unwrap_span(start_lon: float, end_lon: float) -> tuple[float, float]:
    """Return normalised ``(start, end)`` with ``end`` lifted past ``start``.

    ``end`` values that precede ``start`` after normalisation (``330 → 0``)
    gain a full turn so the pair describes the forward zodiacal segment.
    """

    start = normalize_degrees(start_lon)
    end = normalize_degrees(end_lon)
    if end < start:
        end += FULL_TURN
    return start, end


def sign_arc(start_lon: float, end_lon: float, rotation_offset: float = 0.0) -> SignArc:
    """Compute the arc and anchor for a segment from ``start_lon`` to ``end_lon``.

    Screen angles decrease as longitude increases, so the sweep runs from
    the screen angle of ``end_lon`` up to the screen angle of ``start_lon``.
    When that upper bound is numerically smaller than the lower one the
    segment crosses the seam and a full turn is added to it, keeping the
    drawn arc on the short side.

    The anchor is *not* the average of the two screen angles. Longitudes are
    averaged first and the midpoint converted afterwards, which is immune to
    the seam.
    """

    start, end = unwrap_span(start_lon, end_lon)
    start_screen = astro_to_svg_angle(start, rotation_offset)
    end_screen = astro_to_svg_angle(end, rotation_offset)

    sweep_start = end_screen
    sweep_end = start_screen
    wrapped = False
    if sweep_end < sweep_start:
        sweep_end += FULL_TURN
        wrapped = True

    mid_angle = astro_to_svg_angle((start + end) / 2.0, rotation_offset)
    return SignArc(
        start_lon=start,
        end_lon=end,
        start_angle=sweep_start,
        end_angle=sweep_end,
        mid_angle=mid_angle,
        wrapped=wrapped,
    )


def point_angle(lon: float, rotation_offset: float = 0.0) -> float:
    """Screen angle for a point marker (house cusp, planet, other object)."""

    return astro_to_svg_angle(normalize_degrees(lon), rotation_offset)
