from __future__ import annotations

import pytest

from chartwheel.core.angles import astro_to_svg_angle
from chartwheel.core.arcs import point_angle, sign_arc, unwrap_span


def test_aries_arc_spans_one_sign() -> None:
    arc = sign_arc(0.0, 30.0)

    assert arc.start_angle == pytest.approx(60.0)
    assert arc.end_angle == pytest.approx(90.0)
    assert arc.span == pytest.approx(30.0)
    assert not arc.wrapped
    assert arc.start_angle <= arc.end_angle


def test_aries_anchor_uses_longitude_midpoint() -> None:
    arc = sign_arc(0.0, 30.0)

    assert arc.mid_angle == pytest.approx(astro_to_svg_angle(15.0, 0.0))
    assert arc.mid_angle == pytest.approx(75.0)


def test_arc_crossing_screen_seam_is_lifted() -> None:
    # Cancer: longitude 90 maps to screen 0, 120 to screen 330.
    arc = sign_arc(90.0, 120.0)

    assert arc.wrapped
    assert arc.start_angle == pytest.approx(330.0)
    assert arc.end_angle == pytest.approx(360.0)
    assert arc.span == pytest.approx(30.0)
    assert arc.mid_angle == pytest.approx(345.0)
    assert arc.start_lon_angle == pytest.approx(0.0)


@pytest.mark.parametrize(
    ("start", "end", "start_screen", "end_screen"),
    [(0.0, 30.0, 90.0, 60.0), (90.0, 120.0, 0.0, 330.0), (330.0, 0.0, 120.0, 90.0)],
)
def test_angles_by_longitude(start: float, end: float, start_screen: float, end_screen: float) -> None:
    arc = sign_arc(start, end)

    assert arc.start_lon_angle == pytest.approx(start_screen)
    assert arc.end_lon_angle == pytest.approx(end_screen)
    assert arc.start_lon_angle == pytest.approx(astro_to_svg_angle(arc.start_lon, 0.0))
    assert arc.end_lon_angle == pytest.approx(astro_to_svg_angle(arc.end_lon, 0.0))


def test_pisces_end_wraps_in_longitude() -> None:
    arc = sign_arc(330.0, 0.0)

    assert arc.end_lon == pytest.approx(360.0)
    assert arc.span == pytest.approx(30.0)
    assert arc.mid_angle == pytest.approx(astro_to_svg_angle(345.0, 0.0))
    assert arc.mid_angle == pytest.approx(105.0)


@pytest.mark.parametrize("index", range(12))
def test_every_sign_spans_thirty_degrees(index: int) -> None:
    start = index * 30.0
    arc = sign_arc(start, start + 30.0, rotation_offset=17.0)

    assert arc.span == pytest.approx(30.0)
    assert arc.start_angle <= arc.end_angle
    assert arc.start_lon_angle == pytest.approx(astro_to_svg_angle(start, 17.0))


def test_rotation_shifts_anchor() -> None:
    assert sign_arc(0.0, 30.0, rotation_offset=90.0).mid_angle == pytest.approx(345.0)


def test_unwrap_span() -> None:
    assert unwrap_span(330.0, 0.0) == (330.0, 360.0)
    assert unwrap_span(-30.0, 0.0) == (330.0, 360.0)
    assert unwrap_span(0.0, 30.0) == (0.0, 30.0)


def test_point_angle_matches_transform() -> None:
    assert point_angle(280.5) == pytest.approx(astro_to_svg_angle(280.5))
    assert point_angle(-10.0, 5.0) == pytest.approx(astro_to_svg_angle(350.0, 5.0))
