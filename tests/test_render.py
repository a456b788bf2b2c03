from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from chartwheel.viz import LayoutOptions, build_wheel_layout, export_wheel, render_wheel_png, render_wheel_svg
from chartwheel.viz.core.svg import format_number
from chartwheel.viz.render import sector_path


def test_svg_document_structure(aspect_payload) -> None:
    svg = render_wheel_svg(build_wheel_layout(aspect_payload))

    assert svg.startswith("<svg")
    assert 'xmlns="http://www.w3.org/2000/svg"' in svg
    assert 'viewBox="0 0 800 800"' in svg
    assert 'transform="translate(400, 400)"' in svg
    assert 'fill="#1a1a1a"' in svg
    assert svg.count("<path") == 2


def test_svg_carries_hit_test_attributes(aspect_payload) -> None:
    svg = render_wheel_svg(build_wheel_layout(aspect_payload))

    assert 'data-item-id="planet-sun"' in svg
    assert 'data-ring-id="planets"' in svg
    assert 'data-aspect-id="aspect-1"' in svg
    assert 'data-logical-id="natal:planet:sun"' in svg


def test_svg_contains_labels_and_glyphs(snapshot_payload) -> None:
    svg = render_wheel_svg(build_wheel_layout(snapshot_payload))

    assert "♈" in svg
    assert "☉" in svg
    assert "280°30&apos;" in svg
    assert ">Sun<" in svg


def test_svg_draws_sign_sectors_and_house_lines(snapshot_payload) -> None:
    layout = build_wheel_layout(snapshot_payload)
    svg = render_wheel_svg(layout)

    aries = layout.find_item("signs", "sign-aries")
    arc = aries.arc
    expected = sector_path(arc.start_angle, arc.end_angle, aries.inner_radius, aries.outer_radius)
    assert f'd="{expected}"' in svg

    house = layout.find_item("houses", "house-2")
    (x1, y1), (x2, y2) = house.line
    assert svg.count('class="house-cusp"') == 2
    assert f'x1="{format_number(x1)}"' in svg
    assert f'y2="{format_number(y2)}"' in svg


def test_svg_compact_output(snapshot_payload) -> None:
    svg = render_wheel_svg(build_wheel_layout(snapshot_payload), pretty=False)
    assert "\n" not in svg


def test_sector_path_flags() -> None:
    path = sector_path(60.0, 90.0, 0.0, 100.0)

    assert path.startswith("M 86.603,50 A 100 100 0 0 0 100,0 ")
    assert path.endswith(" Z")
    large = sector_path(0.0, 200.0, 10.0, 20.0)
    assert "A 20 20 0 1 0 " in large
    assert "A 10 10 0 1 1 " in large


def test_png_render(snapshot_payload, tmp_path: Path) -> None:
    data = render_wheel_png(build_wheel_layout(snapshot_payload, options=LayoutOptions(width=300, height=200)))

    assert data.startswith(b"\x89PNG")
    image = Image.open(BytesIO(data))
    assert image.size == (300, 200)
    target = tmp_path / "wheel.png"
    target.write_bytes(data)
    assert target.stat().st_size > 0


def test_export_wheel_formats(aspect_payload) -> None:
    svg_bytes = export_wheel(aspect_payload, "SVG")
    png_bytes = export_wheel(aspect_payload, "png", theme="modern")

    assert svg_bytes.startswith(b"<svg")
    assert png_bytes.startswith(b"\x89PNG")


def test_export_wheel_rejects_unknown_format(snapshot_payload) -> None:
    with pytest.raises(ValueError, match="Unsupported format"):
        export_wheel(snapshot_payload, "pdf")
