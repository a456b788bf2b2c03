"""Reference SVG and PNG backends for :class:`~chartwheel.viz.layout.WheelLayout`."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from io import BytesIO
from typing import Any, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from ..chart.models import ChartSnapshot
from ..core.angles import polar_to_cartesian
from ..core.arcs import SignArc
from .core.glyphs import GlyphConfig
from .core.svg import SvgDocument, SvgElement, format_number
from .core.theme import VisualConfig
from .layout import ItemDescriptor, LayoutOptions, Segment, WheelLayout, build_wheel_layout

LOG = logging.getLogger(__name__)

__all__ = ["export_wheel", "render_wheel_png", "render_wheel_svg", "sector_path"]


def _fmt_point(point: Tuple[float, float]) -> str:
    return f"{format_number(point[0])},{format_number(point[1])}"


def sector_path(start_angle: float, end_angle: float, inner: float, outer: float) -> str:
    """SVG path data for an annular sector between two screen angles.

    ``start_angle <= end_angle`` is expected; increasing screen angles run
    counter-clockwise on screen, so the outer edge uses sweep flag ``0``.
    """

    large = 1 if end_angle - start_angle > 180.0 else 0
    outer_start = polar_to_cartesian(start_angle, outer)
    outer_end = polar_to_cartesian(end_angle, outer)
    inner_end = polar_to_cartesian(end_angle, inner)
    inner_start = polar_to_cartesian(start_angle, inner)
    r_out = format_number(outer)
    r_in = format_number(inner)
    return (
        f"M {_fmt_point(outer_start)} "
        f"A {r_out} {r_out} 0 {large} 0 {_fmt_point(outer_end)} "
        f"L {_fmt_point(inner_end)} "
        f"A {r_in} {r_in} 0 {large} 1 {_fmt_point(inner_start)} Z"
    )


# ---------------------------------------------------------------------------
# SVG


def _text(parent: SvgElement, text: str, x: float, y: float, **attrs: object) -> SvgElement:
    return parent.child(
        "text",
        text=text,
        x=x,
        y=y,
        text_anchor="middle",
        dominant_baseline="middle",
        **attrs,
    )


def _svg_sign(group: SvgElement, item: ItemDescriptor, arc: SignArc, layout: WheelLayout) -> None:
    visual, glyphs = layout.visual, layout.glyphs
    group.child(
        "path",
        d=sector_path(arc.start_angle, arc.end_angle, item.inner_radius, item.outer_radius),
        fill=item.color,
        fill_opacity="0.15",
        stroke=visual.stroke_color,
        stroke_width=visual.stroke_width,
        class_="sign-arc",
    )
    x, y = item.position
    _text(
        group,
        item.glyph or item.label,
        x,
        y,
        fill=item.color,
        font_family=glyphs.glyph_font,
        font_size=glyphs.glyph_size if item.glyph else glyphs.glyph_size * 0.75,
        class_="sign-glyph" if item.glyph else "sign-label",
    )
    if item.detail and item.detail_position is not None:
        dx, dy = item.detail_position
        _text(
            group,
            item.detail,
            dx,
            dy,
            fill=visual.stroke_color,
            font_size=glyphs.glyph_size * 0.6,
            class_="sign-cusp",
        )


def _svg_house(group: SvgElement, item: ItemDescriptor, line: Segment, layout: WheelLayout) -> None:
    visual, glyphs = layout.visual, layout.glyphs
    (x1, y1), (x2, y2) = line
    group.child(
        "line",
        x1=x1,
        y1=y1,
        x2=x2,
        y2=y2,
        stroke=item.color,
        stroke_width=visual.stroke_width,
        class_="house-cusp",
    )
    x, y = item.position
    _text(group, item.label, x, y, fill=visual.stroke_color, font_size=glyphs.glyph_size * 0.8, class_="house-number")
    if item.detail:
        _text(
            group,
            item.detail,
            x,
            y + glyphs.glyph_size,
            fill=visual.stroke_color,
            font_size=glyphs.glyph_size * 0.6,
            class_="house-degrees",
        )


def _svg_point(group: SvgElement, item: ItemDescriptor, layout: WheelLayout) -> None:
    glyphs = layout.glyphs
    x, y = item.position
    marker = group.child("g", transform=f"translate({format_number(x)}, {format_number(y)})")
    if item.glyph:
        _text(
            marker,
            item.glyph,
            0.0,
            0.0,
            fill=item.color,
            font_family=glyphs.glyph_font,
            font_size=glyphs.glyph_size,
            class_="object-glyph",
        )
    else:
        marker.child("circle", cx=0, cy=0, r=3, fill=item.color, class_="object-marker")
    label = item.label + (" ℞" if item.retrograde else "")
    _text(marker, label, 0.0, glyphs.glyph_size + 4.0, fill=item.color, font_size=glyphs.glyph_size * 0.7, class_="object-label")
    if item.detail:
        _text(
            marker,
            item.detail,
            0.0,
            glyphs.glyph_size * 2 + 4.0,
            fill=item.color,
            font_size=glyphs.glyph_size * 0.6,
            class_="object-degrees",
        )


def render_wheel_svg(layout: WheelLayout, *, pretty: bool = True) -> str:
    """Render ``layout`` as a standalone SVG document.

    Every drawn item carries ``data-ring-id``/``data-item-id`` and every
    aspect line ``data-aspect-id`` so hit-testing can map elements back to
    snapshot data.
    """

    visual = layout.visual
    doc = SvgDocument(layout.width, layout.height, background=visual.background_color)
    cx, cy = layout.center
    content = doc.group(
        class_="chart-content",
        transform=f"translate({format_number(cx)}, {format_number(cy)})",
    )

    rings_group = doc.group(content, class_="rings")
    for ring in layout.rings:
        rings_group.child(
            "circle",
            cx=0,
            cy=0,
            r=ring.outer_radius,
            fill="none",
            stroke=visual.stroke_color,
            stroke_width=visual.stroke_width,
            stroke_opacity="0.3",
            class_=f"ring ring-{ring.ring_type}",
            data_ring_id=ring.ring_id,
        )
        if ring.inner_radius > 0:
            rings_group.child(
                "circle",
                cx=0,
                cy=0,
                r=ring.inner_radius,
                fill="none",
                stroke=visual.stroke_color,
                stroke_width=visual.stroke_width,
                stroke_opacity="0.3",
                class_=f"ring-inner ring-{ring.ring_type}",
                data_ring_id=ring.ring_id,
            )

    if layout.aspects:
        aspects_group = doc.group(content, class_="aspects")
        for aspect in layout.aspects:
            (x1, y1), (x2, y2) = aspect.start, aspect.end
            aspects_group.child(
                "line",
                x1=x1,
                y1=y1,
                x2=x2,
                y2=y2,
                stroke=aspect.color,
                stroke_width=aspect.stroke_width,
                stroke_opacity="0.6",
                class_=f"aspect aspect-{aspect.aspect_type}",
                data_aspect_id=aspect.aspect_id,
            )

    items_group = doc.group(content, class_="items")
    for item in layout.items:
        group = items_group.child(
            "g",
            class_=f"item item-{item.kind}",
            data_ring_id=item.ring_id,
            data_item_id=item.item_id,
            data_logical_id=item.logical_id,
        )
        if item.arc is not None:
            _svg_sign(group, item, item.arc, layout)
        elif item.line is not None:
            _svg_house(group, item, item.line, layout)
        else:
            _svg_point(group, item, layout)

    doc.group(content, class_="outline").child(
        "circle",
        cx=0,
        cy=0,
        r=layout.max_radius,
        fill="none",
        stroke=visual.stroke_color,
        stroke_width=visual.stroke_width,
    )
    return doc.to_string(pretty=pretty)


# ---------------------------------------------------------------------------
# PNG


def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size=size)
    except OSError:  # pragma: no cover - font availability varies
        return ImageFont.load_default()


def _measure(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> Tuple[float, float]:
    if not text:
        return 0.0, 0.0
    bbox = draw.textbbox((0, 0), text, font=font)
    return float(bbox[2] - bbox[0]), float(bbox[3] - bbox[1])


def _centered_text(
    draw: ImageDraw.ImageDraw,
    xy: Tuple[float, float],
    text: str,
    fill: str,
    font: ImageFont.ImageFont,
) -> None:
    tw, th = _measure(draw, text, font)
    draw.text((xy[0] - tw / 2, xy[1] - th / 2), text, fill=fill, font=font)


def render_wheel_png(layout: WheelLayout) -> bytes:
    """Rasterise ``layout`` into a PNG buffer with Pillow."""

    visual, glyphs = layout.visual, layout.glyphs
    width = max(int(round(layout.width)), 1)
    height = max(int(round(layout.height)), 1)
    img = Image.new("RGB", (width, height), visual.background_color)
    draw = ImageDraw.Draw(img)
    cx, cy = layout.center
    stroke = max(int(round(visual.stroke_width)), 1)

    def _shift(point: Tuple[float, float]) -> Tuple[float, float]:
        return point[0] + cx, point[1] + cy

    def _bbox(radius: float) -> Tuple[float, float, float, float]:
        return (cx - radius, cy - radius, cx + radius, cy + radius)

    for ring in layout.rings:
        if ring.outer_radius > 0:
            draw.ellipse(_bbox(ring.outer_radius), outline=visual.stroke_color, width=stroke)
        if ring.inner_radius > 0:
            draw.ellipse(_bbox(ring.inner_radius), outline=visual.stroke_color, width=stroke)

    aspect_width = max(int(round(visual.aspect_stroke_width)), 1)
    for aspect in layout.aspects:
        draw.line((*_shift(aspect.start), *_shift(aspect.end)), fill=aspect.color, width=aspect_width)

    glyph_font = _font(max(int(round(glyphs.glyph_size)), 6))
    small_font = _font(max(int(round(glyphs.glyph_size * 0.7)), 6))
    for item in layout.items:
        if item.arc is not None:
            # Pillow measures angles clockwise from 3 o'clock: 90 - screen.
            start = 90.0 - item.arc.end_angle
            end = 90.0 - item.arc.start_angle
            if item.outer_radius > 0:
                draw.arc(_bbox(item.outer_radius), start, end, fill=item.color, width=stroke)
            for angle in (item.arc.start_angle, item.arc.end_angle):
                draw.line(
                    (
                        *_shift(polar_to_cartesian(angle, item.inner_radius)),
                        *_shift(polar_to_cartesian(angle, item.outer_radius)),
                    ),
                    fill=visual.stroke_color,
                    width=stroke,
                )
            _centered_text(draw, _shift(item.position), item.glyph or item.label, item.color, glyph_font)
        elif item.line is not None:
            (x1, y1), (x2, y2) = item.line
            draw.line((*_shift((x1, y1)), *_shift((x2, y2))), fill=visual.stroke_color, width=stroke)
            _centered_text(draw, _shift(item.position), item.label, visual.stroke_color, small_font)
        else:
            x, y = _shift(item.position)
            if item.glyph:
                _centered_text(draw, (x, y), item.glyph, item.color, glyph_font)
            else:
                draw.ellipse((x - 3, y - 3, x + 3, y + 3), fill=item.color)
            _centered_text(draw, (x, y + glyphs.glyph_size + 4), item.label, item.color, small_font)

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def export_wheel(
    snapshot: Union[ChartSnapshot, Mapping[str, Any]],
    fmt: str = "svg",
    *,
    options: Optional[LayoutOptions] = None,
    visual_config: Union[VisualConfig, Mapping[str, Any], None] = None,
    glyph_config: Union[GlyphConfig, Mapping[str, Any], None] = None,
    theme: Union[str, VisualConfig, None] = None,
    pretty: bool = True,
) -> bytes:
    """Lay out ``snapshot`` and export it as SVG or PNG bytes."""

    fmt_lower = fmt.lower()
    if fmt_lower not in ("svg", "png"):
        raise ValueError("Unsupported format: expected 'svg' or 'png'")
    layout = build_wheel_layout(
        snapshot,
        options=options,
        visual_config=visual_config,
        glyph_config=glyph_config,
        theme=theme,
    )
    LOG.debug("Exporting wheel as %s (%dx%d)", fmt_lower, layout.width, layout.height)
    if fmt_lower == "svg":
        return render_wheel_svg(layout, pretty=pretty).encode("utf-8")
    return render_wheel_png(layout)
