"""Layout driver: turns a snapshot into ordered draw descriptors.

For every ring (in wheel order) and every ring item, the driver combines
the index tables, the angle/arc geometry and the merged visual and glyph
configuration into a renderer-agnostic descriptor. Rendering backends only
have to paint what they are given.

Coordinates in descriptors are relative to the wheel centre; ``y`` grows
downward. Each descriptor keeps a reference to the originating ring item,
ring or aspect pair so an event layer can route clicks back to the data.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from ..chart.indexes import Indexes, ItemRef, build_indexes, item_logical_id
from ..chart.models import (
    AspectPair,
    ChartSnapshot,
    GenericRingItem,
    HouseRingItem,
    PlanetRingItem,
    Ring,
    RingItem,
    SignRingItem,
    load_snapshot,
)
from ..core.angles import (
    format_degrees_minutes,
    format_sign_degrees_minutes,
    polar_to_cartesian,
)
from ..core.arcs import SignArc, point_angle, sign_arc
from .core.glyphs import FullGlyphConfig, GlyphConfig, lookup_object, merge_glyph_config, sign_index_for
from .core.theme import FullVisualConfig, VisualConfig, merge_visual_config

LOG = logging.getLogger(__name__)

__all__ = [
    "AspectLine",
    "ItemDescriptor",
    "LayoutOptions",
    "RingDescriptor",
    "WheelLayout",
    "build_wheel_layout",
]

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


@dataclass(frozen=True, slots=True)
class LayoutOptions:
    """Canvas and orientation parameters for one layout pass."""

    width: float = 800.0
    height: float = 800.0
    center_x: Optional[float] = None
    center_y: Optional[float] = None
    rotation_offset: float = 0.0
    margin: float = 20.0
    show_aspects: bool = True

    @property
    def center(self) -> Point:
        cx = self.width / 2 if self.center_x is None else self.center_x
        cy = self.height / 2 if self.center_y is None else self.center_y
        return float(cx), float(cy)

    @property
    def max_radius(self) -> float:
        return max(min(self.width, self.height) / 2 - self.margin, 0.0)


@dataclass(frozen=True, slots=True)
class RingDescriptor:
    ring_id: str
    ring_type: str
    label: Optional[str]
    inner_radius: float
    outer_radius: float
    ring: Ring = field(repr=False, compare=False)

    @property
    def center_radius(self) -> float:
        return (self.inner_radius + self.outer_radius) / 2


@dataclass(frozen=True, slots=True)
class ItemDescriptor:
    """Everything a backend needs to draw one ring item.

    ``position`` is the glyph/label anchor and ``screen_angle`` its angle.
    Signs carry their ``arc``; house cusps carry the cusp ``line``.
    ``detail`` is the secondary degree text, anchored at
    ``detail_position`` when that differs from ``position``.
    """

    ring_id: str
    item_id: str
    kind: str
    position: Point
    screen_angle: float
    color: str
    label: str
    glyph: Optional[str]
    inner_radius: float
    outer_radius: float
    detail: Optional[str] = None
    detail_position: Optional[Point] = None
    logical_id: Optional[str] = None
    arc: Optional[SignArc] = None
    line: Optional[Segment] = None
    retrograde: bool = False
    item: Optional[RingItem] = field(default=None, repr=False, compare=False)
    ring: Optional[Ring] = field(default=None, repr=False, compare=False)

    @property
    def ref(self) -> ItemRef:
        return ItemRef(self.ring_id, self.item_id)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "ringId": self.ring_id,
            "itemId": self.item_id,
            "kind": self.kind,
            "position": list(self.position),
            "screenAngle": self.screen_angle,
            "color": self.color,
            "label": self.label,
            "glyph": self.glyph,
            "detail": self.detail,
            "logicalId": self.logical_id,
            "retrograde": self.retrograde,
        }
        if self.detail_position is not None:
            payload["detailPosition"] = list(self.detail_position)
        if self.arc is not None:
            payload["arc"] = {
                "startAngle": self.arc.start_angle,
                "endAngle": self.arc.end_angle,
                "midAngle": self.arc.mid_angle,
                "innerRadius": self.inner_radius,
                "outerRadius": self.outer_radius,
            }
        if self.line is not None:
            start, end = self.line
            payload["line"] = [list(start), list(end)]
        return payload


@dataclass(frozen=True, slots=True)
class AspectLine:
    """A line between the drawn positions of an aspect's two endpoints."""

    aspect_id: str
    aspect_type: str
    start: Point
    end: Point
    color: str
    stroke_width: float
    glyph: Optional[str]
    from_ref: ItemRef
    to_ref: ItemRef
    pair: Optional[AspectPair] = field(default=None, repr=False, compare=False)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "aspectId": self.aspect_id,
            "aspectType": self.aspect_type,
            "start": list(self.start),
            "end": list(self.end),
            "color": self.color,
            "strokeWidth": self.stroke_width,
            "glyph": self.glyph,
            "from": {"ringId": self.from_ref.ring_id, "itemId": self.from_ref.item_id},
            "to": {"ringId": self.to_ref.ring_id, "itemId": self.to_ref.item_id},
        }


@dataclass(frozen=True, slots=True)
class WheelLayout:
    """Result of a layout pass, in drawing order."""

    width: float
    height: float
    center: Point
    max_radius: float
    scale: float
    rotation_offset: float
    rings: Tuple[RingDescriptor, ...]
    items: Tuple[ItemDescriptor, ...]
    aspects: Tuple[AspectLine, ...]
    visual: FullVisualConfig = field(repr=False)
    glyphs: FullGlyphConfig = field(repr=False)

    def items_for_ring(self, ring_id: str) -> List[ItemDescriptor]:
        return [item for item in self.items if item.ring_id == ring_id]

    def find_item(self, ring_id: str, item_id: str) -> Optional[ItemDescriptor]:
        for item in self.items:
            if item.ring_id == ring_id and item.item_id == item_id:
                return item
        return None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "center": list(self.center),
            "maxRadius": self.max_radius,
            "scale": self.scale,
            "rotationOffset": self.rotation_offset,
            "rings": [
                {
                    "ringId": ring.ring_id,
                    "type": ring.ring_type,
                    "label": ring.label,
                    "innerRadius": ring.inner_radius,
                    "outerRadius": ring.outer_radius,
                }
                for ring in self.rings
            ],
            "items": [item.to_payload() for item in self.items],
            "aspects": [aspect.to_payload() for aspect in self.aspects],
        }


# ---------------------------------------------------------------------------
# Per-kind builders


def _sign_descriptor(
    item: SignRingItem,
    ring: RingDescriptor,
    rotation: float,
    visual: FullVisualConfig,
    glyphs: FullGlyphConfig,
) -> ItemDescriptor:
    arc = sign_arc(item.start_lon, item.end_lon, rotation)
    index = item.index
    if index is None:
        index = sign_index_for(item.id)
    if index is None and item.label:
        index = sign_index_for(item.label)
    color = visual.sign_color(index) or visual.stroke_color
    glyph = glyphs.sign_glyphs.get(index) if index is not None else None
    return ItemDescriptor(
        ring_id=ring.ring_id,
        item_id=item.id,
        kind=item.kind,
        position=polar_to_cartesian(arc.mid_angle, ring.center_radius),
        screen_angle=arc.mid_angle,
        color=color,
        label=item.label or item.id,
        glyph=glyph or None,
        inner_radius=ring.inner_radius,
        outer_radius=ring.outer_radius,
        detail=format_sign_degrees_minutes(item.start_lon),
        detail_position=polar_to_cartesian(arc.start_lon_angle, ring.center_radius),
        arc=arc,
        item=item,
        ring=ring.ring,
    )


def _house_descriptor(
    item: HouseRingItem,
    ring: RingDescriptor,
    rotation: float,
    visual: FullVisualConfig,
    key: Optional[str],
) -> ItemDescriptor:
    angle = point_angle(item.lon, rotation)
    line = (
        polar_to_cartesian(angle, ring.inner_radius),
        polar_to_cartesian(angle, ring.outer_radius),
    )
    return ItemDescriptor(
        ring_id=ring.ring_id,
        item_id=item.id,
        kind=item.kind,
        position=polar_to_cartesian(angle, ring.center_radius),
        screen_angle=angle,
        color=visual.house_color(item.house_index) or visual.stroke_color,
        label=str(item.house_index),
        glyph=None,
        inner_radius=ring.inner_radius,
        outer_radius=ring.outer_radius,
        detail=format_sign_degrees_minutes(item.lon),
        logical_id=key,
        line=line,
        item=item,
        ring=ring.ring,
    )


def _planet_descriptor(
    item: PlanetRingItem,
    ring: RingDescriptor,
    rotation: float,
    visual: FullVisualConfig,
    glyphs: FullGlyphConfig,
    key: Optional[str],
) -> ItemDescriptor:
    angle = point_angle(item.lon, rotation)
    info = lookup_object(item.planet_id)
    ordinal = info.index if info is not None else None

    color = visual.planet_color(ordinal) or visual.stroke_color
    glyph: Optional[str] = None
    if ordinal is not None:
        glyph = glyphs.planet_glyphs.get(ordinal)
    if not glyph and info is not None:
        glyph = info.glyph

    return ItemDescriptor(
        ring_id=ring.ring_id,
        item_id=item.id,
        kind=item.kind,
        position=polar_to_cartesian(angle, ring.center_radius),
        screen_angle=angle,
        color=color,
        label=info.label if info is not None else item.planet_id,
        glyph=glyph or None,
        inner_radius=ring.inner_radius,
        outer_radius=ring.outer_radius,
        detail=format_degrees_minutes(item.lon),
        logical_id=key,
        retrograde=item.retrograde,
        item=item,
        ring=ring.ring,
    )


def _generic_descriptor(
    item: GenericRingItem,
    ring: RingDescriptor,
    rotation: float,
    visual: FullVisualConfig,
    key: Optional[str],
) -> Optional[ItemDescriptor]:
    if item.lon is None:
        LOG.debug("Skipping %s item %s without a longitude", item.kind, item.id)
        return None
    angle = point_angle(item.lon, rotation)
    return ItemDescriptor(
        ring_id=ring.ring_id,
        item_id=item.id,
        kind=item.kind,
        position=polar_to_cartesian(angle, ring.center_radius),
        screen_angle=angle,
        color=visual.stroke_color,
        label=item.label or item.id,
        glyph=None,
        inner_radius=ring.inner_radius,
        outer_radius=ring.outer_radius,
        detail=format_degrees_minutes(item.lon),
        logical_id=key,
        item=item,
        ring=ring.ring,
    )


def _item_descriptor(
    item: RingItem,
    ring: RingDescriptor,
    rotation: float,
    visual: FullVisualConfig,
    glyphs: FullGlyphConfig,
) -> Optional[ItemDescriptor]:
    key = item_logical_id(item, ring.ring)
    if isinstance(item, SignRingItem):
        return _sign_descriptor(item, ring, rotation, visual, glyphs)
    if isinstance(item, HouseRingItem):
        return _house_descriptor(item, ring, rotation, visual, key)
    if isinstance(item, PlanetRingItem):
        return _planet_descriptor(item, ring, rotation, visual, glyphs, key)
    return _generic_descriptor(item, ring, rotation, visual, key)


def _aspect_lines(
    indexes: Indexes,
    drawn: Mapping[ItemRef, ItemDescriptor],
    visual: FullVisualConfig,
    glyphs: FullGlyphConfig,
) -> List[AspectLine]:
    def _resolve(object_logical_id: str) -> Optional[ItemDescriptor]:
        for ref in indexes.items_by_logical_id.get(object_logical_id, ()):
            descriptor = drawn.get(ref)
            if descriptor is not None and descriptor.arc is None:
                return descriptor
        return None

    lines: List[AspectLine] = []
    for pair in indexes.aspect_by_id.values():
        start = _resolve(pair.from_.logical_id)
        end = _resolve(pair.to.logical_id)
        if start is None or end is None:
            LOG.debug("Aspect %s has an endpoint that is not drawn", pair.id)
            continue
        aspect_type = pair.aspect.type
        lines.append(
            AspectLine(
                aspect_id=pair.id,
                aspect_type=aspect_type,
                start=start.position,
                end=end.position,
                color=visual.aspect_color(aspect_type) or visual.stroke_color,
                stroke_width=visual.aspect_stroke_width,
                glyph=glyphs.aspect_glyphs.get(aspect_type),
                from_ref=start.ref,
                to_ref=end.ref,
                pair=pair,
            )
        )
    return lines


def build_wheel_layout(
    snapshot: Union[ChartSnapshot, Mapping[str, Any]],
    indexes: Optional[Indexes] = None,
    *,
    options: Optional[LayoutOptions] = None,
    visual_config: Union[VisualConfig, Mapping[str, Any], None] = None,
    glyph_config: Union[GlyphConfig, Mapping[str, Any], None] = None,
    theme: Union[str, VisualConfig, None] = None,
) -> WheelLayout:
    """Compute draw descriptors for every ring and ring item of ``snapshot``.

    ``indexes`` is built from the snapshot when omitted. Unknown objects or
    signs never fail the pass; they are drawn label-only in the stroke
    color.
    """

    snapshot = load_snapshot(snapshot)
    if indexes is None:
        indexes = build_indexes(snapshot)
    opts = options or LayoutOptions()
    visual = merge_visual_config(visual_config, theme)
    glyphs = merge_glyph_config(glyph_config)

    wheel = snapshot.wheel
    max_radius = opts.max_radius
    scale = max_radius / wheel.radius.outer if wheel.radius.outer > 0 else 1.0
    rotation = float(opts.rotation_offset)

    rings: List[RingDescriptor] = []
    items: List[ItemDescriptor] = []
    drawn: Dict[ItemRef, ItemDescriptor] = {}
    for ring in wheel.rings:
        descriptor = RingDescriptor(
            ring_id=ring.id,
            ring_type=ring.type,
            label=ring.label,
            inner_radius=ring.radius.inner * scale,
            outer_radius=ring.radius.outer * scale,
            ring=ring,
        )
        rings.append(descriptor)
        for item in ring.items or ():
            item_descriptor = _item_descriptor(item, descriptor, rotation, visual, glyphs)
            if item_descriptor is None:
                continue
            items.append(item_descriptor)
            if item_descriptor.ref in drawn:
                LOG.warning("Ring %s has more than one item with id %s", ring.id, item.id)
            # aspect endpoints resolve to the last item, as the indexes do
            drawn[item_descriptor.ref] = item_descriptor

    aspects: List[AspectLine] = []
    if opts.show_aspects:
        aspects = _aspect_lines(indexes, drawn, visual, glyphs)

    width, height = float(opts.width), float(opts.height)
    LOG.debug("Laid out %d rings, %d items, %d aspects", len(rings), len(items), len(aspects))
    return WheelLayout(
        width=width,
        height=height,
        center=opts.center,
        max_radius=max_radius,
        scale=scale,
        rotation_offset=rotation,
        rings=tuple(rings),
        items=tuple(items),
        aspects=tuple(aspects),
        visual=visual,
        glyphs=glyphs,
    )
