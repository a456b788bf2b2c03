"""Pydantic models for the chart snapshot consumed by the wheel renderer.

A snapshot is the complete, immutable render response for one chart:
metadata, settings, a coordinate-system descriptor, per-layer positions,
aspect sets and the wheel/ring layout. Wire payloads use camelCase keys;
attributes are exposed in snake_case. Unknown keys are preserved because
the schema is versioned by the producer, not by this package.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import SnapshotStructureError

__all__ = [
    "AspectCollection",
    "AspectDescriptor",
    "AspectPair",
    "AspectSet",
    "ChartInstance",
    "ChartSnapshot",
    "CoordinateSystem",
    "DataSource",
    "GenericRingItem",
    "HouseRingItem",
    "Layer",
    "ObjectRef",
    "PlanetRingItem",
    "RadiusRange",
    "Ring",
    "RingItem",
    "SignRingItem",
    "Wheel",
    "load_snapshot",
    "logical_id",
    "snapshot_from_json",
]


def logical_id(layer_id: str, object_type: str, object_id: str) -> str:
    """Compose the ``layer:type:object`` identity joining ring items and aspects."""

    return f"{layer_id}:{object_type}:{object_id}"


class _SnapshotModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
        allow_inf_nan=False,
    )


class RadiusRange(_SnapshotModel):
    inner: float = 0.0
    outer: float = 0.0


class DataSource(_SnapshotModel):
    kind: Optional[str] = None
    layer_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Ring items


class _RingItemBase(_SnapshotModel):
    id: str
    label: Optional[str] = None


class SignRingItem(_RingItemBase):
    """One zodiac sign segment."""

    kind: Literal["sign"] = "sign"
    index: Optional[int] = None
    glyph: Optional[str] = None
    start_lon: float
    end_lon: float


class HouseRingItem(_RingItemBase):
    """A house cusp marker; ``house_index`` is 1-based."""

    kind: Literal["houseCusp"] = "houseCusp"
    house_index: int
    lon: float
    layer_id: Optional[str] = None


class PlanetRingItem(_RingItemBase):
    """A planet (or other chart object) position on a ring."""

    kind: Literal["planet"] = "planet"
    planet_id: str
    layer_id: Optional[str] = None
    lon: float
    lat: Optional[float] = None
    speed_lon: Optional[float] = None
    retrograde: bool = False
    sign_index: Optional[int] = None
    sign_degree: Optional[float] = None
    house_index: Optional[int] = None


class GenericRingItem(_RingItemBase):
    """Any ring item whose ``kind`` has no dedicated model.

    Items that name a domain object through ``layer_id``/``object_type``/
    ``object_id`` take part in logical-id cross referencing; items with a
    ``lon`` are drawn as label-only markers.
    """

    kind: str
    lon: Optional[float] = None
    layer_id: Optional[str] = None
    object_type: Optional[str] = None
    object_id: Optional[str] = None


_KNOWN_KINDS = frozenset({"sign", "houseCusp", "planet"})


def _ring_item_tag(value: Any) -> str:
    if isinstance(value, Mapping):
        kind = value.get("kind")
    else:
        kind = getattr(value, "kind", None)
    return kind if kind in _KNOWN_KINDS else "other"


RingItem = Annotated[
    Union[
        Annotated[SignRingItem, Tag("sign")],
        Annotated[HouseRingItem, Tag("houseCusp")],
        Annotated[PlanetRingItem, Tag("planet")],
        Annotated[GenericRingItem, Tag("other")],
    ],
    Discriminator(_ring_item_tag),
]


class Ring(_SnapshotModel):
    """An annular band of the wheel.

    ``items is None`` means the producer never supplied items, while an
    empty list marks an explicitly empty ring. Both are valid.
    """

    id: str
    type: str = "other"
    label: Optional[str] = None
    order: Optional[int] = None
    radius: RadiusRange = Field(default_factory=RadiusRange)
    data_source: Optional[DataSource] = None
    items: Optional[list[RingItem]] = None

    @property
    def source_layer_id(self) -> Optional[str]:
        if self.data_source is None:
            return None
        return self.data_source.layer_id


class Wheel(_SnapshotModel):
    id: str = ""
    name: str = ""
    description: Optional[str] = None
    radius: RadiusRange = Field(default_factory=lambda: RadiusRange(inner=0.0, outer=100.0))
    rings: list[Ring]


# ---------------------------------------------------------------------------
# Aspects


class ObjectRef(_SnapshotModel):
    """Endpoint of an aspect: which object in which layer."""

    layer_id: str
    object_type: str
    object_id: str

    @property
    def logical_id(self) -> str:
        return logical_id(self.layer_id, self.object_type, self.object_id)


class AspectDescriptor(_SnapshotModel):
    type: str
    exact_angle: Optional[float] = None
    orb: Optional[float] = None
    is_applying: bool = False
    is_exact: bool = False


class AspectPair(_SnapshotModel):
    id: str
    from_: ObjectRef = Field(alias="from")
    to: ObjectRef
    aspect: AspectDescriptor


class AspectSet(_SnapshotModel):
    id: str
    label: Optional[str] = None
    kind: Optional[str] = None
    layer_ids: list[str] = Field(default_factory=list)
    pairs: list[AspectPair] = Field(default_factory=list)


class AspectCollection(_SnapshotModel):
    sets: dict[str, AspectSet] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Snapshot envelope


class CoordinateSystem(_SnapshotModel):
    angle_unit: str = "degrees"
    angle_range: tuple[float, float] = (0.0, 360.0)
    direction: str = "cw"
    zero_point: Optional[dict[str, Any]] = None


class ChartInstance(_SnapshotModel):
    id: Optional[str] = None
    chart_definition_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


class Layer(_SnapshotModel):
    """Positions of objects and houses for one subject/time."""

    id: str
    label: Optional[str] = None
    kind: Optional[str] = None
    subject_id: Optional[str] = None
    date_time: Optional[str] = None
    positions: dict[str, Any] = Field(default_factory=dict)


class ChartSnapshot(_SnapshotModel):
    chart_instance: Optional[ChartInstance] = None
    settings: dict[str, Any] = Field(default_factory=dict)
    coordinate_system: CoordinateSystem = Field(default_factory=CoordinateSystem)
    layers: dict[str, Layer] = Field(default_factory=dict)
    aspects: AspectCollection = Field(default_factory=AspectCollection)
    wheel: Wheel


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
    return f"{location}: {error.get('msg', 'invalid value')}"


def load_snapshot(payload: ChartSnapshot | Mapping[str, Any]) -> ChartSnapshot:
    """Return a validated :class:`ChartSnapshot` for ``payload``.

    Raises
    ------
    SnapshotStructureError
        When the payload is not a mapping or fails validation; the error
        lists every failing location.
    """

    if isinstance(payload, ChartSnapshot):
        return payload
    if not isinstance(payload, Mapping):
        raise SnapshotStructureError(
            [f"<root>: expected an object, got {type(payload).__name__}"]
        )
    try:
        return ChartSnapshot.model_validate(payload)
    except ValidationError as exc:
        raise SnapshotStructureError(_format_error(err) for err in exc.errors()) from exc


def snapshot_from_json(text: str | bytes) -> ChartSnapshot:
    """Parse and validate a JSON-encoded snapshot."""

    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotStructureError([f"<root>: invalid JSON ({exc.msg})"]) from exc
    return load_snapshot(document)
