"""Lookup tables derived from a chart snapshot.

:func:`build_indexes` walks the wheel rings and aspect sets once and
produces an :class:`Indexes` read-model: rings by id, items by ring and
item id, aspect sets and pairs by id, and two cross references keyed by
*logical id* (``layer:objectType:objectId``). The logical id is what lets
a planet drawn on a ring find the aspects that mention it.

Logical ids per ring item kind:

* ``planet``: ``{layer}:planet:{planet_id}``
* ``houseCusp``: ``{layer}:house:{house_index}``
* ``sign``: none, zodiac segments are static and never aspect endpoints
* anything else: ``{layer}:{object_type}:{object_id}`` when all three are
  present

``layer`` is the item's own ``layer_id`` and falls back to the ring's
``data_source.layer_id``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from ..errors import SnapshotStructureError
from .models import (
    AspectPair,
    AspectSet,
    ChartSnapshot,
    GenericRingItem,
    HouseRingItem,
    PlanetRingItem,
    Ring,
    RingItem,
    SignRingItem,
    load_snapshot,
    logical_id,
)

LOG = logging.getLogger(__name__)

__all__ = ["Indexes", "ItemRef", "build_indexes", "item_logical_id"]


class ItemRef(NamedTuple):
    """Reference to a ring item by ``(ring_id, item_id)``."""

    ring_id: str
    item_id: str


@dataclass(frozen=True)
class Indexes:
    """Normalized lookup tables for one chart snapshot.

    A ring missing from ``item_by_ring_and_id`` never received items; a
    ring mapped to an empty dict was explicitly empty.
    """

    ring_by_id: Dict[str, Ring] = field(default_factory=dict)
    item_by_ring_and_id: Dict[str, Dict[str, RingItem]] = field(default_factory=dict)
    aspect_set_by_id: Dict[str, AspectSet] = field(default_factory=dict)
    aspect_by_id: Dict[str, AspectPair] = field(default_factory=dict)
    items_by_logical_id: Dict[str, List[ItemRef]] = field(default_factory=dict)
    aspects_by_object_logical_id: Dict[str, List[str]] = field(default_factory=dict)

    def item(self, ring_id: str, item_id: str) -> Optional[RingItem]:
        return self.item_by_ring_and_id.get(ring_id, {}).get(item_id)

    def items_for(self, object_logical_id: str) -> List[RingItem]:
        """Ring items drawn for ``object_logical_id`` in ring order."""

        resolved: List[RingItem] = []
        for ref in self.items_by_logical_id.get(object_logical_id, ()):
            item = self.item(ref.ring_id, ref.item_id)
            if item is not None:
                resolved.append(item)
        return resolved

    def aspects_for(self, object_logical_id: str) -> List[AspectPair]:
        return [
            self.aspect_by_id[aspect_id]
            for aspect_id in self.aspects_by_object_logical_id.get(object_logical_id, ())
            if aspect_id in self.aspect_by_id
        ]

    def to_payload(self) -> Dict[str, Any]:
        """Plain nested structure with camelCase keys for external consumers."""

        return {
            "ringById": {
                ring_id: ring.model_dump(mode="json", by_alias=True)
                for ring_id, ring in self.ring_by_id.items()
            },
            "itemByRingAndId": {
                ring_id: {
                    item_id: item.model_dump(mode="json", by_alias=True)
                    for item_id, item in items.items()
                }
                for ring_id, items in self.item_by_ring_and_id.items()
            },
            "aspectSetById": {
                set_id: aspect_set.model_dump(mode="json", by_alias=True)
                for set_id, aspect_set in self.aspect_set_by_id.items()
            },
            "aspectById": {
                pair_id: pair.model_dump(mode="json", by_alias=True)
                for pair_id, pair in self.aspect_by_id.items()
            },
            "itemsByLogicalId": {
                key: [{"ringId": ref.ring_id, "itemId": ref.item_id} for ref in refs]
                for key, refs in self.items_by_logical_id.items()
            },
            "aspectsByObjectLogicalId": {
                key: list(ids) for key, ids in self.aspects_by_object_logical_id.items()
            },
        }


def item_logical_id(item: RingItem, ring: Ring) -> Optional[str]:
    """Return the logical id of ``item`` or ``None`` when it has none."""

    if isinstance(item, SignRingItem):
        return None
    layer = getattr(item, "layer_id", None) or ring.source_layer_id
    if isinstance(item, PlanetRingItem):
        return logical_id(layer, "planet", item.planet_id) if layer else None
    if isinstance(item, HouseRingItem):
        return logical_id(layer, "house", str(item.house_index)) if layer else None
    if isinstance(item, GenericRingItem):
        if layer and item.object_type and item.object_id:
            return logical_id(layer, item.object_type, item.object_id)
    return None


def _ordered_rings(snapshot: ChartSnapshot) -> Sequence[Ring]:
    wheel = getattr(snapshot, "wheel", None)
    rings = getattr(wheel, "rings", None)
    if isinstance(rings, (str, bytes, Mapping)) or not isinstance(rings, Sequence):
        raise SnapshotStructureError(
            [f"wheel.rings: expected an ordered sequence, got {type(rings).__name__}"]
        )
    return rings


def _append_unique(bucket: List[str], value: str) -> None:
    if value not in bucket:
        bucket.append(value)


def build_indexes(snapshot: ChartSnapshot | Mapping[str, Any]) -> Indexes:
    """Build the lookup tables for ``snapshot``.

    Parameters
    ----------
    snapshot:
        A validated :class:`ChartSnapshot` or its raw payload.

    Raises
    ------
    SnapshotStructureError
        If ``wheel.rings`` is missing or not an ordered sequence. Rings
        without items are not an error.
    """

    snapshot = load_snapshot(snapshot)
    rings = _ordered_rings(snapshot)

    ring_by_id: Dict[str, Ring] = {}
    item_by_ring_and_id: Dict[str, Dict[str, RingItem]] = {}
    items_by_logical_id: Dict[str, List[ItemRef]] = {}

    for ring in rings:
        ring_by_id[ring.id] = ring
        if ring.items is None:
            continue
        ring_items = item_by_ring_and_id.setdefault(ring.id, {})
        for item in ring.items:
            ring_items[item.id] = item
            key = item_logical_id(item, ring)
            if key is None:
                if not isinstance(item, SignRingItem):
                    LOG.debug("No logical id for item %s in ring %s", item.id, ring.id)
                continue
            items_by_logical_id.setdefault(key, []).append(ItemRef(ring.id, item.id))

    aspect_set_by_id: Dict[str, AspectSet] = {}
    aspect_by_id: Dict[str, AspectPair] = {}
    aspects_by_object_logical_id: Dict[str, List[str]] = {}

    for aspect_set in snapshot.aspects.sets.values():
        aspect_set_by_id[aspect_set.id] = aspect_set
        for pair in aspect_set.pairs:
            aspect_by_id[pair.id] = pair
            for endpoint in (pair.from_, pair.to):
                bucket = aspects_by_object_logical_id.setdefault(endpoint.logical_id, [])
                _append_unique(bucket, pair.id)

    LOG.debug(
        "Indexed %d rings, %d logical ids, %d aspects",
        len(ring_by_id),
        len(items_by_logical_id),
        len(aspect_by_id),
    )
    return Indexes(
        ring_by_id=ring_by_id,
        item_by_ring_and_id=item_by_ring_and_id,
        aspect_set_by_id=aspect_set_by_id,
        aspect_by_id=aspect_by_id,
        items_by_logical_id=items_by_logical_id,
        aspects_by_object_logical_id=aspects_by_object_logical_id,
    )
