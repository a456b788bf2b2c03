"""Chart snapshot models and the index builder."""

from .indexes import Indexes, ItemRef, build_indexes, item_logical_id
from .models import (
    AspectCollection,
    AspectDescriptor,
    AspectPair,
    AspectSet,
    ChartSnapshot,
    GenericRingItem,
    HouseRingItem,
    ObjectRef,
    PlanetRingItem,
    Ring,
    RingItem,
    SignRingItem,
    Wheel,
    load_snapshot,
    logical_id,
    snapshot_from_json,
)

__all__ = [
    "AspectCollection",
    "AspectDescriptor",
    "AspectPair",
    "AspectSet",
    "ChartSnapshot",
    "GenericRingItem",
    "HouseRingItem",
    "Indexes",
    "ItemRef",
    "ObjectRef",
    "PlanetRingItem",
    "Ring",
    "RingItem",
    "SignRingItem",
    "Wheel",
    "build_indexes",
    "item_logical_id",
    "load_snapshot",
    "logical_id",
    "snapshot_from_json",
]
