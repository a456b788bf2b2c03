from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from chartwheel.chart.models import (
    ChartSnapshot,
    GenericRingItem,
    HouseRingItem,
    PlanetRingItem,
    SignRingItem,
    load_snapshot,
    logical_id,
    snapshot_from_json,
)
from chartwheel.errors import ChartwheelError, SnapshotStructureError


def test_ring_items_are_discriminated_by_kind(snapshot_payload) -> None:
    snapshot = load_snapshot(snapshot_payload)
    signs, houses, planets = snapshot.wheel.rings

    assert all(isinstance(item, SignRingItem) for item in signs.items)
    assert all(isinstance(item, HouseRingItem) for item in houses.items)
    assert all(isinstance(item, PlanetRingItem) for item in planets.items)
    assert planets.items[0].planet_id == "sun"
    assert houses.items[0].house_index == 1
    assert houses.source_layer_id == "natal"
    assert signs.source_layer_id is None


def test_unknown_kind_falls_back_to_generic(snapshot_payload) -> None:
    snapshot_payload["wheel"]["rings"][0]["items"].append({"id": "x", "kind": "decan", "lon": 5.0})
    snapshot = load_snapshot(snapshot_payload)

    item = snapshot.wheel.rings[0].items[-1]
    assert isinstance(item, GenericRingItem)
    assert item.kind == "decan"
    assert item.lon == 5.0


def test_aspect_pair_from_alias(aspect_payload) -> None:
    snapshot = load_snapshot(aspect_payload)
    pair = snapshot.aspects.sets["natal-aspects"].pairs[0]

    assert pair.from_.logical_id == "natal:planet:sun"
    assert pair.to.logical_id == "natal:planet:moon"
    assert pair.aspect.exact_angle == 120.0
    assert pair.model_dump(by_alias=True)["from"]["layerId"] == "natal"


def test_unknown_fields_are_preserved(snapshot_payload) -> None:
    snapshot = load_snapshot(snapshot_payload)

    dumped = snapshot.chart_instance.model_dump(by_alias=True)
    assert dumped["ownerUserId"] == "user-1"


def test_snapshot_is_immutable(snapshot_payload) -> None:
    snapshot = load_snapshot(snapshot_payload)

    with pytest.raises(ValidationError):
        snapshot.wheel = None  # type: ignore[misc]


def test_load_snapshot_passes_models_through(snapshot_payload) -> None:
    snapshot = load_snapshot(snapshot_payload)

    assert load_snapshot(snapshot) is snapshot
    assert isinstance(snapshot, ChartSnapshot)


def test_validation_errors_are_collected(snapshot_payload) -> None:
    planet = snapshot_payload["wheel"]["rings"][2]["items"][0]
    planet.pop("lon")

    with pytest.raises(SnapshotStructureError) as excinfo:
        load_snapshot(snapshot_payload)

    assert isinstance(excinfo.value, ChartwheelError)
    assert any(message.startswith("wheel.rings.2.items.0") for message in excinfo.value.errors)
    assert "lon" in str(excinfo.value)


def test_non_finite_numbers_are_rejected(snapshot_payload) -> None:
    snapshot_payload["wheel"]["rings"][2]["items"][0]["lon"] = float("inf")

    with pytest.raises(SnapshotStructureError) as excinfo:
        load_snapshot(snapshot_payload)

    assert any(message.startswith("wheel.rings.2.items.0") for message in excinfo.value.errors)


@pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN"])
def test_non_finite_json_literals_are_rejected(snapshot_payload, literal: str) -> None:
    text = json.dumps(snapshot_payload).replace('"lon": 280.5', f'"lon": {literal}')
    assert literal in text

    with pytest.raises(SnapshotStructureError):
        snapshot_from_json(text)


def test_non_mapping_payload_raises() -> None:
    with pytest.raises(SnapshotStructureError):
        load_snapshot(["not", "a", "snapshot"])  # type: ignore[arg-type]


def test_snapshot_from_json(snapshot_payload) -> None:
    snapshot = snapshot_from_json(json.dumps(snapshot_payload))
    assert snapshot.wheel.id == "wheel-1"

    with pytest.raises(SnapshotStructureError) as excinfo:
        snapshot_from_json("{not json")
    assert "invalid JSON" in str(excinfo.value)


def test_logical_id_format() -> None:
    assert logical_id("natal", "planet", "sun") == "natal:planet:sun"
