from __future__ import annotations

import pytest

from chartwheel.chart import ItemRef, build_indexes, load_snapshot
from chartwheel.chart.models import PlanetRingItem
from chartwheel.errors import SnapshotStructureError


def _wheel_with(ring: dict) -> dict:
    return {
        "id": "wheel-1",
        "name": "Test Wheel",
        "radius": {"inner": 0, "outer": 100},
        "rings": [ring],
    }


def test_builds_ring_and_item_tables(snapshot_payload) -> None:
    indexes = build_indexes(snapshot_payload)

    assert list(indexes.ring_by_id) == ["signs", "houses", "planets"]
    assert set(indexes.item_by_ring_and_id["planets"]) == {"planet-sun", "planet-moon"}
    assert "sign-aries" in indexes.item_by_ring_and_id["signs"]
    assert "house-1" in indexes.item_by_ring_and_id["houses"]
    sun = indexes.item("planets", "planet-sun")
    assert isinstance(sun, PlanetRingItem)
    assert sun.lon == pytest.approx(280.5)


def test_minimal_snapshot_yields_empty_tables(minimal_payload) -> None:
    indexes = build_indexes(minimal_payload)

    assert indexes.ring_by_id == {}
    assert indexes.item_by_ring_and_id == {}
    assert indexes.aspect_set_by_id == {}
    assert indexes.aspect_by_id == {}
    assert indexes.items_by_logical_id == {}
    assert indexes.aspects_by_object_logical_id == {}


def test_absent_items_leave_no_entry(snapshot_payload) -> None:
    snapshot_payload["wheel"] = _wheel_with(
        {"id": "empty-ring", "type": "planets", "radius": {"inner": 0, "outer": 100}}
    )
    indexes = build_indexes(snapshot_payload)

    assert "empty-ring" in indexes.ring_by_id
    assert "empty-ring" not in indexes.item_by_ring_and_id


def test_empty_items_list_maps_to_empty_dict(snapshot_payload) -> None:
    snapshot_payload["wheel"] = _wheel_with(
        {"id": "empty-ring", "type": "planets", "radius": {"inner": 0, "outer": 100}, "items": []}
    )
    indexes = build_indexes(snapshot_payload)

    assert indexes.item_by_ring_and_id["empty-ring"] == {}


def test_planet_logical_ids(snapshot_payload) -> None:
    indexes = build_indexes(snapshot_payload)

    assert indexes.items_by_logical_id["natal:planet:sun"] == [ItemRef("planets", "planet-sun")]
    assert indexes.items_by_logical_id["natal:planet:moon"] == [ItemRef("planets", "planet-moon")]


def test_house_logical_ids_use_ring_layer(snapshot_payload) -> None:
    indexes = build_indexes(snapshot_payload)

    assert indexes.items_by_logical_id["natal:house:1"] == [ItemRef("houses", "house-1")]
    assert "natal:house:2" in indexes.items_by_logical_id


def test_signs_have_no_logical_id(snapshot_payload) -> None:
    indexes = build_indexes(snapshot_payload)

    refs = [ref for refs in indexes.items_by_logical_id.values() for ref in refs]
    assert all(ref.ring_id != "signs" for ref in refs)


def test_items_without_layer_are_not_cross_referenced(snapshot_payload) -> None:
    planets = snapshot_payload["wheel"]["rings"][2]
    planets.pop("dataSource")
    for item in planets["items"]:
        item.pop("layerId")
    indexes = build_indexes(snapshot_payload)

    assert "natal:planet:sun" not in indexes.items_by_logical_id
    assert "planet-sun" in indexes.item_by_ring_and_id["planets"]


def test_same_object_on_two_rings(snapshot_payload) -> None:
    rings = snapshot_payload["wheel"]["rings"]
    rings.append(
        {
            "id": "outer-planets",
            "type": "planets",
            "radius": {"inner": 100, "outer": 120},
            "dataSource": {"kind": "layer_planets", "layerId": "natal"},
            "items": [{"id": "sun-again", "kind": "planet", "planetId": "sun", "lon": 280.5}],
        }
    )
    indexes = build_indexes(snapshot_payload)

    assert indexes.items_by_logical_id["natal:planet:sun"] == [
        ItemRef("planets", "planet-sun"),
        ItemRef("outer-planets", "sun-again"),
    ]
    assert len(indexes.items_for("natal:planet:sun")) == 2


def test_aspects_indexed_under_both_endpoints(aspect_payload) -> None:
    indexes = build_indexes(aspect_payload)

    assert "natal-aspects" in indexes.aspect_set_by_id
    assert indexes.aspect_by_id["aspect-1"].aspect.type == "trine"
    assert indexes.aspects_by_object_logical_id["natal:planet:sun"] == ["aspect-1"]
    assert indexes.aspects_by_object_logical_id["natal:planet:moon"] == ["aspect-1"]
    assert [pair.id for pair in indexes.aspects_for("natal:planet:sun")] == ["aspect-1"]


def test_aspect_set_without_pairs(snapshot_payload) -> None:
    snapshot_payload["aspects"] = {"sets": {"empty": {"id": "empty", "pairs": []}}}
    indexes = build_indexes(snapshot_payload)

    assert "empty" in indexes.aspect_set_by_id
    assert indexes.aspect_by_id == {}
    assert indexes.aspects_by_object_logical_id == {}


def test_self_aspect_listed_once(snapshot_payload) -> None:
    endpoint = {"layerId": "natal", "objectType": "planet", "objectId": "sun"}
    snapshot_payload["aspects"] = {
        "sets": {
            "self": {
                "id": "self",
                "pairs": [
                    {
                        "id": "self-1",
                        "from": endpoint,
                        "to": dict(endpoint),
                        "aspect": {"type": "conjunction"},
                    }
                ],
            }
        }
    }
    indexes = build_indexes(snapshot_payload)

    assert indexes.aspects_by_object_logical_id["natal:planet:sun"] == ["self-1"]


def test_unknown_item_kind_is_preserved(snapshot_payload) -> None:
    snapshot_payload["wheel"]["rings"][2]["items"].append(
        {
            "id": "fortune",
            "kind": "arabicPart",
            "lon": 100.0,
            "objectType": "part",
            "objectId": "fortune",
        }
    )
    indexes = build_indexes(snapshot_payload)

    assert indexes.item("planets", "fortune").kind == "arabicPart"
    assert indexes.items_by_logical_id["natal:part:fortune"] == [ItemRef("planets", "fortune")]


def test_build_is_deterministic(aspect_payload) -> None:
    first = build_indexes(aspect_payload)
    second = build_indexes(load_snapshot(aspect_payload))

    assert first.to_payload() == second.to_payload()


def test_payload_uses_wire_keys(aspect_payload) -> None:
    payload = build_indexes(aspect_payload).to_payload()

    assert set(payload) == {
        "ringById",
        "itemByRingAndId",
        "aspectSetById",
        "aspectById",
        "itemsByLogicalId",
        "aspectsByObjectLogicalId",
    }
    assert payload["itemsByLogicalId"]["natal:planet:sun"] == [
        {"ringId": "planets", "itemId": "planet-sun"}
    ]
    assert payload["aspectById"]["aspect-1"]["from"]["objectId"] == "sun"
    assert payload["itemByRingAndId"]["planets"]["planet-sun"]["planetId"] == "sun"


@pytest.mark.parametrize("rings", [None, "signs", {"id": "signs"}])
def test_non_sequence_rings_raise(snapshot_payload, rings) -> None:
    snapshot_payload["wheel"]["rings"] = rings

    with pytest.raises(SnapshotStructureError) as excinfo:
        build_indexes(snapshot_payload)
    assert any("rings" in message for message in excinfo.value.errors)


def test_missing_wheel_raises() -> None:
    with pytest.raises(SnapshotStructureError):
        build_indexes({"layers": {}})
