"""Shared chart snapshot payloads for the chartwheel test-suite."""

from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

_MOCK_SNAPSHOT: Dict[str, Any] = {
    "chartInstance": {
        "id": "instance-1",
        "chartDefinitionId": "chart-1",
        "title": "Test Chart",
        "description": "Test Description",
        "ownerUserId": "user-1",
    },
    "settings": {
        "zodiacType": "tropical",
        "houseSystem": "placidus",
        "includeObjects": ["sun", "moon", "mercury", "venus", "mars"],
    },
    "coordinateSystem": {
        "angleUnit": "degrees",
        "angleRange": [0, 360],
        "direction": "cw",
        "zeroPoint": {"type": "zodiac", "signStart": "aries", "offsetDegrees": 0},
    },
    "layers": {
        "natal": {
            "id": "natal",
            "label": "Natal",
            "kind": "natal",
            "subjectId": "subject-1",
            "dateTime": "1990-01-01T12:00:00Z",
            "positions": {
                "planets": {
                    "sun": {"lon": 280.5, "lat": 1.2, "speedLon": 0.95, "retrograde": False},
                    "moon": {"lon": 40.25, "lat": -2.3, "speedLon": 12.3, "retrograde": False},
                },
            },
        }
    },
    "aspects": {"sets": {}},
    "wheel": {
        "id": "wheel-1",
        "name": "Test Wheel",
        "description": "Test Wheel Description",
        "radius": {"inner": 0, "outer": 100},
        "rings": [
            {
                "id": "signs",
                "type": "signs",
                "label": "Signs",
                "order": 0,
                "radius": {"inner": 0, "outer": 30},
                "dataSource": {"kind": "static_zodiac"},
                "items": [
                    {
                        "id": "sign-aries",
                        "kind": "sign",
                        "index": 0,
                        "label": "Aries",
                        "glyph": "♈",
                        "startLon": 0,
                        "endLon": 30,
                    },
                    {
                        "id": "sign-taurus",
                        "kind": "sign",
                        "index": 1,
                        "label": "Taurus",
                        "glyph": "♉",
                        "startLon": 30,
                        "endLon": 60,
                    },
                ],
            },
            {
                "id": "houses",
                "type": "houses",
                "label": "Houses",
                "order": 1,
                "radius": {"inner": 30, "outer": 60},
                "dataSource": {"kind": "layer_houses", "layerId": "natal"},
                "items": [
                    {"id": "house-1", "kind": "houseCusp", "houseIndex": 1, "lon": 15.0},
                    {"id": "house-2", "kind": "houseCusp", "houseIndex": 2, "lon": 45.0},
                ],
            },
            {
                "id": "planets",
                "type": "planets",
                "label": "Planets",
                "order": 2,
                "radius": {"inner": 60, "outer": 100},
                "dataSource": {"kind": "layer_planets", "layerId": "natal"},
                "items": [
                    {
                        "id": "planet-sun",
                        "kind": "planet",
                        "planetId": "sun",
                        "layerId": "natal",
                        "lon": 280.5,
                        "lat": 1.2,
                        "speedLon": 0.95,
                        "retrograde": False,
                        "signIndex": 9,
                        "signDegree": 10.5,
                        "houseIndex": 10,
                    },
                    {
                        "id": "planet-moon",
                        "kind": "planet",
                        "planetId": "moon",
                        "layerId": "natal",
                        "lon": 40.25,
                        "lat": -2.3,
                        "speedLon": 12.3,
                        "retrograde": False,
                        "signIndex": 1,
                        "signDegree": 10.25,
                        "houseIndex": 1,
                    },
                ],
            },
        ],
    },
}

_TRINE_SET: Dict[str, Any] = {
    "id": "natal-aspects",
    "label": "Natal Aspects",
    "kind": "intra_layer",
    "layerIds": ["natal"],
    "pairs": [
        {
            "id": "aspect-1",
            "from": {"layerId": "natal", "objectType": "planet", "objectId": "sun"},
            "to": {"layerId": "natal", "objectType": "planet", "objectId": "moon"},
            "aspect": {
                "type": "trine",
                "exactAngle": 120.0,
                "orb": 0.25,
                "isApplying": False,
                "isExact": False,
            },
        }
    ],
}


def make_snapshot_payload() -> Dict[str, Any]:
    """Return a fresh copy of the three-ring natal snapshot."""

    return copy.deepcopy(_MOCK_SNAPSHOT)


def make_aspect_payload() -> Dict[str, Any]:
    payload = make_snapshot_payload()
    payload["aspects"] = {"sets": {"natal-aspects": copy.deepcopy(_TRINE_SET)}}
    return payload


def make_minimal_payload() -> Dict[str, Any]:
    return {
        "chartInstance": {"id": "instance-minimal", "title": "Minimal Chart"},
        "settings": {},
        "layers": {},
        "aspects": {"sets": {}},
        "wheel": {
            "id": "wheel-minimal",
            "name": "Minimal Wheel",
            "radius": {"inner": 0, "outer": 100},
            "rings": [],
        },
    }


@pytest.fixture
def snapshot_payload() -> Dict[str, Any]:
    return make_snapshot_payload()


@pytest.fixture
def aspect_payload() -> Dict[str, Any]:
    return make_aspect_payload()


@pytest.fixture
def minimal_payload() -> Dict[str, Any]:
    return make_minimal_payload()
