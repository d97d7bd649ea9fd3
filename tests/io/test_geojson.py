# tests/io/test_geojson.py
import pytest

from street_quiz.domain.entities.geography import LonLat
from street_quiz.io.geojson import parse_geometry, parse_overpass_elements

COORDS = [[[-58.41, -34.60], [-58.40, -34.60]], [[-58.38, -34.61], [-58.37, -34.61], [-58.36, -34.62]]]


@pytest.mark.parametrize(
    "entry",
    [
        {
            "type": "Feature",
            "properties": {"name": "Avenida de Mayo"},
            "geometry": {"type": "MultiLineString", "coordinates": COORDS},
        },
        {"type": "MultiLineString", "coordinates": COORDS},
        COORDS,
    ],
    ids=["feature", "multilinestring", "bare"],
)
def test_supported_shapes_normalize_to_the_same_geometry(entry):
    g = parse_geometry(entry)
    assert g is not None
    assert len(g.lines) == 2
    assert g.lines[0].points[0] == LonLat(-58.41, -34.60)
    assert len(g.lines[1].points) == 3


def test_linestring_is_a_single_line():
    g = parse_geometry({"type": "LineString", "coordinates": COORDS[0]})
    assert len(g.lines) == 1


def test_short_lines_are_dropped():
    g = parse_geometry([[[-58.41, -34.60]], COORDS[0]])
    assert len(g.lines) == 1


@pytest.mark.parametrize(
    "entry",
    [
        None,
        "Avenida de Mayo",
        {"type": "Point", "coordinates": [-58.4, -34.6]},
        {"type": "MultiLineString"},
        {"type": "Feature", "geometry": None},
        [[[-58.41, -34.60]]],
        [[["x", "y"], [1, 2]]],
        [],
    ],
)
def test_malformed_entries_are_absent(entry):
    assert parse_geometry(entry) is None


def test_overpass_ways_only_and_lon_lat_order():
    elements = [
        {"type": "node", "id": 1, "lat": -34.6, "lon": -58.4},
        {"type": "way", "id": 2, "tags": {"name": "Calle Florida"}},  # no geometry
        {
            "type": "way",
            "id": 3,
            "geometry": [{"lat": -34.60, "lon": -58.41}, {"lat": -34.61, "lon": -58.40}],
        },
    ]
    g = parse_overpass_elements(elements)
    assert len(g.lines) == 1
    assert g.lines[0].points == (LonLat(-58.41, -34.60), LonLat(-58.40, -34.61))


def test_overpass_without_ways_is_none():
    assert parse_overpass_elements([{"type": "node", "lat": 0, "lon": 0}]) is None
    assert parse_overpass_elements([]) is None
