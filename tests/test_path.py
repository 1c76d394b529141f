import pytest

from trackframe.config import TrackframeConfig
from trackframe.geometry import GeoPoint
from trackframe.models import Track
from trackframe.path import (
    PathSource,
    loop_around,
    path_between,
    path_from_coordinates,
    path_from_route,
    resolve_path,
    synthesize_path,
)

START = {"type": "Point", "coordinates": [9.0, 45.0]}
END = {"type": "Point", "coordinates": [9.2, 45.1]}


def test_route_is_used_verbatim():
    track = {
        "route": [{"lat": 41.9, "lng": 12.5}, {"lat": 41.91, "lng": 12.51}],
        "coordinates": [[0.0, 0.0], [1.0, 1.0]],
        "startLocation": START,
        "endLocation": END,
    }
    resolved = resolve_path(track)
    assert resolved.source == PathSource.ROUTE
    assert resolved.points == [GeoPoint(41.9, 12.5), GeoPoint(41.91, 12.51)]


def test_route_order_is_preserved():
    route = [{"lat": 45.0 + i * 0.01, "lng": 9.0 - i * 0.01} for i in range(10)]
    path = synthesize_path({"route": route[::-1]})
    assert path == [GeoPoint(p["lat"], p["lng"]) for p in route[::-1]]


def test_route_is_not_axis_swapped():
    path = synthesize_path({"route": [{"lat": 10.0, "lng": 100.0}, {"lat": 11.0, "lng": 101.0}]})
    assert path[0] == GeoPoint(latitude=10.0, longitude=100.0)


def test_single_entry_route_falls_through():
    track = {"route": [{"lat": 41.9, "lng": 12.5}], "startLocation": START}
    resolved = resolve_path(track)
    assert resolved.source == PathSource.START_LOOP


def test_route_with_unusable_entries():
    route = [{"lat": 41.9, "lng": 12.5}, {"lat": None, "lng": 12.6}, {"lat": 42.0, "lng": 12.7}]
    assert path_from_route(route) == [GeoPoint(41.9, 12.5), GeoPoint(42.0, 12.7)]

    mostly_bad = [{"lat": 41.9, "lng": 12.5}, {"foo": 1}, "garbage"]
    assert path_from_route(mostly_bad) is None


def test_route_that_is_not_a_list():
    assert path_from_route({"lat": 41.9, "lng": 12.5}) is None
    assert path_from_route("route") is None
    assert path_from_route(None) is None


def test_coordinates_pairs_are_swapped():
    track = {"coordinates": [[12.5, 41.9], [12.51, 41.91], [12.52, 41.92]]}
    resolved = resolve_path(track)
    assert resolved.source == PathSource.COORDINATES
    assert resolved.points == [
        GeoPoint(41.9, 12.5),
        GeoPoint(41.91, 12.51),
        GeoPoint(41.92, 12.52),
    ]


def test_coordinates_mixed_shapes():
    coordinates = [
        [12.5, 41.9],
        {"lat": 41.91, "lng": 12.51},
        {"type": "Point", "coordinates": [12.52, 41.92]},
        GeoPoint(41.93, 12.53),
    ]
    assert path_from_coordinates(coordinates) == [
        GeoPoint(41.9, 12.5),
        GeoPoint(41.91, 12.51),
        GeoPoint(41.92, 12.52),
        GeoPoint(41.93, 12.53),
    ]


def test_coordinates_drop_unresolvable_entries():
    coordinates = [[12.5, 41.9], None, "x", [1.0], ["a", "b"]]
    assert path_from_coordinates(coordinates) == [GeoPoint(41.9, 12.5)]


def test_coordinates_short_arrays_are_not_read_as_objects():
    coordinates = [[12.5, 41.9], [], [1.0], (2.0,), [12.51, 41.91]]
    assert path_from_coordinates(coordinates) == [
        GeoPoint(41.9, 12.5),
        GeoPoint(41.91, 12.51),
    ]


def test_coordinates_with_nothing_resolvable_fall_through():
    track = {"coordinates": [None, "x"], "startLocation": START, "endLocation": END}
    assert resolve_path(track).source == PathSource.ANCHORS


def test_single_coordinate_is_not_a_trajectory():
    assert path_from_coordinates([[12.5, 41.9]]) is None


def test_anchor_path():
    path = synthesize_path({"startLocation": START, "endLocation": END})
    assert len(path) == 3
    assert path[0] == GeoPoint(45.0, 9.0)
    assert path[2] == GeoPoint(45.1, 9.2)
    assert path[1].latitude == pytest.approx(45.05 + 0.002)
    assert path[1].longitude == pytest.approx(9.1)


def test_location_is_used_when_start_location_is_missing():
    resolved = resolve_path({"location": {"lat": 45.0, "lng": 9.0}, "endLocation": END})
    assert resolved.source == PathSource.ANCHORS
    assert resolved.points[0] == GeoPoint(45.0, 9.0)


def test_start_location_takes_precedence_over_location():
    track = {"startLocation": START, "location": {"lat": 10.0, "lng": 10.0}}
    assert synthesize_path(track)[0] == GeoPoint(45.0, 9.0)


def test_start_loop():
    path = synthesize_path({"startLocation": START})
    r = 0.001
    assert len(path) == 6
    assert path[0] == path[-1] == GeoPoint(45.0, 9.0)
    assert path[1] == GeoPoint(45.0 + r, 9.0)
    assert path[2] == GeoPoint(45.0, 9.0 + r)
    assert path[3] == GeoPoint(45.0 - r, 9.0)
    assert path[4] == GeoPoint(45.0, 9.0 - r)


def test_only_end_location_gives_empty_path():
    resolved = resolve_path({"endLocation": END})
    assert resolved.points == []
    assert resolved.source == PathSource.NONE


@pytest.mark.parametrize("track", [{}, None, "track", 12, {"city": "Bologna"}, Track()])
def test_nothing_to_resolve(track):
    assert synthesize_path(track) == []


def test_synthesized_points_stay_in_range():
    path = loop_around(GeoPoint(90.0, 180.0))
    assert all(-90 <= p.latitude <= 90 and -180 <= p.longitude <= 180 for p in path)

    bend = path_between(GeoPoint(89.9995, 0.0), GeoPoint(90.0, 0.0))[1]
    assert bend.latitude == 90.0


def test_custom_offsets():
    config = TrackframeConfig(midpoint_offset=0.0, loop_radius=0.01)
    start, end = GeoPoint(0.0, 0.0), GeoPoint(1.0, 1.0)
    assert path_between(start, end, config)[1] == GeoPoint(0.5, 0.5)
    assert loop_around(start, config)[1] == GeoPoint(0.01, 0.0)


def test_accepts_track_objects():
    track = Track(start_location=START, end_location=END)
    assert synthesize_path(track) == synthesize_path(
        {"startLocation": START, "endLocation": END}
    )


def test_deterministic():
    track = {"startLocation": START, "endLocation": END}
    assert synthesize_path(track) == synthesize_path(track)


def test_source_is_synthesized():
    assert PathSource.ANCHORS.is_synthesized
    assert PathSource.START_LOOP.is_synthesized
    assert not PathSource.ROUTE.is_synthesized
    assert str(PathSource.COORDINATES) == "coordinates"
