import folium

from map_utils import create_map, click_event
from models import Coordinate, PointAdded

ROUTE = [Coordinate(41.88674, -87.63139), Coordinate(41.88254, -87.61512), Coordinate(41.93251, -87.63172)]


def _children_of_type(m, kind):
    return [child for child in m._children.values() if isinstance(child, kind)]


def test_create_map_draws_route_and_markers():
    m = create_map([41.888, -87.626], ROUTE, 6000)
    assert len(_children_of_type(m, folium.PolyLine)) == 1
    markers = _children_of_type(m, folium.Marker)
    assert len(markers) == 3
    assert not any(marker.options.get("draggable") for marker in markers)


def test_create_map_without_route():
    m = create_map([41.888, -87.626])
    assert _children_of_type(m, folium.PolyLine) == []
    assert _children_of_type(m, folium.Marker) == []


def test_click_event_adds_point_once():
    state = {"last_clicked": {"lat": 41.9, "lng": -87.6}}
    event, handled = click_event(state, None)
    assert event == PointAdded(Coordinate(41.9, -87.6))
    assert handled == (41.9, -87.6)

    event, handled_again = click_event(state, handled)
    assert event is None
    assert handled_again == handled


def test_click_event_without_click():
    assert click_event(None, None) == (None, None)
    assert click_event({"last_clicked": None}, (1, 2)) == (None, (1, 2))


def test_click_outside_world_is_ignored():
    event, handled = click_event({"last_clicked": {"lat": 10, "lng": 190}}, None)
    assert event is None
    assert handled == (10, 190)


def test_marker_popup_points_to_move_form():
    html = create_map([41.888, -87.626], ROUTE[:1]).get_root().render()
    assert "Waypoint #1" in html
    assert "Flytta waypoint" in html
