from __future__ import annotations

import pytest

from pymapsync.exceptions import MissingSourceError
from pymapsync.models.geometry import Coordinate, Feature
from pymapsync.models.resources import MapIcon, ResourceName
from pymapsync.registry import FeatureSourceRegistry


def _pt(lon: float, lat: float) -> Coordinate:
    return Coordinate(longitude=lon, latitude=lat)


def test_ensure_resource_is_idempotent(surface) -> None:
    registry = FeatureSourceRegistry(surface)

    registry.ensure_resource("pickup", MapIcon.PICKUP)
    registry.ensure_resource("pickup", MapIcon.PICKUP)

    assert list(surface.sources) == ["pickup"]
    assert list(surface.layers) == ["pickup"]
    assert surface.calls == [("add_source", "pickup"), ("add_layer", "pickup")]


def test_ensure_resource_symbol_layout(surface) -> None:
    registry = FeatureSourceRegistry(surface, icon_min_zoom=12)

    registry.ensure_resource(ResourceName.CHARGERS)

    layer = surface.layers["chargers"]
    assert layer["type"] == "symbol"
    assert layer["source"] == "chargers"
    assert layer["minzoom"] == 12
    assert layer["layout"] == {
        "icon-image": "charger",
        "icon-allow-overlap": True,
        "icon-ignore-placement": True,
    }
    assert surface.sources["chargers"].data == {"type": "FeatureCollection", "features": []}


def test_set_data_replaces_collection(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.ensure_resource(ResourceName.VEHICLES)

    registry.set_data("vehicles", [Feature(id="a", coordinate=_pt(1, 1)), Feature(id="b", coordinate=_pt(2, 2))])
    registry.set_data("vehicles", [Feature(id="c", coordinate=_pt(3, 3))])

    data = surface.sources["vehicles"].data
    assert data == {
        "type": "FeatureCollection",
        "features": [
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": [3.0, 3.0]}, "properties": {"id": "c"}}
        ],
    }


def test_set_data_on_missing_source_raises(surface) -> None:
    registry = FeatureSourceRegistry(surface)

    with pytest.raises(MissingSourceError) as exc_info:
        registry.set_data("vehicles", [])

    assert exc_info.value.name == "vehicles"


def test_remove_pair_removes_layer_before_source(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.ensure_resource(ResourceName.LOCATION)
    surface.calls.clear()

    registry.remove_pair(["location", "route"])

    assert surface.calls == [("remove_layer", "location"), ("remove_source", "location")]
    assert registry.names() == []


def test_remove_pair_skips_partial_pair(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    surface.add_source("route", {"type": "geojson", "data": {}})
    surface.calls.clear()

    registry.remove_pair(["route"])

    assert surface.calls == []
    assert "route" in surface.sources


def test_add_route_keeps_first_geometry(surface) -> None:
    registry = FeatureSourceRegistry(surface)

    registry.add_route([_pt(1, 1), _pt(2, 2)])
    registry.add_route([_pt(5, 5), _pt(6, 6), _pt(7, 7)])

    data = surface.sources["route"].data
    assert data["geometry"] == {"type": "LineString", "coordinates": [[1.0, 1.0], [2.0, 2.0]]}
    layer = surface.layers["route"]
    assert layer["type"] == "line"
    assert layer["layout"] == {"line-join": "round", "line-cap": "round"}
    assert layer["paint"] == {"line-color": "#FF6F4D", "line-width": 5}


def test_clear_route(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.add_route([_pt(1, 1), _pt(2, 2)])

    registry.clear_route()
    registry.clear_route()

    assert "route" not in surface.sources
    assert "route" not in surface.layers


def test_terminal_pair_created_together(surface) -> None:
    registry = FeatureSourceRegistry(surface)

    registry.add_terminal_pair()
    registry.add_terminal_pair()

    assert sorted(surface.sources) == ["dropoff", "pickup"]
    assert sorted(surface.layers) == ["dropoff", "pickup"]
    assert registry.terminals_present()


def test_terminal_pair_not_created_when_one_exists(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.ensure_resource(ResourceName.PICKUP)

    registry.add_terminal_pair()

    assert list(surface.sources) == ["pickup"]


def test_clear_terminals_noop_when_only_pickup_exists(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.ensure_resource(ResourceName.PICKUP)
    surface.calls.clear()

    registry.clear_terminal_pair()

    assert surface.calls == []
    assert "pickup" in surface.sources and "pickup" in surface.layers


def test_clear_terminals_removes_both(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.add_terminal_pair()

    registry.clear_terminal_pair()

    assert surface.sources == {}
    assert surface.layers == {}


def test_set_point_writes_single_feature(surface) -> None:
    registry = FeatureSourceRegistry(surface)
    registry.ensure_resource(ResourceName.LOCATION)

    registry.set_point("location", _pt(-122, 37))

    features = surface.sources["location"].data["features"]
    assert len(features) == 1
    assert features[0]["geometry"]["coordinates"] == [-122.0, 37.0]
