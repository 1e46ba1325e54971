import pytest

from asphalt_core.geometry import StationScale, poi_positions, stack_offsets
from asphalt_core.model import Layer, PointOfInterest, Station


def test_scale_maps_range_onto_drawable_width():
    stations = [
        Station(id=1, station=0.0, width=2.0),
        Station(id=2, station=25.0, width=2.0),
    ]
    scale = StationScale.from_stations(stations)

    assert scale.drawable_width == 700.0
    assert scale.scale_x(0.0) == 50.0
    assert scale.scale_x(25.0) == 750.0
    assert scale.station_delta(140.0) == pytest.approx(5.0)


def test_empty_store_uses_unit_range():
    scale = StationScale.from_stations([])

    assert (scale.min_station, scale.max_station) == (0.0, 1.0)
    assert scale.scale_x(0.0) == 50.0


def test_single_station_does_not_divide_by_zero():
    scale = StationScale.from_stations([Station(id=1, station=12.0, width=2.0)])

    assert scale.station_range == 1.0
    assert scale.scale_x(12.0) == 50.0


def test_stack_offsets_put_first_layer_on_top():
    layers = [
        Layer(id=1, name="Top", recipe="A", density=2300.0, thickness=0.04),
        Layer(id=2, name="Middle", recipe="B", density=2400.0, thickness=0.08),
        Layer(id=3, name="Bottom", recipe="C", density=2200.0, thickness=0.2),
    ]

    assert stack_offsets(layers) == pytest.approx([0.28, 0.2, 0.0])
    assert stack_offsets([]) == []


def test_poi_positions_use_scale():
    scale = StationScale(0.0, 70.0)
    poi = PointOfInterest(id=1, station=35.0, name="Gate")

    assert poi_positions([poi], scale) == [(poi, 400.0)]
