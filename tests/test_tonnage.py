import pytest

from asphalt_core.activation import SectionActivation
from asphalt_core.model import Layer, Station
from asphalt_core.tonnage import (
    compute_report,
    layer_area,
    layer_tonnage,
    project_total,
    section_area,
    section_areas,
)


@pytest.fixture
def stations():
    return [
        Station(id=1, station=0.0, width=2.5),
        Station(id=2, station=10.5, width=3.2),
        Station(id=3, station=25.0, width=2.8),
    ]


@pytest.fixture
def surface_layer():
    # 2.3 g/cm3 at 4 cm
    return Layer(id=1, name="Surface", recipe="AC 11 D S", density=2300.0, thickness=0.04)


def _activation(stations, layers):
    activation = SectionActivation()
    activation.reconcile(stations, layers)
    return activation


def test_section_area_is_trapezoid():
    a = Station(id=1, station=0.0, width=2.5)
    b = Station(id=2, station=10.5, width=3.2)

    assert section_area(a, b) == pytest.approx(29.925)
    assert section_area(b, a) == pytest.approx(29.925)


def test_coincident_stations_have_zero_area():
    a = Station(id=1, station=4.0, width=2.0)
    b = Station(id=2, station=4.0, width=3.0)

    assert section_area(a, b) == 0.0


def test_section_areas_are_non_negative(stations):
    areas = section_areas(stations)

    assert areas.tolist() == pytest.approx([29.925, 43.5])
    assert (areas >= 0).all()


def test_all_sections_active(stations, surface_layer):
    activation = _activation(stations, [surface_layer])

    assert surface_layer.installed_weight == pytest.approx(92.0)
    assert layer_area(surface_layer, stations, activation) == pytest.approx(73.425)
    assert layer_tonnage(surface_layer, stations, activation) == pytest.approx(6.7551)
    assert round(layer_tonnage(surface_layer, stations, activation), 3) == 6.755


def test_inactive_section_is_excluded(stations, surface_layer):
    activation = _activation(stations, [surface_layer])
    activation.toggle(surface_layer.id, "2-3")

    assert layer_area(surface_layer, stations, activation) == pytest.approx(29.925)
    assert round(layer_tonnage(surface_layer, stations, activation), 3) == 2.753


def test_project_total_is_sum_of_layers(stations, surface_layer):
    base = Layer(id=2, name="Base", recipe="AC 22", density=2400.0, thickness=0.08)
    layers = [surface_layer, base]
    activation = _activation(stations, layers)
    activation.toggle(base.id, "1-2")

    expected = sum(layer_tonnage(layer, stations, activation) for layer in layers)

    assert project_total(layers, stations, activation) == expected
    assert compute_report(layers, stations, activation).total_tonnage == pytest.approx(expected)


def test_empty_inputs_give_zero(surface_layer):
    activation = SectionActivation()

    assert project_total([], [], activation) == 0
    single = [Station(id=1, station=0.0, width=3.0)]
    assert layer_area(surface_layer, single, activation) == 0.0
    assert layer_tonnage(surface_layer, single, activation) == 0.0


def test_report_counts_active_sections(stations, surface_layer):
    activation = _activation(stations, [surface_layer])
    activation.toggle(surface_layer.id, "1-2")

    report = compute_report([surface_layer], stations, activation)
    material = report.layers[0]

    assert material.active_sections == 1
    assert material.total_sections == 2
    assert material.area == pytest.approx(43.5)
    assert report.total_kg == pytest.approx(43.5 * 92.0)
