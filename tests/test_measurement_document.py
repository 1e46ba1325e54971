import pytest

pytest.importorskip("PyQt5")

from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.model.sample_data import SAMPLE_LAYERS, SAMPLE_STATIONS
from asphalt_viewer.model.validation import ValidationError


def _record(signal):
    calls = []
    signal.connect(lambda: calls.append(True))
    return calls


def _assert_complete(document):
    for layer in document.layers:
        for key in document.section_keys():
            assert document.activation.has_entry(layer.id, key)


def test_sample_document_is_reconciled_on_construction():
    document = MeasurementDocument(SAMPLE_STATIONS, SAMPLE_LAYERS)

    assert len(document.section_keys()) == 4
    _assert_complete(document)


def test_station_changes_reconcile_before_signals():
    document = MeasurementDocument()
    document.add_layer("Surface", "AC 11", 2.3, 4)
    seen = []
    document.stations_changed.connect(
        lambda: seen.append(all(
            document.activation.has_entry(layer.id, key)
            for layer in document.layers
            for key in document.section_keys()
        ))
    )
    activation_calls = _record(document.activation_changed)

    document.add_station(0, 2.5)
    document.add_station(10, 3.0)
    document.duplicate_station_after(document.stations[0].id)

    assert seen == [True, True, True]
    assert len(activation_calls) == 2
    _assert_complete(document)


def test_layer_add_reconciles_existing_sections():
    document = MeasurementDocument()
    document.add_station(0, 2.5)
    document.add_station(10, 3.0)

    layer = document.add_layer("Base", "AC 22", 2.4, 8)

    assert document.is_section_active(layer.id, document.section_keys()[0])


def test_default_active_can_be_switched_off():
    document = MeasurementDocument(SAMPLE_STATIONS, SAMPLE_LAYERS, default_active=False)

    assert document.tonnage_report().total_tonnage == 0


def test_toggle_section_updates_report():
    document = MeasurementDocument(SAMPLE_STATIONS[:3])
    layer = document.add_layer("Surface", "AC 11", 2.3, 4)
    calls = _record(document.activation_changed)

    document.toggle_section(layer.id, "2-3")

    assert calls == [True]
    assert round(document.tonnage_report().total_tonnage, 3) == 2.753


def test_rejected_input_emits_nothing():
    document = MeasurementDocument()
    calls = _record(document.stations_changed)

    with pytest.raises(ValidationError):
        document.add_station("", 2.0)

    assert calls == []
    assert document.stations == []


def test_poi_mutations_emit_pois_changed():
    document = MeasurementDocument()
    calls = _record(document.pois_changed)

    poi = document.add_poi(5, "", "bridge")
    document.update_poi(poi.id, "name", "Old bridge")
    document.delete_poi(poi.id)

    assert len(calls) == 3
    assert document.pois == []


def test_delete_layer_emits_layers_changed():
    document = MeasurementDocument(SAMPLE_STATIONS, SAMPLE_LAYERS)
    calls = _record(document.layers_changed)

    document.delete_layer(SAMPLE_LAYERS[0].id)

    assert calls == [True]
    assert [layer.id for layer in document.layers] == [2, 3]
