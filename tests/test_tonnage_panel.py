import os
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

try:  # pragma: no cover - allows tests to be skipped in headless CI without PyQt5
    from PyQt5 import QtWidgets
    from asphalt_viewer.model.measurement_document import MeasurementDocument
    from asphalt_viewer.model.sample_data import SAMPLE_STATIONS
    from asphalt_viewer.ui.tonnage_panel import TonnagePanel
except ImportError:  # pragma: no cover
    pytest.skip("PyQt5 not available", allow_module_level=True)


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


def test_panel_tracks_layers_and_activation(qapp):
    document = MeasurementDocument(SAMPLE_STATIONS[:3])
    panel = TonnagePanel(document)

    assert panel.layer_texts() == []
    assert panel.total_text() == "Total: 0.00 t"

    layer = document.add_layer("Surface", "AC 11", 2.3, 4)
    (text,) = panel.layer_texts()
    assert text.startswith("Surface\nArea: 73.4")
    assert text.endswith("| Tonnage: 6.76 t")
    assert panel.total_text() == "Total: 6.76 t"

    document.toggle_section(layer.id, "2-3")
    assert panel.total_text() == "Total: 2.75 t"


def test_panel_updates_on_station_change(qapp):
    document = MeasurementDocument(SAMPLE_STATIONS[:2])
    document.add_layer("Surface", "AC 11", 2.3, 4)
    panel = TonnagePanel(document)
    before = panel.total_text()

    document.add_station(20, 3.0)

    assert panel.total_text() != before
    assert len(panel.layer_texts()) == 1
