import pytest

pytest.importorskip("PyQt5")

from asphalt_core.geometry import StationScale
from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.ui.controllers.drag_controller import (
    MIN_WIDTH,
    WIDTH_DRAG_SENSITIVITY,
    DragAxis,
    ProfileDragController,
)


@pytest.fixture
def document():
    doc = MeasurementDocument()
    doc.add_station(0, 2.5)
    doc.add_station(10, 3.0)
    doc.add_station(25, 2.8)
    return doc


def _station_at(document, position):
    return next(s for s in document.stations if s.station == position)


def test_horizontal_drag_moves_station_only(document):
    scale = document.scale()
    middle = _station_at(document, 10.0)
    controller = ProfileDragController(document)

    assert controller.press(middle.id, 400.0, 170.0, scale) is True
    axis = controller.move(540.0, 170.0)
    controller.release()

    moved = document.station(middle.id)
    assert axis is DragAxis.POSITION
    assert moved.station == pytest.approx(15.0)
    assert moved.width == middle.width


def test_vertical_drag_changes_width_only(document):
    middle = _station_at(document, 10.0)
    controller = ProfileDragController(document)

    controller.press(middle.id, 400.0, 170.0, document.scale())
    axis = controller.move(400.0, 120.0)

    updated = document.station(middle.id)
    assert axis is DragAxis.WIDTH
    assert updated.width == pytest.approx(3.0 + 50 * WIDTH_DRAG_SENSITIVITY)
    assert updated.station == 10.0


def test_width_and_station_are_clamped(document):
    first = _station_at(document, 0.0)
    controller = ProfileDragController(document)

    controller.press(first.id, 50.0, 170.0, document.scale())
    controller.move(50.0, 1000.0)
    assert document.station(first.id).width == MIN_WIDTH

    controller.move(-500.0, 170.0)
    assert document.station(first.id).station == 0.0


def test_drag_follows_station_id_across_resort(document):
    first = _station_at(document, 0.0)
    controller = ProfileDragController(document)

    controller.press(first.id, 50.0, 170.0, document.scale())
    controller.move(50.0 + 28.0 * 17.5, 170.0)

    assert document.station(first.id).station == pytest.approx(17.5)
    assert document.stations[1].id == first.id
    controller.move(50.0 + 28.0 * 20.0, 170.0)
    assert document.station(first.id).station == pytest.approx(20.0)


def test_axis_reclassified_on_each_move_by_default(document):
    middle = _station_at(document, 10.0)
    controller = ProfileDragController(document)

    controller.press(middle.id, 400.0, 170.0, document.scale())
    assert controller.move(420.0, 170.0) is DragAxis.POSITION
    assert controller.move(420.0, 100.0) is DragAxis.WIDTH


def test_lock_axis_keeps_first_direction(document):
    middle = _station_at(document, 10.0)
    controller = ProfileDragController(document, lock_axis=True)

    controller.press(middle.id, 400.0, 170.0, document.scale())
    assert controller.move(400.0, 170.0) is None
    assert controller.move(428.0, 170.0) is DragAxis.POSITION
    assert controller.move(428.0, 100.0) is DragAxis.POSITION
    assert document.station(middle.id).width == 3.0


def test_press_on_action_control_stays_idle(document):
    controller = ProfileDragController(document)

    assert controller.press(1, 0.0, 0.0, document.scale(), on_action_control=True) is False
    assert controller.is_dragging is False
    assert controller.move(100.0, 100.0) is None


def test_release_returns_to_idle_and_keeps_changes(document):
    middle = _station_at(document, 10.0)
    controller = ProfileDragController(document)

    controller.press(middle.id, 400.0, 170.0, StationScale(0.0, 25.0))
    controller.move(540.0, 170.0)
    controller.release()

    assert controller.is_dragging is False
    assert controller.dragged_station_id is None
    assert document.station(middle.id).station == pytest.approx(15.0)
    assert controller.move(600.0, 170.0) is None
