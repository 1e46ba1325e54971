from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from asphalt_core.geometry import StationScale
from asphalt_viewer.services.app_settings import WIDTH_DRAG_SENSITIVITY

if TYPE_CHECKING:
    from asphalt_viewer.model.measurement_document import MeasurementDocument

logger = logging.getLogger(__name__)

MIN_STATION = 0.0
MIN_WIDTH = 0.1


class DragAxis(Enum):
    POSITION = "position"
    WIDTH = "width"


@dataclass(frozen=True)
class DragState:
    station_id: int
    start_x: float
    start_y: float
    start_station: float
    start_width: float
    scale: StationScale


class ProfileDragController:
    """Pointer state machine for dragging station bars in the profile.

    ``Idle`` when ``state`` is None, ``Dragging`` otherwise. A horizontal
    gesture moves the station along the route, a vertical one changes its
    width; upward drags widen. Each move writes straight through to the
    document, which re-sorts the stations, so the drag follows the station
    id rather than its index. Nothing is rolled back on release.
    """

    def __init__(
        self,
        document: "MeasurementDocument",
        *,
        lock_axis: bool = False,
        width_sensitivity: float = WIDTH_DRAG_SENSITIVITY,
    ) -> None:
        self.document = document
        self.lock_axis = lock_axis
        self.width_sensitivity = width_sensitivity
        self.state: DragState | None = None
        self._locked_axis: DragAxis | None = None

    @property
    def is_dragging(self) -> bool:
        return self.state is not None

    @property
    def dragged_station_id(self) -> int | None:
        return None if self.state is None else self.state.station_id

    def press(
        self,
        station_id: int,
        x: float,
        y: float,
        scale: StationScale,
        *,
        on_action_control: bool = False,
    ) -> bool:
        """Start dragging ``station_id``; action controls keep the machine idle."""

        if on_action_control:
            return False
        station = self.document.station(station_id)
        self.state = DragState(
            station_id=station_id,
            start_x=x,
            start_y=y,
            start_station=station.station,
            start_width=station.width,
            scale=scale,
        )
        self._locked_axis = None
        logger.debug("Drag started on station %s", station_id)
        return True

    def move(self, x: float, y: float) -> DragAxis | None:
        state = self.state
        if state is None:
            return None
        dx = x - state.start_x
        dy = state.start_y - y
        axis = self._classify(dx, dy)
        if axis is None:
            return None

        if axis is DragAxis.POSITION:
            value = max(MIN_STATION, state.start_station + state.scale.station_delta(dx))
            self.document.update_station(state.station_id, "station", value)
        else:
            value = max(MIN_WIDTH, state.start_width + dy * self.width_sensitivity)
            self.document.update_station(state.station_id, "width", value)
        return axis

    def release(self) -> None:
        if self.state is not None:
            logger.debug("Drag finished on station %s", self.state.station_id)
        self.state = None
        self._locked_axis = None

    def _classify(self, dx: float, dy: float) -> DragAxis | None:
        if self._locked_axis is not None:
            return self._locked_axis
        axis = DragAxis.POSITION if abs(dx) > abs(dy) else DragAxis.WIDTH
        if self.lock_axis:
            if dx == 0 and dy == 0:
                return None
            self._locked_axis = axis
        return axis
