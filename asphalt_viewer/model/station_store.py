from __future__ import annotations

import logging
from operator import attrgetter
from typing import Iterable

from asphalt_core.model import Station
from asphalt_viewer.model.validation import (
    ValidationError,
    id_counter,
    require_float,
    require_positive,
)

logger = logging.getLogger(__name__)

DUPLICATE_OFFSET_M = 5.0


class StationStore:
    """Stations ordered by position along the route.

    The list is re-sorted (stable, by ``station``) after every mutation, so a
    position edit may move an entry to a different index. Callers track
    stations by id.
    """

    FIELDS = ("station", "width")

    def __init__(self, stations: Iterable[Station] = ()) -> None:
        self._stations = sorted(stations, key=attrgetter("station"))
        self._ids = id_counter(self._stations)

    @property
    def stations(self) -> list[Station]:
        return list(self._stations)

    def __len__(self) -> int:
        return len(self._stations)

    def get(self, station_id: int) -> Station:
        for station in self._stations:
            if station.id == station_id:
                return station
        raise KeyError(station_id)

    def add(self, station: object, width: object) -> Station:
        position = require_float(station, "Station")
        width_value = require_positive(width, "Width")
        created = Station(id=next(self._ids), station=position, width=width_value)
        self._stations.append(created)
        self._resort()
        logger.debug("Added station %s at %.3f m (width %.3f m)", created.id, position, width_value)
        return created

    def update(self, station_id: int, field: str, value: object) -> Station:
        if field not in self.FIELDS:
            raise ValueError(f"Unknown station field: {field}")
        current = self.get(station_id)
        if field == "station":
            updated = current.with_station(require_float(value, "Station"))
        else:
            updated = current.with_width(require_positive(value, "Width"))
        self._stations = [updated if s.id == station_id else s for s in self._stations]
        self._resort()
        return updated

    def delete(self, station_id: int) -> Station:
        removed = self.get(station_id)
        self._stations = [s for s in self._stations if s.id != station_id]
        logger.debug("Deleted station %s", station_id)
        return removed

    def duplicate_after(self, station_id: int) -> Station:
        source = self.get(station_id)
        return self.add(source.station + DUPLICATE_OFFSET_M, source.width)

    def _resort(self) -> None:
        self._stations.sort(key=attrgetter("station"))


__all__ = ["StationStore", "ValidationError", "DUPLICATE_OFFSET_M"]
