from __future__ import annotations

import logging
from dataclasses import replace
from operator import attrgetter
from typing import Iterable

from asphalt_core.model import PoiType, PointOfInterest, default_poi_name
from asphalt_viewer.model.validation import ValidationError, id_counter, require_float

logger = logging.getLogger(__name__)


def _coerce_type(value: object) -> PoiType:
    try:
        return PoiType.coerce(value)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


class PoiStore:
    """Points of interest ordered by station."""

    def __init__(self, pois: Iterable[PointOfInterest] = ()) -> None:
        self._pois = sorted(pois, key=attrgetter("station"))
        self._ids = id_counter(self._pois)

    @property
    def pois(self) -> list[PointOfInterest]:
        return list(self._pois)

    def __len__(self) -> int:
        return len(self._pois)

    def get(self, poi_id: int) -> PointOfInterest:
        for poi in self._pois:
            if poi.id == poi_id:
                return poi
        raise KeyError(poi_id)

    def add(
        self, station: object, name: object = "", poi_type: object = PoiType.START
    ) -> PointOfInterest:
        position = require_float(station, "Station")
        kind = _coerce_type(poi_type)
        label = "" if name is None else str(name).strip()
        poi = PointOfInterest(
            id=next(self._ids),
            station=position,
            name=label or default_poi_name(kind),
            type=kind,
        )
        self._pois.append(poi)
        self._pois.sort(key=attrgetter("station"))
        logger.debug("Added point of interest %s %r at %.3f m", poi.id, poi.name, position)
        return poi

    def update(self, poi_id: int, field: str, value: object) -> PointOfInterest:
        current = self.get(poi_id)
        if field == "station":
            updated = replace(current, station=require_float(value, "Station"))
        elif field == "name":
            updated = replace(current, name=str(value))
        elif field == "type":
            updated = replace(current, type=_coerce_type(value))
        else:
            raise ValueError(f"Unknown point of interest field: {field}")
        self._pois = [updated if p.id == poi_id else p for p in self._pois]
        self._pois.sort(key=attrgetter("station"))
        return updated

    def delete(self, poi_id: int) -> PointOfInterest:
        removed = self.get(poi_id)
        self._pois = [p for p in self._pois if p.id != poi_id]
        logger.debug("Deleted point of interest %s", poi_id)
        return removed
