from __future__ import annotations

import logging
from typing import Iterable

from PyQt5 import QtCore

from asphalt_core.activation import DEFAULT_SECTION_ACTIVE, SectionActivation, iter_section_keys
from asphalt_core.geometry import SURFACE_MARGIN, SURFACE_WIDTH, StationScale
from asphalt_core.model import Layer, PointOfInterest, Station
from asphalt_core.tonnage import TonnageReport, compute_report
from asphalt_core.units import FORM_UNITS, LayerUnits
from asphalt_viewer.model.layer_store import LayerStore
from asphalt_viewer.model.poi_store import PoiStore
from asphalt_viewer.model.station_store import StationStore

logger = logging.getLogger(__name__)


class MeasurementDocument(QtCore.QObject):
    """Observable owner of the station, layer and POI stores.

    Every station or layer mutation reconciles the section activation matrix
    before any change signal is emitted, so listeners that recompute the
    tonnage always see an entry for each (layer, section) pair.
    """

    stations_changed = QtCore.pyqtSignal()
    layers_changed = QtCore.pyqtSignal()
    pois_changed = QtCore.pyqtSignal()
    activation_changed = QtCore.pyqtSignal()

    def __init__(
        self,
        stations: Iterable[Station] = (),
        layers: Iterable[Layer] = (),
        pois: Iterable[PointOfInterest] = (),
        *,
        default_active: bool = DEFAULT_SECTION_ACTIVE,
        parent: QtCore.QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._stations = StationStore(stations)
        self._layers = LayerStore(layers)
        self._pois = PoiStore(pois)
        self._activation = SectionActivation(default_active)
        self._reconcile()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def stations(self) -> list[Station]:
        return self._stations.stations

    @property
    def layers(self) -> list[Layer]:
        return self._layers.layers

    @property
    def pois(self) -> list[PointOfInterest]:
        return self._pois.pois

    @property
    def activation(self) -> SectionActivation:
        return self._activation

    def station(self, station_id: int) -> Station:
        return self._stations.get(station_id)

    def layer(self, layer_id: int) -> Layer:
        return self._layers.get(layer_id)

    def section_keys(self) -> list[str]:
        return list(iter_section_keys(self._stations.stations))

    def is_section_active(self, layer_id: int, key: str) -> bool:
        return self._activation.get(layer_id, key)

    def scale(
        self, surface_width: float = SURFACE_WIDTH, margin: float = SURFACE_MARGIN
    ) -> StationScale:
        return StationScale.from_stations(self._stations.stations, surface_width, margin)

    def tonnage_report(self) -> TonnageReport:
        return compute_report(self.layers, self.stations, self._activation)

    # ------------------------------------------------------------------
    # Stations
    # ------------------------------------------------------------------
    def add_station(self, station: object, width: object) -> Station:
        created = self._stations.add(station, width)
        self._after_station_change()
        return created

    def update_station(self, station_id: int, field: str, value: object) -> Station:
        updated = self._stations.update(station_id, field, value)
        self._after_station_change()
        return updated

    def delete_station(self, station_id: int) -> Station:
        removed = self._stations.delete(station_id)
        self._after_station_change()
        return removed

    def duplicate_station_after(self, station_id: int) -> Station:
        created = self._stations.duplicate_after(station_id)
        self._after_station_change()
        return created

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------
    def add_layer(
        self,
        name: object,
        recipe: object,
        density: object,
        thickness: object,
        *,
        units: LayerUnits = FORM_UNITS,
    ) -> Layer:
        created = self._layers.add(name, recipe, density, thickness, units=units)
        self._after_layer_change()
        return created

    def update_layer(
        self, layer_id: int, field: str, value: object, *, units: LayerUnits = FORM_UNITS
    ) -> Layer:
        updated = self._layers.update(layer_id, field, value, units=units)
        self._after_layer_change()
        return updated

    def delete_layer(self, layer_id: int) -> Layer:
        removed = self._layers.delete(layer_id)
        self._after_layer_change()
        return removed

    # ------------------------------------------------------------------
    # Points of interest
    # ------------------------------------------------------------------
    def add_poi(self, station: object, name: object = "", poi_type: object = None) -> PointOfInterest:
        created = self._pois.add(station, name, poi_type)
        self.pois_changed.emit()
        return created

    def update_poi(self, poi_id: int, field: str, value: object) -> PointOfInterest:
        updated = self._pois.update(poi_id, field, value)
        self.pois_changed.emit()
        return updated

    def delete_poi(self, poi_id: int) -> PointOfInterest:
        removed = self._pois.delete(poi_id)
        self.pois_changed.emit()
        return removed

    # ------------------------------------------------------------------
    # Section activation
    # ------------------------------------------------------------------
    def toggle_section(self, layer_id: int, key: str) -> bool:
        active = self._activation.toggle(layer_id, key)
        logger.debug("Section %s of layer %s active=%s", key, layer_id, active)
        self.activation_changed.emit()
        return active

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _reconcile(self) -> bool:
        return self._activation.reconcile(self._stations.stations, self._layers.layers)

    def _after_station_change(self) -> None:
        added = self._reconcile()
        self.stations_changed.emit()
        if added:
            self.activation_changed.emit()

    def _after_layer_change(self) -> None:
        added = self._reconcile()
        self.layers_changed.emit()
        if added:
            self.activation_changed.emit()
