"""Material quantities from stations, layers and section activation.

Areas use the trapezoidal rule between consecutive cross-sections: the
distance along the route times the mean of the two full widths. A layer's
mass is its active area times the installed weight (kg/m^2).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from asphalt_core.activation import SectionActivation, iter_section_keys
from asphalt_core.model import Layer, Station
from asphalt_core.units import KG_PER_TONNE


def section_area(a: Station, b: Station) -> float:
    return abs(b.station - a.station) * (a.width + b.width) / 2.0


def section_areas(stations: Sequence[Station]) -> np.ndarray:
    """Areas of every consecutive pair, in station order."""

    if len(stations) < 2:
        return np.zeros(0, dtype=float)
    positions = np.array([s.station for s in stations], dtype=float)
    widths = np.array([s.width for s in stations], dtype=float)
    return np.abs(np.diff(positions)) * (widths[:-1] + widths[1:]) / 2.0


def _active_mask(
    layer: Layer, stations: Sequence[Station], activation: SectionActivation
) -> np.ndarray:
    return np.array(
        [activation.get(layer.id, key) for key in iter_section_keys(stations)],
        dtype=bool,
    )


def layer_area(
    layer: Layer, stations: Sequence[Station], activation: SectionActivation
) -> float:
    areas = section_areas(stations)
    if areas.size == 0:
        return 0.0
    return float(areas[_active_mask(layer, stations, activation)].sum())


def layer_tonnage(
    layer: Layer, stations: Sequence[Station], activation: SectionActivation
) -> float:
    return layer_area(layer, stations, activation) * layer.installed_weight / KG_PER_TONNE


def project_total(
    layers: Sequence[Layer], stations: Sequence[Station], activation: SectionActivation
) -> float:
    return sum(layer_tonnage(layer, stations, activation) for layer in layers)


@dataclass(frozen=True)
class LayerMaterial:
    layer: Layer
    area: float
    active_sections: int
    total_sections: int

    @property
    def material_kg(self) -> float:
        return self.area * self.layer.installed_weight

    @property
    def tonnage(self) -> float:
        return self.material_kg / KG_PER_TONNE


@dataclass(frozen=True)
class TonnageReport:
    layers: tuple[LayerMaterial, ...]

    @property
    def total_tonnage(self) -> float:
        return sum(item.tonnage for item in self.layers)

    @property
    def total_kg(self) -> float:
        return sum(item.material_kg for item in self.layers)


def compute_report(
    layers: Sequence[Layer], stations: Sequence[Station], activation: SectionActivation
) -> TonnageReport:
    areas = section_areas(stations)
    materials = []
    for layer in layers:
        if areas.size:
            mask = _active_mask(layer, stations, activation)
            area = float(areas[mask].sum())
            active = int(mask.sum())
        else:
            area = 0.0
            active = 0
        materials.append(
            LayerMaterial(
                layer=layer,
                area=area,
                active_sections=active,
                total_sections=int(areas.size),
            )
        )
    return TonnageReport(layers=tuple(materials))
