from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from asphalt_core.model import Layer, PointOfInterest, Station

SURFACE_WIDTH = 800.0
SURFACE_HEIGHT = 400.0
SURFACE_MARGIN = 50.0


@dataclass(frozen=True)
class StationScale:
    """Linear map from station metres to x pixels on the drawing surface.

    Built from the stations present at the time of the call; rebuild after
    every store change.
    """

    min_station: float
    max_station: float
    surface_width: float = SURFACE_WIDTH
    margin: float = SURFACE_MARGIN

    @classmethod
    def from_stations(
        cls,
        stations: Sequence[Station],
        surface_width: float = SURFACE_WIDTH,
        margin: float = SURFACE_MARGIN,
    ) -> "StationScale":
        if not stations:
            return cls(0.0, 1.0, surface_width, margin)
        values = [s.station for s in stations]
        return cls(min(values), max(values), surface_width, margin)

    @property
    def station_range(self) -> float:
        span = self.max_station - self.min_station
        return span if span != 0 else 1.0

    @property
    def drawable_width(self) -> float:
        return self.surface_width - 2 * self.margin

    def scale_x(self, station: float) -> float:
        return self.margin + (station - self.min_station) / self.station_range * self.drawable_width

    def station_delta(self, pixel_dx: float) -> float:
        return pixel_dx / self.drawable_width * self.station_range


def stack_offsets(layers: Sequence[Layer]) -> list[float]:
    """Cumulative thickness (m) of the layers below each layer.

    Layers stack in insertion order with the first one on top, so the last
    layer sits at offset 0.
    """

    offsets = [0.0] * len(layers)
    below = 0.0
    for idx in range(len(layers) - 1, -1, -1):
        offsets[idx] = below
        below += layers[idx].thickness
    return offsets


def poi_positions(
    pois: Sequence[PointOfInterest], scale: StationScale
) -> list[tuple[PointOfInterest, float]]:
    return [(poi, scale.scale_x(poi.station)) for poi in pois]
