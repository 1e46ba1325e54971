"""Pixel layout of the station profile, independent of painting.

Everything is expressed in surface coordinates (800 x 400); the widget maps
its own size onto that surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from asphalt_core.activation import SectionActivation, section_key
from asphalt_core.geometry import (
    SURFACE_HEIGHT,
    StationScale,
    poi_positions,
    stack_offsets,
)
from asphalt_core.model import Layer, PointOfInterest, Station

CENTER_Y = 170.0
WIDTH_PX_PER_M = 20.0
BAR_HALF_WIDTH = 3.0
BAR_HIT_SLOP = 3.0
ACTION_OFFSET = 15.0
ACTION_RADIUS = 12.0
LAYER_BAND_TOP = SURFACE_HEIGHT - 80.0
LAYER_BAND_HEIGHT = 50.0
POI_LABEL_Y = 16.0


@dataclass(frozen=True)
class StationBar:
    station_id: int
    x: float
    top: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        reach = BAR_HALF_WIDTH + BAR_HIT_SLOP
        return abs(x - self.x) <= reach and self.top <= y <= self.bottom

    def hover_contains(self, x: float, y: float) -> bool:
        """Bar plus the space its action buttons occupy above it."""

        reach = ACTION_OFFSET + ACTION_RADIUS
        return abs(x - self.x) <= reach and self.top - reach <= y <= self.bottom


@dataclass(frozen=True)
class ActionButton:
    station_id: int
    kind: Literal["delete", "edit"]
    cx: float
    cy: float
    radius: float = ACTION_RADIUS

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.cx
        dy = y - self.cy
        return dx * dx + dy * dy <= self.radius * self.radius


@dataclass(frozen=True)
class LayerBand:
    layer_id: int
    layer_index: int
    key: str
    left: float
    right: float
    top: float
    bottom: float
    active: bool

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class PoiMarker:
    poi_id: int
    x: float
    symbol: str
    name: str


@dataclass(frozen=True)
class ProfileHit:
    kind: Literal["action", "bar", "band"]
    station_id: int | None = None
    action: str | None = None
    layer_id: int | None = None
    key: str | None = None


@dataclass(frozen=True)
class ProfileLayout:
    scale: StationScale
    center_y: float
    bars: tuple[StationBar, ...]
    actions: tuple[ActionButton, ...]
    bands: tuple[LayerBand, ...]
    markers: tuple[PoiMarker, ...]

    def hit_test(self, x: float, y: float) -> ProfileHit | None:
        for button in self.actions:
            if button.contains(x, y):
                return ProfileHit("action", station_id=button.station_id, action=button.kind)
        for bar in self.bars:
            if bar.contains(x, y):
                return ProfileHit("bar", station_id=bar.station_id)
        for band in self.bands:
            if band.contains(x, y):
                return ProfileHit("band", layer_id=band.layer_id, key=band.key)
        return None

    def hovered_station(
        self, x: float, y: float, current: int | None = None
    ) -> int | None:
        """Station whose action buttons should show for a pointer at (x, y).

        The current station stays hovered while the pointer is inside its
        hover zone, so the buttons do not vanish on the way to them.
        """

        if current is not None:
            for bar in self.bars:
                if bar.station_id == current and bar.hover_contains(x, y):
                    return current
        hit = self.hit_test(x, y)
        if hit is not None and hit.kind in ("bar", "action"):
            return hit.station_id
        return None


def half_width_px(width: float, zoom: float) -> float:
    return width * WIDTH_PX_PER_M * zoom


def _layer_bands(
    stations: Sequence[Station],
    layers: Sequence[Layer],
    activation: SectionActivation,
    scale: StationScale,
) -> list[LayerBand]:
    total = sum(layer.thickness for layer in layers)
    if not layers or len(stations) < 2 or total <= 0:
        return []
    px_per_m = LAYER_BAND_HEIGHT / total
    bottom_of_stack = LAYER_BAND_TOP + LAYER_BAND_HEIGHT
    bands = []
    for index, (layer, offset) in enumerate(zip(layers, stack_offsets(layers))):
        bottom = bottom_of_stack - offset * px_per_m
        top = bottom - layer.thickness * px_per_m
        for a, b in zip(stations, stations[1:]):
            key = section_key(a, b)
            bands.append(
                LayerBand(
                    layer_id=layer.id,
                    layer_index=index,
                    key=key,
                    left=scale.scale_x(a.station),
                    right=scale.scale_x(b.station),
                    top=top,
                    bottom=bottom,
                    active=activation.get(layer.id, key),
                )
            )
    return bands


def build_profile_layout(
    stations: Sequence[Station],
    layers: Sequence[Layer],
    pois: Sequence[PointOfInterest],
    activation: SectionActivation,
    *,
    zoom: float = 1.0,
    hovered_station_id: int | None = None,
    show_measurement: bool = True,
    show_layers: bool = True,
    show_pois: bool = True,
) -> ProfileLayout:
    scale = StationScale.from_stations(stations)

    bars: list[StationBar] = []
    actions: list[ActionButton] = []
    if show_measurement:
        for station in stations:
            x = scale.scale_x(station.station)
            half = half_width_px(station.width, zoom)
            top = CENTER_Y - half
            bars.append(StationBar(station.id, x, top, CENTER_Y + half))
            if station.id == hovered_station_id:
                actions.append(
                    ActionButton(station.id, "delete", x + ACTION_OFFSET, top - ACTION_OFFSET)
                )
                actions.append(
                    ActionButton(station.id, "edit", x - ACTION_OFFSET, top - ACTION_OFFSET)
                )

    bands = _layer_bands(stations, layers, activation, scale) if show_layers else []

    markers: list[PoiMarker] = []
    if show_pois:
        for poi, x in poi_positions(pois, scale):
            markers.append(PoiMarker(poi.id, x, poi.type.symbol, poi.name))

    return ProfileLayout(
        scale=scale,
        center_y=CENTER_Y,
        bars=tuple(bars),
        actions=tuple(actions),
        bands=tuple(bands),
        markers=tuple(markers),
    )
