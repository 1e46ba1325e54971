from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from asphalt_core.units import installed_weight


@dataclass(frozen=True)
class Station:
    """Cross-section measured at ``station`` metres along the route."""

    id: int
    station: float
    width: float

    def with_station(self, value: float) -> "Station":
        return replace(self, station=value)

    def with_width(self, value: float) -> "Station":
        return replace(self, width=value)


@dataclass(frozen=True)
class Layer:
    """Material course in SI units (kg/m^3, m).

    ``installed_weight`` (kg/m^2) is derived in ``__post_init__`` and cannot be
    passed in, so ``dataclasses.replace`` on density or thickness always
    recomputes it.
    """

    id: int
    name: str
    recipe: str
    density: float
    thickness: float
    installed_weight: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "installed_weight", installed_weight(self.density, self.thickness)
        )


class PoiType(Enum):
    START = "start"
    END = "end"
    ENTRANCE = "entrance"
    TURNAROUND = "turnaround"
    CLEANING_AREA = "cleaning_area"
    HIGH_VOLTAGE = "high_voltage"
    BRIDGE = "bridge"
    CUSTOM = "custom"

    @property
    def symbol(self) -> str:
        return POI_SYMBOLS[self]

    @property
    def label(self) -> str:
        return POI_LABELS[self]

    @classmethod
    def coerce(cls, value: "PoiType | str | None") -> "PoiType":
        if value is None or value == "":
            return cls.START
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text in (member.value, member.name, member.label):
                return member
        raise ValueError(f"Unknown point of interest type: {value!r}")


POI_SYMBOLS = {
    PoiType.START: "🚀",
    PoiType.END: "🏁",
    PoiType.ENTRANCE: "🚪",
    PoiType.TURNAROUND: "🔄",
    PoiType.CLEANING_AREA: "🧹",
    PoiType.HIGH_VOLTAGE: "⚡",
    PoiType.BRIDGE: "🌉",
    PoiType.CUSTOM: "📍",
}

POI_LABELS = {
    PoiType.START: "Start",
    PoiType.END: "End",
    PoiType.ENTRANCE: "Entrance",
    PoiType.TURNAROUND: "Turnaround",
    PoiType.CLEANING_AREA: "Cleaning area",
    PoiType.HIGH_VOLTAGE: "High voltage",
    PoiType.BRIDGE: "Bridge",
    PoiType.CUSTOM: "Custom",
}


def default_poi_name(poi_type: PoiType) -> str:
    return f"{poi_type.symbol} {poi_type.label}"


@dataclass(frozen=True)
class PointOfInterest:
    id: int
    station: float
    name: str
    type: PoiType = PoiType.START
