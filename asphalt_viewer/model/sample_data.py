"""Sample survey loaded by ``--sample``."""

from __future__ import annotations

from asphalt_core.model import Layer, Station
from asphalt_core.units import FORM_UNITS

SAMPLE_STATIONS = (
    Station(id=1, station=0.0, width=2.5),
    Station(id=2, station=10.5, width=3.2),
    Station(id=3, station=25.0, width=2.8),
    Station(id=4, station=40.3, width=4.1),
    Station(id=5, station=55.7, width=3.5),
)


def _layer(layer_id: int, name: str, recipe: str, density_g_cm3: float, thickness_cm: float) -> Layer:
    return Layer(
        id=layer_id,
        name=name,
        recipe=recipe,
        density=FORM_UNITS.density_in(density_g_cm3),
        thickness=FORM_UNITS.thickness_in(thickness_cm),
    )


SAMPLE_LAYERS = (
    _layer(1, "Asphalt surface course", "AC 11 D S", 2.3, 4),
    _layer(2, "Asphalt base course", "AC 22 T S", 2.4, 8),
    _layer(3, "Crushed stone base", "STS 0/32", 2.2, 20),
)
