"""Unit conventions for layer materials.

Internally every layer is stored in SI units: density in kg/m^3 and
thickness in m, which makes the installed weight (kg/m^2) the plain product
of the two. Values typed into the layer form use g/cm^3 and cm and are
converted once, at the input boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LayerUnits:
    """Factors converting input values to the internal SI convention."""

    density_label: str
    thickness_label: str
    density_to_si: float
    thickness_to_si: float

    def density_in(self, value: float) -> float:
        return value * self.density_to_si

    def thickness_in(self, value: float) -> float:
        return value * self.thickness_to_si

    def density_out(self, value: float) -> float:
        return value / self.density_to_si

    def thickness_out(self, value: float) -> float:
        return value / self.thickness_to_si


SI_UNITS = LayerUnits(
    density_label="kg/m³",
    thickness_label="m",
    density_to_si=1.0,
    thickness_to_si=1.0,
)

FORM_UNITS = LayerUnits(
    density_label="g/cm³",
    thickness_label="cm",
    density_to_si=1000.0,
    thickness_to_si=0.01,
)

INSTALLED_WEIGHT_LABEL = "kg/m²"
KG_PER_TONNE = 1000.0


def installed_weight(density: float, thickness: float) -> float:
    """Mass per area (kg/m^2) for an SI density and thickness."""

    return density * thickness


def parse_float(value: object) -> float | None:
    """Parse user input to a float, ``None`` when missing or not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    text = str(value).strip().replace(",", ".")
    if not text or text == "–":
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
