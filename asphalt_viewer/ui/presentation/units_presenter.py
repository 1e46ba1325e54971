from __future__ import annotations

from asphalt_core.model import Layer
from asphalt_core.units import FORM_UNITS, INSTALLED_WEIGHT_LABEL, LayerUnits


def format_meters(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "–"
    return f"{value:.{decimals}f} m"


def format_area(value: float) -> str:
    return f"{value:.2f} m²"


def format_tonnes(value: float) -> str:
    return f"{value:.2f} t"


def format_kg(value: float) -> str:
    return f"{value:.0f} kg"


def format_installed_weight(value: float) -> str:
    return f"{value:.2f} {INSTALLED_WEIGHT_LABEL}"


def layer_density_display(layer: Layer, units: LayerUnits = FORM_UNITS) -> str:
    return f"{units.density_out(layer.density):g}"


def layer_thickness_display(layer: Layer, units: LayerUnits = FORM_UNITS) -> str:
    return f"{units.thickness_out(layer.thickness):g}"
