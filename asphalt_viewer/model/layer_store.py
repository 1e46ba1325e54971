from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from asphalt_core.model import Layer
from asphalt_core.units import FORM_UNITS, LayerUnits
from asphalt_viewer.model.validation import id_counter, require_positive, require_text

logger = logging.getLogger(__name__)


class LayerStore:
    """Material layers in stacking order (first layer on top).

    Density and thickness arrive in ``units`` (the layer form's g/cm³ and cm
    by default) and are stored in SI; the installed weight is always derived
    from the stored pair.
    """

    def __init__(self, layers: Iterable[Layer] = ()) -> None:
        self._layers = list(layers)
        self._ids = id_counter(self._layers)

    @property
    def layers(self) -> list[Layer]:
        return list(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def get(self, layer_id: int) -> Layer:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        raise KeyError(layer_id)

    def add(
        self,
        name: object,
        recipe: object,
        density: object,
        thickness: object,
        *,
        units: LayerUnits = FORM_UNITS,
    ) -> Layer:
        name_text = require_text(name, "Name")
        recipe_text = require_text(recipe, "Recipe")
        density_si = units.density_in(require_positive(density, "Density"))
        thickness_si = units.thickness_in(require_positive(thickness, "Thickness"))
        layer = Layer(
            id=next(self._ids),
            name=name_text,
            recipe=recipe_text,
            density=density_si,
            thickness=thickness_si,
        )
        self._layers.append(layer)
        logger.debug(
            "Added layer %s %r (%.2f kg/m²)", layer.id, layer.name, layer.installed_weight
        )
        return layer

    def update(
        self,
        layer_id: int,
        field: str,
        value: object,
        *,
        units: LayerUnits = FORM_UNITS,
    ) -> Layer:
        current = self.get(layer_id)
        if field == "name":
            updated = replace(current, name=require_text(value, "Name"))
        elif field == "recipe":
            updated = replace(current, recipe=require_text(value, "Recipe"))
        elif field == "density":
            updated = replace(
                current, density=units.density_in(require_positive(value, "Density"))
            )
        elif field == "thickness":
            updated = replace(
                current,
                thickness=units.thickness_in(require_positive(value, "Thickness")),
            )
        else:
            raise ValueError(f"Unknown layer field: {field}")
        self._layers = [updated if layer.id == layer_id else layer for layer in self._layers]
        return updated

    def delete(self, layer_id: int) -> Layer:
        removed = self.get(layer_id)
        self._layers = [layer for layer in self._layers if layer.id != layer_id]
        logger.debug("Deleted layer %s", layer_id)
        return removed
