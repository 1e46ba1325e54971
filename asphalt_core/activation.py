"""Per-layer, per-section activation flags."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Sequence

from asphalt_core.model import Layer, Station

logger = logging.getLogger(__name__)

# New sections count towards the tonnage unless switched off.
DEFAULT_SECTION_ACTIVE = True


def section_key(a: Station, b: Station) -> str:
    return f"{a.id}-{b.id}"


def iter_section_keys(stations: Sequence[Station]) -> Iterator[str]:
    for idx in range(len(stations) - 1):
        yield section_key(stations[idx], stations[idx + 1])


class SectionActivation:
    """Sparse ``layer_id -> {section_key -> bool}`` mapping.

    Entries for deleted stations or layers are left in place; every lookup
    goes through the keys of the current station order, so they are never
    read.
    """

    def __init__(self, default_active: bool = DEFAULT_SECTION_ACTIVE) -> None:
        self.default_active = bool(default_active)
        self._flags: dict[int, dict[str, bool]] = {}

    def reconcile(self, stations: Sequence[Station], layers: Iterable[Layer]) -> bool:
        """Add missing entries for the current layers and station pairs."""

        keys = list(iter_section_keys(stations))
        added = 0
        for layer in layers:
            flags = self._flags.setdefault(layer.id, {})
            for key in keys:
                if key not in flags:
                    flags[key] = self.default_active
                    added += 1
        if added:
            logger.debug("Reconciled %d activation entries", added)
        return added > 0

    def toggle(self, layer_id: int, key: str) -> bool:
        flags = self._flags.setdefault(layer_id, {})
        flags[key] = not flags.get(key, False)
        return flags[key]

    def get(self, layer_id: int, key: str) -> bool:
        return bool(self._flags.get(layer_id, {}).get(key, False))

    def has_entry(self, layer_id: int, key: str) -> bool:
        return key in self._flags.get(layer_id, {})

    def to_dict(self) -> dict[str, dict[str, bool]]:
        return {
            str(layer_id): dict(flags) for layer_id, flags in self._flags.items()
        }
