from __future__ import annotations

from datetime import datetime, timezone

from asphalt_core.model import Layer, PointOfInterest, Station
from asphalt_viewer.model.measurement_document import MeasurementDocument

DEFAULT_PROJECT_NAME = "New measurement project"


def _station_payload(station: Station) -> dict[str, object]:
    return {"id": station.id, "station": station.station, "width": station.width}


def _layer_payload(layer: Layer) -> dict[str, object]:
    return {
        "id": layer.id,
        "name": layer.name,
        "recipe": layer.recipe,
        "density": layer.density,
        "thickness": layer.thickness,
        "installedWeight": layer.installed_weight,
    }


def _poi_payload(poi: PointOfInterest) -> dict[str, object]:
    return {
        "id": poi.id,
        "station": poi.station,
        "name": poi.name,
        "type": poi.type.value,
    }


def build_project_snapshot(
    name: str,
    document: MeasurementDocument,
    *,
    saved_at: datetime | None = None,
) -> dict[str, object]:
    """JSON-ready save payload; layer values are in SI units."""

    timestamp = saved_at or datetime.now(timezone.utc)
    return {
        "name": name.strip() or DEFAULT_PROJECT_NAME,
        "stations": [_station_payload(s) for s in document.stations],
        "layers": [_layer_payload(layer) for layer in document.layers],
        "sectionActivation": document.activation.to_dict(),
        "pointsOfInterest": [_poi_payload(p) for p in document.pois],
        "savedAt": timestamp.isoformat(),
    }
