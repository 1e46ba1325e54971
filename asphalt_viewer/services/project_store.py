from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_KEY = "measurement-project"


class ProjectStore:
    """Local JSON key-value file holding the saved project snapshot."""

    DEFAULT_PATH = Path.home() / ".bpo_asphalt_store.json"

    def __init__(self, path: Path | None = None) -> None:
        self._path = Path(path) if path is not None else self.DEFAULT_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable store %s", self._path)
            return {}
        if not isinstance(payload, dict):
            return {}
        return payload

    def save_project(self, snapshot: dict[str, object]) -> None:
        payload = self.load()
        payload[PROJECT_KEY] = snapshot
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        logger.info("Saved project %r to %s", snapshot.get("name"), self._path)
