from __future__ import annotations

import logging
import math
import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path

from asphalt_core.activation import DEFAULT_SECTION_ACTIVE

logger = logging.getLogger(__name__)

EDITOR_SECTION = "editor"
PROJECT_SECTION = "project"

DEFAULT_ZOOM = 0.5
MIN_ZOOM = 0.2
MAX_ZOOM = 1.5
WIDTH_DRAG_SENSITIVITY = 0.02


@dataclass
class EditorSettings:
    default_section_active: bool = DEFAULT_SECTION_ACTIVE
    lock_drag_axis: bool = False
    width_drag_sensitivity: float = WIDTH_DRAG_SENSITIVITY
    zoom_level: float = DEFAULT_ZOOM


class AppSettings:
    """INI-backed editor preferences."""

    DEFAULT_PATH = Path.home() / ".bpo_asphalt.ini"
    ENV_VAR = "BPO_ASPHALT_SETTINGS"

    def __init__(self, path: Path | None = None) -> None:
        if path is None:
            env_path = os.getenv(self.ENV_VAR)
            path = Path(env_path) if env_path else self.DEFAULT_PATH
        self._path = Path(path)
        self._config = ConfigParser()
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def editor(self) -> EditorSettings:
        defaults = EditorSettings()
        zoom = self._get_float(EDITOR_SECTION, "zoom_level", defaults.zoom_level)
        sensitivity = self._get_float(
            EDITOR_SECTION, "width_drag_sensitivity", defaults.width_drag_sensitivity
        )
        if sensitivity <= 0:
            sensitivity = defaults.width_drag_sensitivity
        return EditorSettings(
            default_section_active=self._get_bool(
                EDITOR_SECTION, "default_section_active", defaults.default_section_active
            ),
            lock_drag_axis=self._get_bool(
                EDITOR_SECTION, "lock_drag_axis", defaults.lock_drag_axis
            ),
            width_drag_sensitivity=sensitivity,
            zoom_level=min(max(zoom, MIN_ZOOM), MAX_ZOOM),
        )

    def set_zoom_level(self, zoom: float) -> None:
        self._set(EDITOR_SECTION, "zoom_level", f"{zoom:.2f}")

    def last_project_name(self) -> str:
        return self._config.get(PROJECT_SECTION, "last_name", fallback="")

    def set_last_project_name(self, name: str) -> None:
        self._set(PROJECT_SECTION, "last_name", name)

    def store_path(self) -> Path | None:
        raw = self._config.get(PROJECT_SECTION, "store_path", fallback="").strip()
        return Path(raw).expanduser() if raw else None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _load(self) -> None:
        if self._path.exists():
            self._config.read(self._path, encoding="utf-8")

    def _save(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                self._config.write(handle)
        except OSError:
            logger.warning("Could not write settings to %s", self._path, exc_info=True)

    def _set(self, section: str, option: str, value: str) -> None:
        if not self._config.has_section(section):
            self._config.add_section(section)
        self._config[section][option] = value
        self._save()

    def _get_bool(self, section: str, option: str, fallback: bool) -> bool:
        try:
            return self._config.getboolean(section, option, fallback=fallback)
        except ValueError:
            logger.warning("Invalid boolean for %s.%s; using %s", section, option, fallback)
            return fallback

    def _get_float(self, section: str, option: str, fallback: float) -> float:
        try:
            value = self._config.getfloat(section, option, fallback=fallback)
        except ValueError:
            logger.warning("Invalid number for %s.%s; using %s", section, option, fallback)
            return fallback
        if not math.isfinite(value):
            logger.warning("Non-finite number for %s.%s; using %s", section, option, fallback)
            return fallback
        return value
