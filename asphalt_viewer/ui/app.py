from __future__ import annotations

from typing import List

from PyQt5 import QtWidgets

from asphalt_viewer.ui.main_window import MeasurementWindow


class AsphaltApp(QtWidgets.QApplication):
    """Thin application wrapper for the measurement editor."""

    def __init__(self, argv: List[str]):
        super().__init__(argv)
        self.setApplicationName("BPO Asphalt")
        self.setQuitOnLastWindowClosed(True)
        self.window: MeasurementWindow | None = None
