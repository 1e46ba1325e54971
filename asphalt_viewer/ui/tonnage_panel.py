from __future__ import annotations

from PyQt5 import QtCore, QtWidgets

from asphalt_core.tonnage import TonnageReport
from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.ui.presentation.units_presenter import (
    format_area,
    format_installed_weight,
    format_kg,
    format_tonnes,
)
from asphalt_viewer.ui.profile_widget import LAYER_COLORS


class TonnagePanel(QtWidgets.QFrame):
    """Per-layer area and tonnage plus the project total."""

    def __init__(
        self, document: MeasurementDocument, parent: QtWidgets.QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.setFrameShape(QtWidgets.QFrame.StyledPanel)
        self._document = document

        self._layers_row = QtWidgets.QHBoxLayout()
        self._total_label = QtWidgets.QLabel()
        self._total_label.setStyleSheet(
            "background: #dcfce7; color: #166534; font-weight: bold; padding: 6px;"
        )

        title = QtWidgets.QLabel("Tonnage overview")
        title.setStyleSheet("font-weight: bold; font-size: 14px;")

        layout = QtWidgets.QHBoxLayout()
        layout.addWidget(title)
        layout.addStretch()
        layout.addLayout(self._layers_row)
        layout.addWidget(self._total_label)
        self.setLayout(layout)

        for signal in (
            document.stations_changed,
            document.layers_changed,
            document.activation_changed,
        ):
            signal.connect(self.refresh)
        self.refresh()

    def refresh(self) -> None:
        report = self._document.tonnage_report()
        self._rebuild_layer_labels(report)
        self._total_label.setText(f"Total: {format_tonnes(report.total_tonnage)}")
        self._total_label.setToolTip(format_kg(report.total_kg))

    def layer_texts(self) -> list[str]:
        texts = []
        for idx in range(self._layers_row.count()):
            widget = self._layers_row.itemAt(idx).widget()
            if isinstance(widget, QtWidgets.QLabel):
                texts.append(widget.text())
        return texts

    def total_text(self) -> str:
        return self._total_label.text()

    def _rebuild_layer_labels(self, report: TonnageReport) -> None:
        while self._layers_row.count():
            item = self._layers_row.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        for index, material in enumerate(report.layers):
            color = LAYER_COLORS[index % len(LAYER_COLORS)]
            label = QtWidgets.QLabel(
                f"{material.layer.name}\n"
                f"Area: {format_area(material.area)} | "
                f"Tonnage: {format_tonnes(material.tonnage)}"
            )
            label.setToolTip(
                f"{material.active_sections}/{material.total_sections} sections active, "
                f"{format_installed_weight(material.layer.installed_weight)}"
            )
            label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
            label.setStyleSheet(
                f"border-left: 4px solid {color}; background: #f8fafc; padding: 4px;"
            )
            self._layers_row.addWidget(label)
