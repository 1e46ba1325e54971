from __future__ import annotations

import logging

from PyQt5 import QtCore, QtWidgets

from asphalt_core.units import FORM_UNITS, installed_weight, parse_float
from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.model.validation import ValidationError
from asphalt_viewer.ui.presentation.units_presenter import (
    format_installed_weight,
    layer_density_display,
    layer_thickness_display,
)

logger = logging.getLogger(__name__)

COLUMNS = ("name", "recipe", "density", "thickness", "installed_weight")


class LayerManagerDialog(QtWidgets.QDialog):
    """Add, edit and remove material layers."""

    def __init__(
        self, document: MeasurementDocument, parent: QtWidgets.QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Manage layers")
        self.resize(760, 480)
        self._document = document
        self._is_updating = False
        self._in_cell_edit = False

        self._name_edit = QtWidgets.QLineEdit()
        self._name_edit.setPlaceholderText("e.g. Asphalt surface course")
        self._recipe_edit = QtWidgets.QLineEdit()
        self._recipe_edit.setPlaceholderText("e.g. AC 11 D S")
        self._density_edit = QtWidgets.QLineEdit()
        self._density_edit.setPlaceholderText("2.3")
        self._thickness_edit = QtWidgets.QLineEdit()
        self._thickness_edit.setPlaceholderText("4")
        self._preview_label = QtWidgets.QLabel()
        self._add_button = QtWidgets.QPushButton("Add layer")

        form = QtWidgets.QFormLayout()
        form.addRow("Name", self._name_edit)
        form.addRow("Recipe", self._recipe_edit)
        form.addRow(f"Density ({FORM_UNITS.density_label})", self._density_edit)
        form.addRow(f"Thickness ({FORM_UNITS.thickness_label})", self._thickness_edit)
        form.addRow("Installed weight", self._preview_label)
        form.addRow(self._add_button)
        add_box = QtWidgets.QGroupBox("New layer")
        add_box.setLayout(form)

        self._table = QtWidgets.QTableWidget(0, len(COLUMNS) + 1)
        self._table.setHorizontalHeaderLabels(
            [
                "Name",
                "Recipe",
                f"Density ({FORM_UNITS.density_label})",
                f"Thickness ({FORM_UNITS.thickness_label})",
                "Installed weight",
                "",
            ]
        )
        self._table.horizontalHeader().setSectionResizeMode(
            QtWidgets.QHeaderView.Stretch
        )
        self._table.itemChanged.connect(self._handle_item_changed)

        close_button = QtWidgets.QPushButton("Close")
        close_button.clicked.connect(self.accept)

        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(add_box)
        layout.addWidget(self._table)
        button_row = QtWidgets.QHBoxLayout()
        button_row.addStretch()
        button_row.addWidget(close_button)
        layout.addLayout(button_row)
        self.setLayout(layout)

        self._density_edit.textChanged.connect(self._update_preview)
        self._thickness_edit.textChanged.connect(self._update_preview)
        self._add_button.clicked.connect(self.add_layer_from_form)
        document.layers_changed.connect(self._on_layers_changed)

        self._update_preview()
        self._populate()

    # ------------------------------------------------------------------
    # Form
    # ------------------------------------------------------------------
    def add_layer_from_form(self) -> bool:
        try:
            layer = self._document.add_layer(
                self._name_edit.text(),
                self._recipe_edit.text(),
                self._density_edit.text(),
                self._thickness_edit.text(),
            )
        except ValidationError as exc:
            logger.warning("Layer rejected: %s", exc)
            QtWidgets.QMessageBox.warning(self, "Invalid layer", str(exc))
            return False
        for edit in (
            self._name_edit,
            self._recipe_edit,
            self._density_edit,
            self._thickness_edit,
        ):
            edit.clear()
        logger.info("Layer %r added", layer.name)
        return True

    def _update_preview(self) -> None:
        density = parse_float(self._density_edit.text())
        thickness = parse_float(self._thickness_edit.text())
        if density is None or thickness is None:
            self._preview_label.setText("–")
            return
        weight = installed_weight(
            FORM_UNITS.density_in(density), FORM_UNITS.thickness_in(thickness)
        )
        self._preview_label.setText(format_installed_weight(weight))

    # ------------------------------------------------------------------
    # Table
    # ------------------------------------------------------------------
    def _populate(self) -> None:
        layers = self._document.layers
        self._is_updating = True
        try:
            self._table.setRowCount(len(layers))
            for row, layer in enumerate(layers):
                values = (
                    layer.name,
                    layer.recipe,
                    layer_density_display(layer),
                    layer_thickness_display(layer),
                    format_installed_weight(layer.installed_weight),
                )
                for column, value in enumerate(values):
                    item = QtWidgets.QTableWidgetItem(value)
                    item.setData(QtCore.Qt.UserRole, layer.id)
                    if COLUMNS[column] == "installed_weight":
                        item.setFlags(item.flags() & ~QtCore.Qt.ItemIsEditable)
                    self._table.setItem(row, column, item)
                delete_button = QtWidgets.QPushButton("Delete")
                delete_button.clicked.connect(
                    lambda _checked=False, layer_id=layer.id: self._delete_layer(layer_id)
                )
                self._table.setCellWidget(row, len(COLUMNS), delete_button)
        finally:
            self._is_updating = False

    def _handle_item_changed(self, item: QtWidgets.QTableWidgetItem) -> None:
        if self._is_updating:
            return
        layer_id = item.data(QtCore.Qt.UserRole)
        field = COLUMNS[item.column()]
        self._in_cell_edit = True
        try:
            layer = self._document.update_layer(layer_id, field, item.text())
        except ValidationError as exc:
            logger.warning("Layer edit rejected: %s", exc)
            QtWidgets.QMessageBox.warning(self, "Invalid value", str(exc))
            QtCore.QTimer.singleShot(0, self._populate)
            return
        finally:
            self._in_cell_edit = False

        weight_item = self._table.item(item.row(), COLUMNS.index("installed_weight"))
        if weight_item is not None:
            self._is_updating = True
            try:
                weight_item.setText(format_installed_weight(layer.installed_weight))
            finally:
                self._is_updating = False

    def _on_layers_changed(self) -> None:
        if not self._in_cell_edit:
            self._populate()

    def _delete_layer(self, layer_id: int) -> None:
        removed = self._document.delete_layer(layer_id)
        logger.info("Layer %r removed", removed.name)
