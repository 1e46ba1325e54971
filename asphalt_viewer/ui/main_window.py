from __future__ import annotations

import logging

from PyQt5 import QtCore, QtWidgets

from asphalt_core.model import PoiType
from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.model.project import DEFAULT_PROJECT_NAME, build_project_snapshot
from asphalt_viewer.model.validation import ValidationError
from asphalt_viewer.services.app_settings import AppSettings
from asphalt_viewer.services.project_store import ProjectStore
from asphalt_viewer.ui.controllers.drag_controller import ProfileDragController
from asphalt_viewer.ui.layer_dialog import LayerManagerDialog
from asphalt_viewer.ui.presentation.units_presenter import format_meters
from asphalt_viewer.ui.profile_widget import ProfileWidget
from asphalt_viewer.ui.tonnage_panel import TonnagePanel

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_MS = 4000
STATION_COLUMNS = ("station", "width")
POI_COLUMNS = ("name", "station", "type")


class MeasurementWindow(QtWidgets.QMainWindow):
    """Station list, points of interest, profile and tonnage in one window."""

    def __init__(
        self,
        document: MeasurementDocument,
        *,
        settings: AppSettings | None = None,
        project_store: ProjectStore | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("BPO ASPHALT")
        self.resize(1200, 860)
        self._document = document
        self._settings = settings or AppSettings()
        self._project_store = project_store or ProjectStore(self._settings.store_path())
        self._updating_tables = False
        self._layer_dialog: LayerManagerDialog | None = None

        editor = self._settings.editor()
        drag = ProfileDragController(
            document,
            lock_axis=editor.lock_drag_axis,
            width_sensitivity=editor.width_drag_sensitivity,
        )
        self._profile = ProfileWidget(document, drag)
        self._profile.set_zoom(editor.zoom_level)
        self._tonnage_panel = TonnagePanel(document)

        central = QtWidgets.QWidget()
        layout = QtWidgets.QVBoxLayout()
        layout.addLayout(self._build_header())
        layout.addLayout(self._build_profile_toolbar())
        layout.addWidget(self._profile, stretch=2)

        lists = QtWidgets.QHBoxLayout()
        lists.addWidget(self._build_station_panel(), stretch=2)
        lists.addWidget(self._build_poi_panel(), stretch=1)
        layout.addLayout(lists, stretch=3)
        layout.addWidget(self._tonnage_panel)
        central.setLayout(layout)
        self.setCentralWidget(central)

        self._profile.stationDeleteRequested.connect(self.delete_station)
        self._profile.stationEditRequested.connect(self._edit_station_row)
        self._profile.sectionToggled.connect(self._document.toggle_section)
        self._profile.zoomChanged.connect(self._on_zoom_changed)
        document.stations_changed.connect(self._on_stations_changed)
        document.pois_changed.connect(self._populate_pois)

        self._on_zoom_changed(self._profile.zoom)
        self._populate_stations()
        self._populate_pois()

    @property
    def profile(self) -> ProfileWidget:
        return self._profile

    @property
    def project_name(self) -> str:
        return self._project_name_edit.text().strip() or DEFAULT_PROJECT_NAME

    def show_status_message(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    def show_validation_error(self, message: str) -> None:
        logger.warning("Input rejected: %s", message)
        QtWidgets.QMessageBox.warning(self, "Error", message)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_header(self) -> QtWidgets.QHBoxLayout:
        title = QtWidgets.QLabel("BPO ASPHALT")
        title.setStyleSheet("font-size: 24px; font-weight: bold; color: #1e3a8a;")
        self._project_name_edit = QtWidgets.QLineEdit(
            self._settings.last_project_name() or DEFAULT_PROJECT_NAME
        )
        self._project_name_edit.setPlaceholderText("Project name")
        self._project_name_edit.setMinimumWidth(260)
        save_button = QtWidgets.QPushButton("Save project")
        save_button.clicked.connect(self.save_project)

        row = QtWidgets.QHBoxLayout()
        row.addWidget(title)
        row.addStretch()
        row.addWidget(self._project_name_edit)
        row.addWidget(save_button)
        return row

    def _build_profile_toolbar(self) -> QtWidgets.QHBoxLayout:
        row = QtWidgets.QHBoxLayout()
        for label, setter in (
            ("Measurement", self._profile.set_show_measurement),
            ("Layers", self._profile.set_show_layers),
            ("POI", self._profile.set_show_pois),
        ):
            button = QtWidgets.QPushButton(label)
            button.setCheckable(True)
            button.setChecked(True)
            button.toggled.connect(setter)
            row.addWidget(button)

        row.addSpacing(16)
        zoom_out = QtWidgets.QPushButton("-")
        zoom_out.setFixedWidth(28)
        zoom_out.clicked.connect(self._profile.zoom_out)
        self._zoom_label = QtWidgets.QLabel()
        self._zoom_label.setMinimumWidth(48)
        self._zoom_label.setAlignment(QtCore.Qt.AlignCenter)
        zoom_in = QtWidgets.QPushButton("+")
        zoom_in.setFixedWidth(28)
        zoom_in.clicked.connect(self._profile.zoom_in)
        row.addWidget(zoom_out)
        row.addWidget(self._zoom_label)
        row.addWidget(zoom_in)

        row.addStretch()
        self._station_count_label = QtWidgets.QLabel()
        row.addWidget(self._station_count_label)
        return row

    def _build_station_panel(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Stations")
        materials_button = QtWidgets.QPushButton("Materials…")
        materials_button.clicked.connect(self.open_layer_manager)

        self._station_table = QtWidgets.QTableWidget(0, 3)
        self._station_table.setHorizontalHeaderLabels(["Station (m)", "Width (m)", "Actions"])
        self._station_table.horizontalHeader().setSectionResizeMode(
            QtWidgets.QHeaderView.Stretch
        )
        self._station_table.itemChanged.connect(self._handle_station_item_changed)

        self._new_station_edit = QtWidgets.QLineEdit()
        self._new_station_edit.setPlaceholderText("Station (m)")
        self._new_width_edit = QtWidgets.QLineEdit()
        self._new_width_edit.setPlaceholderText("Width (m)")
        add_button = QtWidgets.QPushButton("Add")
        add_button.clicked.connect(self.add_station_from_form)

        add_row = QtWidgets.QHBoxLayout()
        add_row.addWidget(self._new_station_edit)
        add_row.addWidget(self._new_width_edit)
        add_row.addWidget(add_button)

        header = QtWidgets.QHBoxLayout()
        header.addStretch()
        header.addWidget(materials_button)

        layout = QtWidgets.QVBoxLayout()
        layout.addLayout(header)
        layout.addWidget(self._station_table)
        layout.addLayout(add_row)
        box.setLayout(layout)
        return box

    def _build_poi_panel(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Points of interest")
        self._poi_station_edit = QtWidgets.QLineEdit()
        self._poi_station_edit.setPlaceholderText("Station (m)")
        self._poi_name_edit = QtWidgets.QLineEdit()
        self._poi_name_edit.setPlaceholderText("POI name")
        self._poi_type_combo = self._poi_type_selector(PoiType.START)
        add_button = QtWidgets.QPushButton("Add POI")
        add_button.clicked.connect(self.add_poi_from_form)

        self._poi_table = QtWidgets.QTableWidget(0, 4)
        self._poi_table.setHorizontalHeaderLabels(["Name", "Station (m)", "Type", ""])
        self._poi_table.horizontalHeader().setSectionResizeMode(
            QtWidgets.QHeaderView.Stretch
        )
        self._poi_table.itemChanged.connect(self._handle_poi_item_changed)

        layout = QtWidgets.QVBoxLayout()
        layout.addWidget(self._poi_station_edit)
        layout.addWidget(self._poi_name_edit)
        layout.addWidget(self._poi_type_combo)
        layout.addWidget(add_button)
        layout.addWidget(self._poi_table)
        box.setLayout(layout)
        return box

    @staticmethod
    def _poi_type_selector(selected: PoiType) -> QtWidgets.QComboBox:
        combo = QtWidgets.QComboBox()
        for poi_type in PoiType:
            combo.addItem(f"{poi_type.symbol} {poi_type.label}", poi_type.value)
        combo.setCurrentIndex(list(PoiType).index(selected))
        return combo

    # ------------------------------------------------------------------
    # Stations
    # ------------------------------------------------------------------
    def add_station_from_form(self) -> bool:
        if not self._new_station_edit.text().strip() or not self._new_width_edit.text().strip():
            self.show_validation_error("Please enter station and width.")
            return False
        try:
            station = self._document.add_station(
                self._new_station_edit.text(), self._new_width_edit.text()
            )
        except ValidationError as exc:
            self.show_validation_error(str(exc))
            return False
        self._new_station_edit.clear()
        self._new_width_edit.clear()
        self.show_status_message(
            f"Station {format_meters(station.station)} "
            f"with width {format_meters(station.width, 2)} added"
        )
        return True

    def duplicate_station(self, station_id: int) -> None:
        station = self._document.duplicate_station_after(station_id)
        self.show_status_message(f"New station {format_meters(station.station)} added")

    def delete_station(self, station_id: int) -> None:
        self._document.delete_station(station_id)
        self.show_status_message("Station removed")

    def _on_stations_changed(self) -> None:
        if self._updating_tables:
            QtCore.QTimer.singleShot(0, self._populate_stations)
            return
        self._populate_stations()

    def _populate_stations(self) -> None:
        stations = self._document.stations
        self._station_count_label.setText(f"Stations: {len(stations)}")
        self._updating_tables = True
        try:
            existing = self._station_table.rowCount()
            self._station_table.setRowCount(len(stations))
            for row in range(existing, len(stations)):
                for column in range(len(STATION_COLUMNS)):
                    self._station_table.setItem(row, column, QtWidgets.QTableWidgetItem())
                self._station_table.setCellWidget(row, 2, self._station_actions())
            # Rows are reused in place; only the values and the bound id change.
            for row, station in enumerate(stations):
                for column, value in enumerate((station.station, station.width)):
                    item = self._station_table.item(row, column)
                    item.setText(f"{value:.1f}")
                    item.setData(QtCore.Qt.UserRole, station.id)
                self._station_table.cellWidget(row, 2).setProperty("stationId", station.id)
        finally:
            self._updating_tables = False

    def _station_actions(self) -> QtWidgets.QWidget:
        widget = QtWidgets.QWidget()
        duplicate = QtWidgets.QPushButton("+5 m")
        duplicate.setToolTip("Add a station 5 m after this one")
        duplicate.clicked.connect(
            lambda _checked=False: self.duplicate_station(widget.property("stationId"))
        )
        delete = QtWidgets.QPushButton("Delete")
        delete.clicked.connect(
            lambda _checked=False: self.delete_station(widget.property("stationId"))
        )
        layout = QtWidgets.QHBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(duplicate)
        layout.addWidget(delete)
        widget.setLayout(layout)
        return widget

    def _handle_station_item_changed(self, item: QtWidgets.QTableWidgetItem) -> None:
        if self._updating_tables:
            return
        station_id = item.data(QtCore.Qt.UserRole)
        field = STATION_COLUMNS[item.column()]
        self._updating_tables = True
        try:
            self._document.update_station(station_id, field, item.text())
        except ValidationError as exc:
            self.show_validation_error(str(exc))
            QtCore.QTimer.singleShot(0, self._populate_stations)
        finally:
            self._updating_tables = False

    def _edit_station_row(self, station_id: int) -> None:
        for row in range(self._station_table.rowCount()):
            item = self._station_table.item(row, 0)
            if item is not None and item.data(QtCore.Qt.UserRole) == station_id:
                self._station_table.setCurrentItem(item)
                self._station_table.editItem(item)
                return

    # ------------------------------------------------------------------
    # Points of interest
    # ------------------------------------------------------------------
    def add_poi_from_form(self) -> bool:
        if not self._poi_station_edit.text().strip():
            self.show_validation_error("Please enter a station.")
            return False
        try:
            poi = self._document.add_poi(
                self._poi_station_edit.text(),
                self._poi_name_edit.text(),
                self._poi_type_combo.currentData(),
            )
        except ValidationError as exc:
            self.show_validation_error(str(exc))
            return False
        self._poi_station_edit.clear()
        self._poi_name_edit.clear()
        self._poi_type_combo.setCurrentIndex(0)
        self.show_status_message(f"{poi.name} at station {format_meters(poi.station)} added")
        return True

    def delete_poi(self, poi_id: int) -> None:
        self._document.delete_poi(poi_id)
        self.show_status_message("Point of interest removed")

    def _populate_pois(self) -> None:
        if self._updating_tables:
            QtCore.QTimer.singleShot(0, self._populate_pois)
            return
        pois = self._document.pois
        self._updating_tables = True
        try:
            self._poi_table.setRowCount(len(pois))
            for row, poi in enumerate(pois):
                for column, value in enumerate((poi.name, f"{poi.station:.1f}")):
                    item = QtWidgets.QTableWidgetItem(value)
                    item.setData(QtCore.Qt.UserRole, poi.id)
                    self._poi_table.setItem(row, column, item)
                combo = self._poi_type_selector(poi.type)
                combo.currentIndexChanged.connect(
                    lambda _index, poi_id=poi.id, box=combo: self._update_poi_type(
                        poi_id, box.currentData()
                    )
                )
                self._poi_table.setCellWidget(row, 2, combo)
                delete = QtWidgets.QPushButton("Delete")
                delete.clicked.connect(lambda _checked=False, poi_id=poi.id: self.delete_poi(poi_id))
                self._poi_table.setCellWidget(row, 3, delete)
        finally:
            self._updating_tables = False

    def _update_poi_type(self, poi_id: int, value: str) -> None:
        self._document.update_poi(poi_id, "type", value)

    def _handle_poi_item_changed(self, item: QtWidgets.QTableWidgetItem) -> None:
        if self._updating_tables:
            return
        poi_id = item.data(QtCore.Qt.UserRole)
        field = POI_COLUMNS[item.column()]
        self._updating_tables = True
        try:
            self._document.update_poi(poi_id, field, item.text())
        except ValidationError as exc:
            self.show_validation_error(str(exc))
            QtCore.QTimer.singleShot(0, self._populate_pois)
        finally:
            self._updating_tables = False

    # ------------------------------------------------------------------
    # Layers, zoom and saving
    # ------------------------------------------------------------------
    def open_layer_manager(self) -> None:
        if self._layer_dialog is None:
            self._layer_dialog = LayerManagerDialog(self._document, self)
        self._layer_dialog.show()
        self._layer_dialog.raise_()

    def _on_zoom_changed(self, zoom: float) -> None:
        self._zoom_label.setText(f"{round(zoom * 100)}%")
        self._settings.set_zoom_level(zoom)

    def save_project(self) -> bool:
        snapshot = build_project_snapshot(self.project_name, self._document)
        try:
            self._project_store.save_project(snapshot)
        except OSError as exc:
            logger.exception("Saving project failed")
            QtWidgets.QMessageBox.critical(self, "Save failed", str(exc))
            return False
        self._settings.set_last_project_name(self.project_name)
        self.show_status_message(f"{self.project_name} saved")
        return True
