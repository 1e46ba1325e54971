from __future__ import annotations

import logging

from PyQt5 import QtCore, QtGui, QtWidgets

from asphalt_core.geometry import SURFACE_HEIGHT, SURFACE_MARGIN, SURFACE_WIDTH
from asphalt_viewer.model.measurement_document import MeasurementDocument
from asphalt_viewer.preview.profile_layout import (
    BAR_HALF_WIDTH,
    POI_LABEL_Y,
    ProfileLayout,
    build_profile_layout,
    half_width_px,
)
from asphalt_viewer.services.app_settings import DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM
from asphalt_viewer.ui.controllers.drag_controller import ProfileDragController

logger = logging.getLogger(__name__)

LAYER_COLORS = ("#ef4444", "#f97316", "#eab308")
ZOOM_STEP = 0.1


def layer_color(index: int) -> QtGui.QColor:
    return QtGui.QColor(LAYER_COLORS[index % len(LAYER_COLORS)])


class ProfileWidget(QtWidgets.QWidget):
    """Interactive 2D profile of the stations.

    Drag a station bar sideways to move it along the route or up/down to
    change its width. Clicking a layer band toggles that section for the
    layer.
    """

    stationDeleteRequested = QtCore.pyqtSignal(int)
    stationEditRequested = QtCore.pyqtSignal(int)
    sectionToggled = QtCore.pyqtSignal(int, str)
    zoomChanged = QtCore.pyqtSignal(float)

    def __init__(
        self,
        document: MeasurementDocument,
        drag_controller: ProfileDragController | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setMinimumSize(400, 200)
        self.setMouseTracking(True)
        self._document = document
        self._drag = drag_controller or ProfileDragController(document)
        self._hovered_station: int | None = None
        self._zoom = DEFAULT_ZOOM
        self._show_measurement = True
        self._show_layers = True
        self._show_pois = True

        document.stations_changed.connect(self.update)
        document.layers_changed.connect(self.update)
        document.pois_changed.connect(self.update)
        document.activation_changed.connect(self.update)

    # ------------------------------------------------------------------
    # View options
    # ------------------------------------------------------------------
    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def drag_controller(self) -> ProfileDragController:
        return self._drag

    def set_zoom(self, zoom: float) -> None:
        clamped = round(min(max(zoom, MIN_ZOOM), MAX_ZOOM), 2)
        if clamped == self._zoom:
            return
        self._zoom = clamped
        self.zoomChanged.emit(clamped)
        self.update()

    def zoom_in(self) -> None:
        self.set_zoom(self._zoom + ZOOM_STEP)

    def zoom_out(self) -> None:
        self.set_zoom(self._zoom - ZOOM_STEP)

    def set_show_measurement(self, visible: bool) -> None:
        self._show_measurement = bool(visible)
        self.update()

    def set_show_layers(self, visible: bool) -> None:
        self._show_layers = bool(visible)
        self.update()

    def set_show_pois(self, visible: bool) -> None:
        self._show_pois = bool(visible)
        self.update()

    def layout_snapshot(self) -> ProfileLayout:
        return build_profile_layout(
            self._document.stations,
            self._document.layers,
            self._document.pois,
            self._document.activation,
            zoom=self._zoom,
            hovered_station_id=self._hovered_station,
            show_measurement=self._show_measurement,
            show_layers=self._show_layers,
            show_pois=self._show_pois,
        )

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------
    def _surface_transform(self) -> QtGui.QTransform:
        transform = QtGui.QTransform()
        transform.scale(self.width() / SURFACE_WIDTH, self.height() / SURFACE_HEIGHT)
        return transform

    def _to_surface(self, pos: QtCore.QPoint) -> QtCore.QPointF:
        inverted, ok = self._surface_transform().inverted()
        if not ok:
            return QtCore.QPointF(pos)
        return inverted.map(QtCore.QPointF(pos))

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, event: QtGui.QPaintEvent) -> None:  # noqa: D401
        painter = QtGui.QPainter(self)
        painter.fillRect(self.rect(), self.palette().color(QtGui.QPalette.Base))

        stations = self._document.stations
        if not stations:
            painter.setPen(QtGui.QPen(QtGui.QColor("#888")))
            painter.drawText(self.rect(), QtCore.Qt.AlignCenter, "No stations yet.")
            painter.end()
            return

        layout = self.layout_snapshot()
        painter.setTransform(self._surface_transform())
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)

        self._draw_grid(painter)
        self._draw_center_line(painter, layout)
        if self._show_measurement:
            self._draw_envelope(painter, layout)
        self._draw_layer_bands(painter, layout)
        self._draw_pois(painter, layout)
        self._draw_station_bars(painter, layout)
        self._draw_scale_labels(painter, layout)
        painter.end()

    def _draw_grid(self, painter: QtGui.QPainter) -> None:
        painter.save()
        painter.setPen(QtGui.QPen(QtGui.QColor("#f1f5f9"), 1.0))
        step = 20
        for x in range(0, int(SURFACE_WIDTH) + 1, step):
            painter.drawLine(QtCore.QLineF(x, 0, x, SURFACE_HEIGHT))
        for y in range(0, int(SURFACE_HEIGHT) + 1, step):
            painter.drawLine(QtCore.QLineF(0, y, SURFACE_WIDTH, y))
        painter.restore()

    def _draw_center_line(self, painter: QtGui.QPainter, layout: ProfileLayout) -> None:
        painter.save()
        pen = QtGui.QPen(QtGui.QColor("#64748b"), 2.0)
        pen.setDashPattern([5, 5])
        painter.setPen(pen)
        painter.drawLine(
            QtCore.QLineF(
                SURFACE_MARGIN, layout.center_y, SURFACE_WIDTH - SURFACE_MARGIN, layout.center_y
            )
        )
        painter.restore()

    def _draw_envelope(self, painter: QtGui.QPainter, layout: ProfileLayout) -> None:
        stations = self._document.stations
        if len(stations) < 2:
            return
        top = []
        bottom = []
        for station in stations:
            x = layout.scale.scale_x(station.station)
            half = half_width_px(station.width, self._zoom)
            top.append(QtCore.QPointF(x, layout.center_y - half))
            bottom.append(QtCore.QPointF(x, layout.center_y + half))

        painter.save()
        fill = QtGui.QPolygonF(top + list(reversed(bottom)))
        painter.setPen(QtCore.Qt.NoPen)
        painter.setBrush(QtGui.QColor(59, 130, 246, 38))
        painter.drawPolygon(fill)

        pen = QtGui.QPen(QtGui.QColor("#3b82f6"), 3.0)
        pen.setJoinStyle(QtCore.Qt.RoundJoin)
        pen.setCapStyle(QtCore.Qt.RoundCap)
        painter.setPen(pen)
        painter.setBrush(QtCore.Qt.NoBrush)
        painter.drawPolyline(QtGui.QPolygonF(top))
        painter.drawPolyline(QtGui.QPolygonF(bottom))

        painter.setPen(QtGui.QPen(QtGui.QColor("white"), 2.0))
        painter.setBrush(QtGui.QColor("#3b82f6"))
        for point in top + bottom:
            painter.drawEllipse(point, 4.0, 4.0)
        painter.restore()

    def _draw_layer_bands(self, painter: QtGui.QPainter, layout: ProfileLayout) -> None:
        if not layout.bands:
            return
        painter.save()
        for band in layout.bands:
            color = layer_color(band.layer_index)
            rect = QtCore.QRectF(
                band.left, band.top, band.right - band.left, band.bottom - band.top
            )
            if band.active:
                painter.setPen(QtGui.QPen(color.darker(130), 1.0))
                painter.setBrush(color)
            else:
                pen = QtGui.QPen(color, 1.0)
                pen.setStyle(QtCore.Qt.DashLine)
                painter.setPen(pen)
                painter.setBrush(QtGui.QBrush(color, QtCore.Qt.BDiagPattern))
            painter.drawRect(rect)
        painter.restore()

    def _draw_pois(self, painter: QtGui.QPainter, layout: ProfileLayout) -> None:
        if not layout.markers:
            return
        painter.save()
        pen = QtGui.QPen(QtGui.QColor("#8b5cf6"), 1.5)
        pen.setStyle(QtCore.Qt.DashLine)
        for marker in layout.markers:
            painter.setPen(pen)
            painter.drawLine(QtCore.QLineF(marker.x, POI_LABEL_Y + 4, marker.x, SURFACE_HEIGHT - 20))
            painter.setPen(QtGui.QPen(QtGui.QColor("#4c1d95")))
            painter.drawText(QtCore.QPointF(marker.x + 4, POI_LABEL_Y), f"{marker.symbol} {marker.name}")
        painter.restore()

    def _draw_station_bars(self, painter: QtGui.QPainter, layout: ProfileLayout) -> None:
        dragged = self._drag.dragged_station_id
        painter.save()
        for bar in layout.bars:
            station = self._document.station(bar.station_id)
            if bar.station_id == dragged:
                fill, outline = "#3b82f6", "#1d4ed8"
            elif bar.station_id == self._hovered_station:
                fill, outline = "#60a5fa", "#3b82f6"
            else:
                fill, outline = "#94a3b8", "#64748b"
            painter.setPen(QtGui.QPen(QtGui.QColor(outline), 2.0))
            painter.setBrush(QtGui.QColor(fill))
            painter.drawRect(
                QtCore.QRectF(bar.x - BAR_HALF_WIDTH, bar.top, 2 * BAR_HALF_WIDTH, bar.bottom - bar.top)
            )

            painter.setPen(QtGui.QPen(QtGui.QColor("white"), 2.0))
            painter.setBrush(QtGui.QColor("#1e293b"))
            painter.drawEllipse(QtCore.QPointF(bar.x, layout.center_y), 4.0, 4.0)

            painter.setPen(QtGui.QPen(QtGui.QColor("#475569")))
            painter.drawText(
                QtCore.QRectF(bar.x - 40, bar.bottom + 4, 80, 16),
                QtCore.Qt.AlignHCenter | QtCore.Qt.AlignTop,
                f"{station.station:.1f}m",
            )
            painter.drawText(
                QtCore.QRectF(bar.x - 40, bar.top - 20, 80, 16),
                QtCore.Qt.AlignHCenter | QtCore.Qt.AlignBottom,
                f"{station.width:.1f}m",
            )

        for button in layout.actions:
            color = "#ef4444" if button.kind == "delete" else "#3b82f6"
            painter.setPen(QtCore.Qt.NoPen)
            painter.setBrush(QtGui.QColor(color))
            painter.drawEllipse(QtCore.QPointF(button.cx, button.cy), button.radius, button.radius)
            icon_pen = QtGui.QPen(QtGui.QColor("white"), 2.0)
            icon_pen.setCapStyle(QtCore.Qt.RoundCap)
            painter.setPen(icon_pen)
            r = 4.0
            if button.kind == "delete":
                painter.drawLine(QtCore.QLineF(button.cx - r, button.cy - r, button.cx + r, button.cy + r))
                painter.drawLine(QtCore.QLineF(button.cx + r, button.cy - r, button.cx - r, button.cy + r))
            else:
                painter.drawLine(QtCore.QLineF(button.cx - r, button.cy + r, button.cx + r, button.cy - r))
        painter.restore()

    def _draw_scale_labels(self, painter: QtGui.QPainter, layout: ProfileLayout) -> None:
        painter.save()
        painter.setPen(QtGui.QPen(QtGui.QColor("#64748b")))
        baseline = SURFACE_HEIGHT - 6
        painter.drawText(QtCore.QPointF(SURFACE_MARGIN, baseline), f"{layout.scale.min_station:.1f}m")
        painter.drawText(
            QtCore.QRectF(SURFACE_WIDTH - SURFACE_MARGIN - 100, baseline - 14, 100, 16),
            QtCore.Qt.AlignRight | QtCore.Qt.AlignBottom,
            f"{layout.scale.max_station:.1f}m",
        )
        painter.restore()

    # ------------------------------------------------------------------
    # Mouse handling
    # ------------------------------------------------------------------
    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        if event.button() != QtCore.Qt.LeftButton:
            return
        point = self._to_surface(event.pos())
        layout = self.layout_snapshot()
        hit = layout.hit_test(point.x(), point.y())
        if hit is None:
            return
        if hit.kind == "action":
            self._drag.press(
                hit.station_id, point.x(), point.y(), layout.scale, on_action_control=True
            )
            if hit.action == "delete":
                self._hovered_station = None
                self.stationDeleteRequested.emit(hit.station_id)
            else:
                self.stationEditRequested.emit(hit.station_id)
            event.accept()
            return
        if hit.kind == "band":
            self.sectionToggled.emit(hit.layer_id, hit.key)
            event.accept()
            return
        self._drag.press(hit.station_id, point.x(), point.y(), layout.scale)
        self.setCursor(QtCore.Qt.ClosedHandCursor)
        self.update()
        event.accept()

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        point = self._to_surface(event.pos())
        if self._drag.is_dragging:
            self._drag.move(point.x(), point.y())
            event.accept()
            return
        self._update_hover(point)

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401
        if event.button() != QtCore.Qt.LeftButton:
            return
        self._end_drag()
        event.accept()

    def leaveEvent(self, event: QtCore.QEvent) -> None:  # noqa: D401
        self._end_drag()
        if self._hovered_station is not None:
            self._hovered_station = None
            self.update()
        super().leaveEvent(event)

    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:  # noqa: D401
        delta = event.angleDelta().y()
        if delta == 0:
            return
        if delta > 0:
            self.zoom_in()
        else:
            self.zoom_out()
        event.accept()

    def _end_drag(self) -> None:
        if not self._drag.is_dragging:
            return
        self._drag.release()
        self.unsetCursor()
        self.update()

    def _update_hover(self, point: QtCore.QPointF) -> None:
        layout = self.layout_snapshot()
        hovered = layout.hovered_station(point.x(), point.y(), self._hovered_station)
        if hovered != self._hovered_station:
            self._hovered_station = hovered
            self.update()
