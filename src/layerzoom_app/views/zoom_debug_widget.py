"""
Zoom debug widget - paints the scale bar for visual self-inspection.

Layout (top to bottom):
- Zoom axis with the current-zoom marker
- One row per layer, coloured by presentation mode region
- Optimal zoom tick and label per layer

Zoomed in is on the left, matching the scale axis (scale = 2^-zoom).
"""

import math
from typing import Optional, TYPE_CHECKING

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRectF, QPointF
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QPolygonF, QFont

from layerzoom_core.domain.enums import PresentationMode
from layerzoom_core.domain.models import LayerWindow
from ..resources.styles import COLORS, MODE_COLORS

if TYPE_CHECKING:
    from ..viewmodels.zoom_debug_vm import ZoomDebugVM


# Regions of a window in scale order, paired with their boundary indices
_REGIONS = [
    (PresentationMode.FADING_IN, 0, 1),
    (PresentationMode.EXPANDED, 1, 2),
    (PresentationMode.COLLAPSING, 2, 3),
    (PresentationMode.COLLAPSED, 3, 4),
    (PresentationMode.FADING_OUT, 4, 5),
]


class ZoomDebugWidget(QWidget):
    """
    Scale bar view bound to a ZoomDebugVM.

    Repaints whenever the VM's zoom or scale bar changes.
    """

    PADDING = 12
    AXIS_TOP = 24
    ROW_HEIGHT = 18
    ROW_GAP = 6

    def __init__(self, vm: "ZoomDebugVM", parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._vm = vm
        self._font = QFont("Consolas", 8)

        vm.zoom_changed.connect(lambda _zoom: self.update())
        vm.scale_bar_changed.connect(self.update)

        self.setMinimumSize(420, 160)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def zoom_to_x(self, zoom: float) -> float:
        """Horizontal pixel position of ``zoom``, clamped to the axis."""
        low, high = self._vm.zoom_range
        left = self.PADDING
        right = self.width() - self.PADDING
        if high <= low:
            return left
        zoom = max(low, min(high, zoom))
        return left + (high - zoom) / (high - low) * (right - left)

    def _boundary_x(self, window: LayerWindow, index: int) -> float:
        """x of one window boundary; open ends run to the axis edge."""
        bound = window.boundaries()[index]
        if bound.is_unbounded:
            return self.PADDING if index == 0 else self.width() - self.PADDING
        if bound.value <= 0:
            return self.PADDING
        return self.zoom_to_x(-math.log2(bound.value))

    # -------------------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------------------

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(COLORS["bg_primary"]))
        painter.setFont(self._font)

        snapshots = self._vm.diagnostics
        if not snapshots:
            painter.setPen(QPen(QColor(COLORS["text_secondary"])))
            painter.drawText(QRectF(self.rect()), Qt.AlignmentFlag.AlignCenter,
                             "Scale bar not built")
            painter.end()
            return

        self._draw_axis(painter)

        primary = self._vm.primary_layer
        for row, snap in enumerate(snapshots):
            top = self.AXIS_TOP + 16 + row * (self.ROW_HEIGHT + self.ROW_GAP)
            self._draw_layer_row(painter, snap.window, top)

            # Optimal position tick
            x = self.zoom_to_x(snap.optimal_zoom)
            is_primary = snap.layer == primary
            color = QColor(COLORS["primary_tick"] if is_primary else COLORS["optimal_tick"])
            painter.setPen(QPen(color, 2 if is_primary else 1))
            painter.drawLine(QPointF(x, top), QPointF(x, top + self.ROW_HEIGHT))
            painter.drawText(QPointF(x + 3, top + self.ROW_HEIGHT - 4),
                             f"L{snap.layer} {snap.mode.value}")

        self._draw_zoom_marker(painter)
        painter.end()

    def _draw_axis(self, painter: QPainter):
        low, high = self._vm.zoom_range
        y = self.AXIS_TOP
        left, right = self.PADDING, self.width() - self.PADDING

        painter.setPen(QPen(QColor(COLORS["accent"]), 2))
        painter.drawLine(QPointF(left, y), QPointF(right, y))
        painter.drawLine(QPointF(left, y - 5), QPointF(left, y + 5))
        painter.drawLine(QPointF(right, y - 5), QPointF(right, y + 5))

        painter.setPen(QPen(QColor(COLORS["text_secondary"])))
        painter.drawText(QPointF(left, y + 14), f"{high:.1f}")
        painter.drawText(QPointF(right - 30, y + 14), f"{low:.1f}")

    def _draw_layer_row(self, painter: QPainter, window: LayerWindow, top: float):
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(MODE_COLORS[PresentationMode.INVISIBLE.value])))
        painter.drawRect(QRectF(self.PADDING, top,
                                self.width() - 2 * self.PADDING, self.ROW_HEIGHT))

        for mode, start, end in _REGIONS:
            x0 = self._boundary_x(window, start)
            x1 = self._boundary_x(window, end)
            if x1 <= x0:
                continue
            painter.setBrush(QBrush(QColor(MODE_COLORS[mode.value])))
            painter.drawRect(QRectF(x0, top, x1 - x0, self.ROW_HEIGHT))

    def _draw_zoom_marker(self, painter: QPainter):
        x = self.zoom_to_x(self._vm.zoom)
        y = self.AXIS_TOP - 2
        triangle = QPolygonF([
            QPointF(x, y),
            QPointF(x - 5, y - 9),
            QPointF(x + 5, y - 9),
        ])
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(COLORS["zoom_marker"])))
        painter.drawPolygon(triangle)

        painter.setPen(QPen(QColor(COLORS["zoom_marker"]), 1, Qt.PenStyle.DashLine))
        painter.drawLine(QPointF(x, y), QPointF(x, self.height() - self.PADDING))
