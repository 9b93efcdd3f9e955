"""
Main Window for the LayerZoom debug app.

Thin view layer using MVVM pattern:
- ZoomDebugVM holds zoom state and queries the core
- This view handles layout and binding
"""

from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QSlider, QPushButton, QPlainTextEdit, QStatusBar,
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont

from ..viewmodels import ZoomDebugVM
from .zoom_debug_widget import ZoomDebugWidget


class MainWindow(QMainWindow):
    """Debug window: scale bar view, zoom slider, and per-layer report."""

    # Slider ticks per zoom unit
    SLIDER_RESOLUTION = 100

    def __init__(self, vm: ZoomDebugVM, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._vm = vm
        self._syncing = False

        self.setWindowTitle("LayerZoom - Scale Bar Inspector")
        self.resize(900, 520)

        self._setup_ui()
        self._bind_viewmodel()
        self._on_scale_bar_changed()

    def _setup_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        self.scale_view = ZoomDebugWidget(self._vm)
        layout.addWidget(self.scale_view, stretch=2)

        controls = QHBoxLayout()
        self.zoom_in_btn = QPushButton("Zoom In")
        self.zoom_out_btn = QPushButton("Zoom Out")
        self.slider = QSlider(Qt.Orientation.Horizontal)
        # Slider runs zoomed-in -> zoomed-out, like the scale view
        self.slider.setInvertedAppearance(True)
        controls.addWidget(self.zoom_in_btn)
        controls.addWidget(self.slider, stretch=1)
        controls.addWidget(self.zoom_out_btn)
        layout.addLayout(controls)

        self.report = QPlainTextEdit()
        self.report.setReadOnly(True)
        self.report.setFont(QFont("Consolas", 9))
        layout.addWidget(self.report, stretch=1)

        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar())

    def _bind_viewmodel(self):
        self.zoom_in_btn.clicked.connect(self._vm.zoom_in)
        self.zoom_out_btn.clicked.connect(self._vm.zoom_out)
        self.slider.valueChanged.connect(self._on_slider_moved)

        self._vm.zoom_changed.connect(self._on_zoom_changed)
        self._vm.scale_bar_changed.connect(self._on_scale_bar_changed)

    # -------------------------------------------------------------------------
    # ViewModel -> View
    # -------------------------------------------------------------------------

    def _on_scale_bar_changed(self):
        low, high = self._vm.zoom_range
        self._syncing = True
        self.slider.setRange(int(low * self.SLIDER_RESOLUTION), int(high * self.SLIDER_RESOLUTION))
        self._syncing = False
        self._on_zoom_changed(self._vm.zoom)

    def _on_zoom_changed(self, zoom: float):
        self._syncing = True
        self.slider.setValue(int(round(zoom * self.SLIDER_RESOLUTION)))
        self._syncing = False

        self.report.setPlainText(self._vm.report)
        visible = self._vm.service.visible_layers(zoom)
        self.statusBar().showMessage(
            f"Zoom {zoom:.2f} | primary L{self._vm.primary_layer} | visible layers {visible}"
        )

    # -------------------------------------------------------------------------
    # View -> ViewModel
    # -------------------------------------------------------------------------

    def _on_slider_moved(self, value: int):
        if self._syncing:
            return
        self._vm.set_zoom(value / self.SLIDER_RESOLUTION)
