"""
Zoom Debug ViewModel.

Manages:
- The LayerDetailService for the loaded hierarchy
- Current camera zoom (clamped to the scale bar's navigable range)
- Diagnostic snapshots for the current zoom

The ZoomDebugWidget receives state from this ViewModel and focuses
purely on rendering.
"""

from typing import Iterable, List, Optional, Tuple

from PyQt6.QtCore import QObject, pyqtSignal

from .base import BaseViewModel
from layerzoom_core.domain.models import LayerDiagnostics
from layerzoom_core.ports.entity_port import LayeredEntity
from layerzoom_core.services.diagnostics import diagnose, format_report
from layerzoom_core.services.layer_detail import LayerDetailService


class ZoomDebugVM(BaseViewModel):
    """
    ViewModel for the zoom debug view.

    Signals:
        zoom_changed: Emitted with the new zoom when it changes
        scale_bar_changed: Emitted after a hierarchy (re)load

    State:
        zoom: Current camera zoom
        zoom_range: (min_zoom, max_zoom) of the loaded scale bar
        diagnostics: Per-layer snapshot at the current zoom
    """

    zoom_changed = pyqtSignal(float)
    scale_bar_changed = pyqtSignal()

    # Zoom units per zoom_in / zoom_out step
    ZOOM_STEP = 0.1

    def __init__(self, service: LayerDetailService, parent: Optional[QObject] = None):
        """
        Initialize the ViewModel.

        Args:
            service: Layer detail service to inspect
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._service = service
        self._zoom = 0.0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def service(self) -> LayerDetailService:
        return self._service

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def zoom_range(self) -> Tuple[float, float]:
        scale_bar = self._service.scale_bar
        if scale_bar is None:
            return (0.0, 0.0)
        return scale_bar.zoom_range

    @property
    def primary_layer(self) -> int:
        return self._service.primary_layer(self._zoom)

    @property
    def diagnostics(self) -> List[LayerDiagnostics]:
        """Snapshot of every layer at the current zoom (empty before load)."""
        if self._service.resolver is None:
            return []
        return diagnose(self._service.resolver, self._zoom)

    @property
    def report(self) -> str:
        if self._service.resolver is None:
            return "Scale bar: not built"
        return format_report(self._service.resolver, self._zoom)

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def load_hierarchy(self, roots: Iterable[LayeredEntity]) -> None:
        """Rebuild the scale bar from a hierarchy and re-clamp the zoom."""
        self._service.build_from_entities(roots)
        self.scale_bar_changed.emit()
        self.set_zoom(self._zoom)

    def set_zoom(self, zoom: float) -> None:
        low, high = self.zoom_range
        clamped = max(low, min(high, float(zoom)))
        self._set_and_notify("_zoom", clamped, self.zoom_changed)

    def zoom_in(self) -> None:
        self.set_zoom(self._zoom + self.ZOOM_STEP)

    def zoom_out(self) -> None:
        self.set_zoom(self._zoom - self.ZOOM_STEP)
