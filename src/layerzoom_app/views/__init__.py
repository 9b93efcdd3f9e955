"""
Views for the LayerZoom debug app.
"""

from .main_window import MainWindow
from .zoom_debug_widget import ZoomDebugWidget

__all__ = ["MainWindow", "ZoomDebugWidget"]
