"""
ViewModels for the LayerZoom debug app.

MVVM architecture separating state from UI:
- ViewModels hold zoom state and query the core services
- Views (Qt widgets) handle painting and user input
"""

from .base import BaseViewModel
from .zoom_debug_vm import ZoomDebugVM

__all__ = [
    "BaseViewModel",
    "ZoomDebugVM",
]
