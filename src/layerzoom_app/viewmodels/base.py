"""
Base ViewModel class for the LayerZoom debug app.

Provides the foundation for ViewModels with:
- PyQt6 signal support for UI binding
- Change-only notification
- Service injection via the constructor
"""

from typing import Any, Optional
from PyQt6.QtCore import QObject, pyqtBoundSignal


class BaseViewModel(QObject):
    """
    Base class for all ViewModels.

    Pattern:
    - Properties with signals on change
    - Commands as methods
    - No widget references (UI-agnostic)
    - Services injected via constructor
    """

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)

    def _set_and_notify(self, attr: str, value: Any, signal: pyqtBoundSignal) -> bool:
        """
        Assign ``self.<attr>`` and emit ``signal(value)`` if it changed.

        Returns:
            True if the value changed
        """
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        signal.emit(value)
        return True
