"""
Domain models for LayerZoom.

Contains DTOs, enums, and configuration used throughout the library.
"""

from .models import (
    Bound,
    UNBOUNDED,
    LayerWindow,
    DetailState,
    DEFAULT_DETAIL_STATE,
    INVISIBLE_DETAIL_STATE,
    HierarchyNode,
    LayerDiagnostics,
)
from .enums import (
    PresentationMode,
    EntityShape,
)
from .config import (
    LayerDetailConfig,
    LayerMetadata,
    DEFAULT_RELATIVE_SCALE,
    DEFAULT_EXPAND_FRACTION,
)

__all__ = [
    # Models
    "Bound",
    "UNBOUNDED",
    "LayerWindow",
    "DetailState",
    "DEFAULT_DETAIL_STATE",
    "INVISIBLE_DETAIL_STATE",
    "HierarchyNode",
    "LayerDiagnostics",
    # Enums
    "PresentationMode",
    "EntityShape",
    # Config
    "LayerDetailConfig",
    "LayerMetadata",
    "DEFAULT_RELATIVE_SCALE",
    "DEFAULT_EXPAND_FRACTION",
]
