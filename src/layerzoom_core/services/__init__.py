"""
Services for LayerZoom.

Scale bar construction, detail-state resolution, and diagnostics.
"""

from .scale_bar import ScaleBar, InvalidRelativeScaleError, zoom_to_scale
from .detail_resolver import DetailStateResolver, classify, smoothstep
from .layer_detail import LayerDetailService
from .diagnostics import diagnose, format_report

__all__ = [
    "ScaleBar",
    "InvalidRelativeScaleError",
    "zoom_to_scale",
    "DetailStateResolver",
    "classify",
    "smoothstep",
    "LayerDetailService",
    "diagnose",
    "format_report",
]
