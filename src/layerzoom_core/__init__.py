"""
LayerZoom Core - Headless level-of-detail engine for zoomable graphs.

Maps a single camera zoom onto a per-layer presentation state so that
zooming through any number of hierarchy layers stays visually continuous.
It has no UI dependencies and can be embedded in any renderer.
"""

__version__ = "0.1.0"

# Lazy imports to avoid loading everything at once
def __getattr__(name):
    if name == "ScaleBar":
        from .services.scale_bar import ScaleBar
        return ScaleBar
    elif name == "DetailStateResolver":
        from .services.detail_resolver import DetailStateResolver
        return DetailStateResolver
    elif name == "LayerDetailService":
        from .services.layer_detail import LayerDetailService
        return LayerDetailService
    elif name == "LayerDetailConfig":
        from .domain.config import LayerDetailConfig
        return LayerDetailConfig
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "__version__",
    "ScaleBar",
    "DetailStateResolver",
    "LayerDetailService",
    "LayerDetailConfig",
]
