"""
Diagnostics - Per-layer snapshots of the scale bar at a given zoom.

Feeds the zoom debug widget and plain-text logging. Nothing here is on
the per-frame render path.
"""

from typing import List

from ..domain.models import Bound, LayerDiagnostics
from .detail_resolver import DetailStateResolver, classify
from .scale_bar import zoom_to_scale


def diagnose(resolver: DetailStateResolver, zoom: float) -> List[LayerDiagnostics]:
    """Raw window, mode and detail state of every layer at ``zoom``."""
    scale_bar = resolver.scale_bar
    scale = zoom_to_scale(zoom)
    snapshots = []
    for layer in scale_bar.layers:
        window = scale_bar.window(layer)
        snapshots.append(LayerDiagnostics(
            layer=layer,
            optimal_zoom=scale_bar.optimal_zoom(layer),
            window=window,
            mode=classify(window, scale),
            state=resolver.detail_state(layer, zoom),
        ))
    return snapshots


def _fmt(bound: Bound, lower: bool = False) -> str:
    if bound.is_unbounded:
        return "-∞" if lower else "∞"
    return f"{bound.value:.3f}"


def format_report(resolver: DetailStateResolver, zoom: float) -> str:
    """
    Human-readable report, one line per layer.

    Example:
        Zoom: 0.00 (L0-optimal: 0.00) | scale: 1.000
        L0  expanded    opacity=1.00  [-∞ | 0.000 1.390 | 2.158 4.171 | 6.473]
    """
    scale_bar = resolver.scale_bar
    primary = scale_bar.primary_layer(zoom)
    lines = [
        f"Zoom: {zoom:.2f} (L{primary}-optimal: {scale_bar.optimal_zoom(primary):.2f})"
        f" | scale: {zoom_to_scale(zoom):.3f}"
    ]
    for snap in diagnose(resolver, zoom):
        w = snap.window
        lines.append(
            f"L{snap.layer:<3d}{snap.mode.value:<12s}opacity={snap.state.opacity:.2f}  "
            f"[{_fmt(w.fading_in_min, lower=True)} | {_fmt(w.expanded_min)} {_fmt(w.expanded_max)} | "
            f"{_fmt(w.collapsed_min)} {_fmt(w.collapsed_max)} | {_fmt(w.fading_out_max)}]"
        )
    return "\n".join(lines)
