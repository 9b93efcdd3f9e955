"""
Scale Bar - Zoom-to-layer mapping with tiling presentation windows.

Each layer has an optimal zoom position. Positions use logarithmic
spacing so zooming out by log2(k) units shows objects that are k times
bigger at the same on-screen size:

    L0-optimal: zoom = 0
    L1-optimal: zoom = -log2(rs[0])
    L2-optimal: zoom = -log2(rs[0]) - log2(rs[1])

Windows are computed in scale coordinates (scale = 2^(-zoom), growing as
the camera zooms out). For adjacent layers n, n+1 the windows tile:

    window(n).collapsed_* == window(n + 1).expanded_*

so a layer looks summarized exactly while the next coarser layer is at
peak detail, and the zoom axis has no gaps or overlaps.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from ..domain.config import DEFAULT_EXPAND_FRACTION, DEFAULT_RELATIVE_SCALE
from ..domain.models import Bound, LayerWindow, UNBOUNDED


logger = logging.getLogger(__name__)

# Navigable zoom buffer past the outermost layers, in fade distances
ZOOM_BUFFER_MULTIPLIER = 2.5


class InvalidRelativeScaleError(ValueError):
    """A relative scale that would make the logarithmic spacing undefined."""


def zoom_to_scale(zoom: float) -> float:
    """
    Convert a camera zoom to the scale coordinate, 2^(-zoom).

    Extreme zooms saturate to 0.0 / inf instead of raising.

    Raises:
        ValueError: if zoom is NaN
    """
    if math.isnan(zoom):
        raise ValueError("zoom must be a number, got NaN")
    return _pow2(-zoom)


def _pow2(exponent: float) -> float:
    try:
        return 2.0 ** exponent
    except OverflowError:
        return math.inf


def check_relative_scale(value: float, layer: Optional[int] = None) -> float:
    """
    Validate one relative scale and return it as a float.

    Raises:
        InvalidRelativeScaleError: non-finite, non-positive, or below 1
    """
    where = "default relative scale" if layer is None else f"relative scale for layer {layer}"
    try:
        scale = float(value)
    except (TypeError, ValueError):
        raise InvalidRelativeScaleError(f"{where} is not a number: {value!r}") from None
    if not math.isfinite(scale) or scale <= 0:
        raise InvalidRelativeScaleError(f"{where} must be positive and finite, got {value!r}")
    if scale < 1.0:
        raise InvalidRelativeScaleError(
            f"{where} must be >= 1, got {value!r}. Scales between 0 and 1 are rejected"
            " on purpose: a coarser layer must be at least as large as the finer one,"
            " or its window would sit on the zoomed-in side and break boundary ordering"
        )
    return scale


def check_expand_fraction(value: float) -> float:
    """
    Validate the EXPANDED half-width fraction and return it as a float.

    Raises:
        ValueError: outside (0, 0.5]
    """
    try:
        fraction = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"expand_fraction must be a number, got {value!r}") from None
    if not (0.0 < fraction <= 0.5):
        raise ValueError(f"expand_fraction must be in (0, 0.5], got {value!r}")
    return fraction


class ScaleBar:
    """
    Optimal zoom positions and presentation windows for every layer.

    Built once per graph build and immutable afterwards: there are no
    setters, so an instance can be shared freely between frames.

    Window construction (per layer n, log2 spacing s[n] to layer n + 1,
    f = expand_fraction):
    1. EXPANDED: around the optimal scale, f * s[n-1] below and f * s[n]
       above. Layer 0 opens to scale 0; the highest layer reuses s[n-1]
       above.
    2. COLLAPSED: the next layer's EXPANDED. The highest layer starts one
       collapsing zone past its EXPANDED and never ends.
    3. fading_in_min: previous layer's expanded_max (unbounded for L0).
    4. fading_out_max: next layer's collapsed_min (unbounded for the
       highest layer).

    With f <= 0.5 and every relative scale >= 1 the six boundaries are
    non-decreasing within each window.
    """

    def __init__(
        self,
        max_layer: int,
        relative_scales: Optional[Dict[int, float]] = None,
        default_relative_scale: float = DEFAULT_RELATIVE_SCALE,
        expand_fraction: float = DEFAULT_EXPAND_FRACTION,
        layers: Optional[Iterable[int]] = None,
    ):
        """
        Build the scale bar.

        Args:
            max_layer: Highest layer index (>= 0)
            relative_scales: Optional {layer: scale of layer+1 relative to layer}
            default_relative_scale: Used for layers without an override
            expand_fraction: EXPANDED half-width as a fraction of the spacing
            layers: Discovered layer set. If given and not exactly
                0..max_layer, every listed layer gets an always-EXPANDED window.

        Raises:
            InvalidRelativeScaleError: for a bad default or override
            ValueError: for a negative max_layer, a bad expand_fraction, or a
                discovered layer outside 0..max_layer
        """
        if int(max_layer) != max_layer or max_layer < 0:
            raise ValueError(f"max_layer must be a non-negative integer, got {max_layer!r}")

        self._max_layer = int(max_layer)
        self._default_relative_scale = check_relative_scale(default_relative_scale)
        self._expand_fraction = check_expand_fraction(expand_fraction)
        self._relative_scales: Dict[int, float] = {
            int(layer): check_relative_scale(scale, layer)
            for layer, scale in (relative_scales or {}).items()
        }

        self._positions: Dict[int, float] = {}    # layer -> optimal zoom
        self._spacings: Dict[int, float] = {}     # layer -> log2 spacing to layer + 1
        self._windows: Dict[int, LayerWindow] = {}

        self._compute_positions()

        discovered = sorted(set(int(layer) for layer in layers)) if layers is not None else None
        if discovered and (discovered[0] < 0 or discovered[-1] > self._max_layer):
            raise ValueError(
                f"Discovered layers {discovered} must lie within 0..{self._max_layer}"
            )
        self._degenerate = False
        if discovered is not None and discovered != list(range(self._max_layer + 1)):
            self._build_degenerate(discovered)
        elif self._max_layer == 0:
            self._windows[0] = LayerWindow.open()
        else:
            self._compute_windows()

        logger.info(
            "Scale bar built: layers=%s degenerate=%s zoom_range=(%.3f, %.3f)",
            self.layers, self._degenerate, *self.zoom_range,
        )

    @classmethod
    def for_layers(
        cls,
        layers: Iterable[int],
        relative_scales: Optional[Dict[int, float]] = None,
        default_relative_scale: float = DEFAULT_RELATIVE_SCALE,
        expand_fraction: float = DEFAULT_EXPAND_FRACTION,
    ) -> "ScaleBar":
        """Build a scale bar from a discovered layer set (empty = layer 0 only)."""
        found = sorted(set(int(layer) for layer in layers))
        if not found:
            found = [0]
        if found[0] < 0:
            raise ValueError(f"Layers must be non-negative, got {found[0]}")
        return cls(
            found[-1],
            relative_scales=relative_scales,
            default_relative_scale=default_relative_scale,
            expand_fraction=expand_fraction,
            layers=found,
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _compute_positions(self) -> None:
        """Walk layers 0..max, subtracting log2(relative scale) per step."""
        zoom = 0.0
        self._positions[0] = zoom
        for layer in range(1, self._max_layer + 1):
            spacing = math.log2(self.relative_scale(layer - 1))
            zoom -= spacing
            self._positions[layer] = zoom
            self._spacings[layer - 1] = spacing

    def _build_degenerate(self, discovered: List[int]) -> None:
        logger.warning(
            "Layer set %s is not contiguous from 0; every layer stays expanded",
            discovered,
        )
        self._degenerate = True
        self._positions = {layer: self._positions[layer] for layer in discovered}
        open_window = LayerWindow.open()
        for layer in discovered:
            self._windows[layer] = open_window

    def _compute_windows(self) -> None:
        top = self._max_layer
        f = self._expand_fraction

        # Pass 1: EXPANDED bounds, in log2(scale) = -zoom
        expanded: Dict[int, Tuple[Bound, Bound]] = {}
        for layer in range(top + 1):
            centre = -self._positions[layer]
            below = self._spacings[layer - 1] if layer > 0 else 0.0
            above = self._spacings[layer] if layer < top else self._spacings[layer - 1]
            lower = Bound.at(0.0) if layer == 0 else Bound.at(_pow2(centre - f * below))
            upper = Bound.at(_pow2(centre + f * above))
            expanded[layer] = (lower, upper)

        # Pass 2: COLLAPSED = next layer's EXPANDED; the top layer extends
        # to where a virtual next layer's EXPANDED would begin.
        collapsed: Dict[int, Tuple[Bound, Bound]] = {}
        for layer in range(top):
            collapsed[layer] = expanded[layer + 1]
        spacing = self._spacings[top - 1]
        collapsed[top] = (
            Bound.at(_pow2(-self._positions[top] + spacing - f * spacing)),
            UNBOUNDED,
        )

        # Passes 3-4: fades hand over to the neighbouring layers
        for layer in range(top + 1):
            fading_in = expanded[layer - 1][1] if layer > 0 else UNBOUNDED
            fading_out = collapsed[layer + 1][0] if layer < top else UNBOUNDED
            self._windows[layer] = LayerWindow(
                fading_in_min=fading_in,
                expanded_min=expanded[layer][0],
                expanded_max=expanded[layer][1],
                collapsed_min=collapsed[layer][0],
                collapsed_max=collapsed[layer][1],
                fading_out_max=fading_out,
            )
            logger.debug("Layer %d window: %s", layer, self._windows[layer])

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def max_layer(self) -> int:
        return self._max_layer

    @property
    def layers(self) -> List[int]:
        """Registered layers, ascending."""
        return sorted(self._windows)

    @property
    def is_degenerate(self) -> bool:
        """True when built from a non-contiguous layer set."""
        return self._degenerate

    @property
    def default_relative_scale(self) -> float:
        return self._default_relative_scale

    @property
    def expand_fraction(self) -> float:
        return self._expand_fraction

    def has_layer(self, layer: int) -> bool:
        return layer in self._windows

    def relative_scale(self, layer: int) -> float:
        """Scale of layer + 1 relative to ``layer`` (override or default)."""
        return self._relative_scales.get(layer, self._default_relative_scale)

    def optimal_zoom(self, layer: int) -> float:
        """Optimal zoom position of a layer; 0.0 for an unregistered layer."""
        return self._positions.get(layer, 0.0)

    def primary_layer(self, zoom: float) -> int:
        """Layer whose optimal position is closest to ``zoom`` (diagnostics only)."""
        closest_layer = 0
        closest_distance = math.inf
        for layer in sorted(self._positions):
            distance = abs(zoom - self._positions[layer])
            if distance < closest_distance:
                closest_distance = distance
                closest_layer = layer
        return closest_layer

    def window(self, layer: int) -> Optional[LayerWindow]:
        """Presentation window of a layer, or None if unregistered."""
        return self._windows.get(layer)

    @property
    def zoom_range(self) -> Tuple[float, float]:
        """
        (min_zoom, max_zoom) worth navigating.

        Extends a fixed buffer past layer 0 and past the highest layer, so
        the range grows with the depth of the hierarchy.
        """
        fade_distance = math.log2(self._default_relative_scale) * 0.5
        buffer = fade_distance * ZOOM_BUFFER_MULTIPLIER
        depth = abs(self._positions.get(self._max_layer, 0.0))
        return (-(depth + buffer), buffer)

    def __repr__(self) -> str:
        return f"ScaleBar(max_layer={self._max_layer}, layers={self.layers})"
