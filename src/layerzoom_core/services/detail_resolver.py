"""
Detail State Resolver - Maps (layer, zoom) to a render-ready DetailState.

Two steps, both pure:
1. Classify the layer into a PresentationMode from its scale-bar window.
2. Derive every visual property from the mode and the window boundaries.

The resolver keeps no per-frame state, so it can be called for every
entity in every frame (or from several workers at once) without locking.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, TypeVar

from ..domain.enums import PresentationMode
from ..domain.models import (
    Bound,
    DEFAULT_DETAIL_STATE,
    DetailState,
    INVISIBLE_DETAIL_STATE,
    LayerWindow,
)
from .scale_bar import ScaleBar, zoom_to_scale


logger = logging.getLogger(__name__)

E = TypeVar("E")


def smoothstep(t: float) -> float:
    """Hermite ease, t^2 (3 - 2t), with t clamped to [0, 1]."""
    t = max(0.0, min(1.0, t))
    return t * t * (3.0 - 2.0 * t)


def _progress(scale: float, start: Bound, end: Bound) -> float:
    """Fractional position of ``scale`` between two bounded boundaries."""
    if start.is_unbounded or end.is_unbounded:
        return 0.0
    width = end.value - start.value
    if width <= 0:
        return 1.0
    return (scale - start.value) / width


def _below(scale: float, bound: Bound) -> bool:
    """scale < bound, where an unbounded upper boundary is +inf."""
    if bound.is_unbounded:
        return True
    return scale < bound.value


def classify(window: LayerWindow, scale: float) -> PresentationMode:
    """
    Place ``scale`` in one of the six regions of ``window``.

    An unbounded fading_in_min means the layer has no INVISIBLE region on
    the zoomed-in side; an unbounded fading_out_max means none on the
    zoomed-out side.
    """
    if not window.fading_in_min.is_unbounded and scale < window.fading_in_min.value:
        return PresentationMode.INVISIBLE
    if _below(scale, window.expanded_min):
        if window.fading_in_min.is_unbounded:
            # Nothing finer to hand over from: already at peak detail.
            return PresentationMode.EXPANDED
        return PresentationMode.FADING_IN
    if _below(scale, window.expanded_max):
        return PresentationMode.EXPANDED
    if _below(scale, window.collapsed_min):
        return PresentationMode.COLLAPSING
    if _below(scale, window.collapsed_max):
        return PresentationMode.COLLAPSED
    if _below(scale, window.fading_out_max):
        return PresentationMode.FADING_OUT
    return PresentationMode.INVISIBLE


class DetailStateResolver:
    """
    Pure mapping from (layer, zoom) to DetailState over one ScaleBar.

    Property table:

        mode        visible opacity       background     label   children border
        INVISIBLE   no      0             0              -       no       no
        FADING_IN   yes     smooth 0->1   transparent    outside no       no
        EXPANDED    yes     1             transparent    outside yes      yes
        COLLAPSING  yes     1             transp.->opaque inside no       yes
        COLLAPSED   yes     1             opaque         inside  no       yes
        FADING_OUT  yes     smooth 1->0   opaque         inside  no       no

    Opacity only interpolates in the two FADING modes, and equals 1 on
    both sides of every other boundary, so nothing pops.
    """

    def __init__(
        self,
        scale_bar: ScaleBar,
        background_opacity_transparent: float = 0.15,
        background_opacity_opaque: float = 1.0,
    ):
        self._scale_bar = scale_bar
        self._bg_transparent = background_opacity_transparent
        self._bg_opaque = background_opacity_opaque
        self._default_state = replace(
            DEFAULT_DETAIL_STATE, background_opacity=background_opacity_transparent
        )

    @property
    def scale_bar(self) -> ScaleBar:
        return self._scale_bar

    @property
    def default_state(self) -> DetailState:
        """State returned for layers the scale bar does not know."""
        return self._default_state

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def mode(self, layer: int, zoom: float) -> Optional[PresentationMode]:
        """Presentation mode of ``layer`` at ``zoom``; None for an unknown layer."""
        window = self._scale_bar.window(layer)
        if window is None:
            return None
        return classify(window, zoom_to_scale(zoom))

    # -------------------------------------------------------------------------
    # Property derivation
    # -------------------------------------------------------------------------

    def detail_state(self, layer: int, zoom: float) -> DetailState:
        """
        Full presentation state of ``layer`` at ``zoom``.

        Unknown layers get the fully visible, fully expanded default rather
        than an error, so a render racing a graph rebuild never blanks.
        """
        window = self._scale_bar.window(layer)
        if window is None:
            logger.debug("Layer %s not on scale bar; using default detail state", layer)
            return self._default_state

        scale = zoom_to_scale(zoom)
        return self._state_for(classify(window, scale), window, scale)

    def _state_for(self, mode: PresentationMode, window: LayerWindow, scale: float) -> DetailState:
        if mode is PresentationMode.INVISIBLE:
            return INVISIBLE_DETAIL_STATE

        if mode is PresentationMode.FADING_IN:
            t = _progress(scale, window.fading_in_min, window.expanded_min)
            return DetailState(
                visible=True,
                opacity=smoothstep(t),
                show_border=False,
                background_opacity=self._bg_transparent,
                label_inside=False,
                show_children=False,
                collapse_state=0.0,
            )

        if mode is PresentationMode.EXPANDED:
            return DetailState(
                visible=True,
                opacity=1.0,
                show_border=True,
                background_opacity=self._bg_transparent,
                label_inside=False,
                show_children=True,
                collapse_state=0.0,
            )

        if mode is PresentationMode.COLLAPSING:
            eased = smoothstep(_progress(scale, window.expanded_max, window.collapsed_min))
            return DetailState(
                visible=True,
                opacity=1.0,
                show_border=True,
                background_opacity=self._bg_transparent + (self._bg_opaque - self._bg_transparent) * eased,
                label_inside=True,
                show_children=False,
                collapse_state=eased,
            )

        if mode is PresentationMode.COLLAPSED:
            return DetailState(
                visible=True,
                opacity=1.0,
                show_border=True,
                background_opacity=self._bg_opaque,
                label_inside=True,
                show_children=False,
                collapse_state=1.0,
            )

        # FADING_OUT
        t = _progress(scale, window.collapsed_max, window.fading_out_max)
        return DetailState(
            visible=True,
            opacity=1.0 - smoothstep(t),
            show_border=False,
            background_opacity=self._bg_opaque,
            label_inside=True,
            show_children=False,
            collapse_state=1.0,
        )

    # -------------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------------

    def visible_layers(self, zoom: float) -> List[int]:
        """Every registered layer not classified INVISIBLE at ``zoom``, ascending."""
        scale = zoom_to_scale(zoom)
        visible = []
        for layer in self._scale_bar.layers:
            if classify(self._scale_bar.window(layer), scale).is_visible:
                visible.append(layer)
        return visible

    def visible_entities(self, entities: Iterable[E], zoom: float) -> List[E]:
        """
        Entities whose layer is visible at ``zoom``, in input order.

        Everything else can be frozen by the physics engine.
        """
        visible = set(self.visible_layers(zoom))
        return [entity for entity in entities if entity.layer in visible]

