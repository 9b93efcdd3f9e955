"""
Layer Detail Service - Host-facing facade over ScaleBar and resolver.

Owns the layer configuration, discovers the layer set from an entity
hierarchy, builds the scale bar, and answers every per-frame query the
renderer and physics engine make. Until a scale bar is built, queries
fall back to "everything visible" so an empty graph still draws.
"""

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, TypeVar

from ..domain.config import LayerDetailConfig
from ..domain.enums import PresentationMode
from ..domain.models import DEFAULT_DETAIL_STATE, DetailState
from ..ports.entity_port import LayeredEntity
from .detail_resolver import DetailStateResolver
from .scale_bar import ScaleBar, check_expand_fraction, check_relative_scale


logger = logging.getLogger(__name__)

E = TypeVar("E")


class LayerDetailService:
    """
    Service for layer-based level of detail.

    Usage:
        service = LayerDetailService(LayerDetailConfig(default_relative_scale=3))
        service.build_from_entities(roots)
        state = service.detail_state(entity.layer, zoom)
        awake = service.visible_entities(all_entities, zoom)

    Rebuild (build_scale_bar / build_from_entities) whenever the hierarchy
    changes structurally; the scale bar itself is immutable.
    """

    def __init__(self, config: Optional[LayerDetailConfig] = None):
        """
        Initialize the service.

        Args:
            config: Layer configuration (defaults if omitted)

        Raises:
            InvalidRelativeScaleError: if the config carries a bad relative scale
            ValueError: if the config carries a bad expand_fraction
        """
        self.config = config or LayerDetailConfig()
        check_relative_scale(self.config.default_relative_scale)
        for layer, scale in self.config.relative_scale_overrides().items():
            check_relative_scale(scale, layer)
        check_expand_fraction(self.config.expand_fraction)

        self._resolver: Optional[DetailStateResolver] = None

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    @property
    def scale_bar(self) -> Optional[ScaleBar]:
        return self._resolver.scale_bar if self._resolver else None

    @property
    def resolver(self) -> Optional[DetailStateResolver]:
        return self._resolver

    @property
    def is_built(self) -> bool:
        return self._resolver is not None

    def layers_in_hierarchy(self, entities: Iterable[LayeredEntity]) -> List[int]:
        """All unique layers in the entity hierarchy (recursively), ascending."""
        layers = set()
        stack = list(entities)
        while stack:
            entity = stack.pop()
            layers.add(int(entity.layer))
            stack.extend(entity.children or ())
        return sorted(layers)

    def build_scale_bar(self, min_layer: int, max_layer: int) -> ScaleBar:
        """
        Build and install the scale bar for layers min_layer..max_layer.

        A min_layer other than 0 leaves a gap below it, which takes the
        degenerate (always expanded) branch.
        """
        if min_layer > max_layer:
            raise ValueError(f"min_layer {min_layer} exceeds max_layer {max_layer}")
        return self._install(range(min_layer, max_layer + 1))

    def build_from_entities(self, entities: Iterable[LayeredEntity]) -> ScaleBar:
        """Discover layers in the hierarchy and build the scale bar from them."""
        return self._install(self.layers_in_hierarchy(entities))

    def _install(self, layers: Iterable[int]) -> ScaleBar:
        scale_bar = ScaleBar.for_layers(
            layers,
            relative_scales=self.config.relative_scale_overrides(),
            default_relative_scale=self.config.default_relative_scale,
            expand_fraction=self.config.expand_fraction,
        )
        self._resolver = DetailStateResolver(
            scale_bar,
            background_opacity_transparent=self.config.background_opacity_transparent,
            background_opacity_opaque=self.config.background_opacity_opaque,
        )
        return scale_bar

    def clear(self) -> None:
        """Drop the scale bar (e.g. when the graph is cleared)."""
        self._resolver = None

    # -------------------------------------------------------------------------
    # Per-frame queries
    # -------------------------------------------------------------------------

    def optimal_zoom(self, layer: int) -> float:
        if not self._resolver:
            return 0.0
        return self._resolver.scale_bar.optimal_zoom(layer)

    def primary_layer(self, zoom: float) -> int:
        if not self._resolver:
            return 0
        return self._resolver.scale_bar.primary_layer(zoom)

    def mode(self, layer: int, zoom: float) -> Optional[PresentationMode]:
        if not self._resolver:
            return None
        return self._resolver.mode(layer, zoom)

    def detail_state(self, layer: int, zoom: float) -> DetailState:
        if not self._resolver:
            return replace(
                DEFAULT_DETAIL_STATE,
                background_opacity=self.config.background_opacity_transparent,
            )
        return self._resolver.detail_state(layer, zoom)

    def visible_layers(self, zoom: float) -> List[int]:
        if not self._resolver:
            return []
        return self._resolver.visible_layers(zoom)

    def visible_entities(self, entities: Sequence[E], zoom: float) -> List[E]:
        """
        Filter entities to those on visible layers.

        Only these need simulating; the physics engine freezes the rest.
        """
        if not self._resolver:
            return list(entities)
        result = self._resolver.visible_entities(entities, zoom)
        if self.config.debug:
            logger.info(
                "Zoom: %.2f, visible layers: %s, visible entities: %s",
                zoom,
                self._resolver.visible_layers(zoom),
                ", ".join(str(getattr(e, "entity_id", e)) for e in result),
            )
        return result

    # -------------------------------------------------------------------------
    # Layer metadata
    # -------------------------------------------------------------------------

    def relative_scale(self, layer: int) -> float:
        """Scale of layer + 1 relative to ``layer``."""
        meta = self.config.layer_metadata.get(layer)
        if meta is not None and meta.relative_scale is not None:
            return meta.relative_scale
        return self.config.default_relative_scale

    def node_radius(self, base_radius: float, layer: int) -> float:
        """
        Radius of a node on ``layer``.

        Scales cumulatively: base * rs[0] * ... * rs[layer - 1].
        """
        cumulative = 1.0
        for i in range(layer):
            cumulative *= self.relative_scale(i)
        return base_radius * cumulative

    def entity_shape(self, layer: int) -> str:
        return self.config.metadata_for(layer).entity_shape

    def entity_colour(self, layer: int) -> str:
        return self.config.metadata_for(layer).entity_colour

    def edge_colour(self, layer: int) -> str:
        return self.config.metadata_for(layer).edge_colour
