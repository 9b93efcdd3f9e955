"""
Configuration objects for LayerZoom.

Consumed once when the scale bar is built. Values can be passed directly
or parsed from a plain dict (e.g. a section of a host's JSON settings).
"""

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .enums import EntityShape


DEFAULT_RELATIVE_SCALE = 3.0
DEFAULT_EXPAND_FRACTION = 0.3
DEFAULT_ENTITY_COLOUR = "#3498db"
DEFAULT_EDGE_COLOUR = "#95a5a6"


@dataclass
class LayerMetadata:
    """
    Per-layer customisation. All fields are optional.

    relative_scale is how much bigger this layer's entities are than the
    layer below it; None falls back to the config default.
    """
    relative_scale: Optional[float] = None
    entity_shape: str = EntityShape.CIRCLE.value
    entity_colour: str = DEFAULT_ENTITY_COLOUR
    edge_colour: str = DEFAULT_EDGE_COLOUR

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayerMetadata":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown layer metadata keys: {sorted(unknown)}")
        values = dict(data)
        if values.get("relative_scale") is not None:
            values["relative_scale"] = float(values["relative_scale"])
        return cls(**values)


@dataclass
class LayerDetailConfig:
    """Settings for layer detail management."""
    default_relative_scale: float = DEFAULT_RELATIVE_SCALE
    layer_metadata: Dict[int, LayerMetadata] = field(default_factory=dict)

    # Half-width of each EXPANDED window, as a fraction of the log2 spacing
    # to the adjacent layer. Must lie in (0, 0.5].
    expand_fraction: float = DEFAULT_EXPAND_FRACTION

    background_opacity_transparent: float = 0.15
    background_opacity_opaque: float = 1.0

    # Log visible layers/entities every time they are queried
    debug: bool = False

    def relative_scale_overrides(self) -> Dict[int, float]:
        """Layers whose metadata sets an explicit relative scale."""
        return {
            layer: meta.relative_scale
            for layer, meta in self.layer_metadata.items()
            if meta.relative_scale is not None
        }

    def metadata_for(self, layer: int) -> LayerMetadata:
        return self.layer_metadata.get(layer) or LayerMetadata()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayerDetailConfig":
        """
        Build a config from a plain dict.

        Layer metadata keys may be ints or numeric strings (JSON object keys
        are always strings).

        Raises:
            ValueError: on unknown keys or malformed values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        values = dict(data)
        raw_meta = values.pop("layer_metadata", None) or {}
        metadata: Dict[int, LayerMetadata] = {}
        for key, meta in raw_meta.items():
            try:
                layer = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"Layer metadata key must be an integer: {key!r}")
            if layer < 0:
                raise ValueError(f"Layer metadata key must be non-negative: {layer}")
            metadata[layer] = meta if isinstance(meta, LayerMetadata) else LayerMetadata.from_dict(meta)

        for name in ("default_relative_scale", "expand_fraction",
                     "background_opacity_transparent", "background_opacity_opaque"):
            if name in values:
                values[name] = float(values[name])
        if "debug" in values:
            values["debug"] = bool(values["debug"])

        config = cls(layer_metadata=metadata, **values)
        config._check_opacities()
        return config

    def _check_opacities(self) -> None:
        for name in ("background_opacity_transparent", "background_opacity_opaque"):
            value = getattr(self, name)
            if not math.isfinite(value) or not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
