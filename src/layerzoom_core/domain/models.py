"""
Domain models (DTOs) for LayerZoom.

These are pure data classes with no rendering or physics dependencies.
Window boundaries live in scale coordinates, where scale = 2^(-zoom).
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .enums import PresentationMode


@dataclass(frozen=True)
class Bound:
    """
    One window boundary: either a finite scale value or open-ended.

    An unbounded boundary must never take part in a numeric comparison;
    check ``is_unbounded`` first. Which infinity it stands for depends on
    the boundary (see LayerWindow).
    """
    value: Optional[float] = None

    @classmethod
    def at(cls, value: float) -> "Bound":
        return cls(float(value))

    @classmethod
    def unbounded(cls) -> "Bound":
        return cls(None)

    @property
    def is_unbounded(self) -> bool:
        return self.value is None

    def __str__(self) -> str:
        if self.value is None:
            return "unbounded"
        return f"{self.value:.4g}"


UNBOUNDED = Bound.unbounded()


@dataclass(frozen=True)
class LayerWindow:
    """
    The six presentation boundaries of one layer, in scale coordinates.

    Ordering (zoomed in -> zoomed out):
        fading_in_min <= expanded_min <= expanded_max
            <= collapsed_min <= collapsed_max <= fading_out_max

    An unbounded ``fading_in_min`` means -inf (no INVISIBLE region on the
    zoomed-in side). Every other unbounded boundary means +inf.
    """
    fading_in_min: Bound
    expanded_min: Bound
    expanded_max: Bound
    collapsed_min: Bound
    collapsed_max: Bound
    fading_out_max: Bound

    @classmethod
    def open(cls) -> "LayerWindow":
        """Window that is EXPANDED at every scale."""
        return cls(
            fading_in_min=UNBOUNDED,
            expanded_min=Bound.at(0.0),
            expanded_max=UNBOUNDED,
            collapsed_min=UNBOUNDED,
            collapsed_max=UNBOUNDED,
            fading_out_max=UNBOUNDED,
        )

    def boundaries(self) -> Tuple[Bound, ...]:
        """All six boundaries in scale order."""
        return (
            self.fading_in_min,
            self.expanded_min,
            self.expanded_max,
            self.collapsed_min,
            self.collapsed_max,
            self.fading_out_max,
        )

    def as_floats(self) -> Tuple[float, ...]:
        """Boundaries with unbounded values mapped to -inf / +inf."""
        values = []
        for index, bound in enumerate(self.boundaries()):
            if bound.is_unbounded:
                values.append(float("-inf") if index == 0 else float("inf"))
            else:
                values.append(bound.value)
        return tuple(values)


@dataclass(frozen=True)
class DetailState:
    """Render-ready presentation of an entity at a given zoom."""
    visible: bool
    opacity: float               # 0.0 to 1.0
    show_border: bool
    background_opacity: float    # 0.0 to 1.0
    label_inside: bool           # Label inside the node vs outside it
    show_children: bool
    collapse_state: float        # 0 = fully detailed, 1 = fully collapsed


# Returned for layers the scale bar does not know about, so a render query
# racing a graph rebuild still draws the entity.
DEFAULT_DETAIL_STATE = DetailState(
    visible=True,
    opacity=1.0,
    show_border=True,
    background_opacity=0.15,
    label_inside=False,
    show_children=True,
    collapse_state=0.0,
)

INVISIBLE_DETAIL_STATE = DetailState(
    visible=False,
    opacity=0.0,
    show_border=False,
    background_opacity=0.0,
    label_inside=False,
    show_children=False,
    collapse_state=1.0,
)


@dataclass
class HierarchyNode:
    """A graph entity placed on a hierarchy layer."""
    entity_id: str
    layer: int = 0
    children: List["HierarchyNode"] = field(default_factory=list)

    def add_child(self, child: "HierarchyNode") -> "HierarchyNode":
        self.children.append(child)
        return child

    def is_composite(self) -> bool:
        return len(self.children) > 0

    def walk(self) -> Iterator["HierarchyNode"]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class LayerDiagnostics:
    """Snapshot of one layer at one zoom, for visual self-inspection."""
    layer: int
    optimal_zoom: float
    window: LayerWindow
    mode: PresentationMode
    state: DetailState
