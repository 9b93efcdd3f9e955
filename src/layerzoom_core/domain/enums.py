"""
Enumerations for the LayerZoom domain.
"""

from enum import Enum


class PresentationMode(str, Enum):
    """
    How an entity is presented at the current zoom.

    Members are declared left to right along the scale axis, i.e. in the
    order a layer passes through them while the camera zooms out.
    """
    INVISIBLE = "invisible"     # Outside the layer's window
    FADING_IN = "fading_in"     # Approaching optimal, alpha 0 -> 1
    EXPANDED = "expanded"       # Peak detail, children shown
    COLLAPSING = "collapsing"   # Background turning opaque
    COLLAPSED = "collapsed"     # Summary view of the subtree
    FADING_OUT = "fading_out"   # Too far out, alpha 1 -> 0

    @property
    def is_visible(self) -> bool:
        return self is not PresentationMode.INVISIBLE

    @property
    def is_fading(self) -> bool:
        """Whether opacity interpolates in this mode."""
        return self in (PresentationMode.FADING_IN, PresentationMode.FADING_OUT)


class EntityShape(str, Enum):
    """Built-in entity shapes a layer can request."""
    CIRCLE = "circle"
    RECTANGLE = "rectangle"
