"""
Entity port interface.

Defines what the layer detail services need from the host's graph
entities. Hosts keep their own entity classes and either subclass
LayeredEntity or register them as virtual subclasses.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..domain.models import HierarchyNode


class LayeredEntity(ABC):
    """
    Abstract interface for a graph entity that sits on a hierarchy layer.

    Only ``layer`` is read on the per-frame path; ``children`` is walked
    once when the layer set is discovered.
    """

    @property
    @abstractmethod
    def entity_id(self) -> str:
        """Stable identifier, used in diagnostics output."""
        pass

    @property
    @abstractmethod
    def layer(self) -> int:
        """Hierarchy layer (0 = most detailed)."""
        pass

    @property
    @abstractmethod
    def children(self) -> Sequence["LayeredEntity"]:
        """Direct children on finer layers (empty for leaves)."""
        pass


LayeredEntity.register(HierarchyNode)
