"""
Ports (interfaces) for LayerZoom.

These define the contracts that host entities must satisfy.
This keeps the core free of any particular graph model.
"""

from .entity_port import LayeredEntity

__all__ = ["LayeredEntity"]
