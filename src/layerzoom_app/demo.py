"""
Demo hierarchy for the debug app: modules containing groups of nodes.
"""

from typing import List

from layerzoom_core.domain.models import HierarchyNode


def demo_hierarchy(modules: int = 2, groups: int = 3, nodes: int = 4) -> List[HierarchyNode]:
    """
    Three-layer hierarchy.

    Layer 2 modules contain layer 1 groups, which contain layer 0 nodes.
    """
    roots = []
    for m in range(modules):
        module = HierarchyNode(f"module_{m}", layer=2)
        for g in range(groups):
            group = module.add_child(HierarchyNode(f"group_{m}_{g}", layer=1))
            for n in range(nodes):
                group.add_child(HierarchyNode(f"node_{m}_{g}_{n}", layer=0))
        roots.append(module)
    return roots
