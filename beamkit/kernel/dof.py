# beamkit/kernel/dof.py
"""
DOF MANAGER: Degree of Freedom Indexing
=======================================

Every node of a beam carries three DOFs, stored in this order:

    0 = u      axial displacement (+x)
    1 = w      transverse deflection (+ upward)
    2 = theta  rotation (+ counter-clockwise)

Nodes are addressed by their integer position in ``Model.nodes``, never by
their user-facing id, so deleting a node in the editor cannot leave a
stale index behind (the model is rebuilt on every edit).

USAGE:
------
    dof = DOFManager(dof_per_node=3)
    global_idx = dof.idx(node=2, local_dof=1)  # -> 7
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DOFManager:
    """
    Maps (node index, local dof) to a global DOF index.

    Examples:
    ---------
    >>> dof = DOFManager(dof_per_node=3)
    >>> dof.idx(1, 0)
    3
    >>> dof.ndof(4)
    12
    >>> dof.element_dof_map([2, 5])
    [6, 7, 8, 15, 16, 17]
    """
    dof_per_node: int

    def idx(self, node: int, local_dof: int) -> int:
        return self.dof_per_node * node + local_dof

    def ndof(self, n_nodes: int) -> int:
        return self.dof_per_node * n_nodes

    def node_dofs(self, node: int) -> List[int]:
        base = self.dof_per_node * node
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, nodes: List[int]) -> List[int]:
        """Flattened global DOFs for an element connecting ``nodes`` (in order)."""
        result = []
        for node in nodes:
            result.extend(self.node_dofs(node))
        return result


DOF_BEAM = DOFManager(dof_per_node=3)   # u, w, theta
