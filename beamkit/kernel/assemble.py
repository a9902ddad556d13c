# beamkit/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Assembly
================================

Scatter-add of element contributions into the global stiffness matrix and
load vector. Callers compute, per element, its DOF map and its matrix (or
vector) in global DOF order; the assembly itself does not care which
element produced them.

    contributions = [(dof_map, ke), ...]
    K = assemble_global_K(ndof, contributions)
"""

import numpy as np
from typing import List, Tuple


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """
    Assemble the global stiffness matrix.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system
    contributions : List[Tuple[List[int], np.ndarray]]
        (dof_map, ke) per element; ke has shape (len(dof_map), len(dof_map))

    Returns:
    --------
    np.ndarray
        K of shape (ndof, ndof), symmetric positive semi-definite before
        supports are applied
    """
    K = np.zeros((ndof, ndof), dtype=float)

    for dof_map, ke in contributions:
        n = len(dof_map)
        assert ke.shape == (n, n), \
            f"Element ke shape {ke.shape} doesn't match dof_map length {n}"
        idx = np.asarray(dof_map, dtype=int)
        K[np.ix_(idx, idx)] += ke

    return K


def assemble_global_F(
    ndof: int,
    contributions: List[Tuple[List[int], np.ndarray]]
) -> np.ndarray:
    """Assemble the global load vector from (dof_map, fe) pairs."""
    F = np.zeros(ndof, dtype=float)

    for dof_map, fe in contributions:
        n = len(dof_map)
        assert fe.shape == (n,), \
            f"Element fe shape {fe.shape} doesn't match dof_map length {n}"
        np.add.at(F, np.asarray(dof_map, dtype=int), fe)

    return F


def add_nodal_load(
    F: np.ndarray,
    node: int,
    load_vector: np.ndarray,
    dof_per_node: int
) -> None:
    """
    Add a nodal load [Fx, Fy, Mz] to the global load vector (in-place).

    >>> F = np.zeros(6)
    >>> add_nodal_load(F, node=1, load_vector=np.array([0.0, -1000.0, 0.0]), dof_per_node=3)
    >>> F[4]
    -1000.0
    """
    base_dof = dof_per_node * node
    for i, val in enumerate(load_vector):
        F[base_dof + i] += val
