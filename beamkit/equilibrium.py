# beamkit/equilibrium.py
"""
EQUILIBRIUM SOLVER
==================

Finds the support reactions.

DETERMINATE PATH (r == 0):
--------------------------
Per sub-structure, three equations with the reactions as unknowns:

    sum Fx = 0
    sum Fy = 0
    sum M about the sub-structure's left end = 0

Distributed loads enter through their resultants. The stacked system is
square by construction and solved by LU with partial pivoting.

INDETERMINATE PATH (r > 0):
---------------------------
Stiffness method: assemble the 6x6 beam matrices (u, w, theta at each
end), load the free DOFs with work-equivalent nodal loads, solve the free
block for the nodal displacements, and back-substitute

    R = K·d - F

for the reactions at restrained DOFs.

Both paths return reactions keyed by node index as [Rx, Ry, Mz]
(Rx along +x, Ry upward, Mz counter-clockwise; zero where unrestrained).
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .determinacy import Component, Determinacy
from .elements import span_stiffness
from .errors import SingularError
from .kernel.assemble import add_nodal_load, assemble_global_F, assemble_global_K
from .kernel.dof import DOF_BEAM
from .kernel.solve import solve_dense, solve_linear
from .loads import LoadSet, consistent_nodal_loads, load_resultant
from .model import THETA, U, W, Model

logger = logging.getLogger(__name__)

Reactions = Dict[int, np.ndarray]


def component_loads(comp: Component, loads: LoadSet):
    nodes = set(comp.nodes)
    elements = set(comp.elements)
    points = [p for p in loads.points if p.node in nodes or p.element in elements]
    dist = [d for d in loads.distributed if d.element in elements]
    return points, dist


def _unknowns(model: Model, comp: Component) -> List[Tuple[int, int]]:
    return [(i, dof) for i in comp.supports(model) for dof in model.nodes[i].support.restrained]


def solve_determinate(
    model: Model,
    det: Determinacy,
    loads: LoadSet,
    config: SolverConfig = CONFIG,
) -> Reactions:
    """Reactions of a statically determinate model from global equilibrium."""
    unknowns: List[Tuple[int, int]] = []
    for comp in det.components:
        unknowns.extend(_unknowns(model, comp))

    n_eq = 3 * len(det.components)
    if len(unknowns) != n_eq:
        raise SingularError(
            f"Equilibrium system is not square ({n_eq} equations, {len(unknowns)} unknowns)."
        )

    col = {u: k for k, u in enumerate(unknowns)}
    A = np.zeros((n_eq, n_eq), dtype=float)
    b = np.zeros(n_eq, dtype=float)

    for c, comp in enumerate(det.components):
        x_ref = comp.x_left
        row = 3 * c
        for node, dof in _unknowns(model, comp):
            k = col[(node, dof)]
            if dof == U:
                A[row, k] = 1.0
            elif dof == W:
                A[row + 1, k] = 1.0
                A[row + 2, k] = model.nodes[node].x - x_ref
            elif dof == THETA:
                A[row + 2, k] = 1.0
        points, dist = component_loads(comp, loads)
        b[row:row + 3] = -load_resultant(points, dist, x_ref)

    x = solve_dense(A, b, config.cond_limit, what="equilibrium system")

    reactions: Reactions = {}
    for (node, dof), value in zip(unknowns, x):
        reactions.setdefault(node, np.zeros(3, dtype=float))[dof] = value
    return reactions


def assemble_system(model: Model, det: Determinacy, loads: LoadSet):
    """Global K, F and the restrained DOFs of the attached nodes."""
    dof = DOF_BEAM
    ndof = dof.ndof(len(model.nodes))

    stiffness = []
    element_loads = []
    for comp in det.components:
        for sp in comp.spans:
            dof_map = dof.element_dof_map([sp.left, sp.right])
            stiffness.append((dof_map, span_stiffness(model, sp)))
            points, dist = loads.on_element(sp.index)
            if points or dist:
                element_loads.append((dof_map, consistent_nodal_loads(sp, points, dist)))

    K = assemble_global_K(ndof, stiffness)
    F = assemble_global_F(ndof, element_loads)
    for p in loads.points:
        if p.node is not None:
            add_nodal_load(F, p.node, np.array([p.Fx, p.Fy, p.C]), dof.dof_per_node)

    attached = det.component_of()
    fixed = []
    for i, node in enumerate(model.nodes):
        if i not in attached:
            # detached nodes carry no stiffness; pin them out of the system
            fixed.extend(dof.node_dofs(i))
            continue
        fixed.extend(dof.idx(i, local) for local in node.support.restrained)
    return K, F, fixed


def solve_stiffness(
    model: Model,
    det: Determinacy,
    loads: LoadSet,
    config: SolverConfig = CONFIG,
) -> Tuple[Reactions, np.ndarray]:
    """Reactions and nodal displacements [u, w, theta] by the stiffness method."""
    K, F, fixed = assemble_system(model, det, loads)
    logger.debug("Stiffness system: %d DOFs, %d restrained", K.shape[0], len(fixed))
    d, R, _ = solve_linear(K, F, fixed, config.cond_limit)

    reactions: Reactions = {}
    for comp in det.components:
        for i in comp.supports(model):
            r = np.zeros(3, dtype=float)
            for local in model.nodes[i].support.restrained:
                r[local] = R[DOF_BEAM.idx(i, local)]
            reactions[i] = r
    return reactions, d


def equilibrium_residual(
    model: Model,
    det: Determinacy,
    loads: LoadSet,
    reactions: Reactions,
) -> np.ndarray:
    """
    [sum Fx, sum Fy, sum M] of loads plus reactions, one row per component.

    Moments are taken about each component's left end.
    """
    rows = []
    for comp in det.components:
        points, dist = component_loads(comp, loads)
        total = load_resultant(points, dist, comp.x_left)
        for i in comp.supports(model):
            r = reactions.get(i, np.zeros(3))
            x = model.nodes[i].x
            total += (r[U], r[W], r[THETA] + (x - comp.x_left) * r[W])
        rows.append(total)
    return np.array(rows, dtype=float)
