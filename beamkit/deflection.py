# beamkit/deflection.py
"""
DEFLECTION EVALUATOR
====================

Double integration of the curvature w'' = M / EI.

For every element, with x_l its left end,

    Phi(x) = integral from x_l of M/EI        (Phi(x_l) = 0)
    Psi(x) = integral from x_l of Phi         (Psi(x_l) = 0)

    theta(x) = Phi(x) + C1
    w(x)     = Psi(x) + C1 * (x - x_l) + C2

leaving two constants per element. They come from one linear system:

    - theta and w continuous at every node joining two elements
    - w = 0 at every support
    - theta = 0 at fixed supports

For a determinate structure the system is square. An indeterminate one has
more conditions than constants; they are consistent because the reactions
already satisfy compatibility, so the system is solved in the
least-squares sense and its residual checked.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import CONFIG, SolverConfig
from .determinacy import Determinacy
from .elements import Span
from .internal_forces import ElementForces
from .kernel.dof import DOF_BEAM
from .kernel.solve import solve_least_squares
from .model import THETA, W, Model, Support
from .piecewise import PiecewisePolynomial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementDeflection:
    """theta and w of one element as functions of global x."""
    span: Span
    theta: PiecewisePolynomial
    w: PiecewisePolynomial


def _curvature_integrals(model: Model, forces: ElementForces):
    e = model.elements[forces.span.index]
    phi = forces.M.scaled(1.0 / (e.E * e.I)).integral(0.0)
    psi = phi.integral(0.0)
    return phi, psi


def deflections(
    model: Model,
    det: Determinacy,
    forces: Dict[int, ElementForces],
    config: SolverConfig = CONFIG,
    displacements: Optional[np.ndarray] = None,
) -> Tuple[Dict[int, ElementDeflection], Dict[int, Tuple[float, float]]]:
    """
    Rotation and deflection of every element.

    Returns ``(per_element, nodal)`` where ``per_element`` is keyed by element
    index and ``nodal`` maps node index -> (w, theta). When the stiffness
    path's nodal displacement vector is passed, the two are compared in the
    debug log.
    """
    spans: List[Span] = [sp for comp in det.components for sp in comp.spans]
    col = {sp.index: 2 * k for k, sp in enumerate(spans)}
    integrals = {sp.index: _curvature_integrals(model, forces[sp.index]) for sp in spans}

    rows: List[np.ndarray] = []
    rhs: List[float] = []

    def equation(coefs: Dict[int, float], value: float) -> None:
        row = np.zeros(2 * len(spans), dtype=float)
        for c, v in coefs.items():
            row[c] += v
        rows.append(row)
        rhs.append(value)

    for comp in det.components:
        for a, b in zip(comp.spans, comp.spans[1:]):
            phi, psi = integrals[a.index]
            ca, cb = col[a.index], col[b.index]
            equation({ca: 1.0, cb: -1.0}, -phi.end_value())
            equation({ca: a.length, ca + 1: 1.0, cb + 1: -1.0}, -psi.end_value())

        for i in comp.supports(model):
            support = model.nodes[i].support
            starting = [sp for sp in comp.spans if sp.left == i]
            if starting:
                c = col[starting[0].index]
                equation({c + 1: 1.0}, 0.0)
                if support is Support.FIXED:
                    equation({c: 1.0}, 0.0)
                continue
            sp = next(sp for sp in comp.spans if sp.right == i)
            phi, psi = integrals[sp.index]
            c = col[sp.index]
            equation({c: sp.length, c + 1: 1.0}, -psi.end_value())
            if support is Support.FIXED:
                equation({c: 1.0}, -phi.end_value())

    A = np.vstack(rows)
    b = np.asarray(rhs, dtype=float)
    # size of the curvature integrals, for judging the residual
    scale = max(abs(f.max_abs()[1]) for pair in integrals.values() for f in pair)
    logger.debug("Deflection constants: %d equations, %d unknowns", *A.shape)
    constants = solve_least_squares(
        A, b, config.cond_limit, config.residual_tol,
        what="deflection constants", scale=scale,
    )

    per_element: Dict[int, ElementDeflection] = {}
    nodal: Dict[int, Tuple[float, float]] = {}
    for sp in spans:
        phi, psi = integrals[sp.index]
        C1, C2 = constants[col[sp.index]], constants[col[sp.index] + 1]
        theta = phi.add_affine(0.0, C1, sp.x_left)
        w = psi.add_affine(C1, C2, sp.x_left)
        per_element[sp.index] = ElementDeflection(sp, theta, w)
        nodal.setdefault(sp.left, (w(sp.x_left), theta(sp.x_left)))
        nodal.setdefault(sp.right, (w(sp.x_right), theta(sp.x_right)))

    if displacements is not None and logger.isEnabledFor(logging.DEBUG):
        for i, (w_i, t_i) in nodal.items():
            logger.debug(
                "Node %r: w=%.6e (stiffness %.6e), theta=%.6e (stiffness %.6e)",
                model.nodes[i].id, w_i, displacements[DOF_BEAM.idx(i, W)],
                t_i, displacements[DOF_BEAM.idx(i, THETA)],
            )
    return per_element, nodal
