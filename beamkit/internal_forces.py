# beamkit/internal_forces.py
"""
INTERNAL FORCE EVALUATOR
========================

N(x), V(x) and M(x) by the method of sections.

Each connected sub-structure is walked once from its left end to its right
end. Breakpoints are placed at every node, point force, point moment and
distributed-load edge. At a breakpoint the concentrated actions there
(applied loads and support reactions alike) produce jumps:

    N  -= Fx        (tension positive)
    V  += Fy        (Fy upward)
    M  -= C         (C counter-clockwise, M sagging positive)

Between breakpoints only distributed loads act, so with t = x - b_k

    V(t) = V_k - integral(q)        dV/dx = -q
    M(t) = M_k + integral(V)        dM/dx =  V

With correct reactions all three quantities return to zero just past the
right end; anything else is a closure residual and gets logged.

The distributed loads enter with their actual intensities; resultants are
only used for the global equilibrium equations.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
from numpy.polynomial import Polynomial

from .config import CONFIG, SolverConfig
from .determinacy import Component, Determinacy
from .elements import Span
from .equilibrium import Reactions, component_loads
from .loads import DistributedAction, LoadSet, PointAction
from .model import Model
from .piecewise import PiecewisePolynomial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementForces:
    """N, V, M of one element as functions of global x."""
    span: Span
    N: PiecewisePolynomial
    V: PiecewisePolynomial
    M: PiecewisePolynomial


def merge_breakpoints(xs, tol: float) -> List[float]:
    """Sorted positions with values closer than tol collapsed into one."""
    out: List[float] = []
    for x in sorted(xs):
        if out and x - out[-1] <= tol:
            continue
        out.append(float(x))
    return out


def _snap(x: float, breakpoints: List[float]) -> int:
    return int(np.argmin(np.abs(np.asarray(breakpoints) - x)))


def walk_component(
    model: Model,
    comp: Component,
    points: List[PointAction],
    distributed: List[DistributedAction],
    tol: float,
) -> Tuple[List[float], List[Tuple[Polynomial, Polynomial, Polynomial]], np.ndarray]:
    """
    Section one component from left to right.

    Returns the merged breakpoints, one (N, V, M) polynomial triple per
    segment (in the segment-local offset x - b_k), and the [N, V, M]
    residual remaining past the right end.
    """
    xs = [model.nodes[i].x for i in comp.nodes]
    xs += [p.x for p in points]
    for d in distributed:
        xs += [d.x0, d.x1]
    bps = merge_breakpoints(xs, tol)

    jumps = np.zeros((len(bps), 3), dtype=float)
    for p in points:
        k = _snap(p.x, bps)
        jumps[k] += (-p.Fx, p.Fy, -p.C)

    N = V = M = 0.0
    segments = []
    for k in range(len(bps) - 1):
        N, V, M = np.array([N, V, M]) + jumps[k]
        a, b = bps[k], bps[k + 1]
        q = Polynomial([0.0])
        for d in distributed:
            if d.covers(a, b, tol):
                q = q + d.intensity(a)
        Vp = Polynomial([V]) - q.integ()
        Mp = Vp.integ(k=[M])
        segments.append((Polynomial([N]), Vp, Mp))
        h = b - a
        V = float(Vp(h))
        M = float(Mp(h))

    residual = np.array([N, V, M]) + jumps[-1]
    return bps, segments, residual


def _slice(bps, polys, x_left: float, x_right: float, tol: float) -> PiecewisePolynomial:
    k0 = _snap(x_left, bps)
    k1 = _snap(x_right, bps)
    breakpoints = bps[k0:k1 + 1]
    breakpoints[0], breakpoints[-1] = x_left, x_right
    return PiecewisePolynomial.from_polynomials(breakpoints, polys[k0:k1])


def internal_forces(
    model: Model,
    det: Determinacy,
    loads: LoadSet,
    reactions: Reactions,
    config: SolverConfig = CONFIG,
) -> Dict[int, ElementForces]:
    """
    N, V, M of every element, keyed by element index, in global x.

    Reactions act as point actions at their support nodes.
    """
    tol = model.tolerance(config)
    out: Dict[int, ElementForces] = {}

    for comp in det.components:
        points, dist = component_loads(comp, loads)
        scale = max(
            [abs(v) for p in points for v in (p.Fx, p.Fy, p.C)]
            + [abs(d.resultant()) for d in dist]
            + [1.0]
        )
        for i in comp.supports(model):
            Rx, Ry, Mz = reactions.get(i, np.zeros(3))
            points.append(PointAction(model.nodes[i].x, Fx=Rx, Fy=Ry, C=Mz, node=i))

        bps, segments, residual = walk_component(model, comp, points, dist, tol)
        length = max(comp.x_right - comp.x_left, 1.0)
        limit = config.residual_tol * scale * np.array([1.0, 1.0, length])
        if np.any(np.abs(residual) > limit):
            logger.warning(
                "Internal forces of elements %s do not close at x=%g: "
                "N=%.3e, V=%.3e, M=%.3e",
                comp.element_ids(model), comp.x_right, *residual,
            )

        for sp in comp.spans:
            pieces = [
                _slice(bps, [s[j] for s in segments], sp.x_left, sp.x_right, tol)
                for j in range(3)
            ]
            out[sp.index] = ElementForces(sp, *pieces)
        logger.debug(
            "Sectioned %d element(s) into %d segment(s)", len(comp.spans), len(segments)
        )
    return out
