# loads.py - Loads placed on the beam axis, resultants and equivalent nodal loads
"""
Every load in a Model is first placed on the global x axis:

- point forces / point moments become ``PointAction`` (global components:
  Fx along +x, Fy UPWARD, C counter-clockwise)
- distributed loads become ``DistributedAction`` over [x0, x1] with a
  DOWNWARD intensity varying linearly from q0 to q1

Element loads are positioned by distance from the element's start node,
so an element drawn right to left places them at x_start - a.

Two reductions are derived from the placed loads:

1. ``load_resultant`` - total force and moment about a point, with each
   distributed load replaced by its resultant. Only for GLOBAL equilibrium.
2. ``consistent_nodal_loads`` - work-equivalent nodal forces for the
   stiffness method (the fixed-end actions with opposite sign).

The internal-force walk never uses either reduction; it integrates the
actual intensities.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from numpy.polynomial import Polynomial

from .elements import Span, element_span, hermite_polynomials, linear_polynomials
from .errors import UnsupportedError
from .model import (DistributedLoad, Load, Model, NodalForce, NodalMoment,
                    PointLoad, PointMoment)


@dataclass(frozen=True)
class PointAction:
    x: float
    Fx: float = 0.0
    Fy: float = 0.0
    C: float = 0.0
    node: Optional[int] = None      # node index for nodal loads
    element: Optional[int] = None   # element index for element loads
    source: Optional[Load] = None


@dataclass(frozen=True)
class DistributedAction:
    element: int
    x0: float
    x1: float
    q0: float   # downward intensity at x0
    q1: float   # downward intensity at x1
    source: Optional[Load] = None

    @property
    def length(self) -> float:
        return self.x1 - self.x0

    def intensity(self, origin: float) -> Polynomial:
        """Downward intensity as a polynomial in (x - origin)."""
        slope = (self.q1 - self.q0) / self.length
        return Polynomial([self.q0 + slope * (origin - self.x0), slope])

    def covers(self, a: float, b: float, tol: float) -> bool:
        return self.x0 <= a + tol and self.x1 >= b - tol

    def resultant(self) -> float:
        """Total downward force."""
        return 0.5 * (self.q0 + self.q1) * self.length

    def centroid(self) -> Optional[float]:
        """Line of action of the resultant (None when the resultant vanishes)."""
        total = self.q0 + self.q1
        if total == 0.0:
            return None
        return self.x0 + self.length * (self.q0 + 2.0 * self.q1) / (3.0 * total)

    def moment_about(self, x_ref: float) -> float:
        """Counter-clockwise moment about x_ref (upward force = -q)."""
        q = self.intensity(self.x0)
        arm = Polynomial([self.x0 - x_ref, 1.0])
        return -float((q * arm).integ()(self.length))


@dataclass
class LoadSet:
    points: List[PointAction]
    distributed: List[DistributedAction]

    def on_element(self, index: int):
        pts = [p for p in self.points if p.element == index]
        dist = [d for d in self.distributed if d.element == index]
        return pts, dist


def place_loads(model: Model) -> LoadSet:
    """Place every load of a validated model on the global axis."""
    spans: Dict[int, Span] = {}

    def span_of(element_id) -> Span:
        idx = model.element_index[element_id]
        if idx not in spans:
            spans[idx] = element_span(model, idx)
        return spans[idx]

    points: List[PointAction] = []
    distributed: List[DistributedAction] = []
    for ld in model.loads:
        if isinstance(ld, NodalForce):
            i = model.node_index[ld.node]
            points.append(PointAction(model.nodes[i].x, Fx=ld.H, Fy=-ld.P, node=i, source=ld))
        elif isinstance(ld, NodalMoment):
            i = model.node_index[ld.node]
            points.append(PointAction(model.nodes[i].x, C=ld.C, node=i, source=ld))
        elif isinstance(ld, PointLoad):
            sp = span_of(ld.element)
            x = _clamp(sp.to_axis(ld.a), sp)
            points.append(PointAction(x, Fx=ld.H, Fy=-ld.P, element=sp.index, source=ld))
        elif isinstance(ld, PointMoment):
            sp = span_of(ld.element)
            x = _clamp(sp.to_axis(ld.a), sp)
            points.append(PointAction(x, C=ld.C, element=sp.index, source=ld))
        elif isinstance(ld, DistributedLoad):
            sp = span_of(ld.element)
            b = sp.length if ld.b is None else ld.b
            xa = _clamp(sp.to_axis(ld.a), sp)
            xb = _clamp(sp.to_axis(b), sp)
            qa, qb = ld.w, ld.intensity_end
            if xa <= xb:
                distributed.append(DistributedAction(sp.index, xa, xb, qa, qb, source=ld))
            else:
                distributed.append(DistributedAction(sp.index, xb, xa, qb, qa, source=ld))
        else:
            raise UnsupportedError(f"Unsupported load type {type(ld).__name__}.")
    return LoadSet(points, distributed)


def _clamp(x: float, span: Span) -> float:
    # validation allows positions a hair outside the element
    return min(max(x, span.x_left), span.x_right)


def load_resultant(points, distributed, x_ref: float = 0.0) -> np.ndarray:
    """
    [sum Fx, sum Fy, sum M about x_ref] of the applied loads.

    Distributed loads enter through their resultant at the centroid.
    """
    total = np.zeros(3, dtype=float)
    for p in points:
        total += (p.Fx, p.Fy, p.C + (p.x - x_ref) * p.Fy)
    for d in distributed:
        R = d.resultant()
        xc = d.centroid()
        moment = -(xc - x_ref) * R if xc is not None else d.moment_about(x_ref)
        total += (0.0, -R, moment)
    return total


def consistent_nodal_loads(span: Span, points, distributed) -> np.ndarray:
    """
    Work-equivalent nodal loads of one element, in global DOF order
    [u_l, w_l, theta_l, u_r, w_r, theta_r].

    For a full-span uniform load q (down) this gives the textbook
    [0, -qL/2, -qL^2/12, 0, -qL/2, +qL^2/12].
    """
    L = span.length
    H = hermite_polynomials(L)
    dH = [h.deriv() for h in H]
    A1, A2 = linear_polynomials(L)
    f = np.zeros(6, dtype=float)
    bending = (1, 2, 4, 5)

    for p in points:
        t = p.x - span.x_left
        f[0] += p.Fx * A1(t)
        f[3] += p.Fx * A2(t)
        for dof, h, dh in zip(bending, H, dH):
            f[dof] += p.Fy * h(t) + p.C * dh(t)

    for d in distributed:
        t0 = d.x0 - span.x_left
        t1 = d.x1 - span.x_left
        q = d.intensity(span.x_left)
        for dof, h in zip(bending, H):
            antideriv = (-q * h).integ()
            f[dof] += antideriv(t1) - antideriv(t0)
    return f
