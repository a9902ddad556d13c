# beamkit/elements.py
"""Beam element geometry, stiffness and shape functions."""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.polynomial import Polynomial

from .model import Element, Model


@dataclass(frozen=True)
class Span:
    """
    An element laid out on the axis, left to right.

    ``direction`` is +1 when the element's start node is its left end and
    -1 when the element was drawn right to left.
    """
    index: int
    left: int           # node index at x_left
    right: int          # node index at x_right
    x_left: float
    x_right: float
    direction: int

    @property
    def length(self) -> float:
        return self.x_right - self.x_left

    @property
    def x_start(self) -> float:
        return self.x_left if self.direction > 0 else self.x_right

    def to_axis(self, s: float) -> float:
        """Global x of the point at distance s from the element's start node."""
        return self.x_start + self.direction * s


def element_span(model: Model, index: int) -> Span:
    e = model.elements[index]
    i = model.node_index[e.start]
    j = model.node_index[e.end]
    xi = model.nodes[i].x
    xj = model.nodes[j].x
    if xj == xi:
        raise ValueError(f"Element {e.id!r} has zero length.")
    if xj > xi:
        return Span(index, i, j, xi, xj, +1)
    return Span(index, j, i, xj, xi, -1)


def axial_area(e: Element, L: float) -> float:
    """
    Area used for axial stiffness.

    When A is not given, axial forces are statically determined (checked
    by the classifier) and any positive value works; this one keeps axial
    and bending terms of the element matrix on the same scale.
    """
    return e.A if e.A is not None else 12.0 * e.I / (L * L)


def beam_stiffness(E: float, A: float, I: float, L: float) -> np.ndarray:
    """
    Element stiffness matrix for a member lying along +x.
    DOF order: [u_l, w_l, theta_l, u_r, w_r, theta_r]
    """
    EA_L = E * A / L
    EI = E * I
    L2 = L * L
    L3 = L2 * L

    k = np.array([
        [ EA_L,      0.0,        0.0,    -EA_L,      0.0,        0.0],
        [  0.0,  12*EI/L3,   6*EI/L2,      0.0, -12*EI/L3,   6*EI/L2],
        [  0.0,   6*EI/L2,    4*EI/L,      0.0,  -6*EI/L2,    2*EI/L],
        [-EA_L,      0.0,        0.0,     EA_L,      0.0,        0.0],
        [  0.0, -12*EI/L3,  -6*EI/L2,      0.0,  12*EI/L3,  -6*EI/L2],
        [  0.0,   6*EI/L2,    2*EI/L,      0.0,  -6*EI/L2,    4*EI/L],
    ], dtype=float)
    return k


def span_stiffness(model: Model, span: Span) -> np.ndarray:
    e = model.elements[span.index]
    L = span.length
    return beam_stiffness(e.E, axial_area(e, L), e.I, L)


def hermite_polynomials(L: float) -> Tuple[Polynomial, Polynomial, Polynomial, Polynomial]:
    """
    Hermite cubic shape functions in t = x - x_left, 0 <= t <= L.

        w(t) = H1*w_l + H2*theta_l + H3*w_r + H4*theta_r

    The rotation functions H2 and H4 already carry the factor L.
    """
    H1 = Polynomial([1.0, 0.0, -3.0 / L**2, 2.0 / L**3])
    H2 = Polynomial([0.0, 1.0, -2.0 / L, 1.0 / L**2])
    H3 = Polynomial([0.0, 0.0, 3.0 / L**2, -2.0 / L**3])
    H4 = Polynomial([0.0, 0.0, -1.0 / L, 1.0 / L**2])
    return H1, H2, H3, H4


def linear_polynomials(L: float) -> Tuple[Polynomial, Polynomial]:
    """Linear axial shape functions in t = x - x_left."""
    return Polynomial([1.0, -1.0 / L]), Polynomial([0.0, 1.0 / L])
