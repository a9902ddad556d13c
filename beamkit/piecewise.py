# beamkit/piecewise.py
"""
PIECEWISE POLYNOMIALS
=====================

Every diagram the solver returns (N, V, M, theta, w) is a piecewise
polynomial: an ordered list of breakpoints and, for each segment between
two consecutive breakpoints, polynomial coefficients.

Coefficients are stored in ASCENDING powers of the offset from the
segment's own left breakpoint:

    f(x) = c0 + c1*(x - b_k) + c2*(x - b_k)**2 + ...    for b_k <= x <= b_k+1

Using a local offset keeps the numbers well scaled when a beam sits far
from the origin.

DISCONTINUITIES:
----------------
Segments are closed intervals, so at an interior breakpoint a function has
a left limit (end of the segment before) and a right limit (start of the
segment after). Shear jumps at point forces and moment jumps at point
moments show up as ``right - left`` at those breakpoints.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.polynomial import Polynomial


def _coef_tuple(poly: Polynomial) -> Tuple[float, ...]:
    coef = np.trim_zeros(np.asarray(poly.coef, dtype=float), "b")
    if coef.size == 0:
        return (0.0,)
    return tuple(float(c) for c in coef)


@dataclass(frozen=True)
class PiecewisePolynomial:
    breakpoints: Tuple[float, ...]
    coefficients: Tuple[Tuple[float, ...], ...]

    def __post_init__(self):
        object.__setattr__(self, "breakpoints", tuple(float(b) for b in self.breakpoints))
        object.__setattr__(
            self, "coefficients",
            tuple(tuple(float(c) for c in seg) or (0.0,) for seg in self.coefficients),
        )
        if len(self.breakpoints) != len(self.coefficients) + 1:
            raise ValueError(
                f"{len(self.breakpoints)} breakpoints need {len(self.breakpoints) - 1} segments, "
                f"got {len(self.coefficients)}."
            )
        if any(b1 < b0 for b0, b1 in zip(self.breakpoints, self.breakpoints[1:])):
            raise ValueError("Breakpoints must be non-decreasing.")

    # -- construction ---------------------------------------------------------

    @classmethod
    def from_polynomials(
        cls, breakpoints: Sequence[float], polys: Sequence[Polynomial]
    ) -> "PiecewisePolynomial":
        return cls(tuple(breakpoints), tuple(_coef_tuple(p) for p in polys))

    @classmethod
    def zeros(cls, start: float, end: float) -> "PiecewisePolynomial":
        return cls((start, end), ((0.0,),))

    # -- structure ------------------------------------------------------------

    @property
    def n_segments(self) -> int:
        return len(self.coefficients)

    @property
    def start(self) -> float:
        return self.breakpoints[0]

    @property
    def end(self) -> float:
        return self.breakpoints[-1]

    @property
    def degree(self) -> int:
        return max(len(c) for c in self.coefficients) - 1

    def polynomial(self, k: int) -> Polynomial:
        """Segment k as a numpy Polynomial in the local offset x - b_k."""
        return Polynomial(self.coefficients[k])

    def segments(self):
        for k in range(self.n_segments):
            yield self.breakpoints[k], self.breakpoints[k + 1], self.polynomial(k)

    # -- evaluation -----------------------------------------------------------

    def segment_index(self, x: float, side: str = "right") -> int:
        """Segment used to evaluate at x; at a breakpoint ``side`` picks the neighbour."""
        if side not in ("left", "right"):
            raise ValueError(f"side must be 'left' or 'right', got {side!r}")
        inner = np.asarray(self.breakpoints[1:-1])
        k = int(np.searchsorted(inner, x, side=side))
        return min(max(k, 0), self.n_segments - 1)

    def _eval_scalar(self, x: float, side: str) -> float:
        k = self.segment_index(x, side)
        return float(self.polynomial(k)(x - self.breakpoints[k]))

    def __call__(self, x, side: str = "right"):
        if np.ndim(x) == 0:
            return self._eval_scalar(float(x), side)
        return np.array([self._eval_scalar(float(xi), side) for xi in np.ravel(x)]).reshape(np.shape(x))

    def start_value(self) -> float:
        return float(self.polynomial(0)(0.0))

    def end_value(self) -> float:
        k = self.n_segments - 1
        return float(self.polynomial(k)(self.end - self.breakpoints[k]))

    def limits(self, x: float) -> Tuple[float, float]:
        """(left limit, right limit) at x."""
        return self(x, side="left"), self(x, side="right")

    def jumps(self, atol: float = 0.0) -> List[Tuple[float, float]]:
        """(x, right - left) for interior breakpoints where the function jumps."""
        out = []
        for k in range(1, self.n_segments):
            b = self.breakpoints[k]
            left = float(self.polynomial(k - 1)(b - self.breakpoints[k - 1]))
            right = float(self.polynomial(k)(0.0))
            if abs(right - left) > atol:
                out.append((b, right - left))
        return out

    def sample(self, n_points: int = 21, include_breakpoints: bool = True) -> Tuple[np.ndarray, np.ndarray]:
        """
        Evenly spaced samples over the domain.

        With include_breakpoints, every interior breakpoint is sampled from
        both sides so jumps show as vertical steps.
        """
        xs = list(np.linspace(self.start, self.end, max(n_points, 2)))
        values = [self(x) for x in xs]
        if include_breakpoints:
            for b in self.breakpoints[1:-1]:
                left, right = self.limits(b)
                xs.extend([b, b])
                values.extend([left, right])
        order = np.argsort(np.asarray(xs), kind="stable")
        return np.asarray(xs)[order], np.asarray(values)[order]

    # -- calculus -------------------------------------------------------------

    def derivative(self) -> "PiecewisePolynomial":
        return PiecewisePolynomial.from_polynomials(
            self.breakpoints, [self.polynomial(k).deriv() for k in range(self.n_segments)]
        )

    def integral(self, constant: float = 0.0) -> "PiecewisePolynomial":
        """Continuous antiderivative equal to ``constant`` at the start."""
        polys = []
        value = constant
        for b0, b1, p in self.segments():
            q = p.integ(k=[value])
            polys.append(q)
            value = float(q(b1 - b0))
        return PiecewisePolynomial.from_polynomials(self.breakpoints, polys)

    def definite_integral(self) -> float:
        return float(sum(p.integ()(b1 - b0) for b0, b1, p in self.segments()))

    # -- algebra --------------------------------------------------------------

    def scaled(self, factor: float) -> "PiecewisePolynomial":
        return PiecewisePolynomial(
            self.breakpoints, tuple(tuple(c * factor for c in seg) for seg in self.coefficients)
        )

    def add_affine(self, slope: float, intercept: float, x0: float) -> "PiecewisePolynomial":
        """Return f(x) + slope*(x - x0) + intercept."""
        polys = []
        for b0, _, p in self.segments():
            polys.append(p + Polynomial([slope * (b0 - x0) + intercept, slope]))
        return PiecewisePolynomial.from_polynomials(self.breakpoints, polys)

    def _check_compatible(self, other: "PiecewisePolynomial") -> None:
        if not np.allclose(self.breakpoints, other.breakpoints, rtol=0.0, atol=1e-12 * max(1.0, abs(self.end))):
            raise ValueError("Piecewise polynomials have different breakpoints.")

    def __add__(self, other):
        if isinstance(other, PiecewisePolynomial):
            self._check_compatible(other)
            return PiecewisePolynomial.from_polynomials(
                self.breakpoints,
                [self.polynomial(k) + other.polynomial(k) for k in range(self.n_segments)],
            )
        return self.add_affine(0.0, float(other), self.start)

    def __sub__(self, other):
        if isinstance(other, PiecewisePolynomial):
            return self + other.scaled(-1.0)
        return self + (-float(other))

    def __mul__(self, other):
        if isinstance(other, PiecewisePolynomial):
            self._check_compatible(other)
            return PiecewisePolynomial.from_polynomials(
                self.breakpoints,
                [self.polynomial(k) * other.polynomial(k) for k in range(self.n_segments)],
            )
        return self.scaled(float(other))

    __rmul__ = __mul__

    def __neg__(self):
        return self.scaled(-1.0)

    # -- extrema --------------------------------------------------------------

    def _candidates(self) -> List[Tuple[float, float]]:
        pts = []
        for b0, b1, p in self.segments():
            h = b1 - b0
            pts.append((b0, float(p(0.0))))
            pts.append((b1, float(p(h))))
            dp = p.deriv()
            if dp.degree() >= 1:
                for r in dp.roots():
                    if abs(r.imag) < 1e-12 and 0.0 < r.real < h:
                        pts.append((b0 + r.real, float(p(r.real))))
        return pts

    def extrema(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        """((x_min, f_min), (x_max, f_max)) including one-sided limits at jumps."""
        pts = self._candidates()
        lo = min(pts, key=lambda t: t[1])
        hi = max(pts, key=lambda t: t[1])
        return lo, hi

    def max_abs(self) -> Tuple[float, float]:
        """(x, f(x)) where |f| is largest; the sign of f is kept."""
        return max(self._candidates(), key=lambda t: abs(t[1]))

    def is_finite(self) -> bool:
        return all(np.isfinite(self.breakpoints)) and all(
            np.all(np.isfinite(seg)) for seg in self.coefficients
        )

    # -- reparametrisation ----------------------------------------------------

    def to_local(self, origin: float, direction: int) -> "PiecewisePolynomial":
        """
        Re-express the function over s = direction * (x - origin).

        For direction = -1 the segment order is reversed and each segment
        polynomial is reflected, so the result still has increasing
        breakpoints and local-offset coefficients. Values are unchanged.
        """
        if direction >= 0:
            return PiecewisePolynomial(
                tuple(b - origin for b in self.breakpoints), self.coefficients
            )
        breakpoints = tuple(origin - b for b in reversed(self.breakpoints))
        polys = []
        for k in reversed(range(self.n_segments)):
            h = self.breakpoints[k + 1] - self.breakpoints[k]
            polys.append(self.polynomial(k)(Polynomial([h, -1.0])))
        return PiecewisePolynomial.from_polynomials(breakpoints, polys)

    def __repr__(self) -> str:
        return (
            f"PiecewisePolynomial(segments={self.n_segments}, "
            f"domain=[{self.start:g}, {self.end:g}], degree={self.degree})"
        )
