# beamkit/results.py
"""
RESULT BUNDLE
=============

Everything one solve produces, as immutable values:

- ``Reaction`` per supported node (only restrained components are set)
- ``ElementResult`` per element: N, V, M, theta, w as piecewise
  polynomials over the element-local abscissa s (0 at the start node),
  end actions, optional stresses and strain energy
- ``Result``: the lot plus the determinacy classification

USAGE:
------
    result = solve(model)
    result.reaction("A").Ry
    result.element("e1").M(2.5)
    result.summary()["max_moment"]
    df = result.to_frame(n_points=41)
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Tuple

import numpy as np
import pandas as pd
from tabulate import tabulate

from .determinacy import Determinacy
from .model import REACTION_COMPONENTS, Support
from .piecewise import PiecewisePolynomial
from .stress import ElementStress


@dataclass(frozen=True)
class Reaction:
    """Support reaction: Rx along +x, Ry upward, Mz counter-clockwise."""
    node: Hashable
    support: Support
    Rx: Optional[float] = None
    Ry: Optional[float] = None
    Mz: Optional[float] = None

    def components(self) -> Dict[str, float]:
        """Restrained components only, e.g. {'Ry': 5000.0} for a roller."""
        return {
            name: getattr(self, name)
            for name in REACTION_COMPONENTS
            if getattr(self, name) is not None
        }


@dataclass(frozen=True)
class ElementResult:
    element_id: Hashable
    start: Hashable             # node id at s = 0
    end: Hashable               # node id at s = length
    x_start: float              # global x of the start node
    direction: int              # +1 if s runs along +x, -1 otherwise
    length: float
    N: PiecewisePolynomial
    V: PiecewisePolynomial
    M: PiecewisePolynomial
    theta: PiecewisePolynomial
    w: PiecewisePolynomial
    stress: Optional[ElementStress] = None
    strain_energy: float = 0.0

    @property
    def breakpoints(self) -> Tuple[float, ...]:
        return self.M.breakpoints

    @property
    def end_actions(self) -> np.ndarray:
        """[N, V, M] at the start node followed by [N, V, M] at the end node."""
        L = self.length
        return np.array([
            self.N(0.0), self.V(0.0), self.M(0.0),
            self.N(L, side="left"), self.V(L, side="left"), self.M(L, side="left"),
        ])

    @property
    def max_N(self) -> float:
        return abs(self.N.max_abs()[1])

    @property
    def max_V(self) -> float:
        return abs(self.V.max_abs()[1])

    @property
    def max_M(self) -> float:
        return abs(self.M.max_abs()[1])

    @property
    def max_w(self) -> float:
        return abs(self.w.max_abs()[1])

    def to_global(self, s):
        """Global x of local abscissa s."""
        return self.x_start + self.direction * np.asarray(s, dtype=float)

    def sample(self, n_points: int = 21) -> Dict[str, np.ndarray]:
        """
        Diagrams sampled at n evenly spaced points plus both sides of every
        interior breakpoint.
        """
        grid = [(s, "right") for s in np.linspace(0.0, self.length, max(n_points, 2))]
        for b in self.breakpoints[1:-1]:
            grid += [(b, "left"), (b, "right")]
        grid.sort(key=lambda t: (t[0], t[1] != "left"))

        s = np.array([g[0] for g in grid])
        data = {"s": s, "x": self.to_global(s)}
        for name in ("N", "V", "M", "theta", "w"):
            f = getattr(self, name)
            data[name] = np.array([f(si, side=side) for si, side in grid])
        return data


@dataclass(frozen=True)
class Result:
    determinacy: Determinacy
    reactions: Tuple[Reaction, ...]
    elements: Tuple[ElementResult, ...]
    nodal_displacements: Dict[Hashable, Tuple[float, float]] = field(default_factory=dict)

    @property
    def method(self) -> str:
        return self.determinacy.method

    @property
    def degree(self) -> int:
        return self.determinacy.degree

    def reaction(self, node_id: Hashable) -> Reaction:
        for r in self.reactions:
            if r.node == node_id:
                return r
        raise KeyError(f"No reaction at node {node_id!r}")

    def element(self, element_id: Hashable) -> ElementResult:
        for e in self.elements:
            if e.element_id == element_id:
                return e
        raise KeyError(f"No element {element_id!r}")

    @property
    def total_strain_energy(self) -> float:
        return float(sum(e.strain_energy for e in self.elements))

    def summary(self) -> Dict:
        """Peak |N|, |V|, |M|, |w| over all elements and where they occur."""
        if not self.elements:
            return {
                "max_axial_force": 0.0,
                "max_shear_force": 0.0,
                "max_moment": 0.0,
                "max_deflection": 0.0,
                "critical_element_N": None,
                "critical_element_V": None,
                "critical_element_M": None,
                "critical_element_w": None,
            }

        max_N_elem = max(self.elements, key=lambda e: e.max_N)
        max_V_elem = max(self.elements, key=lambda e: e.max_V)
        max_M_elem = max(self.elements, key=lambda e: e.max_M)
        max_w_elem = max(self.elements, key=lambda e: e.max_w)

        return {
            "max_axial_force": max_N_elem.max_N,
            "max_shear_force": max_V_elem.max_V,
            "max_moment": max_M_elem.max_M,
            "max_deflection": max_w_elem.max_w,
            "critical_element_N": max_N_elem.element_id,
            "critical_element_V": max_V_elem.element_id,
            "critical_element_M": max_M_elem.element_id,
            "critical_element_w": max_w_elem.element_id,
        }

    def to_frame(self, n_points: int = 21) -> pd.DataFrame:
        """Sampled diagrams of every element, one row per sample point."""
        frames: List[pd.DataFrame] = []
        for e in self.elements:
            df = pd.DataFrame(e.sample(n_points))
            df.insert(0, "element", e.element_id)
            frames.append(df)
        if not frames:
            return pd.DataFrame(columns=["element", "s", "x", "N", "V", "M", "theta", "w"])
        return pd.concat(frames, ignore_index=True)

    def reactions_table(self, floatfmt: str = ".4g") -> str:
        rows = [
            [r.node, r.support.value, r.Rx, r.Ry, r.Mz]
            for r in self.reactions
        ]
        return tabulate(
            rows,
            headers=["node", "support", *REACTION_COMPONENTS],
            floatfmt=floatfmt,
            missingval="-",
        )

    def is_finite(self) -> bool:
        numbers = [v for r in self.reactions for v in r.components().values()]
        numbers += [v for pair in self.nodal_displacements.values() for v in pair]
        numbers += [e.strain_energy for e in self.elements]
        if not np.all(np.isfinite(numbers)):
            return False
        for e in self.elements:
            if not all(f.is_finite() for f in (e.N, e.V, e.M, e.theta, e.w)):
                return False
            if e.stress is not None and not all(
                f.is_finite() for f in (e.stress.sigma_top, e.stress.sigma_bottom, e.stress.tau_max)
            ):
                return False
        return True
