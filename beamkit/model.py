# beamkit/model.py
"""
STRUCTURAL MODEL
================

Immutable description of a straight 2D beam: nodes on the longitudinal
axis, elements between pairs of nodes, supports attached to nodes, and
loads attached to nodes or elements.

SIGN CONVENTIONS (used by every evaluator):
-------------------------------------------
- Transverse loads P and distributed intensities w: positive DOWNWARD
- Axial loads H: positive along +x
- Applied moments C: positive COUNTER-CLOCKWISE
- Reactions: Rx along +x, Ry UPWARD, Mz counter-clockwise

Elements and loads reference nodes/elements by id. The Model builds flat
index maps (``node_index``, ``element_index``) so the solver can address
everything by integer position instead of holding object references.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, Hashable, List, Optional, Tuple, Union

from .config import CONFIG, SolverConfig
from .errors import InvalidModelError, UnsupportedError


# Local DOF order at a node: axial displacement, transverse deflection, rotation
U, W, THETA = 0, 1, 2

REACTION_COMPONENTS = ("Rx", "Ry", "Mz")


class Support(str, Enum):
    """Support kinds and the DOFs each one restrains."""

    FREE = "free"
    PIN = "pin"
    ROLLER = "roller"
    FIXED = "fixed"

    @classmethod
    def _missing_(cls, value):
        # Editor aliases
        aliases = {"none": cls.FREE, "pinned": cls.PIN, "hinged": cls.PIN}
        if isinstance(value, str):
            key = value.lower()
            for member in cls:
                if member.value == key:
                    return member
            return aliases.get(key)
        return None

    @property
    def restrained(self) -> Tuple[int, ...]:
        """Local DOFs (U, W, THETA) held at zero by this support."""
        return _RESTRAINED[self]

    @property
    def unknowns(self) -> int:
        """Number of reaction unknowns contributed."""
        return len(self.restrained)


_RESTRAINED = {
    Support.FREE: (),
    Support.PIN: (U, W),
    Support.ROLLER: (W,),
    Support.FIXED: (U, W, THETA),
}


@dataclass(frozen=True)
class Node:
    id: Hashable
    x: float
    support: Support = Support.FREE
    hinge: bool = False  # internal release; not supported by the solver

    def __post_init__(self):
        if not isinstance(self.support, Support):
            try:
                object.__setattr__(self, "support", Support(self.support))
            except ValueError:
                raise InvalidModelError(
                    f"Node {self.id!r}: unknown support type {self.support!r}.",
                    nodes=[self.id],
                ) from None


@dataclass(frozen=True)
class Element:
    """
    Euler-Bernoulli beam element between two nodes.

    A is only needed when axial forces must be distributed between several
    axial restraints; depth is only used for stress post-processing. fy is
    the yield strength for the safety factor (SolverConfig.default_yield
    when not given).
    """
    id: Hashable
    start: Hashable
    end: Hashable
    E: float
    I: float
    A: Optional[float] = None
    depth: Optional[float] = None
    fy: Optional[float] = None


# ---------------------------------------------------------------------------
# Loads (tagged variants)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NodalForce:
    """Point force at a node: P transverse (down +), H axial (+x)."""
    node: Hashable
    P: float = 0.0
    H: float = 0.0
    id: Optional[Hashable] = None


@dataclass(frozen=True)
class NodalMoment:
    """Point moment at a node (counter-clockwise +)."""
    node: Hashable
    C: float
    id: Optional[Hashable] = None


@dataclass(frozen=True)
class PointLoad:
    """Point force at distance a from the element's start node."""
    element: Hashable
    a: float
    P: float = 0.0
    H: float = 0.0
    id: Optional[Hashable] = None


@dataclass(frozen=True)
class PointMoment:
    """Point moment at distance a from the element's start node."""
    element: Hashable
    a: float
    C: float
    id: Optional[Hashable] = None


@dataclass(frozen=True)
class DistributedLoad:
    """
    Linearly varying transverse load on an element (down +).

    Intensity goes from w at distance a to w_end at distance b, both
    measured from the element's start node. w_end defaults to w (uniform),
    a to 0 and b to the element length (full span).
    """
    element: Hashable
    w: float
    w_end: Optional[float] = None
    a: float = 0.0
    b: Optional[float] = None
    id: Optional[Hashable] = None

    @property
    def intensity_end(self) -> float:
        return self.w if self.w_end is None else self.w_end


Load = Union[NodalForce, NodalMoment, PointLoad, PointMoment, DistributedLoad]
NODE_LOADS = (NodalForce, NodalMoment)
ELEMENT_LOADS = (PointLoad, PointMoment, DistributedLoad)


def _finite(*values) -> bool:
    return all(v is None or math.isfinite(v) for v in values)


def _positive(value) -> bool:
    return value is not None and math.isfinite(value) and value > 0.0


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Model:
    """
    Immutable structure: nodes, elements and loads.

    Lists passed in are frozen to tuples. Call ``validate()`` before using
    the index maps on untrusted input; ``solve()`` does this for you.
    """
    nodes: Tuple[Node, ...]
    elements: Tuple[Element, ...]
    loads: Tuple[Load, ...] = ()
    template_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "elements", tuple(self.elements))
        object.__setattr__(self, "loads", tuple(self.loads))

    # -- arena lookups -------------------------------------------------------

    @cached_property
    def node_index(self) -> Dict[Hashable, int]:
        return {n.id: i for i, n in enumerate(self.nodes)}

    @cached_property
    def element_index(self) -> Dict[Hashable, int]:
        return {e.id: i for i, e in enumerate(self.elements)}

    def node(self, node_id: Hashable) -> Node:
        return self.nodes[self.node_index[node_id]]

    def element(self, element_id: Hashable) -> Element:
        return self.elements[self.element_index[element_id]]

    def element_nodes(self, e: Element) -> Tuple[Node, Node]:
        return self.node(e.start), self.node(e.end)

    def element_length(self, e: Element) -> float:
        ni, nj = self.element_nodes(e)
        return abs(nj.x - ni.x)

    def loads_on_node(self, node_id: Hashable) -> List[Load]:
        return [ld for ld in self.loads if isinstance(ld, NODE_LOADS) and ld.node == node_id]

    def loads_on_element(self, element_id: Hashable) -> List[Load]:
        return [ld for ld in self.loads if isinstance(ld, ELEMENT_LOADS) and ld.element == element_id]

    @property
    def supported_nodes(self) -> List[Node]:
        return [n for n in self.nodes if n.support is not Support.FREE]

    @property
    def span(self) -> float:
        """Extent of the model along x (used to scale tolerances)."""
        xs = [n.x for n in self.nodes if math.isfinite(n.x)]
        if not xs:
            return 0.0
        return max(xs) - min(xs)

    def tolerance(self, config: SolverConfig = CONFIG) -> float:
        return config.position_tol * max(self.span, 1.0)

    # -- validation ----------------------------------------------------------

    def validate(self, config: SolverConfig = CONFIG) -> "Model":
        """
        Check referential integrity before any numeric work.

        Raises InvalidModelError for dangling ids, duplicate ids, zero-length
        elements, bad properties and loads placed outside their element, and
        UnsupportedError for unknown load types. Returns self.
        """
        if not self.elements:
            raise InvalidModelError("Model has no elements.")

        seen = set()
        for n in self.nodes:
            if n.id in seen:
                raise InvalidModelError(f"Duplicate node id {n.id!r}.", nodes=[n.id])
            seen.add(n.id)
            if not _finite(n.x):
                raise InvalidModelError(f"Node {n.id!r} has a non-finite position.", nodes=[n.id])

        tol = self.tolerance(config)
        seen = set()
        for e in self.elements:
            if e.id in seen:
                raise InvalidModelError(f"Duplicate element id {e.id!r}.", elements=[e.id])
            seen.add(e.id)
            for end in (e.start, e.end):
                if end not in self.node_index:
                    raise InvalidModelError(
                        f"Element {e.id!r} references missing node {end!r}.", elements=[e.id]
                    )
            if e.start == e.end:
                raise InvalidModelError(
                    f"Element {e.id!r} connects node {e.start!r} to itself.",
                    nodes=[e.start], elements=[e.id],
                )
            if self.element_length(e) <= tol:
                raise InvalidModelError(
                    f"Element {e.id!r} has zero length.",
                    nodes=[e.start, e.end], elements=[e.id],
                )
            if not (_positive(e.E) and _positive(e.I)):
                raise InvalidModelError(
                    f"Element {e.id!r} needs positive E and I (got E={e.E}, I={e.I}).",
                    elements=[e.id],
                )
            EI = e.E * e.I
            if not (_positive(EI) and math.isfinite(1.0 / EI)):
                raise InvalidModelError(
                    f"Element {e.id!r}: bending stiffness E*I={EI} is out of range.",
                    elements=[e.id],
                )
            for name in ("A", "depth", "fy"):
                value = getattr(e, name)
                if value is not None and not _positive(value):
                    raise InvalidModelError(
                        f"Element {e.id!r}: {name} must be positive (got {value}).",
                        elements=[e.id],
                    )

        for ld in self.loads:
            self._validate_load(ld, tol)
        return self

    def _validate_load(self, ld, tol: float) -> None:
        if isinstance(ld, NODE_LOADS):
            if ld.node not in self.node_index:
                raise InvalidModelError(f"Load {ld.id!r} references missing node {ld.node!r}.")
            values = (ld.P, ld.H) if isinstance(ld, NodalForce) else (ld.C,)
            if not _finite(*values):
                raise InvalidModelError(f"Load {ld.id!r} has non-finite values.", nodes=[ld.node])
            return

        if not isinstance(ld, ELEMENT_LOADS):
            raise UnsupportedError(f"Unsupported load type {type(ld).__name__}.")

        if ld.element not in self.element_index:
            raise InvalidModelError(f"Load {ld.id!r} references missing element {ld.element!r}.")
        L = self.element_length(self.element(ld.element))

        if isinstance(ld, PointLoad):
            values, positions = (ld.P, ld.H), (ld.a,)
        elif isinstance(ld, PointMoment):
            values, positions = (ld.C,), (ld.a,)
        else:
            b = L if ld.b is None else ld.b
            values, positions = (ld.w, ld.intensity_end), (ld.a, b)
            if _finite(ld.a, b) and b - ld.a <= tol:
                raise InvalidModelError(
                    f"Distributed load {ld.id!r} has an empty extent [{ld.a}, {b}].",
                    elements=[ld.element],
                )

        if not _finite(*values):
            raise InvalidModelError(f"Load {ld.id!r} has non-finite values.", elements=[ld.element])
        for pos in positions:
            if not _finite(pos) or pos < -tol or pos > L + tol:
                raise InvalidModelError(
                    f"Load {ld.id!r} at {pos} lies outside element {ld.element!r} (length {L:g}).",
                    elements=[ld.element],
                )
