# beamkit/determinacy.py
"""
DETERMINACY CLASSIFIER
======================

Decides whether a model can be solved and how.

For a planar rigid structure each connected sub-structure provides three
independent equilibrium equations (sum Fx, sum Fy, sum M). Supports add
reaction unknowns (pin 2, roller 1, fixed 3). The degree of static
indeterminacy is

    r = (reaction unknowns) - 3 * (number of sub-structures)

    r < 0   under-constrained          -> KinematicError
    r == 0  statically determinate    -> direct equilibrium solve
    r > 0   statically indeterminate  -> stiffness method

Counting alone misses some mechanisms, so every sub-structure is first
checked on its own: it needs three unknowns, at least one axial restraint
(pin or fixed), and either a fixed support or two transverse restraints.
A free-floating part is reported even when another part is over-supported
and the global count balances.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .config import CONFIG, SolverConfig
from .elements import Span, element_span
from .errors import InvalidModelError, KinematicError, UnsupportedError
from .loads import LoadSet
from .model import Model, Support

logger = logging.getLogger(__name__)

EQUATIONS_PER_COMPONENT = 3


class DeterminacyKind(str, Enum):
    DETERMINATE = "determinate"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class Component:
    """A connected sub-structure: a chain of elements ordered left to right."""
    nodes: Tuple[int, ...]      # node indices, left to right
    spans: Tuple[Span, ...]     # element spans, left to right

    @property
    def elements(self) -> Tuple[int, ...]:
        return tuple(sp.index for sp in self.spans)

    @property
    def x_left(self) -> float:
        return self.spans[0].x_left

    @property
    def x_right(self) -> float:
        return self.spans[-1].x_right

    def node_ids(self, model: Model) -> List:
        return [model.nodes[i].id for i in self.nodes]

    def element_ids(self, model: Model) -> List:
        return [model.elements[i].id for i in self.elements]

    def supports(self, model: Model) -> List[int]:
        return [i for i in self.nodes if model.nodes[i].support is not Support.FREE]


@dataclass(frozen=True)
class Determinacy:
    degree: int
    unknowns: int
    equations: int
    components: Tuple[Component, ...]

    @property
    def kind(self) -> DeterminacyKind:
        if self.degree == 0:
            return DeterminacyKind.DETERMINATE
        return DeterminacyKind.INDETERMINATE

    @property
    def method(self) -> str:
        return "equilibrium" if self.degree == 0 else "stiffness"

    def component_of(self) -> Dict[int, int]:
        """node index -> component number"""
        return {n: c for c, comp in enumerate(self.components) for n in comp.nodes}


def connected_components(model: Model, config: SolverConfig = CONFIG) -> List[Component]:
    """
    Group elements sharing nodes and order each group along the axis.

    Raises UnsupportedError when two members of one group overlap on the
    axis (a closed loop on the line, not a rigid chain).
    """
    n = len(model.nodes)
    parent = list(range(n))

    def find(i: int) -> int:
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    spans = [element_span(model, k) for k in range(len(model.elements))]
    for sp in spans:
        ra, rb = find(sp.left), find(sp.right)
        if ra != rb:
            parent[rb] = ra

    groups: Dict[int, List[Span]] = {}
    for sp in spans:
        groups.setdefault(find(sp.left), []).append(sp)

    tol = model.tolerance(config)
    components = []
    for members in groups.values():
        members.sort(key=lambda sp: (sp.x_left, sp.x_right))
        for a, b in zip(members, members[1:]):
            if b.x_left < a.x_right - tol:
                ids = [model.elements[a.index].id, model.elements[b.index].id]
                raise UnsupportedError(
                    f"Elements {ids[0]!r} and {ids[1]!r} overlap on the beam axis.",
                    elements=ids,
                )
        nodes = {sp.left for sp in members} | {sp.right for sp in members}
        ordered = tuple(sorted(nodes, key=lambda i: model.nodes[i].x))
        components.append(Component(ordered, tuple(members)))

    components.sort(key=lambda c: c.x_left)
    return components


def classify(model: Model, loads: LoadSet = None, config: SolverConfig = CONFIG) -> Determinacy:
    """
    Compute the degree of static indeterminacy of a validated model.

    Raises:
        KinematicError: no supports, an unsupported or unstable sub-structure,
            or a load on a node no element carries
        UnsupportedError: internal hinges or overlapping members
        InvalidModelError: axial loads shared between several axial
            restraints on elements without a cross-section area
    """
    hinged = [n.id for n in model.nodes if n.hinge]
    if hinged:
        raise UnsupportedError("Internal hinges are not supported.", nodes=hinged)

    components = connected_components(model, config)
    attached = {i for comp in components for i in comp.nodes}

    for i, node in enumerate(model.nodes):
        if i in attached:
            continue
        if model.loads_on_node(node.id):
            raise KinematicError(
                f"Node {node.id!r} is loaded but not connected to any element.", nodes=[node.id]
            )
        if node.support is not Support.FREE:
            logger.warning("Ignoring support at node %r: no element is connected to it.", node.id)

    supported = [i for i in attached if model.nodes[i].support is not Support.FREE]
    if not supported:
        raise KinematicError(
            "Structure has no supports.", nodes=[model.nodes[i].id for i in sorted(attached)]
        )

    # a failing part is reported with its own nodes and elements
    for comp in components:
        _check_component(model, comp, loads)

    unknowns = sum(model.nodes[i].support.unknowns for i in supported)
    equations = EQUATIONS_PER_COMPONENT * len(components)
    degree = unknowns - equations
    logger.debug(
        "Determinacy: %d unknowns, %d equations, %d component(s), r=%d",
        unknowns, equations, len(components), degree,
    )
    if degree < 0:
        raise KinematicError(
            f"Structure is under-constrained: {unknowns} reaction unknowns for "
            f"{equations} equilibrium equations.",
            nodes=[model.nodes[i].id for i in sorted(attached)],
        )

    return Determinacy(degree, unknowns, equations, tuple(components))


def _check_component(model: Model, comp: Component, loads: LoadSet) -> None:
    kinds = [model.nodes[i].support for i in comp.supports(model)]
    node_ids = comp.node_ids(model)
    element_ids = comp.element_ids(model)

    if not kinds:
        raise KinematicError(
            f"Elements {element_ids} have no support.", nodes=node_ids, elements=element_ids
        )
    unknowns = sum(k.unknowns for k in kinds)
    if unknowns < EQUATIONS_PER_COMPONENT:
        raise KinematicError(
            f"Elements {element_ids} are under-constrained ({unknowns} reaction unknowns).",
            nodes=node_ids, elements=element_ids,
        )

    axial = sum(1 for k in kinds if k in (Support.PIN, Support.FIXED))
    transverse = len(kinds)
    if axial == 0:
        raise KinematicError(
            f"Elements {element_ids} can slide along the axis: no pin or fixed support.",
            nodes=node_ids, elements=element_ids,
        )
    if Support.FIXED not in kinds and transverse < 2:
        raise KinematicError(
            f"Elements {element_ids} can rotate about their only support.",
            nodes=node_ids, elements=element_ids,
        )

    if axial > 1 and loads is not None and _has_axial_load(comp, loads):
        missing = [model.elements[i].id for i in comp.elements if model.elements[i].A is None]
        if missing:
            raise InvalidModelError(
                f"Axial loads are shared between {axial} axial restraints; "
                f"elements {missing} need a cross-section area A.",
                elements=missing,
            )


def _has_axial_load(comp: Component, loads: LoadSet) -> bool:
    nodes = set(comp.nodes)
    elements = set(comp.elements)
    return any(
        p.Fx != 0.0 and (p.node in nodes or p.element in elements)
        for p in loads.points
    )
