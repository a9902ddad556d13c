# beamkit/state.py
"""
Editable model for the canvas editor.

``SolverState`` is the mutable aggregate the editor changes in place. The
solver never sees it directly: ``to_model()`` freezes the current contents
into a ``Model`` for each solve, so nothing cached survives an edit.

Any edit clears ``template_id``; only ``load_template`` sets it.
"""

from dataclasses import dataclass, field, replace
from typing import Hashable, List, Optional

from .config import CONFIG, SolverConfig
from .errors import InvalidModelError
from .model import ELEMENT_LOADS, NODE_LOADS, Element, Load, Model, Node, Support
from .templates import get_template


def _next_id(prefix: str, taken) -> str:
    n = 1
    while f"{prefix}{n}" in taken:
        n += 1
    return f"{prefix}{n}"


@dataclass
class SolverState:
    nodes: List[Node] = field(default_factory=list)
    elements: List[Element] = field(default_factory=list)
    loads: List[Load] = field(default_factory=list)
    template_id: Optional[str] = None
    config: SolverConfig = CONFIG

    # -- lookups --------------------------------------------------------------

    def _node_pos(self, node_id: Hashable) -> int:
        for k, n in enumerate(self.nodes):
            if n.id == node_id:
                return k
        raise InvalidModelError(f"No node {node_id!r}.", nodes=[node_id])

    def _element_pos(self, element_id: Hashable) -> int:
        for k, e in enumerate(self.elements):
            if e.id == element_id:
                return k
        raise InvalidModelError(f"No element {element_id!r}.", elements=[element_id])

    def node(self, node_id: Hashable) -> Node:
        return self.nodes[self._node_pos(node_id)]

    def element(self, element_id: Hashable) -> Element:
        return self.elements[self._element_pos(element_id)]

    # -- nodes ----------------------------------------------------------------

    def add_node(self, x: float, support=Support.FREE, node_id: Hashable = None) -> Node:
        taken = {n.id for n in self.nodes}
        if node_id is None:
            node_id = _next_id("N", taken)
        elif node_id in taken:
            raise InvalidModelError(f"Duplicate node id {node_id!r}.", nodes=[node_id])
        node = Node(node_id, float(x), support)
        self.nodes.append(node)
        self.template_id = None
        return node

    def move_node(self, node_id: Hashable, x: float) -> Node:
        k = self._node_pos(node_id)
        self.nodes[k] = replace(self.nodes[k], x=float(x))
        self.template_id = None
        return self.nodes[k]

    def set_support(self, node_id: Hashable, support) -> Node:
        k = self._node_pos(node_id)
        self.nodes[k] = replace(self.nodes[k], support=support)
        self.template_id = None
        return self.nodes[k]

    def remove_node(self, node_id: Hashable) -> None:
        """Delete a node with its incident elements and every load on them."""
        k = self._node_pos(node_id)
        for e in [e for e in self.elements if node_id in (e.start, e.end)]:
            self.remove_element(e.id)
        self.loads = [
            ld for ld in self.loads
            if not (isinstance(ld, NODE_LOADS) and ld.node == node_id)
        ]
        del self.nodes[k]
        self.template_id = None

    # -- elements -------------------------------------------------------------

    def add_element(
        self,
        start: Hashable,
        end: Hashable,
        E: float = None,
        I: float = None,
        A: float = None,
        depth: float = None,
        fy: float = None,
        element_id: Hashable = None,
    ) -> Element:
        self._node_pos(start)
        self._node_pos(end)
        taken = {e.id for e in self.elements}
        if element_id is None:
            element_id = _next_id("E", taken)
        elif element_id in taken:
            raise InvalidModelError(f"Duplicate element id {element_id!r}.", elements=[element_id])
        cfg = self.config
        element = Element(
            element_id, start, end,
            E=cfg.default_E if E is None else E,
            I=cfg.default_I if I is None else I,
            A=cfg.default_A if A is None else A,
            depth=cfg.default_depth if depth is None else depth,
            fy=fy,
        )
        self.elements.append(element)
        self.template_id = None
        return element

    def remove_element(self, element_id: Hashable) -> None:
        """Delete an element and the loads placed on it."""
        k = self._element_pos(element_id)
        self.loads = [
            ld for ld in self.loads
            if not (isinstance(ld, ELEMENT_LOADS) and ld.element == element_id)
        ]
        del self.elements[k]
        self.template_id = None

    # -- loads ----------------------------------------------------------------

    def add_load(self, load: Load) -> Load:
        """Append a load, giving it an id ("L1", "L2", ...) if it has none."""
        if isinstance(load, NODE_LOADS):
            self._node_pos(load.node)
        elif isinstance(load, ELEMENT_LOADS):
            self._element_pos(load.element)
        else:
            raise InvalidModelError(f"Not a load: {load!r}.")
        taken = {ld.id for ld in self.loads}
        if load.id is None:
            load = replace(load, id=_next_id("L", taken))
        elif load.id in taken:
            raise InvalidModelError(f"Duplicate load id {load.id!r}.")
        self.loads.append(load)
        self.template_id = None
        return load

    def remove_load(self, load_id: Hashable) -> None:
        remaining = [ld for ld in self.loads if ld.id != load_id]
        if len(remaining) == len(self.loads):
            raise InvalidModelError(f"No load {load_id!r}.")
        self.loads = remaining
        self.template_id = None

    # -- whole-model operations ----------------------------------------------

    def load_template(self, template_id: str, **params) -> None:
        """Replace everything with a catalog template."""
        params.setdefault("config", self.config)
        model = get_template(template_id, **params)
        self.nodes = list(model.nodes)
        self.elements = list(model.elements)
        self.loads = list(model.loads)
        self.template_id = model.template_id

    def clear(self) -> None:
        self.nodes = []
        self.elements = []
        self.loads = []
        self.template_id = None

    def to_model(self) -> Model:
        return Model(
            tuple(self.nodes), tuple(self.elements), tuple(self.loads),
            template_id=self.template_id,
        )
