# beamkit/templates.py
"""
TEMPLATE LIBRARY
================

Read-only catalog of canonical beams used to pre-populate the editor.

Each entry builds a fresh ``Model`` tagged with its template id. Span,
point load and load intensity can be overridden; material and section
come from ``SolverConfig`` (steel, 100 x 100 mm solid section by default).

USAGE:
------
    model = get_template("simply-supported-point", L=8.0, P=20e3)
    [t.id for t in list_templates()]

Node ids are letters from left to right ("A", "B", ...); element ids are
"e1", "e2", ... in the same order.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from .config import CONFIG, SolverConfig
from .model import (DistributedLoad, Element, Model, NodalForce, Node,
                    PointLoad, Support)


# Default geometry and loading (m, N, N/m)
DEFAULT_SPAN = 6.0
DEFAULT_P = 10e3
DEFAULT_W = 5e3


def _element(eid: str, start: str, end: str, config: SolverConfig) -> Element:
    return Element(
        eid, start, end,
        E=config.default_E, I=config.default_I,
        A=config.default_A, depth=config.default_depth,
    )


def _simply_supported_point(L, P, w, config):
    nodes = [Node("A", 0.0, Support.PIN), Node("B", L, Support.ROLLER)]
    elements = [_element("e1", "A", "B", config)]
    loads = [PointLoad("e1", a=L / 2, P=P, id="P1")]
    return nodes, elements, loads


def _simply_supported_udl(L, P, w, config):
    nodes = [Node("A", 0.0, Support.PIN), Node("B", L, Support.ROLLER)]
    elements = [_element("e1", "A", "B", config)]
    loads = [DistributedLoad("e1", w=w, id="w1")]
    return nodes, elements, loads


def _cantilever_point(L, P, w, config):
    nodes = [Node("A", 0.0, Support.FIXED), Node("B", L)]
    elements = [_element("e1", "A", "B", config)]
    loads = [NodalForce("B", P=P, id="P1")]
    return nodes, elements, loads


def _cantilever_udl(L, P, w, config):
    nodes = [Node("A", 0.0, Support.FIXED), Node("B", L)]
    elements = [_element("e1", "A", "B", config)]
    loads = [DistributedLoad("e1", w=w, id="w1")]
    return nodes, elements, loads


def _two_span_continuous(L, P, w, config):
    nodes = [
        Node("A", 0.0, Support.PIN),
        Node("B", L, Support.ROLLER),
        Node("C", 2 * L, Support.ROLLER),
    ]
    elements = [_element("e1", "A", "B", config), _element("e2", "B", "C", config)]
    loads = [DistributedLoad("e1", w=w, id="w1"), DistributedLoad("e2", w=w, id="w2")]
    return nodes, elements, loads


def _propped_cantilever(L, P, w, config):
    nodes = [Node("A", 0.0, Support.FIXED), Node("B", L, Support.ROLLER)]
    elements = [_element("e1", "A", "B", config)]
    loads = [DistributedLoad("e1", w=w, id="w1")]
    return nodes, elements, loads


def _overhanging(L, P, w, config):
    # overhang of a quarter span past the right support
    nodes = [
        Node("A", 0.0, Support.PIN),
        Node("B", L, Support.ROLLER),
        Node("C", 1.25 * L),
    ]
    elements = [_element("e1", "A", "B", config), _element("e2", "B", "C", config)]
    loads = [DistributedLoad("e1", w=w, id="w1"), NodalForce("C", P=P, id="P1")]
    return nodes, elements, loads


def _fixed_fixed_udl(L, P, w, config):
    nodes = [Node("A", 0.0, Support.FIXED), Node("B", L, Support.FIXED)]
    elements = [_element("e1", "A", "B", config)]
    loads = [DistributedLoad("e1", w=w, id="w1")]
    return nodes, elements, loads


@dataclass(frozen=True)
class Template:
    id: str
    title: str
    description: str
    builder: Callable

    def build(
        self,
        L: float = DEFAULT_SPAN,
        P: float = DEFAULT_P,
        w: float = DEFAULT_W,
        config: SolverConfig = CONFIG,
    ) -> Model:
        nodes, elements, loads = self.builder(L, P, w, config)
        return Model(nodes, elements, loads, template_id=self.id)


TEMPLATES: Dict[str, Template] = {
    t.id: t
    for t in [
        Template(
            "simply-supported-point", "Simply supported beam, central point load",
            "Pin at the left end, roller at the right, P at midspan.",
            _simply_supported_point,
        ),
        Template(
            "simply-supported-udl", "Simply supported beam, uniform load",
            "Pin at the left end, roller at the right, w over the full span.",
            _simply_supported_udl,
        ),
        Template(
            "cantilever-point", "Cantilever, tip point load",
            "Fixed at the left end, free at the right, P at the tip.",
            _cantilever_point,
        ),
        Template(
            "cantilever-udl", "Cantilever, uniform load",
            "Fixed at the left end, free at the right, w over the full span.",
            _cantilever_udl,
        ),
        Template(
            "two-span-continuous", "Two-span continuous beam",
            "Two equal spans on pin, roller, roller; w on both spans.",
            _two_span_continuous,
        ),
        Template(
            "propped-cantilever", "Propped cantilever",
            "Fixed at the left end, roller at the right, w over the full span.",
            _propped_cantilever,
        ),
        Template(
            "overhanging", "Overhanging beam",
            "Pin and roller with a quarter-span overhang; w on the main span, P at the tip.",
            _overhanging,
        ),
        Template(
            "fixed-fixed-udl", "Fixed-fixed beam, uniform load",
            "Both ends fixed, w over the full span.",
            _fixed_fixed_udl,
        ),
    ]
}


def list_templates() -> List[Template]:
    return list(TEMPLATES.values())


def get_template(template_id: str, **params) -> Model:
    """
    Build the model of a catalog entry.

    Keyword arguments (L, P, w, config) override the defaults.
    Raises KeyError for an unknown id.
    """
    try:
        template = TEMPLATES[template_id]
    except KeyError:
        raise KeyError(
            f"Unknown template {template_id!r}; available: {', '.join(TEMPLATES)}"
        ) from None
    return template.build(**params)
