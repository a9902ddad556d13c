"""Model construction and validation (InvalidModel errors)."""

import math

import pytest

from beamkit import (DistributedLoad, Element, InvalidModelError, Model, NodalForce,
                     NodalMoment, Node, PointLoad, Support, UnsupportedError, solve_or_error)

E, I = 200e9, 8.333e-6


def simple(nodes=None, elements=None, loads=()):
    nodes = nodes if nodes is not None else [Node("A", 0.0, "pin"), Node("B", 4.0, "roller")]
    elements = elements if elements is not None else [Element("e1", "A", "B", E=E, I=I)]
    return Model(nodes, elements, loads)


def test_support_aliases_and_unknowns():
    assert Node("A", 0.0, "pinned").support is Support.PIN
    assert Node("A", 0.0, "none").support is Support.FREE
    assert Node("A", 0.0, "FIXED").support is Support.FIXED
    assert [s.unknowns for s in Support] == [0, 2, 1, 3]


def test_unknown_support_type():
    with pytest.raises(InvalidModelError, match="unknown support"):
        Node("A", 0.0, "sliding")


def test_model_is_immutable_and_indexed():
    model = simple()
    assert isinstance(model.nodes, tuple)
    assert model.node_index == {"A": 0, "B": 1}
    assert model.element("e1").start == "A"
    assert model.element_length(model.element("e1")) == 4.0
    with pytest.raises(AttributeError):
        model.nodes = ()


def test_valid_model_passes():
    model = simple(loads=[PointLoad("e1", a=4.0, P=1.0), DistributedLoad("e1", w=1.0, a=1.0, b=3.0)])
    assert model.validate() is model


@pytest.mark.parametrize("model, match", [
    (simple(elements=[]), "no elements"),
    (simple(nodes=[Node("A", 0.0, "pin"), Node("A", 4.0, "roller")]), "Duplicate node"),
    (simple(elements=[Element("e1", "A", "B", E=E, I=I), Element("e1", "B", "A", E=E, I=I)]),
     "Duplicate element"),
    (simple(elements=[Element("e1", "A", "Z", E=E, I=I)]), "missing node"),
    (simple(elements=[Element("e1", "A", "A", E=E, I=I)]), "to itself"),
    (simple(nodes=[Node("A", 1.0, "pin"), Node("B", 1.0, "roller")]), "zero length"),
    (simple(nodes=[Node("A", math.nan, "pin"), Node("B", 1.0, "roller")]), "non-finite position"),
    (simple(elements=[Element("e1", "A", "B", E=-1.0, I=I)]), "positive E and I"),
    (simple(elements=[Element("e1", "A", "B", E=E, I=0.0)]), "positive E and I"),
    (simple(elements=[Element("e1", "A", "B", E=E, I=I, A=0.0)]), "A must be positive"),
    (simple(elements=[Element("e1", "A", "B", E=E, I=I, depth=-0.1)]), "depth must be positive"),
    (simple(elements=[Element("e1", "A", "B", E=E, I=I, fy=0.0)]), "fy must be positive"),
    (simple(elements=[Element("e1", "A", "B", E=1e-300, I=1e-300)]), r"E\*I=.* out of range"),
    (simple(elements=[Element("e1", "A", "B", E=1e300, I=1e300)]), "out of range"),
])
def test_invalid_models(model, match):
    with pytest.raises(InvalidModelError, match=match):
        model.validate()


@pytest.mark.parametrize("load, match", [
    (PointLoad("e1", a=4.5, P=1.0), "outside element"),
    (PointLoad("e1", a=-0.1, P=1.0), "outside element"),
    (PointLoad("zz", a=1.0, P=1.0), "missing element"),
    (NodalForce("Q", P=1.0), "missing node"),
    (NodalMoment("A", C=math.inf), "non-finite"),
    (DistributedLoad("e1", w=1.0, a=3.0, b=3.0), "empty extent"),
    (DistributedLoad("e1", w=1.0, b=5.0), "outside element"),
])
def test_invalid_loads(load, match):
    with pytest.raises(InvalidModelError, match=match):
        simple(loads=[load]).validate()


def test_unknown_load_type_is_unsupported():
    error = solve_or_error(simple(loads=["gravity"]))
    assert isinstance(error, UnsupportedError)


def test_invalid_model_is_returned_as_value():
    error = solve_or_error(simple(elements=[Element("e1", "A", "Z", E=E, I=I)]))
    assert isinstance(error, InvalidModelError)
    assert isinstance(error, ValueError)
    assert error.kind == "InvalidModel"
    assert error.elements == ("e1",)


def test_distributed_load_defaults():
    load = DistributedLoad("e1", w=2.0)
    assert load.intensity_end == 2.0
    assert load.a == 0.0 and load.b is None
    assert DistributedLoad("e1", w=0.0, w_end=3.0).intensity_end == 3.0


def test_underflowing_bending_stiffness_is_returned_as_value():
    model = Model(
        nodes=[Node("A", 0.0, "fixed"), Node("B", 2.0)],
        elements=[Element("e1", "A", "B", E=1e-300, I=1e-300)],
        loads=[NodalForce("B", P=1.0)],
    )
    error = solve_or_error(model)
    assert isinstance(error, InvalidModelError)
    assert error.elements == ("e1",)
