import numpy as np
import pytest

from beamkit import (DeterminacyKind, Element, KinematicError, Model, NodalForce,
                     Node, PointLoad, UnsupportedError, classify, solve, solve_or_error)
from beamkit.determinacy import connected_components

E, I = 200e9, 8.333e-6


def beam(*supports, xs=None, loads=()):
    """Chain of elements through nodes n0, n1, ... with the given supports."""
    xs = xs if xs is not None else [float(k) * 2.0 for k in range(len(supports))]
    nodes = [Node(f"n{k}", x, s) for k, (x, s) in enumerate(zip(xs, supports))]
    elements = [
        Element(f"e{k}", f"n{k}", f"n{k + 1}", E=E, I=I) for k in range(len(nodes) - 1)
    ]
    return Model(nodes, elements, loads)


@pytest.mark.parametrize("supports, degree", [
    (("pin", "roller"), 0),
    (("fixed", "free"), 0),
    (("pin", "free", "roller"), 0),
    (("fixed", "roller"), 1),
    (("pin", "pin"), 1),
    (("pin", "roller", "roller"), 1),
    (("fixed", "fixed"), 3),
    (("fixed", "roller", "pin"), 3),
])
def test_degree_of_indeterminacy(supports, degree):
    det = classify(beam(*supports).validate())
    assert det.degree == degree
    assert det.equations == 3
    expected = DeterminacyKind.DETERMINATE if degree == 0 else DeterminacyKind.INDETERMINATE
    assert det.kind is expected
    assert det.method == ("equilibrium" if degree == 0 else "stiffness")


def test_no_supports_is_kinematic():
    model = beam("free", "free", loads=[NodalForce("n1", P=1.0)])
    with pytest.raises(KinematicError, match="no supports"):
        solve(model)


@pytest.mark.parametrize("supports", [
    ("pin", "free"),            # 2 unknowns < 3
    ("roller", "roller"),       # nothing stops axial sliding
    ("roller", "roller", "roller"),
])
def test_under_constrained_is_kinematic(supports):
    error = solve_or_error(beam(*supports))
    assert isinstance(error, KinematicError)
    assert error.kind == "Kinematic"
    assert error.nodes, "the offending nodes are reported"


def test_free_floating_part_is_kinematic_even_when_count_balances():
    """
    A fixed-fixed beam (r = +3) next to an unsupported beam (r = -3):
    the global count is 6 - 6 = 0, but the right part is a free body.
    """
    model = Model(
        nodes=[
            Node("A", 0.0, "fixed"), Node("B", 4.0, "fixed"),
            Node("C", 6.0), Node("D", 9.0),
        ],
        elements=[Element("left", "A", "B", E=E, I=I), Element("right", "C", "D", E=E, I=I)],
        loads=[PointLoad("right", a=1.0, P=1e3)],
    )
    det_components = connected_components(model.validate())
    assert len(det_components) == 2

    with pytest.raises(KinematicError) as info:
        solve(model)
    assert "right" in info.value.elements
    assert set(info.value.nodes) == {"C", "D"}


def test_unsupported_part_is_named_when_count_falls_short():
    """
    Pin-roller beam (r = 0) next to a loaded beam with no supports
    (r = -3): the error points at the unsupported part only.
    """
    model = Model(
        nodes=[
            Node("A", 0.0, "pin"), Node("B", 4.0, "roller"),
            Node("C", 6.0), Node("D", 9.0),
        ],
        elements=[Element("ok", "A", "B", E=E, I=I), Element("float", "C", "D", E=E, I=I)],
        loads=[PointLoad("float", a=1.0, P=1e3)],
    )
    error = solve_or_error(model)
    assert isinstance(error, KinematicError)
    assert set(error.nodes) == {"C", "D"}
    assert error.elements == ("float",)


def test_two_supported_parts_are_solved_independently():
    model = Model(
        nodes=[
            Node("A", 0.0, "pin"), Node("B", 4.0, "roller"),
            Node("C", 6.0, "fixed"), Node("D", 9.0),
        ],
        elements=[Element("e1", "A", "B", E=E, I=I), Element("e2", "C", "D", E=E, I=I)],
        loads=[PointLoad("e1", a=2.0, P=2e3), NodalForce("D", P=1e3)],
    )
    result = solve(model)
    assert result.determinacy.degree == 0
    assert len(result.determinacy.components) == 2
    assert np.isclose(result.reaction("A").Ry, 1e3)
    assert np.isclose(result.reaction("B").Ry, 1e3)
    assert np.isclose(result.reaction("C").Ry, 1e3)
    assert np.isclose(result.reaction("C").Mz, 3e3)


def test_hinge_is_unsupported():
    model = Model(
        nodes=[Node("A", 0.0, "fixed"), Node("B", 2.0, hinge=True), Node("C", 4.0, "roller")],
        elements=[Element("e1", "A", "B", E=E, I=I), Element("e2", "B", "C", E=E, I=I)],
    )
    error = solve_or_error(model)
    assert isinstance(error, UnsupportedError)
    assert error.nodes == ("B",)


def test_overlapping_elements_are_unsupported():
    model = Model(
        nodes=[Node("A", 0.0, "pin"), Node("B", 6.0, "roller"), Node("C", 3.0)],
        elements=[Element("long", "A", "B", E=E, I=I), Element("short", "A", "C", E=E, I=I)],
    )
    with pytest.raises(UnsupportedError, match="overlap"):
        solve(model)


def test_loaded_detached_node_is_kinematic():
    model = Model(
        nodes=[Node("A", 0.0, "pin"), Node("B", 4.0, "roller"), Node("X", 10.0)],
        elements=[Element("e1", "A", "B", E=E, I=I)],
        loads=[NodalForce("X", P=5.0)],
    )
    with pytest.raises(KinematicError, match="not connected"):
        solve(model)


def test_detached_supported_node_is_ignored(caplog):
    model = Model(
        nodes=[Node("A", 0.0, "pin"), Node("B", 4.0, "roller"), Node("X", 10.0, "fixed")],
        elements=[Element("e1", "A", "B", E=E, I=I)],
        loads=[PointLoad("e1", a=1.0, P=4e3)],
    )
    with caplog.at_level("WARNING", logger="beamkit"):
        result = solve(model)
    assert "Ignoring support at node 'X'" in caplog.text
    assert result.determinacy.degree == 0
    assert [r.node for r in result.reactions] == ["A", "B"]
    assert np.isclose(result.reaction("A").Ry, 3e3)


def test_components_are_ordered_left_to_right():
    # elements listed right to left and drawn backwards
    model = Model(
        nodes=[Node("C", 8.0, "roller"), Node("B", 4.0, "roller"), Node("A", 0.0, "pin")],
        elements=[Element("e2", "C", "B", E=E, I=I), Element("e1", "B", "A", E=E, I=I)],
    ).validate()
    (comp,) = connected_components(model)
    assert comp.node_ids(model) == ["A", "B", "C"]
    assert comp.element_ids(model) == ["e1", "e2"]
    assert comp.x_left == 0.0 and comp.x_right == 8.0
