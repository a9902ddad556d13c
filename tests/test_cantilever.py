import numpy as np

from beamkit import DistributedLoad, Element, Model, NodalForce, Node, Support, solve


def test_cantilever_tip_load():
    """
    WHAT IS THIS TEST?
    ==================
    A cantilever: one end built into a wall (fixed), the other end free,
    with a point load P at the tip.

    Textbook answers:
    - vertical reaction at the wall:       P (upward)
    - fixed-end moment:                    P*L (hogging, so M(0) = -P*L)
    - tip deflection:                      P*L^3 / (3*E*I) downward
    - tip rotation:                        P*L^2 / (2*E*I) clockwise
    """
    L = 3.0
    E = 210e9
    I = 8.0e-6
    P = 1000.0

    model = Model(
        nodes=[Node(0, 0.0, Support.FIXED), Node(1, L)],
        elements=[Element(0, 0, 1, E=E, I=I)],
        loads=[NodalForce(1, P=P)],
    )
    result = solve(model)
    beam = result.element(0)
    reaction = result.reaction(0)

    assert result.determinacy.degree == 0
    assert np.isclose(reaction.Ry, P, rtol=1e-12), f"Ry {reaction.Ry} != {P}"
    assert np.isclose(reaction.Mz, P * L, rtol=1e-12), f"Mz {reaction.Mz} != {P * L}"
    assert np.isclose(reaction.Rx, 0.0, atol=1e-9)

    # internal moment at the wall is hogging
    assert np.isclose(beam.M(0.0), -P * L, rtol=1e-12)
    assert np.isclose(beam.M(L), 0.0, atol=1e-9)
    assert np.isclose(beam.V(1.0), P)

    delta_expected = -P * L**3 / (3 * E * I)
    theta_expected = -P * L**2 / (2 * E * I)
    w_tip, theta_tip = result.nodal_displacements[1]
    assert np.isclose(w_tip, delta_expected, rtol=1e-9), \
        f"Tip deflection {w_tip} != expected {delta_expected}"
    assert np.isclose(theta_tip, theta_expected, rtol=1e-9), \
        f"Tip rotation {theta_tip} != expected {theta_expected}"

    # the wall holds the beam level
    w_root, theta_root = result.nodal_displacements[0]
    assert np.isclose(w_root, 0.0, atol=1e-15) and np.isclose(theta_root, 0.0, atol=1e-15)

    print(f"✓ Tip deflection: {w_tip:.6e} m (expected: {delta_expected:.6e} m)")


def test_cantilever_udl():
    """
    Cantilever under uniform load w:
    Ry = w*L, Mz = w*L^2/2, tip deflection w*L^4 / (8*E*I).
    """
    L, w = 2.5, 4e3
    E, I = 200e9, 8.333e-6
    model = Model(
        nodes=[Node("A", 0.0, "fixed"), Node("B", L)],
        elements=[Element("e1", "A", "B", E=E, I=I)],
        loads=[DistributedLoad("e1", w=w)],
    )
    result = solve(model)
    e1 = result.element("e1")

    assert np.isclose(result.reaction("A").Ry, w * L)
    assert np.isclose(result.reaction("A").Mz, w * L**2 / 2)
    assert np.isclose(e1.M(0.0), -w * L**2 / 2)
    # shear falls linearly to zero at the free end
    assert np.isclose(e1.V(0.0), w * L) and np.isclose(e1.V(L), 0.0, atol=1e-9)
    assert e1.M.degree == 2
    assert np.isclose(e1.w(L), -w * L**4 / (8 * E * I), rtol=1e-9)


def test_cantilever_fixed_at_right_end():
    """
    Mirror image: the wall is on the right. Reactions and the tip deflection
    are the same; the fixed-end moment now turns the other way.
    """
    L, P = 3.0, 1000.0
    E, I = 210e9, 8.0e-6
    model = Model(
        nodes=[Node("tip", 0.0), Node("wall", L, "fixed")],
        elements=[Element("e1", "tip", "wall", E=E, I=I)],
        loads=[NodalForce("tip", P=P)],
    )
    result = solve(model)

    assert np.isclose(result.reaction("wall").Ry, P)
    assert np.isclose(result.reaction("wall").Mz, -P * L)
    assert np.isclose(result.element("e1").M(L), -P * L)
    w_tip, theta_tip = result.nodal_displacements["tip"]
    assert np.isclose(w_tip, -P * L**3 / (3 * E * I), rtol=1e-9)
    assert np.isclose(theta_tip, P * L**2 / (2 * E * I), rtol=1e-9)
