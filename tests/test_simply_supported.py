import numpy as np

from beamkit import Element, Model, NodalForce, Node, PointLoad, Support, solve


def test_simply_supported_midspan_pointload():
    """
    A beam resting on a pin at the left and a roller at the right, with a
    weight P in the middle. We want to know:
    1. How much each support pushes back (reactions)
    2. The largest bending moment (at midspan, P*L/4)
    3. How much the middle sags (P*L^3 / 48EI)

    The textbook answers are closed-form, so any mistake in the equilibrium
    solve, the sectioning or the double integration shows up here.
    """

    # ========================================================================
    # STEP 1: DEFINE THE PHYSICAL PROBLEM
    # ========================================================================
    L = 4.0     # span (m)
    E = 210e9   # Young's modulus (Pa)
    I = 8.0e-6  # second moment of area (m^4)
    P = 1000.0  # downward load at midspan (N)

    # ========================================================================
    # STEP 2: BUILD THE MODEL
    # ========================================================================
    # One element is enough: the load sits INSIDE it at a = L/2 and the
    # evaluator puts a breakpoint there.
    model = Model(
        nodes=[Node(0, 0.0, Support.PIN), Node(1, L, Support.ROLLER)],
        elements=[Element("beam", 0, 1, E=E, I=I)],
        loads=[PointLoad("beam", a=L / 2, P=P)],
    )

    # ========================================================================
    # STEP 3: SOLVE
    # ========================================================================
    result = solve(model)
    beam = result.element("beam")

    # ========================================================================
    # STEP 4: COMPARE TO TEXTBOOK ANSWERS
    # ========================================================================
    R_expected = P / 2.0
    M_expected = P * L / 4.0
    delta_expected = -P * L**3 / (48 * E * I)   # negative = downward

    assert result.method == "equilibrium"
    assert np.isclose(result.reaction(0).Ry, R_expected, rtol=1e-9), \
        f"Left reaction {result.reaction(0).Ry} != expected {R_expected}"
    assert np.isclose(result.reaction(1).Ry, R_expected, rtol=1e-9), \
        f"Right reaction {result.reaction(1).Ry} != expected {R_expected}"
    assert np.isclose(result.reaction(0).Rx, 0.0, atol=1e-9)

    assert np.isclose(beam.M(L / 2), M_expected, rtol=1e-9), \
        f"Midspan moment {beam.M(L / 2)} != expected {M_expected}"
    x_max, M_max = beam.M.max_abs()
    assert np.isclose(x_max, L / 2) and np.isclose(M_max, M_expected, rtol=1e-9)

    assert np.isclose(beam.w(L / 2), delta_expected, rtol=1e-9), \
        f"Midspan deflection {beam.w(L / 2)} != expected {delta_expected}"
    assert np.isclose(beam.theta(L / 2), 0.0, atol=1e-12), "slope must vanish at midspan by symmetry"

    print(f"✓ Reactions: {R_expected:.2f} N each")
    print(f"✓ Midspan moment: {beam.M(L / 2):.2f} N·m (expected: {M_expected:.2f})")
    print(f"✓ Midspan deflection: {beam.w(L / 2):.6e} m (expected: {delta_expected:.6e})")


def test_simply_supported_shear_jump_at_load():
    """
    The shear force steps DOWN by exactly P under a downward point load and
    is constant (+P/2 then -P/2) on either side.
    """
    L, P = 6.0, 12e3
    model = Model(
        nodes=[Node("A", 0.0, "pin"), Node("B", L, "roller")],
        elements=[Element("e1", "A", "B", E=200e9, I=8.333e-6)],
        loads=[PointLoad("e1", a=L / 2, P=P)],
    )
    V = solve(model).element("e1").V

    jumps = V.jumps(atol=1e-9)
    assert len(jumps) == 1
    x, dV = jumps[0]
    assert np.isclose(x, L / 2)
    assert np.isclose(dV, -P, rtol=1e-12)

    left, right = V.limits(L / 2)
    assert np.isclose(left, P / 2) and np.isclose(right, -P / 2)
    assert np.isclose(V(1.0), P / 2) and np.isclose(V(5.0), -P / 2)


def test_simply_supported_off_centre_load():
    """
    Load at a from the left: R_A = P*b/L, R_B = P*a/L, M_max = P*a*b/L, and
    the deflection under the load is P*a^2*b^2 / (3*E*I*L).
    """
    L, a, P = 5.0, 2.0, 8e3
    b = L - a
    E, I = 200e9, 8.333e-6
    model = Model(
        nodes=[Node("A", 0.0, "pin"), Node("B", L, "roller")],
        elements=[Element("e1", "A", "B", E=E, I=I)],
        loads=[PointLoad("e1", a=a, P=P)],
    )
    result = solve(model)
    e1 = result.element("e1")

    assert np.isclose(result.reaction("A").Ry, P * b / L)
    assert np.isclose(result.reaction("B").Ry, P * a / L)
    assert np.isclose(e1.M(a), P * a * b / L)
    assert np.isclose(e1.w(a), -P * a**2 * b**2 / (3 * E * I * L), rtol=1e-9)
    assert np.isclose(e1.w(0.0), 0.0, atol=1e-12) and np.isclose(e1.w(L), 0.0, atol=1e-12)


def test_simply_supported_two_elements_matches_one():
    """
    Splitting the span at the load into two elements must not change
    anything: the node is just another breakpoint.
    """
    L, P = 4.0, 1000.0
    kw = dict(E=210e9, I=8.0e-6)
    one = solve(Model(
        nodes=[Node(0, 0.0, "pin"), Node(2, L, "roller")],
        elements=[Element(0, 0, 2, **kw)],
        loads=[PointLoad(0, a=L / 2, P=P)],
    ))
    two = solve(Model(
        nodes=[Node(0, 0.0, "pin"), Node(1, L / 2), Node(2, L, "roller")],
        elements=[Element(0, 0, 1, **kw), Element(1, 1, 2, **kw)],
        loads=[NodalForce(1, P=P)],
    ))

    for x in (0.5, 1.0, 1.5):
        assert np.isclose(one.element(0).M(x), two.element(0).M(x))
        assert np.isclose(one.element(0).w(x), two.element(0).w(x), rtol=1e-9)
    for x in (2.5, 3.0, 3.5):
        assert np.isclose(one.element(0).w(x), two.element(1).w(x - L / 2), rtol=1e-9)

    w_mid, theta_mid = two.nodal_displacements[1]
    assert np.isclose(w_mid, -P * L**3 / (48 * 210e9 * 8.0e-6), rtol=1e-9)
    assert np.isclose(theta_mid, 0.0, atol=1e-12)
