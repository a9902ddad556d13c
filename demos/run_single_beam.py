from beamkit import DistributedLoad, Element, Model, NodalMoment, Node, PointLoad, Support, solve


def main():
    """
    ONE BEAM, FULL OUTPUT
    =====================
    A propped cantilever with a partial triangular load, a point load and a
    couple at midspan. Prints the reactions, the diagrams at a few stations
    and the peak values with section stresses.
    """

    # ========================================================================
    # SETUP
    # ========================================================================
    L = 8.0         # Span (m)
    E = 200e9       # Steel (Pa)
    I = 8.333e-6    # 100 x 100 mm solid section (m^4)
    A = 0.01        # (m^2)
    h = 0.1         # Section depth (m)

    model = Model(
        nodes=[
            Node("A", 0.0, Support.FIXED),
            Node("M", L / 2),
            Node("B", L, Support.ROLLER),
        ],
        elements=[
            Element("e1", "A", "M", E=E, I=I, A=A, depth=h),
            Element("e2", "M", "B", E=E, I=I, A=A, depth=h),
        ],
        loads=[
            DistributedLoad("e1", w=0.0, w_end=4e3, a=1.0, b=4.0),
            PointLoad("e2", a=2.0, P=6e3),
            NodalMoment("M", C=2e3),
        ],
    )

    result = solve(model)

    # ========================================================================
    # PRINT RESULTS
    # ========================================================================
    print("Propped Cantilever - Mixed Loading")
    print("=" * 50)
    print(f"Method: {result.method} (degree of indeterminacy {result.degree})")
    print()
    print(result.reactions_table())
    print()

    df = result.to_frame(n_points=5)
    print(df.to_string(index=False, float_format=lambda v: f"{v:.4g}"))
    print()

    summary = result.summary()
    print(f"Max |M| = {summary['max_moment'] / 1e3:.2f} kNm in {summary['critical_element_M']}")
    print(f"Max |w| = {summary['max_deflection'] * 1e3:.3f} mm in {summary['critical_element_w']}")
    print(f"Strain energy = {result.total_strain_energy:.3f} J")
    for e in result.elements:
        if e.stress is not None:
            print(f"{e.element_id}: sigma_max = {abs(e.stress.max_normal[1]) / 1e6:.1f} MPa, "
                  f"SF = {e.stress.safety_factor:.2f}")


if __name__ == "__main__":
    main()
