import logging

from tabulate import tabulate

from beamkit import get_template, list_templates, solve


def main():
    """
    SOLVE EVERY TEMPLATE BEAM
    =========================
    Runs the whole catalog with default span and loads and prints one line
    per beam: how it was solved and the peak values engineers look at first.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rows = []
    for template in list_templates():
        result = solve(get_template(template.id))
        summary = result.summary()
        worst_sf = min(
            (e.stress.safety_factor for e in result.elements if e.stress and e.stress.safety_factor),
            default=None,
        )
        rows.append([
            template.id,
            result.method,
            result.degree,
            summary["max_moment"] / 1e3,
            summary["max_shear_force"] / 1e3,
            summary["max_deflection"] * 1e3,
            worst_sf,
        ])

    print("Template Beams (L = 6 m, P = 10 kN, w = 5 kN/m, steel 100x100 mm)")
    print("=" * 70)
    print(tabulate(
        rows,
        headers=["template", "method", "r", "|M| kNm", "|V| kN", "|w| mm", "SF"],
        floatfmt=".3g",
        missingval="-",
    ))


if __name__ == "__main__":
    main()
