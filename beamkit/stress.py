# beamkit/stress.py
"""Section stresses and strain energy from the internal-force diagrams."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .model import Element
from .piecewise import PiecewisePolynomial


@dataclass(frozen=True)
class ElementStress:
    """
    Stresses in a solid rectangular section of depth h.

    sigma_top / sigma_bottom are the extreme-fibre normal stresses
    N/A -/+ M*(h/2)/I (sagging M compresses the top fibre), tau_max the
    neutral-axis shear stress 1.5*V/A. Principal stresses are taken at the
    neutral axis where the von Mises stress there peaks.
    """
    sigma_axial: PiecewisePolynomial
    sigma_top: PiecewisePolynomial
    sigma_bottom: PiecewisePolynomial
    tau_max: PiecewisePolynomial
    max_normal: Tuple[float, float]     # (s, sigma) with the largest |sigma|
    max_shear: Tuple[float, float]      # (s, tau) with the largest |tau|
    principal: Tuple[float, float]      # (sigma_1, sigma_2) at the neutral axis
    max_von_mises: float
    safety_factor: Optional[float] = None


def element_stress(
    element: Element,
    N: PiecewisePolynomial,
    V: PiecewisePolynomial,
    M: PiecewisePolynomial,
    yield_strength: Optional[float] = None,
) -> Optional[ElementStress]:
    """Stresses of one element; None unless the element has both A and depth."""
    if element.A is None or element.depth is None:
        return None

    c = 0.5 * element.depth
    sigma_axial = N.scaled(1.0 / element.A)
    bending = M.scaled(c / element.I)
    sigma_top = sigma_axial - bending
    sigma_bottom = sigma_axial + bending
    tau = V.scaled(1.5 / element.A)

    top = sigma_top.max_abs()
    bottom = sigma_bottom.max_abs()
    max_normal = top if abs(top[1]) >= abs(bottom[1]) else bottom
    max_shear = tau.max_abs()

    # von Mises squared at the neutral axis is a polynomial: sigma^2 + 3 tau^2
    vm_na_sq = sigma_axial * sigma_axial + tau * tau * 3.0
    (_, _), (x_na, vm_sq) = vm_na_sq.extrema()
    sigma_na = sigma_axial(x_na)
    tau_na = tau(x_na)
    radius = math.hypot(0.5 * sigma_na, tau_na)
    principal = (0.5 * sigma_na + radius, 0.5 * sigma_na - radius)

    max_von_mises = max(abs(max_normal[1]), math.sqrt(max(vm_sq, 0.0)))
    safety = None
    if yield_strength is not None and max_von_mises > 0.0:
        safety = yield_strength / max_von_mises

    return ElementStress(
        sigma_axial=sigma_axial,
        sigma_top=sigma_top,
        sigma_bottom=sigma_bottom,
        tau_max=tau,
        max_normal=max_normal,
        max_shear=max_shear,
        principal=principal,
        max_von_mises=max_von_mises,
        safety_factor=safety,
    )


def strain_energy(
    element: Element,
    N: PiecewisePolynomial,
    M: PiecewisePolynomial,
) -> float:
    """
    U = integral of M^2 / (2 E I) + N^2 / (2 E A) along the element.

    The axial part is left out when the element has no area.
    """
    energy = (M * M).definite_integral() / (2.0 * element.E * element.I)
    if element.A is not None:
        energy += (N * N).definite_integral() / (2.0 * element.E * element.A)
    return energy
