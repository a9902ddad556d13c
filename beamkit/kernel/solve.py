# beamkit/kernel/solve.py
"""Dense linear solves with boundary conditions and singularity detection."""

import logging

import numpy as np
import scipy.linalg

from ..errors import SingularError

logger = logging.getLogger(__name__)


def _check_conditioning(A: np.ndarray, cond_limit: float, what: str) -> float:
    if not np.all(np.isfinite(A)):
        raise SingularError(f"Non-finite entries in {what} matrix.")
    cond = np.linalg.cond(A)
    if not np.isfinite(cond) or cond > cond_limit:
        raise SingularError(
            f"Singular or ill-conditioned {what} (cond={cond:.2e}, limit {cond_limit:.0e})."
        )
    return cond


def solve_dense(
    A: np.ndarray,
    b: np.ndarray,
    cond_limit: float = 1e12,
    what: str = "system",
) -> np.ndarray:
    """
    Solve the square system A·x = b by LU with partial pivoting.

    Raises:
        SingularError: if A is singular, ill-conditioned or the result is
        not finite
    """
    n = A.shape[0]
    if A.shape != (n, n):
        raise SingularError(f"{what} matrix is not square: {A.shape}.")
    if n == 0:
        return np.zeros(0, dtype=float)

    cond = _check_conditioning(A, cond_limit, what)
    lu, piv = scipy.linalg.lu_factor(A)
    x = scipy.linalg.lu_solve((lu, piv), b)
    if not np.all(np.isfinite(x)):
        raise SingularError(f"{what} solution is not finite.")
    logger.debug("Solved %s: n=%d, cond=%.2e", what, n, cond)
    return x


def solve_linear(
    K: np.ndarray,
    F: np.ndarray,
    fixed_dofs: list[int],
    cond_limit: float = 1e12
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve K·d = F with fixed boundary conditions via partitioning.

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,)
        fixed_dofs: Restrained DOF indices (displacement = 0)
        cond_limit: Max condition number of the free block

    Returns:
        d: Displacement vector (ndof,)
        R: Reaction vector (ndof,), R = K·d - F, non-zero only at fixed DOFs
        free: Array of free DOF indices

    Raises:
        SingularError: if the free block is singular (a mechanism)
    """
    ndof = K.shape[0]

    fixed = set(fixed_dofs)
    free = np.array([i for i in range(ndof) if i not in fixed], dtype=int)

    Kff = K[np.ix_(free, free)]
    Ff = F[free]

    df = solve_dense(Kff, Ff, cond_limit, what="stiffness system")

    d = np.zeros(ndof, dtype=float)
    d[free] = df

    R = K @ d - F
    R[free] = 0.0
    return d, R, free


def solve_least_squares(
    A: np.ndarray,
    b: np.ndarray,
    cond_limit: float = 1e12,
    residual_tol: float = 1e-6,
    what: str = "system",
    scale: float = 0.0,
) -> np.ndarray:
    """
    Solve an over-determined but consistent system A·x = b.

    Square systems go through ``solve_dense``. Taller systems are solved in
    the least-squares sense and must have full column rank and a residual
    within ``residual_tol`` relative to the size of b and A·x, or to
    ``scale`` when b itself is only round-off.

    Raises:
        SingularError: rank deficiency or an inconsistent system
    """
    m, n = A.shape
    if m == n:
        return solve_dense(A, b, cond_limit, what)
    if m < n:
        raise SingularError(f"{what} is under-determined ({m} equations, {n} unknowns).")
    if n == 0:
        return np.zeros(0, dtype=float)

    _check_conditioning(A, cond_limit, what)
    x, _, rank, _ = scipy.linalg.lstsq(A, b)
    if rank < n:
        raise SingularError(f"{what} is rank deficient (rank {rank} < {n}).")

    residual = A @ x - b
    scale = max(scale, np.max(np.abs(b)), np.max(np.abs(A) * np.abs(x)), np.finfo(float).tiny)
    worst = np.max(np.abs(residual)) / scale
    if not np.isfinite(worst) or worst > residual_tol:
        raise SingularError(f"{what} is inconsistent (relative residual {worst:.2e}).")
    logger.debug("Solved %s by least squares: %dx%d, residual %.2e", what, m, n, worst)
    return x
