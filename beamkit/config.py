# beamkit/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Tolerances and defaults shared by every solver stage."""

    # Relative tolerance (times the model's span) for coincident positions
    position_tol: float = 1e-9

    # Max condition number accepted for any dense solve
    cond_limit: float = 1e12

    # Relative tolerance for equilibrium closure and over-determined systems
    residual_tol: float = 1e-6

    # Default samples per element when tabulating diagrams
    n_points: int = 21

    # Default material / section for templates (steel, 100x100 mm solid)
    default_E: float = 200e9        # Pa
    default_I: float = 8.333e-6     # m^4
    default_A: float = 0.01         # m^2
    default_depth: float = 0.1      # m
    default_yield: float = 250e6    # Pa


# Global config instance
CONFIG = SolverConfig()
