# beamkit/kernel - Linear algebra core shared by the solver stages
"""
KERNEL: DOF INDEXING, ASSEMBLY AND DENSE SOLVES
===============================================

The stiffness path and the deflection-constant system both end in small
dense linear systems. This package holds the plumbing they share:

- a mapping (node index, local dof) -> global dof index
- scatter-add assembly of element matrices and vectors
- LU solves with singularity detection, and least squares for
  over-determined but consistent systems
"""

from .dof import DOFManager, DOF_BEAM
from .solve import solve_dense, solve_linear, solve_least_squares

__all__ = ['DOFManager', 'DOF_BEAM', 'solve_dense', 'solve_linear', 'solve_least_squares']
