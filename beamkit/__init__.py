# beamkit - Static analysis of straight 2D beams
"""
BEAMKIT: Reactions, Internal Forces and Deflections of 2D Beams
===============================================================

This package provides:
- an immutable beam model (nodes on one axis, elements, supports, loads)
- static determinacy classification
- reactions by direct equilibrium (determinate) or the stiffness method
  (indeterminate)
- N(x), V(x), M(x), theta(x), w(x) as exact piecewise polynomials
- section stresses and strain energy
- a catalog of template beams and an editable SolverState

ARCHITECTURE:
-------------
    kernel/             DOF indexing, assembly, dense solves
    model.py            Node, Element, Support, loads, Model (validation)
    elements.py         Element spans, stiffness matrix, shape functions
    loads.py            Load placement, resultants, consistent nodal loads
    determinacy.py      Connected components and degree of indeterminacy
    equilibrium.py      Reactions (equilibrium or stiffness method)
    internal_forces.py  Method of sections
    deflection.py       Double integration of M/EI
    stress.py           Stresses and strain energy
    results.py          Result bundle
    solver.py           solve(), solve_or_error(), solve_state()
    templates.py        Template catalog
    state.py            Editable SolverState

USAGE:
------
    from beamkit import Model, Node, Element, PointLoad, Support, solve

    model = Model(
        nodes=[Node("A", 0.0, Support.PIN), Node("B", 6.0, Support.ROLLER)],
        elements=[Element("e1", "A", "B", E=200e9, I=8.333e-6)],
        loads=[PointLoad("e1", a=3.0, P=10e3)],
    )
    result = solve(model)
    result.reaction("A").Ry         # 5000.0
    result.element("e1").M(3.0)     # 15000.0
"""

import logging

from .config import CONFIG, SolverConfig
from .determinacy import Determinacy, DeterminacyKind, classify
from .errors import (InvalidModelError, KinematicError, SingularError,
                     SolverError, UnsupportedError)
from .model import (DistributedLoad, Element, Model, NodalForce, NodalMoment,
                    Node, PointLoad, PointMoment, Support)
from .piecewise import PiecewisePolynomial
from .results import ElementResult, Reaction, Result
from .solver import solve, solve_or_error, solve_state
from .state import SolverState
from .stress import ElementStress
from .templates import TEMPLATES, get_template, list_templates

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'CONFIG', 'SolverConfig',
    'Determinacy', 'DeterminacyKind', 'classify',
    'SolverError', 'InvalidModelError', 'KinematicError', 'SingularError', 'UnsupportedError',
    'Node', 'Element', 'Support', 'Model',
    'NodalForce', 'NodalMoment', 'PointLoad', 'PointMoment', 'DistributedLoad',
    'PiecewisePolynomial',
    'Reaction', 'ElementResult', 'Result', 'ElementStress',
    'solve', 'solve_or_error', 'solve_state',
    'SolverState',
    'TEMPLATES', 'get_template', 'list_templates',
]
