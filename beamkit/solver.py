# beamkit/solver.py
"""
SOLVER PIPELINE
===============

    Model -> validate -> place loads -> classify -> reactions
          -> internal forces -> deflections -> Result

``solve`` is a pure function of its input: every call builds fresh working
arrays and returns a new Result, so it can be called repeatedly or from
several threads at once.

Failures raise a ``SolverError`` subclass. ``solve_or_error`` is the
boundary for callers that prefer errors as values (the editor shows
``error.kind`` and highlights ``error.nodes`` / ``error.elements``).
"""

import logging
from typing import Optional, Union

import numpy as np

from .config import CONFIG, SolverConfig
from .deflection import ElementDeflection, deflections
from .determinacy import Determinacy, classify
from .equilibrium import Reactions, equilibrium_residual, solve_determinate, solve_stiffness
from .errors import SingularError, SolverError
from .internal_forces import ElementForces, internal_forces
from .loads import LoadSet, place_loads
from .model import THETA, U, W, Model
from .results import ElementResult, Reaction, Result
from .stress import element_stress, strain_energy

logger = logging.getLogger(__name__)


def solve(model: Model, config: SolverConfig = CONFIG) -> Result:
    """
    Solve a beam model for reactions, internal forces and deflections.

    Raises:
        InvalidModelError: the model is malformed
        KinematicError: the structure (or a part of it) is a mechanism
        SingularError: a linear system is singular or results are not finite
        UnsupportedError: the model uses hinges or overlapping members
    """
    model.validate(config)
    loads = place_loads(model)
    det = classify(model, loads, config)
    logger.debug(
        "Solving %d node(s), %d element(s), %d load(s): r=%d, method=%s",
        len(model.nodes), len(model.elements), len(model.loads), det.degree, det.method,
    )

    displacements: Optional[np.ndarray] = None
    if det.degree == 0:
        reactions = solve_determinate(model, det, loads, config)
    else:
        reactions, displacements = solve_stiffness(model, det, loads, config)

    _check_closure(model, det, loads, reactions, config)

    forces = internal_forces(model, det, loads, reactions, config)
    per_element, nodal = deflections(model, det, forces, config, displacements)

    result = Result(
        determinacy=det,
        reactions=_reaction_records(model, det, reactions),
        elements=tuple(
            _element_result(model, forces[k], per_element[k], config)
            for k in range(len(model.elements))
        ),
        nodal_displacements={model.nodes[i].id: nodal[i] for i in sorted(nodal)},
    )
    if not result.is_finite():
        raise SingularError("Solution contains non-finite values.")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Reactions:\n%s", result.reactions_table())
    return result


def solve_or_error(model: Model, config: SolverConfig = CONFIG) -> Union[Result, SolverError]:
    """Like ``solve`` but returns the SolverError instead of raising it."""
    try:
        return solve(model, config)
    except SolverError as exc:
        logger.info("Solve failed (%s): %s", exc.kind, exc.message)
        return exc


def solve_state(state, config: SolverConfig = CONFIG) -> Result:
    """Solve the current contents of an editable SolverState."""
    return solve(state.to_model(), config)


def _check_closure(
    model: Model,
    det: Determinacy,
    loads: LoadSet,
    reactions: Reactions,
    config: SolverConfig,
) -> None:
    residual = equilibrium_residual(model, det, loads, reactions)
    applied = [abs(p.Fx) + abs(p.Fy) + abs(p.C) for p in loads.points]
    applied += [abs(d.resultant()) for d in loads.distributed]
    scale = max(applied + [1.0]) * max(model.span, 1.0)
    worst = float(np.max(np.abs(residual))) if residual.size else 0.0
    if worst > config.residual_tol * scale:
        logger.warning("Equilibrium residual %.3e exceeds tolerance", worst)
    else:
        logger.debug("Equilibrium residual %.3e", worst)


def _reaction_records(model: Model, det: Determinacy, reactions: Reactions):
    records = []
    for i in sorted(reactions):
        node = model.nodes[i]
        r = reactions[i]
        restrained = node.support.restrained
        records.append(Reaction(
            node=node.id,
            support=node.support,
            Rx=float(r[U]) if U in restrained else None,
            Ry=float(r[W]) if W in restrained else None,
            Mz=float(r[THETA]) if THETA in restrained else None,
        ))
    return tuple(records)


def _element_result(
    model: Model,
    forces: ElementForces,
    deflection: ElementDeflection,
    config: SolverConfig,
) -> ElementResult:
    sp = forces.span
    e = model.elements[sp.index]
    origin, direction = sp.x_start, sp.direction

    N, V, M, theta, w = (
        f.to_local(origin, direction)
        for f in (forces.N, forces.V, forces.M, deflection.theta, deflection.w)
    )
    return ElementResult(
        element_id=e.id,
        start=e.start,
        end=e.end,
        x_start=origin,
        direction=direction,
        length=sp.length,
        N=N,
        V=V,
        M=M,
        theta=theta,
        w=w,
        stress=element_stress(e, N, V, M, config.default_yield if e.fy is None else e.fy),
        strain_energy=strain_energy(e, N, M),
    )
