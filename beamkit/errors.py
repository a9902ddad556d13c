# beamkit/errors.py
"""
Error taxonomy for the structural solver.

Every failure the solver can report is one of four kinds. The kind is
available as ``error.kind`` so a caller (the editor UI) can branch on it
without importing the classes, and ``error.nodes`` / ``error.elements``
name the parts of the model to highlight.
"""

from typing import Iterable, Tuple


class SolverError(Exception):
    """Base class for every error raised by beamkit."""

    kind = "SolverError"

    def __init__(self, message: str, nodes: Iterable = (), elements: Iterable = ()):
        super().__init__(message)
        self.message = message
        self.nodes: Tuple = tuple(nodes)
        self.elements: Tuple = tuple(elements)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidModelError(SolverError, ValueError):
    """Referential integrity or value error in the model (dangling ids, zero-length members, ...)."""

    kind = "InvalidModel"


class KinematicError(SolverError):
    """Structure (or part of it) is under-constrained: no unique equilibrium."""

    kind = "Kinematic"


class SingularError(SolverError, RuntimeError):
    """A linear system turned out singular or produced non-finite numbers."""

    kind = "Singular"


class UnsupportedError(SolverError):
    """The model uses a feature outside the solver's scope (hinges, overlapping members)."""

    kind = "Unsupported"
