"""Constraint solving by wave function collapse with backtracking."""

from .core import Board, Cell, Pan, Exhausted, ReducerViolatesMonotonicity, NotCollapsed
from .solvers import Solver, SolverBuilder, SolverConfig, SolverStatus

__version__ = "1.0.0"

__all__ = [
    "Board",
    "Cell",
    "Pan",
    "Exhausted",
    "ReducerViolatesMonotonicity",
    "NotCollapsed",
    "Solver",
    "SolverBuilder",
    "SolverConfig",
    "SolverStatus",
]
