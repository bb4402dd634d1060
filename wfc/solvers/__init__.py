"""Solver engine: propagation, collapse heuristic and backtracking search."""

from .stats import SolverStats
from .propagator import AdjacencyFn, ReductionFn, propagate, verify_fixpoint
from .heuristic import CollapseHeuristic, Decision
from .backtracking import BacktrackingController, DecisionRecord, SolverStatus
from .solver import Solver, SolverBuilder, SolverConfig

__all__ = [
    "SolverStats",
    "AdjacencyFn",
    "ReductionFn",
    "propagate",
    "verify_fixpoint",
    "CollapseHeuristic",
    "Decision",
    "BacktrackingController",
    "DecisionRecord",
    "SolverStatus",
    "Solver",
    "SolverBuilder",
    "SolverConfig",
]
