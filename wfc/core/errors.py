"""Exception types raised by the solver engine."""

from __future__ import annotations


class WFCError(Exception):
    """Base class for all solver errors."""


class Contradiction(WFCError):
    """
    A cell ran out of candidate states during propagation.

    Raised by the propagator and always handled by the backtracking
    controller; it never escapes ``Solver.solve``.
    """

    def __init__(self, index: int):
        super().__init__(f"Cell {index} has no remaining candidate states")
        self.index = index


class SolverError(WFCError):
    """Terminal failure surfaced to the caller of ``Solver.solve``."""


class Exhausted(SolverError):
    """Backtracking history emptied without finding a consistent assignment."""

    def __init__(self, message: str = "No consistent assignment exists for the given state and rules"):
        super().__init__(message)


class ReducerViolatesMonotonicity(SolverError):
    """The supplied reduction function misbehaved (non-monotonic or inconsistent)."""


class NotCollapsed(WFCError, ValueError):
    """A single state was requested from a cell that still has several candidates."""

    def __init__(self, entropy: int):
        super().__init__(f"Cell is not collapsed (entropy {entropy})")
        self.entropy = entropy
