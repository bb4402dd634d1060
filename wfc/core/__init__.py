"""Core module for cell and board representation."""

from .cell import Cell, bit_for, popcount, MAX_STATES
from .board import Board, Pan
from .errors import (
    WFCError,
    Contradiction,
    SolverError,
    Exhausted,
    ReducerViolatesMonotonicity,
    NotCollapsed,
)

__all__ = [
    "Cell",
    "Board",
    "Pan",
    "bit_for",
    "popcount",
    "MAX_STATES",
    "WFCError",
    "Contradiction",
    "SolverError",
    "Exhausted",
    "ReducerViolatesMonotonicity",
    "NotCollapsed",
]
