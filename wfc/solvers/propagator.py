"""Worklist propagation of reduction rules to a fixpoint."""

from __future__ import annotations
import collections
import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..core.board import Board
from ..core.cell import Cell
from ..core.errors import Contradiction, ReducerViolatesMonotonicity
from .stats import SolverStats

logger = logging.getLogger(__name__)

# index -> neighbour indices
AdjacencyFn = Callable[[int], Sequence[int]]
# (index, [(neighbour index, neighbour cell), ...]) -> mask of forbidden states
ReductionFn = Callable[[int, List[Tuple[int, Cell]]], int]


def default_reduction_limit(board: Board, initial: int) -> int:
    """
    Upper bound on reduction calls for one propagation pass.

    Every enqueue after the initial worklist follows a change, a change
    clears at least one bit, and a change enqueues each index at most once.
    """
    n = len(board)
    return initial + n * board.num_states * n


def _reduce(
    board: Board,
    index: int,
    neighbors: Sequence[int],
    reduction_fn: ReductionFn,
) -> int:
    cells = [(j, board[j]) for j in neighbors]
    forbidden = reduction_fn(index, cells)
    if not isinstance(forbidden, (int, np.integer)):
        raise TypeError(
            f"Reduction for cell {index} returned {type(forbidden).__name__}, expected an int mask"
        )
    return int(forbidden)


def propagate(
    board: Board,
    dirty: Iterable[int],
    adjacency_fn: AdjacencyFn,
    reduction_fn: ReductionFn,
    reduction_limit: Optional[int] = None,
    stats: Optional[SolverStats] = None,
) -> int:
    """
    Narrow cells until no reduction changes anything.

    The worklist starts with the dirty indices followed by their
    neighbours. Each popped index is re-reduced against its neighbours'
    current cells; when that narrows the cell, its neighbours are queued
    again (unless already queued).

    Args:
        board: Board to narrow in place.
        dirty: Indices whose candidates just changed.
        adjacency_fn: Index -> neighbour indices.
        reduction_fn: (index, neighbour cells) -> forbidden state mask.
        reduction_limit: Maximum reduction calls before the reducer is
                         declared misbehaving. Defaults to the bound
                         implied by monotone narrowing.
        stats: Optional stats record to update.

    Returns:
        Number of reduction calls made.

    Raises:
        Contradiction: A cell lost its last candidate. The board is left
                       as it was at that point.
        ReducerViolatesMonotonicity: The reduction limit was exceeded.
    """
    queue: collections.deque = collections.deque()
    queued = set()

    def enqueue(i: int) -> None:
        if i not in queued:
            queued.add(i)
            queue.append(i)

    for i in list(dirty):
        enqueue(i)
        for j in adjacency_fn(i):
            enqueue(j)

    if reduction_limit is None:
        reduction_limit = default_reduction_limit(board, len(queue))

    reductions = 0
    try:
        while queue:
            i = queue.popleft()
            queued.discard(i)

            reductions += 1
            if reductions > reduction_limit:
                raise ReducerViolatesMonotonicity(
                    f"Propagation did not reach a fixpoint within {reduction_limit} reductions"
                )

            neighbors = adjacency_fn(i)
            forbidden = _reduce(board, i, neighbors, reduction_fn)
            changed = board.exclude(i, forbidden)
            if board.mask(i) == 0:
                logger.debug("Contradiction at cell %d after %d reductions", i, reductions)
                raise Contradiction(i)
            if not changed:
                continue

            for j in neighbors:
                enqueue(j)
    finally:
        if stats is not None:
            stats.propagations += 1
            stats.reductions += reductions

    return reductions


def verify_fixpoint(board: Board, adjacency_fn: AdjacencyFn, reduction_fn: ReductionFn) -> None:
    """
    Re-reduce every cell of a settled board.

    Raises:
        ReducerViolatesMonotonicity: Some reduction would still narrow a
            cell, so the reducer gave different answers for the same inputs.
    """
    for i in range(len(board)):
        forbidden = _reduce(board, i, adjacency_fn(i), reduction_fn)
        if board.mask(i) & forbidden:
            raise ReducerViolatesMonotonicity(
                f"Reduction at cell {i} narrows a board that already reached its fixpoint"
            )
