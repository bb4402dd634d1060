"""Backtracking search over speculative collapses."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..core.board import Board
from ..core.cell import bit_for
from ..core.errors import Contradiction, ReducerViolatesMonotonicity
from .heuristic import CollapseHeuristic
from .propagator import AdjacencyFn, ReductionFn, propagate, verify_fixpoint
from .stats import SolverStats

logger = logging.getLogger(__name__)


class SolverStatus(Enum):
    """Lifecycle of a solve."""
    RUNNING = "running"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass
class DecisionRecord:
    """A decision together with the board as it was just before it."""
    index: int
    state: int
    snapshot: Board


class BacktrackingController:
    """
    Drives collapse -> propagate -> commit-or-backtrack to a terminal status.

    Every decision pushes a record holding the pre-decision board. When
    propagation after a decision hits a contradiction, the latest record is
    popped, its snapshot restored, and the failed state excluded at its
    index. If that exclusion (or the propagation following it) contradicts
    as well, the next record is popped, and so on. An empty history at that
    point means the problem has no solution.
    """

    def __init__(
        self,
        board: Board,
        adjacency_fn: AdjacencyFn,
        reduction_fn: ReductionFn,
        heuristic: CollapseHeuristic,
        reduction_limit: Optional[int] = None,
        verify: bool = False,
        stats: Optional[SolverStats] = None,
    ):
        self.board = board
        self.adjacency_fn = adjacency_fn
        self.reduction_fn = reduction_fn
        self.heuristic = heuristic
        self.reduction_limit = reduction_limit
        self.verify = verify
        self.stats = stats if stats is not None else SolverStats()

        self.history: List[DecisionRecord] = []
        self.status = SolverStatus.RUNNING
        self._settled = False

    def reset(self, board: Board) -> None:
        """Start over from ``board`` (e.g. after panning), keeping the random stream."""
        self.board = board
        self.history.clear()
        self.status = SolverStatus.RUNNING
        self._settled = False

    def run(self) -> SolverStatus:
        """Step until the status is terminal."""
        while self.status is SolverStatus.RUNNING:
            self.step()
        return self.status

    def step(self) -> SolverStatus:
        """
        Perform one outer iteration.

        The first call propagates over the whole board; every later call
        makes one decision and either commits it or backtracks.

        Raises:
            ReducerViolatesMonotonicity: Propagation detected a misbehaving
                reducer. The status becomes FAILED.
        """
        if self.status is not SolverStatus.RUNNING:
            return self.status

        try:
            if not self._settled:
                self._initial_sweep()
            else:
                self._decide()
        except ReducerViolatesMonotonicity:
            self._finish(SolverStatus.FAILED)
            raise

        return self.status

    def _initial_sweep(self) -> None:
        try:
            self._propagate(self.board, range(len(self.board)))
        except Contradiction as exc:
            logger.debug("Initial state is inconsistent at cell %d", exc.index)
            self._finish(SolverStatus.EXHAUSTED)
            return
        self._settled = True

    def _decide(self) -> None:
        if self.board.has_contradiction():
            raise ReducerViolatesMonotonicity(
                f"Cells {self.board.contradictions()} are empty after a completed propagation"
            )

        decision = self.heuristic.select(self.board)
        if decision is None:
            self._finish(SolverStatus.SOLVED)
            return

        self.history.append(DecisionRecord(decision.index, decision.state, self.board))
        self.stats.decisions += 1
        self.stats.max_depth = max(self.stats.max_depth, len(self.history))
        logger.debug(
            "Decision %d: cell %d -> state %d (depth %d)",
            self.stats.decisions, decision.index, decision.state, len(self.history),
        )

        working = self.board.copy()
        working.collapse(decision.index, decision.state)
        try:
            self._propagate(working, [decision.index])
        except Contradiction as exc:
            logger.debug("Contradiction at cell %d, backtracking", exc.index)
            self._backtrack()
            return

        self.board = working

    def _backtrack(self) -> None:
        """Undo decisions until one can be excluded without a contradiction."""
        while self.history:
            record = self.history.pop()
            self.stats.backtracks += 1

            board = record.snapshot
            board.exclude(record.index, bit_for(record.state))
            logger.debug(
                "Backtrack %d: excluding state %d at cell %d",
                self.stats.backtracks, record.state, record.index,
            )
            try:
                self._propagate(board, [record.index])
            except Contradiction:
                continue

            self.board = board
            return

        self._finish(SolverStatus.EXHAUSTED)

    def _propagate(self, board: Board, dirty) -> None:
        propagate(
            board,
            dirty,
            self.adjacency_fn,
            self.reduction_fn,
            reduction_limit=self.reduction_limit,
            stats=self.stats,
        )
        if self.verify:
            verify_fixpoint(board, self.adjacency_fn, self.reduction_fn)

    def _finish(self, status: SolverStatus) -> None:
        self.status = status
        self.stats.status = status.value
        self.stats.solved = status is SolverStatus.SOLVED
        self.history.clear()
        logger.debug(
            "Finished with status %s after %d decisions and %d backtracks",
            status.value, self.stats.decisions, self.stats.backtracks,
        )
