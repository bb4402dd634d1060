"""Solver construction and the public solve entry point."""

from __future__ import annotations
import logging
import random
import time
import tracemalloc
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.board import Board, Pan
from ..core.errors import Exhausted, ReducerViolatesMonotonicity
from .backtracking import BacktrackingController, SolverStatus
from .heuristic import CollapseHeuristic
from .propagator import AdjacencyFn, ReductionFn
from .stats import SolverStats

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Everything a solver needs: the rules, the starting board and search options."""
    adjacency_fn: AdjacencyFn
    reduction_fn: ReductionFn
    initial_state: Board
    seed: Optional[int] = None
    weights: Optional[Sequence[float]] = None
    verify_fixpoint: bool = False
    reduction_limit: Optional[int] = None
    track_memory: bool = False


class Solver:
    """
    Wave function collapse solver with backtracking.

    Repeatedly collapses the lowest-entropy cell to a random candidate,
    propagates the consequences through the reduction rule, and backtracks
    on contradictions until the board is fully collapsed or proven
    unsolvable.

    Example:
        solver = (
            SolverBuilder(rules.neighbors, rules.reduce)
            .state(rules.parse(puzzle))
            .seed(5)
            .build()
        )
        board = solver.solve()
    """

    def __init__(self, config: SolverConfig):
        if len(config.initial_state) == 0:
            raise ValueError("Board must contain at least one cell")

        self.config = config
        self.rng = random.Random(config.seed)
        self.stats = SolverStats()
        self.controller = BacktrackingController(
            config.initial_state.copy(),
            config.adjacency_fn,
            config.reduction_fn,
            CollapseHeuristic(self.rng, config.weights),
            reduction_limit=config.reduction_limit,
            verify=config.verify_fixpoint,
            stats=self.stats,
        )
        self._failure: Optional[ReducerViolatesMonotonicity] = None

    @property
    def state(self) -> Board:
        """The live board."""
        return self.controller.board

    @property
    def status(self) -> SolverStatus:
        return self.controller.status

    def solve(self) -> Board:
        """
        Run the search to completion.

        Returns:
            A copy of the fully collapsed board.

        Raises:
            Exhausted: No assignment satisfies the rules.
            ReducerViolatesMonotonicity: The reduction function misbehaved.
        """
        if self._failure is not None:
            raise self._failure

        self.stats = SolverStats()
        self.controller.stats = self.stats

        if self.config.track_memory:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            status = self.controller.run()
        except ReducerViolatesMonotonicity as exc:
            self._failure = exc
            raise
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.config.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        logger.info(
            "Solve finished: %s, %d decisions, %d backtracks in %.4fs",
            status.value, self.stats.decisions, self.stats.backtracks, self.stats.time_seconds,
        )

        if status is SolverStatus.EXHAUSTED:
            raise Exhausted()
        return self.controller.board.copy()

    def pan(self, direction: Pan, distance: int, row_len: int) -> None:
        """
        Shift the live board and make it solvable again.

        Cells scrolled into view start fully open; the cells that remain
        keep their values and constrain the new ones on the next ``solve``.
        """
        board = self.controller.board.copy()
        board.pan(direction, distance, row_len)
        self.controller.reset(board)
        self._failure = None


class SolverBuilder:
    """Fluent construction of a ``Solver``."""

    def __init__(self, adjacency_fn: AdjacencyFn, reduction_fn: ReductionFn):
        self._adjacency_fn = adjacency_fn
        self._reduction_fn = reduction_fn
        self._state: Optional[Board] = None
        self._seed: Optional[int] = None
        self._weights: Optional[Sequence[float]] = None
        self._verify_fixpoint = False
        self._reduction_limit: Optional[int] = None
        self._track_memory = False

    def state(self, board: Board) -> SolverBuilder:
        self._state = board
        return self

    def seed(self, seed: int) -> SolverBuilder:
        self._seed = seed
        return self

    def weights(self, weights: Sequence[float]) -> SolverBuilder:
        self._weights = weights
        return self

    def verify_fixpoint(self, enabled: bool = True) -> SolverBuilder:
        self._verify_fixpoint = enabled
        return self

    def reduction_limit(self, limit: int) -> SolverBuilder:
        self._reduction_limit = limit
        return self

    def track_memory(self, enabled: bool = True) -> SolverBuilder:
        self._track_memory = enabled
        return self

    def config(self) -> SolverConfig:
        """The configuration the builder has collected so far."""
        if self._state is None:
            raise ValueError("An initial state is required; call .state(board) first")
        return SolverConfig(
            adjacency_fn=self._adjacency_fn,
            reduction_fn=self._reduction_fn,
            initial_state=self._state,
            seed=self._seed,
            weights=self._weights,
            verify_fixpoint=self._verify_fixpoint,
            reduction_limit=self._reduction_limit,
            track_memory=self._track_memory,
        )

    def build(self) -> Solver:
        return Solver(self.config())
