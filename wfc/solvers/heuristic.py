"""Minimum-entropy cell selection with randomized tie-breaking."""

from __future__ import annotations
import random
from typing import NamedTuple, Optional, Sequence

import numpy as np

from ..core.board import Board


class Decision(NamedTuple):
    """A speculative choice: collapse ``index`` to ``state``."""
    index: int
    state: int


class CollapseHeuristic:
    """
    Picks the next cell to collapse and the state to collapse it to.

    Cell selection uses the Minimum Remaining Values rule: among the
    uncollapsed cells, the ones with the fewest candidates are tied and one
    is drawn uniformly. The state is then drawn uniformly from that cell's
    candidates, or by weight if per-state weights were given.

    Both draws come from one random stream, tie-break first, so a fixed
    seed reproduces the same sequence of decisions.
    """

    def __init__(self, rng: random.Random, weights: Optional[Sequence[float]] = None):
        """
        Initialize the heuristic.

        Args:
            rng: Source of randomness shared with the rest of the solve.
            weights: Optional relative weight per state index.
        """
        if weights is not None and any(w < 0 for w in weights):
            raise ValueError("State weights must be non-negative")
        self.rng = rng
        self.weights = list(weights) if weights is not None else None

    def select(self, board: Board) -> Optional[Decision]:
        """
        Choose the next decision.

        Returns:
            The decision, or None if every cell is already collapsed.
        """
        entropies = board.entropies()
        if np.any(entropies == 0):
            raise ValueError("Cannot select a cell on a board with a contradiction")

        open_cells = np.flatnonzero(entropies > 1)
        if len(open_cells) == 0:
            return None

        lowest = entropies[open_cells].min()
        tied = [int(i) for i in open_cells[entropies[open_cells] == lowest]]
        index = self.rng.choice(tied)

        return Decision(index, self._pick_state(board[index].states()))

    def _pick_state(self, states: Sequence[int]) -> int:
        if self.weights is not None:
            if len(self.weights) <= max(states):
                raise ValueError(
                    f"Got {len(self.weights)} weights, state {max(states)} needs one"
                )
            weights = [self.weights[s] for s in states]
            if sum(weights) > 0:
                return self.rng.choices(states, weights=weights)[0]
        return self.rng.choice(states)
