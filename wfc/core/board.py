"""Board representation: a fixed-length, index-addressed sequence of cells."""

from __future__ import annotations
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence

import numpy as np

from .cell import Cell, MAX_STATES, popcount


class Pan(Enum):
    """Direction in which to move the view over a row-major 2D board."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class Board:
    """
    An ordered collection of cells sharing one state count.

    Cell masks live in a ``numpy.uint64`` array so copies (snapshots for
    backtracking) are a single array copy. Reading ``board[i]`` returns an
    immutable ``Cell``; writing goes through ``board[i] = cell``,
    ``exclude`` or ``collapse``.
    """

    def __init__(self, num_states: int, masks: Iterable[int]):
        """
        Initialize a board.

        Args:
            num_states: Number of states per cell (1-64).
            masks: One candidate bitset per cell. Bits at or above
                   ``num_states`` are dropped.
        """
        if num_states < 1 or num_states > MAX_STATES:
            raise ValueError(f"Number of states must be 1-{MAX_STATES}, got {num_states}")

        self.num_states = num_states
        self.full_mask = (1 << num_states) - 1
        self.grid = np.array(
            [int(m) & self.full_mask for m in masks], dtype=np.uint64
        )

    @classmethod
    def full(cls, length: int, num_states: int) -> Board:
        """A board where every cell is fully open."""
        if length < 0:
            raise ValueError(f"Length must be non-negative, got {length}")
        return cls(num_states, [(1 << num_states) - 1] * length)

    @classmethod
    def from_cells(cls, cells: Sequence[Cell]) -> Board:
        """Build a board from cells that share a state count."""
        if not cells:
            raise ValueError("Cannot infer the state count of an empty cell list")
        num_states = cells[0].num_states
        for i, cell in enumerate(cells):
            if cell.num_states != num_states:
                raise ValueError(
                    f"Cell {i} has {cell.num_states} states, expected {num_states}"
                )
        return cls(num_states, (cell.mask for cell in cells))

    def copy(self) -> Board:
        """Create an independent copy of the board."""
        new_board = Board(self.num_states, ())
        new_board.grid = self.grid.copy()
        return new_board

    def mask(self, index: int) -> int:
        """Raw candidate bitset at ``index``."""
        return int(self.grid[index])

    def exclude(self, index: int, mask: int) -> bool:
        """
        Remove the states in ``mask`` from the cell at ``index``.

        Returns:
            True if any candidate was removed.
        """
        current = int(self.grid[index])
        narrowed = current & ~int(mask)
        if narrowed == current:
            return False
        self.grid[index] = narrowed
        return True

    def collapse(self, index: int, state: int) -> None:
        """Narrow the cell at ``index`` to exactly ``state``."""
        self[index] = Cell.only(state, self.num_states)

    def entropy(self, index: int) -> int:
        return popcount(int(self.grid[index]))

    def entropies(self) -> np.ndarray:
        """Number of candidate states for every cell."""
        if len(self.grid) == 0:
            return np.zeros(0, dtype=np.int64)
        bits = np.unpackbits(np.ascontiguousarray(self.grid).view(np.uint8))
        return bits.reshape(len(self.grid), 64).sum(axis=1, dtype=np.int64)

    def uncollapsed(self) -> List[int]:
        """Indices of cells with more than one candidate, ascending."""
        return [int(i) for i in np.flatnonzero(self.entropies() > 1)]

    def contradictions(self) -> List[int]:
        """Indices of cells with no candidates left, ascending."""
        return [int(i) for i in np.flatnonzero(self.grid == 0)]

    def has_contradiction(self) -> bool:
        return bool(np.any(self.grid == 0))

    def is_solved(self) -> bool:
        """Check if every cell holds exactly one state."""
        return bool(np.all(self.entropies() == 1))

    def values(self) -> List[Optional[int]]:
        """Collapsed state of each cell, or None where undecided."""
        return [cell.value for cell in self]

    def pan(self, direction: Pan, distance: int, row_len: int) -> None:
        """
        Shift a row-major 2D board by ``distance`` cells.

        The view moves in ``direction``: panning DOWN drops the top rows,
        moves the rest up and opens fresh rows at the bottom. Vacated
        cells are reset to fully open.

        Args:
            direction: Where the view moves.
            distance: Number of rows or columns to move.
            row_len: Width of one row; must divide the board length.
        """
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")
        if row_len <= 0 or len(self) % row_len != 0:
            raise ValueError(f"Row length {row_len} does not divide board length {len(self)}")

        rows = len(self) // row_len
        old = self.grid.reshape(rows, row_len)
        new = np.full_like(old, self.full_mask)

        if direction is Pan.DOWN and distance < rows:
            new[:rows - distance] = old[distance:]
        elif direction is Pan.UP and distance < rows:
            new[distance:] = old[:rows - distance]
        elif direction is Pan.RIGHT and distance < row_len:
            new[:, :row_len - distance] = old[:, distance:]
        elif direction is Pan.LEFT and distance < row_len:
            new[:, distance:] = old[:, :row_len - distance]

        self.grid = new.reshape(-1)

    def __len__(self) -> int:
        return len(self.grid)

    def __getitem__(self, index: int) -> Cell:
        return Cell(int(self.grid[index]), self.num_states)

    def __setitem__(self, index: int, cell: Cell) -> None:
        if cell.num_states != self.num_states:
            raise ValueError(
                f"Cell has {cell.num_states} states, board expects {self.num_states}"
            )
        self.grid[index] = cell.mask

    def __iter__(self) -> Iterator[Cell]:
        for mask in self.grid:
            yield Cell(int(mask), self.num_states)

    def __repr__(self) -> str:
        solved = int(np.sum(self.entropies() == 1))
        return f"Board(cells={len(self)}, states={self.num_states}, collapsed={solved})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return False
        return self.num_states == other.num_states and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash((self.num_states, self.grid.tobytes()))
