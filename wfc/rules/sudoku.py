"""Sudoku expressed as adjacency and reduction rules."""

from __future__ import annotations
from typing import List, Tuple

import numpy as np

from ..core.board import Board
from ..core.cell import Cell


class SudokuRules:
    """
    Rules for an N x N Sudoku with sqrt(N) x sqrt(N) boxes.

    Cells are numbered row-major. State ``k`` stands for the digit ``k + 1``.
    A cell's neighbours are its peers (same row, column or box), and a
    cell may not hold any digit already fixed in one of its peers.
    """

    def __init__(self, size: int = 9):
        """
        Initialize the rules.

        Args:
            size: Board size (4, 9, 16 or 25). Must be a perfect square.
        """
        if size < 1:
            raise ValueError(f"Size must be positive, got {size}")
        box_size = int(np.sqrt(size))
        if box_size * box_size != size:
            raise ValueError(f"Size must be a perfect square, got {size}")
        if size > 25:
            raise ValueError(f"Size must be at most 25, got {size}")

        self.size = size
        self.box_size = box_size
        self.num_cells = size * size
        self._peers = [self._compute_peers(i) for i in range(self.num_cells)]

    def _compute_peers(self, index: int) -> List[int]:
        row, col = divmod(index, self.size)
        peers = set()
        # Row and Col peers
        for i in range(self.size):
            peers.add(row * self.size + i)
            peers.add(i * self.size + col)

        # Box peers
        box_row = (row // self.box_size) * self.box_size
        box_col = (col // self.box_size) * self.box_size
        for i in range(self.box_size):
            for j in range(self.box_size):
                peers.add((box_row + i) * self.size + box_col + j)

        peers.remove(index)
        return sorted(peers)

    def neighbors(self, index: int) -> List[int]:
        """Peers of a cell: same row, column or box, excluding itself."""
        return self._peers[index]

    def reduce(self, index: int, neighbors: List[Tuple[int, Cell]]) -> int:
        """Forbid every digit already fixed in a peer."""
        forbidden = 0
        for _, cell in neighbors:
            if cell.is_collapsed():
                forbidden |= cell.mask
        return forbidden

    def empty_board(self) -> Board:
        return Board.full(self.num_cells, self.size)

    def parse(self, s: str) -> Board:
        """
        Create a board from a string representation.

        Args:
            s: String of length size*size with values.
               0 or . for empty, 1-9 for values, A-P for 10-25.
               Whitespace is ignored.
        """
        s = "".join(s.split())
        if len(s) != self.num_cells:
            raise ValueError(f"String length must be {self.num_cells}, got {len(s)}")

        cells = []
        for idx, c in enumerate(s):
            if c == '0' or c == '.':
                cells.append(Cell.full(self.size))
                continue
            if c.isdigit():
                value = int(c)
            elif c.isalpha():
                value = ord(c.upper()) - ord('A') + 10
            else:
                raise ValueError(f"Character {c!r} at position {idx} is invalid")
            if value < 1 or value > self.size:
                raise ValueError(f"Value must be 1-{self.size}, got {c!r} at position {idx}")
            cells.append(Cell.only(value - 1, self.size))

        return Board.from_cells(cells)

    def grid(self, board: Board) -> np.ndarray:
        """Digits as a size x size array, 0 where a cell is undecided."""
        values = [0 if v is None else v + 1 for v in board.values()]
        return np.array(values, dtype=np.int32).reshape(self.size, self.size)

    def to_string(self, board: Board) -> str:
        """
        Convert board to a compact string representation.
        Uses 0 for undecided cells, 1-9 for standard, A-P beyond 9.
        """
        chars = []
        for val in self.grid(board).flatten():
            if val == 0:
                chars.append('0')
            elif val <= 9:
                chars.append(str(val))
            else:
                chars.append(chr(ord('A') + val - 10))
        return ''.join(chars)

    def format(self, board: Board) -> str:
        """Pretty-print the board."""
        grid = self.grid(board)
        lines = []
        horizontal_sep = '+' + (('-' * (self.box_size * 2 + 1)) + '+') * self.box_size

        for i in range(self.size):
            if i % self.box_size == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = grid[i, j]
                if val == 0:
                    row_str += ' .'
                elif val <= 9:
                    row_str += f' {val}'
                else:
                    row_str += f' {chr(ord("A") + val - 10)}'

                if (j + 1) % self.box_size == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def is_valid(self, board: Board) -> bool:
        """
        Check that no decided digit repeats in a row, column or box.
        Does not check that the board is complete.
        """
        grid = self.grid(board)

        units = [grid[i, :] for i in range(self.size)]
        units += [grid[:, j] for j in range(self.size)]
        for box_row in range(0, self.size, self.box_size):
            for box_col in range(0, self.size, self.box_size):
                units.append(grid[box_row:box_row + self.box_size,
                                  box_col:box_col + self.box_size].flatten())

        for unit in units:
            non_zero = unit[unit != 0]
            if len(non_zero) != len(set(non_zero)):
                return False
        return True

    def is_solved(self, board: Board) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return board.is_solved() and self.is_valid(board)
