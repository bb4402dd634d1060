"""Proper colouring of a ring of cells."""

from __future__ import annotations
from typing import List, Tuple

from ..core.board import Board
from ..core.cell import Cell


class RingColoring:
    """
    Colour ``length`` cells arranged in a ring so that adjacent cells differ.

    An even ring is 2-colourable; an odd ring needs at least 3 colours, so
    an odd ring with 2 colours has no solution.
    """

    def __init__(self, length: int, colors: int):
        if length < 2:
            raise ValueError(f"Ring needs at least 2 cells, got {length}")
        self.length = length
        self.colors = colors

    def neighbors(self, index: int) -> List[int]:
        left = (index - 1) % self.length
        right = (index + 1) % self.length
        return [left] if left == right else [left, right]

    def reduce(self, index: int, neighbors: List[Tuple[int, Cell]]) -> int:
        """Forbid the colour of every collapsed neighbour."""
        forbidden = 0
        for _, cell in neighbors:
            if cell.is_collapsed():
                forbidden |= cell.mask
        return forbidden

    def empty_board(self) -> Board:
        return Board.full(self.length, self.colors)

    def is_proper(self, board: Board) -> bool:
        """Check that every cell is coloured and differs from its neighbours."""
        if not board.is_solved():
            return False
        values = board.values()
        return all(
            values[i] != values[j]
            for i in range(self.length)
            for j in self.neighbors(i)
        )
