"""Connected pipe tiles on a rectangular grid."""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from ..core.board import Board
from ..core.cell import Cell

NORTH, EAST, SOUTH, WEST = "N", "E", "S", "W"
OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}

# (glyph, sides with a pipe opening); the index is the state number
TILES: List[Tuple[str, frozenset]] = [
    ("┐", frozenset({WEST, SOUTH})),
    ("└", frozenset({NORTH, EAST})),
    ("┴", frozenset({WEST, NORTH, EAST})),
    ("┬", frozenset({WEST, EAST, SOUTH})),
    ("├", frozenset({NORTH, EAST, SOUTH})),
    ("─", frozenset({WEST, EAST})),
    ("┼", frozenset({NORTH, EAST, SOUTH, WEST})),
    ("│", frozenset({NORTH, SOUTH})),
    ("┤", frozenset({NORTH, SOUTH, WEST})),
    ("┘", frozenset({NORTH, WEST})),
    ("┌", frozenset({EAST, SOUTH})),
    (" ", frozenset()),
]
GLYPHS = {glyph: state for state, (glyph, _) in enumerate(TILES)}


class PipeRules:
    """
    Rules for a grid of pipe tiles where every opening meets an opening.

    Two horizontally or vertically adjacent tiles are compatible when both
    or neither have a pipe on their shared side. The reduction is arc
    consistent: a tile is forbidden next to a neighbour when it clashes
    with every tile that neighbour may still become.
    """

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")

        self.width = width
        self.height = height
        self.num_cells = width * height
        self.num_states = len(TILES)

        # _clashes[side][t]: tiles that cannot sit with tile t on their ``side``
        self._clashes: Dict[str, List[int]] = {}
        for side in (NORTH, EAST, SOUTH, WEST):
            masks = []
            for _, neighbor_sides in TILES:
                neighbor_open = OPPOSITE[side] in neighbor_sides
                mask = 0
                for state, (_, sides) in enumerate(TILES):
                    if (side in sides) != neighbor_open:
                        mask |= 1 << state
                masks.append(mask)
            self._clashes[side] = masks

    def neighbors(self, index: int) -> List[int]:
        """Left, right, top and bottom cells that exist."""
        y, x = divmod(index, self.width)
        result = []
        if x > 0:
            result.append(index - 1)
        if x < self.width - 1:
            result.append(index + 1)
        if y > 0:
            result.append(index - self.width)
        if y < self.height - 1:
            result.append(index + self.width)
        return result

    def side_towards(self, index: int, other: int) -> str:
        """The side of ``index`` that faces the adjacent cell ``other``."""
        iy, ix = divmod(index, self.width)
        jy, jx = divmod(other, self.width)
        if iy == jy and jx == ix - 1:
            return WEST
        if iy == jy and jx == ix + 1:
            return EAST
        if ix == jx and jy == iy - 1:
            return NORTH
        if ix == jx and jy == iy + 1:
            return SOUTH
        raise ValueError(f"Cells {index} and {other} are not adjacent")

    def reduce(self, index: int, neighbors: List[Tuple[int, Cell]]) -> int:
        forbidden = 0
        for j, cell in neighbors:
            clashes = self._clashes[self.side_towards(index, j)]
            common = (1 << self.num_states) - 1
            for state in cell.states():
                common &= clashes[state]
            forbidden |= common
        return forbidden

    def empty_board(self) -> Board:
        return Board.full(self.num_cells, self.num_states)

    def parse(self, text: str) -> Board:
        """
        Create a board from rows of glyphs.

        '.' marks an open cell; line breaks are ignored.
        """
        chars = [c for c in text if c not in "\r\n"]
        if len(chars) != self.num_cells:
            raise ValueError(f"Expected {self.num_cells} cells, got {len(chars)}")

        cells = []
        for idx, c in enumerate(chars):
            if c == ".":
                cells.append(Cell.full(self.num_states))
            elif c in GLYPHS:
                cells.append(Cell.only(GLYPHS[c], self.num_states))
            else:
                raise ValueError(f"Character {c!r} at position {idx} is invalid")
        return Board.from_cells(cells)

    def format(self, board: Board, rows: Optional[int] = None) -> str:
        """
        Render the board, or only its last ``rows`` rows.
        Open cells are shown as '.'.
        """
        first = 0 if rows is None else max(0, self.height - rows)
        lines = []
        for y in range(first, self.height):
            line = []
            for x in range(self.width):
                value = board[y * self.width + x].value
                line.append("." if value is None else TILES[value][0])
            lines.append("".join(line))
        return "\n".join(lines)

    def is_consistent(self, board: Board) -> bool:
        """Check that the board is collapsed and every shared side matches."""
        if not board.is_solved():
            return False
        values = board.values()
        for i in range(self.num_cells):
            for j in self.neighbors(i):
                side = self.side_towards(i, j)
                if (side in TILES[values[i]][1]) != (OPPOSITE[side] in TILES[values[j]][1]):
                    return False
        return True
