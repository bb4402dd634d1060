"""Ready-made rule sets: adjacency and reduction pairs for common problems."""

from .sudoku import SudokuRules
from .pipes import PipeRules, TILES
from .coloring import RingColoring

__all__ = ["SudokuRules", "PipeRules", "TILES", "RingColoring"]
