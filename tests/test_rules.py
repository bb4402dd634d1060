"""Tests for the bundled rule sets."""

import pytest
from wfc.core.cell import Cell
from wfc.rules import PipeRules, RingColoring, SudokuRules, TILES

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"


class TestSudokuRules:
    """Tests for SudokuRules class."""

    def test_peers(self):
        """Test that each cell has 20 peers."""
        rules = SudokuRules()
        assert all(len(rules.neighbors(i)) == 20 for i in range(81))
        assert 0 not in rules.neighbors(0)
        assert {1, 9, 10, 20} <= set(rules.neighbors(0))
        assert 80 not in rules.neighbors(0)

    def test_sizes(self):
        """Test board size validation."""
        assert SudokuRules(16).box_size == 4
        with pytest.raises(ValueError):
            SudokuRules(10)
        with pytest.raises(ValueError):
            SudokuRules(0)

    def test_parse_and_to_string(self):
        """Test converting between strings and boards."""
        rules = SudokuRules()
        board = rules.parse(PUZZLE)
        assert board[0] == Cell.only(4, 9)
        assert board[2] == Cell.full(9)
        assert rules.to_string(board) == PUZZLE

    def test_parse_dots_and_whitespace(self):
        """Test alternative empty markers."""
        rules = SudokuRules(4)
        board = rules.parse("1... \n .2.. \n ..3. \n ...4")
        assert board.values()[:5] == [0, None, None, None, None]
        assert rules.to_string(board) == "1000020000300004"

    def test_parse_errors(self):
        """Test invalid puzzle strings."""
        rules = SudokuRules()
        with pytest.raises(ValueError):
            rules.parse("123")
        with pytest.raises(ValueError):
            rules.parse("#" + PUZZLE[1:])
        with pytest.raises(ValueError):
            SudokuRules(4).parse("5" + "0" * 15)

    def test_reduce(self):
        """Test that only collapsed peers forbid digits."""
        rules = SudokuRules()
        neighbors = [(1, Cell.only(2, 9)), (2, Cell.from_states([0, 1], 9)), (9, Cell.only(7, 9))]
        assert rules.reduce(0, neighbors) == (1 << 2) | (1 << 7)

    def test_is_valid(self):
        """Test duplicate detection."""
        rules = SudokuRules()
        assert rules.is_valid(rules.parse(PUZZLE))
        assert not rules.is_valid(rules.parse("55" + PUZZLE[2:]))
        assert not rules.is_solved(rules.parse(PUZZLE))

    def test_format(self):
        """Test the box-drawn rendering."""
        rules = SudokuRules()
        text = rules.format(rules.parse(PUZZLE))
        lines = text.split("\n")
        assert len(lines) == 13
        assert lines[0] == "+-------+-------+-------+"
        assert lines[1] == "| 5 3 . | . 7 . | . . . |"


class TestPipeRules:
    """Tests for PipeRules class."""

    def test_tiles(self):
        """Test the tile set."""
        assert len(TILES) == 12
        assert TILES[5][0] == "─"

    def test_neighbors(self):
        """Test grid adjacency."""
        rules = PipeRules(3, 2)
        assert rules.neighbors(0) == [1, 3]
        assert rules.neighbors(4) == [3, 5, 1]
        assert rules.neighbors(5) == [4, 2]

    def test_reduce_collapsed_neighbor(self):
        """Test that a pipe on the left requires an opening on the left."""
        rules = PipeRules(3, 1)
        forbidden = rules.reduce(1, [(0, Cell.only(5, 12))])
        allowed = Cell.full(12).intersect(forbidden)[0]
        assert [TILES[s][0] for s in allowed.states()] == ["┐", "┴", "┬", "─", "┼", "┤", "┘"]

    def test_reduce_open_neighbor(self):
        """Test that an undecided neighbour forbids nothing."""
        rules = PipeRules(3, 1)
        assert rules.reduce(1, [(0, Cell.full(12)), (2, Cell.full(12))]) == 0

    def test_reduce_partial_neighbor(self):
        """Test that only tiles clashing with every candidate are forbidden."""
        rules = PipeRules(1, 2)
        # Both candidates above have a pipe going down
        above = Cell.from_states([7, 10], 12)
        forbidden = rules.reduce(1, [(0, above)])
        allowed = Cell.full(12).intersect(forbidden)[0]
        assert all("N" in TILES[s][1] for s in allowed.states())

    def test_parse_and_format(self):
        """Test converting between glyphs and boards."""
        rules = PipeRules(2, 2)
        board = rules.parse("┌┐\n└┘")
        assert rules.format(board) == "┌┐\n└┘"
        assert rules.format(board, rows=1) == "└┘"
        assert rules.is_consistent(board)

    def test_is_consistent(self):
        """Test detection of mismatched openings."""
        rules = PipeRules(2, 1)
        assert rules.is_consistent(rules.parse("──"))
        assert not rules.is_consistent(rules.parse("┐─"))
        assert not rules.is_consistent(rules.parse(".─"))

    def test_parse_errors(self):
        """Test invalid pipe boards."""
        rules = PipeRules(2, 1)
        with pytest.raises(ValueError):
            rules.parse("─")
        with pytest.raises(ValueError):
            rules.parse("─x")


class TestRingColoring:
    """Tests for RingColoring class."""

    def test_neighbors(self):
        """Test ring adjacency."""
        rules = RingColoring(4, 2)
        assert rules.neighbors(0) == [3, 1]
        assert rules.neighbors(3) == [2, 0]
        assert RingColoring(2, 2).neighbors(0) == [1]

    def test_reduce(self):
        """Test that collapsed neighbours forbid their colour."""
        rules = RingColoring(4, 3)
        assert rules.reduce(0, [(3, Cell.only(1, 3)), (1, Cell.full(3))]) == 0b010

    def test_is_proper(self):
        """Test colouring validation."""
        rules = RingColoring(4, 2)
        board = rules.empty_board()
        assert not rules.is_proper(board)
        for i, color in enumerate([0, 1, 0, 1]):
            board.collapse(i, color)
        assert rules.is_proper(board)
        board.collapse(1, 0)
        assert not rules.is_proper(board)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
