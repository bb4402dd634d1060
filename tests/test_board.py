"""Unit tests for the board."""

import pytest
from wfc.core.board import Board, Pan
from wfc.core.cell import Cell


def numbered_board():
    """A 3-wide, 2-high board where cell i holds state i."""
    return Board.from_cells([Cell.only(i, 6) for i in range(6)])


class TestBoard:
    """Tests for Board class."""

    def test_create_full_board(self):
        """Test creating an open board."""
        board = Board.full(5, 3)
        assert len(board) == 5
        assert list(board.entropies()) == [3, 3, 3, 3, 3]
        assert board.uncollapsed() == [0, 1, 2, 3, 4]
        assert not board.is_solved()

    def test_get_and_set(self):
        """Test reading and writing cells."""
        board = Board.full(3, 4)
        board[1] = Cell.only(2, 4)
        assert board[1].value == 2
        assert board.values() == [None, 2, None]

        with pytest.raises(ValueError):
            board[0] = Cell.full(5)

    def test_exclude(self):
        """Test in-place narrowing."""
        board = Board.full(2, 3)
        assert board.exclude(0, 0b001)
        assert board[0].states() == [1, 2]
        assert not board.exclude(0, 0b001)
        assert not board.exclude(0, 0)
        assert board.entropy(0) == 2

    def test_collapse(self):
        """Test collapsing a cell."""
        board = Board.full(2, 3)
        board.collapse(1, 0)
        assert board.mask(1) == 0b001
        assert board.uncollapsed() == [0]

    def test_copy(self):
        """Test board copy."""
        board = Board.full(3, 3)
        board.collapse(0, 1)
        copy = board.copy()
        assert copy == board

        # Modify copy, original should be unchanged
        copy.exclude(1, 0b011)
        assert board[1] == Cell.full(3)
        assert copy != board

    def test_contradictions(self):
        """Test detection of empty cells."""
        board = Board(3, [0b111, 0, 0b010])
        assert board.has_contradiction()
        assert board.contradictions() == [1]
        assert not Board.full(2, 2).has_contradiction()

    def test_is_solved(self):
        """Test solved detection."""
        assert numbered_board().is_solved()
        assert Board(2, [0b01, 0b10]).is_solved()
        assert not Board(2, [0b01, 0b11]).is_solved()

    def test_wide_cells(self):
        """Test boards using all 64 states."""
        board = Board.full(3, 64)
        assert list(board.entropies()) == [64, 64, 64]
        assert board[0].mask == 2 ** 64 - 1
        board.collapse(2, 63)
        assert board[2].value == 63

    def test_from_cells_rejects_mixed_state_counts(self):
        """Test that cells must agree on the state count."""
        with pytest.raises(ValueError):
            Board.from_cells([Cell.full(3), Cell.full(4)])

    def test_invalid_state_count(self):
        """Test state count validation."""
        with pytest.raises(ValueError):
            Board.full(3, 0)
        with pytest.raises(ValueError):
            Board.full(3, 65)


class TestPan:
    """Tests for panning a 2D board."""

    def test_pan_down(self):
        """Test that panning down opens rows at the bottom."""
        board = numbered_board()
        board.pan(Pan.DOWN, 1, 3)
        assert board.values() == [3, 4, 5, None, None, None]
        assert board[4] == Cell.full(6)

    def test_pan_up(self):
        """Test that panning up opens rows at the top."""
        board = numbered_board()
        board.pan(Pan.UP, 1, 3)
        assert board.values() == [None, None, None, 0, 1, 2]

    def test_pan_right(self):
        """Test that panning right opens columns on the right."""
        board = numbered_board()
        board.pan(Pan.RIGHT, 1, 3)
        assert board.values() == [1, 2, None, 4, 5, None]

    def test_pan_left(self):
        """Test that panning left opens columns on the left."""
        board = numbered_board()
        board.pan(Pan.LEFT, 1, 3)
        assert board.values() == [None, 0, 1, None, 3, 4]

    def test_pan_beyond_extent(self):
        """Test that a long pan resets every cell."""
        board = numbered_board()
        board.pan(Pan.DOWN, 2, 3)
        assert board == Board.full(6, 6)

    def test_pan_zero(self):
        """Test that a zero pan changes nothing."""
        board = numbered_board()
        board.pan(Pan.LEFT, 0, 3)
        assert board == numbered_board()

    def test_pan_validation(self):
        """Test invalid pan arguments."""
        board = numbered_board()
        with pytest.raises(ValueError):
            board.pan(Pan.DOWN, 1, 4)
        with pytest.raises(ValueError):
            board.pan(Pan.DOWN, -1, 3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
