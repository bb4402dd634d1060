"""Tests for the minimum-entropy collapse heuristic."""

import random

import pytest
from wfc.core.board import Board
from wfc.solvers import CollapseHeuristic, Decision


class TestCollapseHeuristic:
    """Tests for CollapseHeuristic class."""

    def test_nothing_to_collapse(self):
        """Test that a collapsed board yields no decision."""
        heuristic = CollapseHeuristic(random.Random(0))
        assert heuristic.select(Board(2, [0b01, 0b10])) is None

    def test_picks_minimum_entropy(self):
        """Test that the most constrained open cell is chosen."""
        board = Board(3, [0b111, 0b011, 0b111, 0b100])
        for seed in range(20):
            decision = CollapseHeuristic(random.Random(seed)).select(board)
            assert decision.index == 1
            assert decision.state in (0, 1)

    def test_ties_are_random(self):
        """Test that tied cells are all eventually chosen."""
        heuristic = CollapseHeuristic(random.Random(1))
        board = Board.full(4, 3)
        chosen = {heuristic.select(board).index for _ in range(200)}
        assert chosen == {0, 1, 2, 3}

    def test_states_are_random(self):
        """Test that every candidate state is eventually chosen."""
        heuristic = CollapseHeuristic(random.Random(2))
        board = Board(4, [0b1011])
        picked = {heuristic.select(board).state for _ in range(200)}
        assert picked == {0, 1, 3}

    def test_deterministic_with_seed(self):
        """Test that the same seed gives the same decisions."""
        board = Board.full(10, 5)
        first = CollapseHeuristic(random.Random(42))
        second = CollapseHeuristic(random.Random(42))
        assert [first.select(board) for _ in range(10)] == [second.select(board) for _ in range(10)]

    def test_decision_fields(self):
        """Test the decision record."""
        decision = CollapseHeuristic(random.Random(0)).select(Board(2, [0b01, 0b11]))
        assert decision == Decision(1, decision.state)
        assert decision.index == 1

    def test_weights(self):
        """Test weighted state selection."""
        heuristic = CollapseHeuristic(random.Random(3), weights=[0.0, 1.0, 0.0])
        board = Board.full(1, 3)
        assert {heuristic.select(board).state for _ in range(50)} == {1}

    def test_zero_weights_fall_back_to_uniform(self):
        """Test candidates whose weights are all zero."""
        heuristic = CollapseHeuristic(random.Random(4), weights=[1.0, 0.0, 0.0])
        board = Board(3, [0b110])
        assert {heuristic.select(board).state for _ in range(100)} == {1, 2}

    def test_invalid_weights(self):
        """Test weight validation."""
        with pytest.raises(ValueError):
            CollapseHeuristic(random.Random(0), weights=[1.0, -1.0])
        heuristic = CollapseHeuristic(random.Random(0), weights=[1.0])
        with pytest.raises(ValueError):
            heuristic.select(Board.full(1, 3))

    def test_contradiction_rejected(self):
        """Test that a board with an empty cell is refused."""
        heuristic = CollapseHeuristic(random.Random(0))
        with pytest.raises(ValueError):
            heuristic.select(Board(2, [0b11, 0]))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
