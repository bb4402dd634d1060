"""Cell representation: a fixed-width bitset of candidate states."""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from .errors import NotCollapsed

MAX_STATES = 64


def bit_for(state: int) -> int:
    """Return the single-bit mask for a state index."""
    if state < 0:
        raise ValueError(f"State must be non-negative, got {state}")
    return 1 << state


def popcount(mask: int) -> int:
    """Count the set bits of a mask."""
    return bin(mask).count("1")


def _check_num_states(num_states: int) -> None:
    if num_states < 1 or num_states > MAX_STATES:
        raise ValueError(f"Number of states must be 1-{MAX_STATES}, got {num_states}")


class Cell:
    """
    Candidate states for one position on the board.

    Bit ``k`` of ``mask`` is set while state ``k`` is still possible.
    Cells are immutable values: narrowing returns a new cell, so a board
    snapshot never shares mutable state with the live board.
    """

    __slots__ = ("_mask", "_num_states")

    def __init__(self, mask: int, num_states: int):
        """
        Create a cell.

        Args:
            mask: Bitset of candidate states. Bits at or above
                  ``num_states`` are dropped.
            num_states: Total number of states a cell can take (1-64).
        """
        _check_num_states(num_states)
        self._num_states = num_states
        self._mask = int(mask) & ((1 << num_states) - 1)

    @classmethod
    def full(cls, num_states: int) -> Cell:
        """A cell with every state still possible."""
        _check_num_states(num_states)
        return cls((1 << num_states) - 1, num_states)

    @classmethod
    def only(cls, state: int, num_states: int) -> Cell:
        """A cell collapsed to exactly one state."""
        if not 0 <= state < num_states:
            raise ValueError(f"State must be 0-{num_states - 1}, got {state}")
        return cls(bit_for(state), num_states)

    @classmethod
    def from_states(cls, states: Iterable[int], num_states: int) -> Cell:
        """A cell restricted to the given states."""
        mask = 0
        for state in states:
            if not 0 <= state < num_states:
                raise ValueError(f"State must be 0-{num_states - 1}, got {state}")
            mask |= bit_for(state)
        return cls(mask, num_states)

    @classmethod
    def from_mask(cls, mask: int, num_states: int) -> Cell:
        return cls(mask, num_states)

    @property
    def mask(self) -> int:
        return self._mask

    @property
    def num_states(self) -> int:
        return self._num_states

    @property
    def value(self) -> Optional[int]:
        """The collapsed state, or None while undecided."""
        if self.is_collapsed():
            return self._mask.bit_length() - 1
        return None

    def entropy(self) -> int:
        """Number of states still possible."""
        return popcount(self._mask)

    def is_collapsed(self) -> bool:
        return self.entropy() == 1

    def is_contradiction(self) -> bool:
        return self._mask == 0

    def states(self) -> List[int]:
        """Candidate states in ascending order."""
        return [s for s in range(self._num_states) if self._mask >> s & 1]

    def single_state(self) -> int:
        """
        Return the only remaining state.

        Raises:
            NotCollapsed: If the cell does not hold exactly one state.
        """
        if not self.is_collapsed():
            raise NotCollapsed(self.entropy())
        return self._mask.bit_length() - 1

    def intersect(self, mask: int) -> Tuple[Cell, bool]:
        """
        Remove the states in ``mask`` from this cell.

        Returns:
            Tuple of (narrowed cell, whether any bit was cleared).
        """
        narrowed = self._mask & ~int(mask)
        if narrowed == self._mask:
            return self, False
        return Cell(narrowed, self._num_states), True

    def __contains__(self, state: int) -> bool:
        return 0 <= state < self._num_states and bool(self._mask >> state & 1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return False
        return self._mask == other._mask and self._num_states == other._num_states

    def __hash__(self) -> int:
        return hash((self._mask, self._num_states))

    def __repr__(self) -> str:
        bits = format(self._mask, f"0{self._num_states}b")
        return f"Cell({bits}, entropy={self.entropy()})"
