"""
DiceCheck - Engine Base Classes

This module defines the foundational data structures used throughout the
engine. All classes are immutable (frozen dataclasses) so they can be shared
freely between simulation workers.

Randomness is never drawn from a process-wide generator: every roll takes a
``numpy.random.Generator`` from its caller, or creates a fresh one seeded from
OS entropy for that call alone.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Sequence

import numpy as np

from dicecheck.engine.validators import (
    validate_dice_count,
    validate_die_values,
    validate_sides,
)


@dataclass(frozen=True)
class RollResult:
    """
    Immutable view over the values produced by one roll.

    Attributes:
        values: Face values in roll order (position = which die)
        sides: Faces on the producing die, when known. Used only to
            validate the values.
    """
    values: tuple[int, ...]
    sides: int | None = None

    def __post_init__(self) -> None:
        """Validate values are within range when the die is known."""
        if self.sides is not None:
            validate_die_values(self.values, self.sides)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    @property
    def sum(self) -> int:
        """Arithmetic sum of all dice."""
        return sum(self.values)

    def contains(self, target: int) -> bool:
        """Returns True if any die shows target."""
        return target in self.values

    def all(self, predicate: Callable[[int], bool]) -> bool:
        """Returns True if every die satisfies predicate (True when empty)."""
        return all(predicate(v) for v in self.values)

    def count_matching(self, predicate: Callable[[int], bool]) -> int:
        """Number of dice satisfying predicate."""
        return sum(1 for v in self.values if predicate(v))

    @classmethod
    def from_sequence(
        cls,
        values: Sequence[int],
        sides: int | None = None
    ) -> "RollResult":
        """Create a RollResult from any sequence type."""
        return cls(values=tuple(int(v) for v in values), sides=sides)


@dataclass(frozen=True)
class DiceRoll:
    """
    Configuration of a roll: ``count`` dice with ``sides`` faces each.

    Attributes:
        sides: Number of faces per die (>= 1)
        count: Number of dice rolled together (>= 1)
    """
    sides: int
    count: int

    def __post_init__(self) -> None:
        """Validate the configuration and store plain ints."""
        object.__setattr__(self, "sides", validate_sides(self.sides))
        object.__setattr__(self, "count", validate_dice_count(self.count))

    def __str__(self) -> str:
        return f"{self.count}d{self.sides}"

    def roll(self, rng: np.random.Generator | None = None) -> RollResult:
        """Roll all dice once.

        Args:
            rng: Generator to draw from. A fresh OS-seeded generator is
                used when omitted.

        Returns:
            RollResult with ``count`` values in 1..sides
        """
        if rng is None:
            rng = np.random.default_rng()
        values = rng.integers(1, self.sides, size=self.count, endpoint=True)
        return RollResult(values=tuple(values.tolist()), sides=self.sides)

    def roll_batch(self, n: int, rng: np.random.Generator) -> np.ndarray:
        """Roll all dice ``n`` independent times.

        Each row is one roll, equivalent to a call to :meth:`roll`.

        Returns:
            [n, count] int64 matrix of face values
        """
        return rng.integers(1, self.sides, size=(n, self.count), endpoint=True)


def roll(
    sides: int,
    count: int,
    rng: np.random.Generator | None = None
) -> RollResult:
    """Roll ``count`` dice with ``sides`` faces each."""
    return DiceRoll(sides=sides, count=count).roll(rng)
