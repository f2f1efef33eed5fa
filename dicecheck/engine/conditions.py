"""
DiceCheck - Roll Conditions

The closed set of predicates a roll can be checked against. Conditions are
immutable; evaluation is a pure function of the condition and a roll.

Each kind has a scalar rule (``evaluate``) for a single RollResult and a
vectorized rule (``evaluate_batch``) for a matrix of rolls, one roll per row.
Both must agree row for row.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from dicecheck.engine.base import RollResult
from dicecheck.engine.validators import InvalidConditionError, validate_match_count


class ConditionType(Enum):
    """Kinds of condition. Values are the wire names used by the UI and API."""
    SUM_EQUALS = "sumEquals"            # 2d6, 7: sum of exactly 7
    SUM_GREATER_THAN = "sumGreaterThan"  # 2d6, 9: sums 10-12
    SUM_LESS_THAN = "sumLessThan"        # 2d6, 5: sums 2-4
    AT_LEAST_ONE = "atLeastOne"          # 3d6, 6: any six
    ALL = "all"                          # 3d6, 6: three sixes
    COUNT_MATCHING = "countMatching"     # 5d6, 6, count=2: exactly two sixes

    @property
    def ordinal(self) -> int:
        """Position in the console menu (0-based)."""
        return list(ConditionType).index(self)

    @property
    def label(self) -> str:
        """PascalCase display name, e.g. ``SumGreaterThan``."""
        return self.value[0].upper() + self.value[1:]

    @classmethod
    def parse(cls, text: "str | int | ConditionType") -> "ConditionType":
        """
        Normalize a collaborator's kind descriptor into a ConditionType.

        Accepts the wire name in any case (``"sumEquals"``, ``"SUMEQUALS"``),
        the member name (``"sum_equals"``), or a menu ordinal (``2`` / ``"2"``).

        Raises:
            InvalidConditionError: If the descriptor names no known kind
        """
        if isinstance(text, cls):
            return text
        if isinstance(text, int) and not isinstance(text, bool):
            members = list(cls)
            if 0 <= text < len(members):
                return members[text]
            raise InvalidConditionError(f"Invalid condition type: {text}")
        if not isinstance(text, str):
            raise InvalidConditionError(f"Invalid condition type: {text}")

        key = text.strip().replace("_", "").lower()
        if key.isascii() and key.isdigit():
            return cls.parse(int(key))
        for member in cls:
            if member.value.lower() == key:
                return member
        raise InvalidConditionError(f"Invalid condition type: {text}")


@dataclass(frozen=True)
class ConditionValue:
    """
    Target of a condition.

    Attributes:
        value: Face value or sum to compare against
        count: Exact number of matching dice (countMatching only)
    """
    value: int
    count: int | None = None

    def describe(self) -> str:
        if self.count is None:
            return str(self.value)
        times = "time" if self.count == 1 else "times"
        return f"{self.count} {times} the value {self.value}"

    def __str__(self) -> str:
        return self.describe()


_DESCRIPTIONS: dict[ConditionType, str] = {
    ConditionType.SUM_EQUALS: "Sum equals {value}",
    ConditionType.SUM_GREATER_THAN: "Sum greater than {value}",
    ConditionType.SUM_LESS_THAN: "Sum less than {value}",
    ConditionType.AT_LEAST_ONE: "At least one die showing {value}",
    ConditionType.ALL: "All dice showing {value}",
    ConditionType.COUNT_MATCHING: "Exactly {count} dice showing {value}",
}


@dataclass(frozen=True)
class RollCondition:
    """
    A predicate over a roll.

    Attributes:
        kind: Which rule to apply
        target: Value (and, for countMatching, count) the rule compares with
    """
    kind: ConditionType
    target: ConditionValue

    def __post_init__(self) -> None:
        """Validate the kind and its count."""
        if not isinstance(self.kind, ConditionType):
            raise InvalidConditionError(f"Invalid condition type: {self.kind}")
        if not isinstance(self.target, ConditionValue):
            raise InvalidConditionError(
                f"Condition target must be a ConditionValue, got {type(self.target).__name__}."
            )
        if self.kind is ConditionType.COUNT_MATCHING:
            validate_match_count(self.target.count)
        elif self.target.count is not None:
            raise InvalidConditionError(
                f"Count is only valid for CountMatching condition, not {self.kind.label}"
            )

    @property
    def value(self) -> int:
        return self.target.value

    @property
    def count(self) -> int | None:
        return self.target.count

    # -- Construction ----------------------------------------------------

    @classmethod
    def create(cls, kind: ConditionType, value: int) -> "RollCondition":
        """Create a condition that takes a single value."""
        return cls(kind=kind, target=ConditionValue(value))

    @classmethod
    def count_matching(cls, count: int, value: int) -> "RollCondition":
        """Create an "exactly ``count`` dice showing ``value``" condition."""
        return cls(
            kind=ConditionType.COUNT_MATCHING,
            target=ConditionValue(value, count),
        )

    @classmethod
    def from_descriptor(
        cls,
        kind: "str | int | ConditionType",
        value: int,
        count: int | None = None
    ) -> "RollCondition":
        """Build a condition from a collaborator's (kind, value, count) triple.

        A count sent with any kind other than countMatching is ignored.
        """
        parsed = ConditionType.parse(kind)
        if parsed is ConditionType.COUNT_MATCHING:
            return cls.count_matching(validate_match_count(count), value)
        return cls.create(parsed, value)

    # -- Evaluation ------------------------------------------------------

    def evaluate(self, result: RollResult) -> bool:
        """Check a single roll."""
        kind = self.kind
        target = self.target.value

        if kind is ConditionType.SUM_EQUALS:
            return result.sum == target
        if kind is ConditionType.SUM_GREATER_THAN:
            return result.sum > target
        if kind is ConditionType.SUM_LESS_THAN:
            return result.sum < target
        if kind is ConditionType.AT_LEAST_ONE:
            return result.contains(target)
        if kind is ConditionType.ALL:
            return result.all(lambda v: v == target)
        return result.count_matching(lambda v: v == target) == self.target.count

    def evaluate_batch(self, rolls: np.ndarray) -> np.ndarray:
        """Check every row of a [n_rolls, n_dice] matrix.

        Returns:
            [n_rolls] bool array
        """
        kind = self.kind
        target = self.target.value

        if kind is ConditionType.SUM_EQUALS:
            return rolls.sum(axis=1) == target
        if kind is ConditionType.SUM_GREATER_THAN:
            return rolls.sum(axis=1) > target
        if kind is ConditionType.SUM_LESS_THAN:
            return rolls.sum(axis=1) < target
        if kind is ConditionType.AT_LEAST_ONE:
            return (rolls == target).any(axis=1)
        if kind is ConditionType.ALL:
            return (rolls == target).all(axis=1)
        return (rolls == target).sum(axis=1) == self.target.count

    def count_successes(self, rolls: np.ndarray) -> int:
        """Number of rows in ``rolls`` satisfying the condition."""
        return int(np.count_nonzero(self.evaluate_batch(rolls)))

    # -- Rendering -------------------------------------------------------

    def describe(self) -> str:
        """Human-readable description, e.g. ``Sum greater than 10``."""
        return _DESCRIPTIONS[self.kind].format(
            value=self.target.value, count=self.target.count
        )

    def __str__(self) -> str:
        return self.describe()
