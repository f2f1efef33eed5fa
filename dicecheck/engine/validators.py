"""
DiceCheck - Input Validation Utilities

Provides the error taxonomy and validation functions for engine inputs. All
validators either return validated data or raise a descriptive error. Every
input error is a ``ValueError`` subclass so callers can catch them together.
"""

from numbers import Integral


class DiceCheckError(ValueError):
    """Base class for rejected engine input."""


class InvalidConfigurationError(DiceCheckError):
    """Dice configuration is unusable (non-positive sides or count)."""


class InvalidConditionError(DiceCheckError):
    """Condition kind is unknown or its count is missing/misplaced."""


class InvalidArgumentError(DiceCheckError):
    """A run argument (simulation count, batch size, workers) is invalid."""


class SimulationCancelled(Exception):
    """A simulation was cancelled before any batch completed."""


def _require_int(value: int, label: str, error: type[DiceCheckError]) -> int:
    # bool is an int subclass but never a meaningful dice quantity
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise error(f"{label} must be an integer, got {type(value).__name__}.")
    return int(value)


def validate_sides(sides: int) -> int:
    """
    Validate the number of faces on a die.

    Raises:
        InvalidConfigurationError: If sides is not a positive integer
    """
    sides = _require_int(sides, "Number of sides", InvalidConfigurationError)
    if sides <= 0:
        raise InvalidConfigurationError("Number of sides must be positive")
    return sides


def validate_dice_count(count: int) -> int:
    """
    Validate how many dice are rolled together.

    Raises:
        InvalidConfigurationError: If count is not a positive integer
    """
    count = _require_int(count, "Number of dice", InvalidConfigurationError)
    if count <= 0:
        raise InvalidConfigurationError("Number of dice must be positive")
    return count


def validate_die_values(values: tuple[int, ...], sides: int) -> tuple[int, ...]:
    """
    Validate rolled values against the die that produced them.

    Args:
        values: Face values, in roll order
        sides: Number of faces on the producing die

    Returns:
        The values unchanged

    Raises:
        InvalidConfigurationError: If any value lies outside 1..sides
    """
    for i, value in enumerate(values):
        if not (1 <= value <= sides):
            raise InvalidConfigurationError(
                f"Die value at index {i} is {value}, must be between 1 and {sides}."
            )
    return values


def validate_simulations(total: int, maximum: int | None = None) -> int:
    """
    Validate a total simulation count.

    Args:
        total: Number of simulations requested
        maximum: Optional upper bound (None = no limit)

    Raises:
        InvalidArgumentError: If total is not positive or exceeds maximum
    """
    total = _require_int(total, "Number of simulations", InvalidArgumentError)
    if total <= 0:
        raise InvalidArgumentError(
            f"Number of simulations must be positive, got {total}."
        )
    if maximum is not None and total > maximum:
        raise InvalidArgumentError(
            f"Number of simulations must be at most {maximum:,}, got {total:,}."
        )
    return total


def validate_batch_size(batch_size: int) -> int:
    """Validate the number of iterations per batch."""
    batch_size = _require_int(batch_size, "Batch size", InvalidArgumentError)
    if batch_size <= 0:
        raise InvalidArgumentError(f"Batch size must be positive, got {batch_size}.")
    return batch_size


def validate_max_workers(max_workers: int | None) -> int | None:
    """Validate a worker-pool size. ``None`` means one worker per CPU."""
    if max_workers is None:
        return None
    max_workers = _require_int(max_workers, "Worker count", InvalidArgumentError)
    if max_workers <= 0:
        raise InvalidArgumentError(
            f"Worker count must be positive, got {max_workers}."
        )
    return max_workers


def validate_match_count(count: int | None) -> int:
    """
    Validate the exact-match count of a countMatching condition.

    Raises:
        InvalidConditionError: If the count is missing or negative
    """
    if count is None:
        raise InvalidConditionError("Count is required for CountMatching condition")
    count = _require_int(count, "Count", InvalidConditionError)
    if count < 0:
        raise InvalidConditionError(f"Count cannot be negative, got {count}.")
    return count
