"""
DiceCheck Engine.

Probability core with zero UI dependencies.
Handles dice rolling, condition evaluation and Monte Carlo comparison.
"""

from dicecheck.engine.base import DiceRoll, RollResult, roll
from dicecheck.engine.conditions import ConditionType, ConditionValue, RollCondition
from dicecheck.engine.simulation import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_SIMULATIONS,
    Scenario,
    SimulationEngine,
    SimulationResult,
    simulate,
)
from dicecheck.engine.validators import (
    DiceCheckError,
    InvalidArgumentError,
    InvalidConditionError,
    InvalidConfigurationError,
    SimulationCancelled,
)

__all__ = [
    # Data Classes
    "DiceRoll",
    "RollResult",
    "ConditionValue",
    "RollCondition",
    "Scenario",
    "SimulationResult",
    # Enums
    "ConditionType",
    # Operations
    "roll",
    "simulate",
    "SimulationEngine",
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_SIMULATIONS",
    # Errors
    "DiceCheckError",
    "InvalidArgumentError",
    "InvalidConditionError",
    "InvalidConfigurationError",
    "SimulationCancelled",
]
