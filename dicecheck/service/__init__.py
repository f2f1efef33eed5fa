"""
DiceCheck Service Layer.

Request validation and response shaping for the UI and CLI.
"""

from dicecheck.service.dice_service import (
    build_condition,
    build_scenario,
    compare_scenarios,
    roll_dice,
)
from dicecheck.service.models import (
    ConditionOutcome,
    ConditionRequest,
    RollRequest,
    RollResponse,
    ScenarioReport,
    ScenarioRequest,
    SimulationRequest,
    SimulationResponse,
)

__all__ = [
    "build_condition",
    "build_scenario",
    "compare_scenarios",
    "roll_dice",
    "ConditionOutcome",
    "ConditionRequest",
    "RollRequest",
    "RollResponse",
    "ScenarioReport",
    "ScenarioRequest",
    "SimulationRequest",
    "SimulationResponse",
]
