"""
DiceCheck - Dice Service

Request handlers that sit between the user-facing surfaces (Streamlit UI,
CLI) and the engine. Every handler validates its whole request before any
rolling starts; rejected input is raised as a ``DiceCheckError`` (a
``ValueError``) whose message is safe to show to the user.
"""

from __future__ import annotations

import logging
import threading

import numpy as np

from dicecheck.config.settings import Settings, get_settings
from dicecheck.engine.base import DiceRoll
from dicecheck.engine.conditions import RollCondition
from dicecheck.engine.simulation import Scenario, SimulationEngine
from dicecheck.engine.validators import (
    validate_dice_count,
    validate_sides,
    validate_simulations,
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

logger = logging.getLogger(__name__)


def build_condition(request: ConditionRequest) -> RollCondition:
    """Turn a condition request into a RollCondition.

    Raises:
        InvalidConditionError: Unknown type, or countMatching without count
    """
    return RollCondition.from_descriptor(request.type, request.value, request.count)


def build_scenario(request: ScenarioRequest) -> Scenario:
    """Validate and build one side of a comparison."""
    validate_sides(request.sides)
    validate_dice_count(request.number_of_dice)
    return Scenario(
        dice=DiceRoll(sides=request.sides, count=request.number_of_dice),
        condition=build_condition(request.condition),
    )


def roll_dice(
    request: RollRequest,
    rng: np.random.Generator | None = None,
) -> RollResponse:
    """Roll once and evaluate every requested condition.

    Args:
        request: Dice configuration and conditions
        rng: Optional generator (tests pass a seeded one)

    Returns:
        RollResponse; ``conditions`` is None when none were requested
    """
    validate_sides(request.sides)
    validate_dice_count(request.number_of_dice)
    # Build every condition before rolling so bad input never consumes a roll
    conditions = [build_condition(c) for c in request.conditions or []]

    dice = DiceRoll(sides=request.sides, count=request.number_of_dice)
    result = dice.roll(rng)
    logger.debug("Rolled %s: %s", dice, result.values)

    if not conditions:
        return RollResponse(values=list(result.values), sum=result.sum)

    return RollResponse(
        values=list(result.values),
        sum=result.sum,
        conditions=[
            ConditionOutcome(condition=c.describe(), satisfied=c.evaluate(result))
            for c in conditions
        ],
    )


def compare_scenarios(
    request: SimulationRequest,
    engine: SimulationEngine | None = None,
    settings: Settings | None = None,
    cancel_event: threading.Event | None = None,
) -> SimulationResponse:
    """Run a Monte Carlo comparison of two scenarios.

    Args:
        request: Both scenarios and an optional simulation count and seed
        engine: Engine to run on (built from settings when omitted)
        settings: Settings override (defaults to the cached singleton)
        cancel_event: Forwarded to the engine

    Raises:
        DiceCheckError: If any part of the request is invalid
        SimulationCancelled: If cancelled before any batch completed
    """
    settings = settings or get_settings()
    first = build_scenario(request.scenario_a)
    second = build_scenario(request.scenario_b)

    total = request.simulations
    if total is None:
        total = settings.default_simulations
    validate_simulations(total, maximum=settings.max_simulations)

    if engine is None:
        engine = SimulationEngine(
            batch_size=settings.batch_size,
            max_workers=settings.max_workers,
            seed=settings.seed,
        )

    result = engine.run(
        first, second, total, seed=request.seed, cancel_event=cancel_event
    )

    return SimulationResponse(
        scenario_a=ScenarioReport(
            dice=str(first.dice),
            condition=first.condition.describe(),
            probability=result.probability_a,
            successes=result.successes_a,
        ),
        scenario_b=ScenarioReport(
            dice=str(second.dice),
            condition=second.condition.describe(),
            probability=result.probability_b,
            successes=result.successes_b,
        ),
        simulations=result.simulations,
        elapsed_ms=result.elapsed_ms,
        difference=result.difference,
        verdict=result.verdict,
        cancelled=result.cancelled,
    )
