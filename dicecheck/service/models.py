"""
DiceCheck - Service Models

Pydantic request/response models. Field aliases are camelCase so payloads
match the JSON the browser front-end speaks; snake_case names are accepted
too.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = {"populate_by_name": True, "alias_generator": to_camel}


class ConditionRequest(BaseModel):
    """One condition as sent by a client. ``type`` is parsed case-insensitively."""

    type: str
    value: int
    count: int | None = None

    model_config = _MODEL_CONFIG


class RollRequest(BaseModel):
    """Roll once and check any number of conditions."""

    sides: int
    number_of_dice: int
    conditions: list[ConditionRequest] | None = None

    model_config = _MODEL_CONFIG


class ConditionOutcome(BaseModel):
    condition: str
    satisfied: bool

    model_config = _MODEL_CONFIG


class RollResponse(BaseModel):
    values: list[int]
    sum: int
    conditions: list[ConditionOutcome] | None = None

    model_config = _MODEL_CONFIG


class ScenarioRequest(BaseModel):
    """One side of a comparison."""

    sides: int
    number_of_dice: int
    condition: ConditionRequest

    model_config = _MODEL_CONFIG


class SimulationRequest(BaseModel):
    """Compare two scenarios. ``simulations`` defaults from settings."""

    scenario_a: ScenarioRequest
    scenario_b: ScenarioRequest
    simulations: int | None = None
    seed: int | None = None

    model_config = _MODEL_CONFIG


class ScenarioReport(BaseModel):
    dice: str
    condition: str
    probability: float = Field(ge=0.0, le=1.0)
    successes: int

    model_config = _MODEL_CONFIG


class SimulationResponse(BaseModel):
    scenario_a: ScenarioReport
    scenario_b: ScenarioReport
    simulations: int
    elapsed_ms: float
    difference: float
    verdict: str
    cancelled: bool = False

    model_config = _MODEL_CONFIG
