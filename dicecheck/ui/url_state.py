"""URL state: keep view inputs in the query string so links are shareable.

The encode/decode functions are pure (plain ``dict[str, list[str]]``) so they
can be tested without a Streamlit runtime; ``load_*``/``save_*`` are thin
wrappers around ``st.query_params``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

import streamlit as st

from dicecheck.engine.conditions import ConditionType
from dicecheck.engine.validators import InvalidConditionError
from dicecheck.service.models import ConditionRequest, ScenarioRequest

QueryParams = dict[str, list[str]]

DEFAULT_SIDES = 6
DEFAULT_DICE = 2

_COUNT_MATCHING = ConditionType.COUNT_MATCHING.value


@dataclass
class RollerState:
    """Inputs of the Roller view."""
    sides: int = DEFAULT_SIDES
    number_of_dice: int = DEFAULT_DICE
    conditions: list[ConditionRequest] = field(default_factory=list)


@dataclass
class CompareState:
    """Inputs of the Compare view."""
    scenario_a: ScenarioRequest
    scenario_b: ScenarioRequest
    simulations: int | None = None


def _first(params: Mapping[str, Sequence[str]], key: str) -> str | None:
    values = params.get(key) or []
    return values[0] if values else None


def _to_int(raw: str | None, default: int | None) -> int | None:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _normalize_type(raw: str) -> str | None:
    try:
        return ConditionType.parse(raw).value
    except InvalidConditionError:
        return None


# -- Roller ----------------------------------------------------------------

def encode_roller_state(state: RollerState) -> QueryParams:
    """Roller inputs -> query parameters.

    ``conditionCount`` is written only for countMatching conditions.
    """
    params: QueryParams = {
        "sides": [str(state.sides)],
        "numberOfDice": [str(state.number_of_dice)],
    }
    types: list[str] = []
    values: list[str] = []
    counts: list[str] = []
    for condition in state.conditions:
        types.append(condition.type)
        values.append(str(condition.value))
        if condition.type == _COUNT_MATCHING and condition.count is not None:
            counts.append(str(condition.count))
    if types:
        params["conditionType"] = types
        params["conditionValue"] = values
    if counts:
        params["conditionCount"] = counts
    return params


def decode_roller_state(params: Mapping[str, Sequence[str]]) -> RollerState:
    """Query parameters -> Roller inputs.

    Malformed numbers fall back to defaults; unknown condition types and
    conditions without a value are dropped. Counts are consumed in order by
    countMatching conditions only.
    """
    types = list(params.get("conditionType") or [])
    values = list(params.get("conditionValue") or [])
    counts = iter(params.get("conditionCount") or [])

    conditions: list[ConditionRequest] = []
    for index, raw_type in enumerate(types):
        kind = _normalize_type(raw_type)
        count = None
        if kind == _COUNT_MATCHING:
            count = _to_int(next(counts, None), None)
        value = _to_int(values[index], None) if index < len(values) else None
        if kind is None or value is None:
            continue
        conditions.append(ConditionRequest(type=kind, value=value, count=count))

    return RollerState(
        sides=_to_int(_first(params, "sides"), DEFAULT_SIDES),
        number_of_dice=_to_int(_first(params, "numberOfDice"), DEFAULT_DICE),
        conditions=conditions,
    )


# -- Compare ---------------------------------------------------------------

def default_compare_state() -> CompareState:
    """Two 2d6 scenarios: a sum of 7 against at least one six."""
    return CompareState(
        scenario_a=ScenarioRequest(
            sides=6,
            number_of_dice=2,
            condition=ConditionRequest(type="sumEquals", value=7),
        ),
        scenario_b=ScenarioRequest(
            sides=6,
            number_of_dice=2,
            condition=ConditionRequest(type="atLeastOne", value=6),
        ),
    )


def _encode_scenario(prefix: str, scenario: ScenarioRequest) -> QueryParams:
    params: QueryParams = {
        f"{prefix}Sides": [str(scenario.sides)],
        f"{prefix}Dice": [str(scenario.number_of_dice)],
        f"{prefix}Type": [scenario.condition.type],
        f"{prefix}Value": [str(scenario.condition.value)],
    }
    if scenario.condition.type == _COUNT_MATCHING and scenario.condition.count is not None:
        params[f"{prefix}Count"] = [str(scenario.condition.count)]
    return params


def _decode_scenario(
    prefix: str,
    params: Mapping[str, Sequence[str]],
    fallback: ScenarioRequest,
) -> ScenarioRequest:
    raw_type = _first(params, f"{prefix}Type")
    kind = _normalize_type(raw_type) if raw_type is not None else None
    if kind is None:
        kind = fallback.condition.type
    count = None
    if kind == _COUNT_MATCHING:
        count = _to_int(_first(params, f"{prefix}Count"), fallback.condition.count)
    return ScenarioRequest(
        sides=_to_int(_first(params, f"{prefix}Sides"), fallback.sides),
        number_of_dice=_to_int(_first(params, f"{prefix}Dice"), fallback.number_of_dice),
        condition=ConditionRequest(
            type=kind,
            value=_to_int(_first(params, f"{prefix}Value"), fallback.condition.value),
            count=count,
        ),
    )


def encode_compare_state(state: CompareState) -> QueryParams:
    params = _encode_scenario("a", state.scenario_a)
    params.update(_encode_scenario("b", state.scenario_b))
    if state.simulations is not None:
        params["simulations"] = [str(state.simulations)]
    return params


def decode_compare_state(params: Mapping[str, Sequence[str]]) -> CompareState:
    defaults = default_compare_state()
    return CompareState(
        scenario_a=_decode_scenario("a", params, defaults.scenario_a),
        scenario_b=_decode_scenario("b", params, defaults.scenario_b),
        simulations=_to_int(_first(params, "simulations"), None),
    )


# -- Streamlit wrappers ----------------------------------------------------

def _read_query_params() -> QueryParams:
    return {key: st.query_params.get_all(key) for key in st.query_params.keys()}


def _write_query_params(params: QueryParams, keep: Sequence[str] = ("view",)) -> None:
    current = _read_query_params()
    merged = {key: current[key] for key in keep if key in current}
    merged.update(params)
    if merged != current:
        st.query_params.from_dict(merged)


def load_roller_state() -> RollerState:
    return decode_roller_state(_read_query_params())


def save_roller_state(state: RollerState) -> None:
    _write_query_params(encode_roller_state(state))


def load_compare_state() -> CompareState:
    return decode_compare_state(_read_query_params())


def save_compare_state(state: CompareState) -> None:
    _write_query_params(encode_compare_state(state))


def load_view(default: str) -> str:
    return st.query_params.get("view", default)


def save_view(view: str) -> None:
    if st.query_params.get("view") != view:
        st.query_params["view"] = view
