"""Scenario form: dice configuration plus one condition."""

from __future__ import annotations

import streamlit as st

from dicecheck.service.models import ScenarioRequest
from dicecheck.ui.components.condition_editor import render_condition_fields


def render_dice_config(
    sides: int,
    number_of_dice: int,
    key: str,
) -> tuple[int, int]:
    """Render number-of-dice and sides inputs side by side.

    Values are not clamped here; the service rejects non-positive input with
    a readable message.

    Returns:
        ``(sides, number_of_dice)`` as entered.
    """
    col1, col2 = st.columns(2)
    with col1:
        dice = st.number_input(
            "Number of dice",
            value=int(number_of_dice),
            step=1,
            key=f"{key}_dice",
        )
    with col2:
        faces = st.number_input(
            "Sides per die",
            value=int(sides),
            step=1,
            key=f"{key}_sides",
        )
    return int(faces), int(dice)


def render_scenario_form(
    title: str,
    scenario: ScenarioRequest,
    key: str,
) -> ScenarioRequest:
    """Render one scenario inside a bordered card.

    Args:
        title: Card heading, e.g. ``"Scenario 1"``.
        scenario: Initial values.
        key: Widget key prefix (must differ between scenarios).

    Returns:
        The scenario as currently entered.
    """
    with st.container(border=True):
        st.markdown(f"**{title}**")
        sides, dice = render_dice_config(scenario.sides, scenario.number_of_dice, key)
        condition = render_condition_fields(scenario.condition, f"{key}_condition")

    return ScenarioRequest(sides=sides, number_of_dice=dice, condition=condition)
