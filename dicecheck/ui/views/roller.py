"""Roller page: roll once and check conditions against the result."""

from __future__ import annotations

import logging

import streamlit as st

from dicecheck.engine.validators import DiceCheckError
from dicecheck.service import RollRequest, roll_dice
from dicecheck.ui.components.condition_editor import render_condition_editor
from dicecheck.ui.components.results import render_roll_results
from dicecheck.ui.components.scenario_form import render_dice_config
from dicecheck.ui.url_state import RollerState, load_roller_state, save_roller_state

logger = logging.getLogger(__name__)

_CONDITIONS_KEY = "roller_conditions"


def render_roller_page() -> None:
    """Render the single-roll page."""
    ss = st.session_state

    # First visit: seed inputs from the URL
    if "roller_initial" not in ss:
        initial = load_roller_state()
        ss["roller_initial"] = initial
        ss[_CONDITIONS_KEY] = list(initial.conditions)
    initial: RollerState = ss["roller_initial"]

    st.title("Dice Roller")
    st.caption("Roll some dice and check them against your conditions.")

    sides, number_of_dice = render_dice_config(
        initial.sides, initial.number_of_dice, key="roller"
    )
    conditions = render_condition_editor(ss[_CONDITIONS_KEY], key=_CONDITIONS_KEY)

    save_roller_state(RollerState(
        sides=sides,
        number_of_dice=number_of_dice,
        conditions=conditions,
    ))

    if st.button("Roll Dice", type="primary", use_container_width=True):
        request = RollRequest(
            sides=sides,
            number_of_dice=number_of_dice,
            conditions=conditions,
        )
        try:
            ss["roller_result"] = (roll_dice(request), sides)
            ss.pop("roller_error", None)
        except DiceCheckError as exc:
            logger.info("Rejected roll request: %s", exc)
            ss["roller_error"] = str(exc)
            ss.pop("roller_result", None)

    if "roller_result" in ss:
        response, rolled_sides = ss["roller_result"]
        render_roll_results(response, rolled_sides)

    if "roller_error" in ss:
        st.error(ss["roller_error"])
