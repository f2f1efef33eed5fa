"""Compare page: Monte Carlo comparison of two scenarios."""

from __future__ import annotations

import logging

import streamlit as st

from dicecheck.config.settings import get_settings
from dicecheck.engine.validators import DiceCheckError
from dicecheck.service import SimulationRequest, compare_scenarios
from dicecheck.ui.components.results import render_simulation_results
from dicecheck.ui.components.scenario_form import render_scenario_form
from dicecheck.ui.url_state import CompareState, load_compare_state, save_compare_state

logger = logging.getLogger(__name__)


def render_compare_page() -> None:
    """Render the scenario comparison page."""
    ss = st.session_state
    settings = get_settings()

    if "compare_initial" not in ss:
        ss["compare_initial"] = load_compare_state()
    initial: CompareState = ss["compare_initial"]

    st.title("Compare Scenarios")
    st.caption("Which is more likely? Simulate both and find out.")

    col1, col2 = st.columns(2)
    with col1:
        scenario_a = render_scenario_form("Scenario 1", initial.scenario_a, key="scenario_a")
    with col2:
        scenario_b = render_scenario_form("Scenario 2", initial.scenario_b, key="scenario_b")

    # A hand-edited URL may hold a count outside the widget's range
    start_value = min(
        max(initial.simulations or settings.default_simulations, 1),
        settings.max_simulations,
    )
    simulations = st.number_input(
        "Number of simulations",
        min_value=1,
        max_value=settings.max_simulations,
        value=start_value,
        step=10_000,
        key="compare_simulations",
    )

    save_compare_state(CompareState(
        scenario_a=scenario_a,
        scenario_b=scenario_b,
        simulations=int(simulations),
    ))

    if st.button("Run Simulation", type="primary", use_container_width=True):
        request = SimulationRequest(
            scenario_a=scenario_a,
            scenario_b=scenario_b,
            simulations=int(simulations),
        )
        try:
            with st.spinner(f"Running {int(simulations):,} simulations..."):
                ss["compare_result"] = compare_scenarios(request, settings=settings)
            ss.pop("compare_error", None)
        except DiceCheckError as exc:
            logger.info("Rejected comparison request: %s", exc)
            ss["compare_error"] = str(exc)
            ss.pop("compare_result", None)

    if "compare_result" in ss:
        render_simulation_results(ss["compare_result"])

    if "compare_error" in ss:
        st.error(ss["compare_error"])
