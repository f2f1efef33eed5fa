"""Result panels: single-roll outcome and comparison summary."""

from __future__ import annotations

import streamlit as st

from dicecheck.service.models import RollResponse, SimulationResponse
from dicecheck.ui.components.dice_tray import render_dice_tray
from dicecheck.ui.themes.styles import render_verdict_banner


def render_roll_results(response: RollResponse, sides: int) -> None:
    """Render dice, their sum and every evaluated condition."""
    st.subheader("Results")
    render_dice_tray(response.values, sides)
    st.markdown(f"**Sum:** {response.sum}")

    if not response.conditions:
        return

    html = []
    for outcome in response.conditions:
        status = "satisfied" if outcome.satisfied else "unsatisfied"
        mark = "&#10003; Satisfied" if outcome.satisfied else "&#10007; Not satisfied"
        html.append(
            f'<div class="condition-row {status}">'
            f"<span>{outcome.condition}</span>"
            f"<span>{mark}</span>"
            "</div>"
        )
    st.markdown("".join(html), unsafe_allow_html=True)


def render_simulation_results(response: SimulationResponse) -> None:
    """Render both probabilities, their difference and the verdict."""
    st.subheader(
        f"Results after {response.simulations:,} simulations "
        f"(completed in {response.elapsed_ms:,.0f}ms)"
    )
    if response.cancelled:
        st.warning("Run was cancelled; results cover the completed simulations only.")

    col1, col2 = st.columns(2)
    for col, title, report in (
        (col1, "Scenario 1", response.scenario_a),
        (col2, "Scenario 2", response.scenario_b),
    ):
        with col:
            st.metric(
                label=f"{title}: {report.dice}",
                value=f"{report.probability:.3%}",
                help=report.condition,
            )
            st.caption(f"{report.condition} ({report.successes:,} successes)")

    st.markdown(f"**Difference in probabilities:** {response.difference:.3%}")
    render_verdict_banner(response.verdict)
