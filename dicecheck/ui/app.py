"""DiceCheck - Streamlit Application Entrypoint.

Run with ``streamlit run dicecheck/ui/app.py``.
"""

from __future__ import annotations

import streamlit as st

_VIEWS = {
    "roller": "Roller",
    "compare": "Compare",
}

_ABOUT = """\
**Roller:** roll dice once and check the result against any number of
conditions.

**Compare:** describe two scenarios and let a Monte Carlo simulation
estimate which is more likely.

**Conditions:**
| Condition | Example (2d6) |
|---|---|
| Sum equals | 7 |
| Sum greater than | 9 (sums 10-12) |
| Sum less than | 5 (sums 2-4) |
| At least one die showing | 6 |
| All dice showing | 6 |
| Exactly N dice showing | 2 dice showing 6 |
"""


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="DiceCheck",
        page_icon="🎲",
        layout="wide",
    )

    from dicecheck.config.settings import configure_logging
    from dicecheck.ui.themes import load_css
    from dicecheck.ui.url_state import load_view, save_view

    if "_logging_configured" not in st.session_state:
        configure_logging()
        st.session_state["_logging_configured"] = True
    load_css()

    view = load_view("roller")
    if view not in _VIEWS:
        view = "roller"

    with st.sidebar:
        st.markdown("## DiceCheck")
        view = st.radio(
            "View",
            options=list(_VIEWS),
            index=list(_VIEWS).index(view),
            format_func=lambda v: _VIEWS[v],
            key="nav_view",
        )
        st.divider()
        st.markdown(_ABOUT)
    save_view(view)

    # Page routing (lazy imports to avoid circular deps)
    if view == "compare":
        from dicecheck.ui.views.compare import render_compare_page
        render_compare_page()
    else:
        from dicecheck.ui.views.roller import render_roller_page
        render_roller_page()


if __name__ == "__main__":
    main()
