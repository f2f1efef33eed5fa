"""CSS injection and small HTML helpers for the DiceCheck theme."""

import streamlit as st

_CSS = """
.dice-tray {
    display: flex;
    flex-wrap: wrap;
    gap: 0.5rem;
    margin: 0.75rem 0;
}
.die {
    width: 3rem;
    height: 3rem;
    display: flex;
    align-items: center;
    justify-content: center;
    border: 2px solid #1f2937;
    border-radius: 0.5rem;
    background: #ffffff;
    color: #1f2937;
    font-size: 1.25rem;
    font-weight: 700;
}
.die.max-face {
    border-color: #2563eb;
    color: #2563eb;
}
.condition-row {
    display: flex;
    justify-content: space-between;
    padding: 0.4rem 0.75rem;
    border-radius: 0.375rem;
    margin-bottom: 0.25rem;
}
.condition-row.satisfied {
    background: #dcfce7;
    color: #166534;
}
.condition-row.unsatisfied {
    background: #fee2e2;
    color: #991b1b;
}
.verdict-banner {
    text-align: center;
    font-size: 1.25rem;
    font-weight: 700;
    padding: 0.75rem;
    border-radius: 0.5rem;
    background: #eff6ff;
    color: #1e3a8a;
}
"""


def load_css() -> None:
    """Inject the DiceCheck CSS theme into the Streamlit app."""
    st.markdown(f"<style>{_CSS}</style>", unsafe_allow_html=True)


def render_verdict_banner(text: str) -> None:
    """Render the comparison verdict as a highlighted banner."""
    st.markdown(f'<div class="verdict-banner">{text}</div>', unsafe_allow_html=True)
