"""Dice tray component: renders rolled dice as a row of faces."""

from __future__ import annotations

import streamlit as st


def render_dice_tray(values: list[int], sides: int) -> None:
    """Render rolled dice.

    Args:
        values: Face values in roll order.
        sides: Faces per die; dice showing the top face are highlighted.
    """
    if not values:
        st.markdown(
            '<div class="dice-tray">'
            '<span style="font-style:italic;">Roll the dice to see the result.</span>'
            "</div>",
            unsafe_allow_html=True,
        )
        return

    html_parts = ['<div class="dice-tray">']
    for val in values:
        classes = ["die"]
        if val == sides:
            classes.append("max-face")
        html_parts.append(f'<div class="{" ".join(classes)}">{val}</div>')
    html_parts.append("</div>")
    st.markdown("".join(html_parts), unsafe_allow_html=True)
