"""Condition editor: add, edit and remove roll conditions."""

from __future__ import annotations

import streamlit as st

from dicecheck.engine.conditions import ConditionType
from dicecheck.service.models import ConditionRequest

CONDITION_LABELS: dict[str, str] = {
    ConditionType.SUM_EQUALS.value: "Sum equals",
    ConditionType.SUM_GREATER_THAN.value: "Sum greater than",
    ConditionType.SUM_LESS_THAN.value: "Sum less than",
    ConditionType.AT_LEAST_ONE.value: "At least one die showing",
    ConditionType.ALL.value: "All dice showing",
    ConditionType.COUNT_MATCHING.value: "Exactly N dice showing",
}

_TYPE_OPTIONS = [kind.value for kind in ConditionType]


def render_condition_fields(
    condition: ConditionRequest,
    key: str,
) -> ConditionRequest:
    """Render type/value/count inputs for a single condition.

    Returns:
        The condition as currently entered.
    """
    index = _TYPE_OPTIONS.index(condition.type) if condition.type in _TYPE_OPTIONS else 0
    is_counting = _TYPE_OPTIONS[index] == ConditionType.COUNT_MATCHING.value

    cols = st.columns(3 if is_counting else 2)
    with cols[0]:
        kind = st.selectbox(
            "Condition",
            options=_TYPE_OPTIONS,
            index=index,
            format_func=lambda v: CONDITION_LABELS[v],
            key=f"{key}_type",
        )
    with cols[1]:
        value = st.number_input(
            "Value",
            value=int(condition.value),
            step=1,
            key=f"{key}_value",
        )
    count = None
    if kind == ConditionType.COUNT_MATCHING.value:
        with cols[-1]:
            count = st.number_input(
                "How many dice",
                min_value=0,
                value=max(int(condition.count if condition.count is not None else 1), 0),
                step=1,
                key=f"{key}_count",
            )
        count = int(count)

    return ConditionRequest(type=kind, value=int(value), count=count)


def render_condition_editor(
    conditions: list[ConditionRequest],
    key: str = "conditions",
) -> list[ConditionRequest]:
    """Render an editable list of conditions.

    Args:
        conditions: Conditions to start from.
        key: Widget key prefix.

    Returns:
        The edited list (rows may have been added or removed).
    """
    st.subheader("Conditions")

    updated: list[ConditionRequest] = []
    removed = False
    for i, condition in enumerate(conditions):
        row_key = f"{key}_{i}_{len(conditions)}"
        with st.container(border=True):
            edited = render_condition_fields(condition, row_key)
            if st.button("Remove", key=f"{row_key}_remove"):
                removed = True
                continue
        updated.append(edited)

    if st.button("Add Condition", key=f"{key}_add"):
        updated.append(ConditionRequest(type=ConditionType.SUM_EQUALS.value, value=7))
        st.session_state[key] = updated
        st.rerun()

    if removed:
        st.session_state[key] = updated
        st.rerun()

    st.session_state[key] = updated
    return updated
