"""UI components for DiceCheck."""

from dicecheck.ui.components.dice_tray import render_dice_tray
from dicecheck.ui.components.condition_editor import (
    render_condition_editor,
    render_condition_fields,
)
from dicecheck.ui.components.results import (
    render_roll_results,
    render_simulation_results,
)
from dicecheck.ui.components.scenario_form import (
    render_dice_config,
    render_scenario_form,
)

__all__ = [
    "render_dice_tray",
    "render_condition_editor",
    "render_condition_fields",
    "render_roll_results",
    "render_simulation_results",
    "render_dice_config",
    "render_scenario_form",
]
