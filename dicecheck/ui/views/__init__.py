"""Page renderers for DiceCheck."""

from dicecheck.ui.views.roller import render_roller_page
from dicecheck.ui.views.compare import render_compare_page

__all__ = ["render_roller_page", "render_compare_page"]
