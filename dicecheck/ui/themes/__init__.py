"""Visual theme for DiceCheck."""

from dicecheck.ui.themes.styles import load_css, render_verdict_banner

__all__ = [
    "load_css",
    "render_verdict_banner",
]
