"""DiceCheck - Monte Carlo dice probability comparison."""

__version__ = "0.1.0"
