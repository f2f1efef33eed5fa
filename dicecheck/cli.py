"""
Command-line interface for DiceCheck.

Usage:
    dicecheck                      # interactive prompts
    dicecheck 2 6 0 7 1 6 3 6      # 2d6 sum equals 7 vs 1d6 at least one 6
    dicecheck 5 6 countMatching 6 2 2 6 sumGreaterThan 9 500000

Positional form:
    dice1 sides1 condition1 value1 [count1] dice2 sides2 condition2 value2 [count2] [simulations]

Conditions are menu numbers or names (case-insensitive). ``count`` follows the
value only for countMatching.
"""

from __future__ import annotations

import logging
from typing import Sequence

import click

from dicecheck.config.settings import configure_logging, get_settings
from dicecheck.engine.base import DiceRoll
from dicecheck.engine.conditions import ConditionType, RollCondition
from dicecheck.engine.simulation import Scenario, SimulationEngine, SimulationResult
from dicecheck.engine.validators import DiceCheckError, validate_simulations

logger = logging.getLogger(__name__)

MIN_POSITIONAL_ARGS = 8


def _parse_int(raw: str, label: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise click.UsageError(f"{label} must be an integer, got {raw!r}.") from None


def _parse_scenario(args: Sequence[str], offset: int, number: int) -> tuple[Scenario, int]:
    """Parse one scenario starting at ``offset``.

    Returns:
        The scenario and the offset just past it.
    """
    label = f"Scenario {number}"
    if len(args) < offset + 4:
        raise click.UsageError(f"{label} needs: dice sides condition value [count].")

    count = _parse_int(args[offset], f"{label} number of dice")
    sides = _parse_int(args[offset + 1], f"{label} sides")
    kind = ConditionType.parse(args[offset + 2])
    value = _parse_int(args[offset + 3], f"{label} condition value")

    if kind is ConditionType.COUNT_MATCHING:
        if len(args) < offset + 5:
            raise click.UsageError(f"{label} countMatching needs a count after the value.")
        match_count = _parse_int(args[offset + 4], f"{label} match count")
        condition = RollCondition.count_matching(match_count, value)
        end = offset + 5
    else:
        condition = RollCondition.create(kind, value)
        end = offset + 4

    return Scenario(dice=DiceRoll(sides=sides, count=count), condition=condition), end


def parse_scenario_args(
    args: Sequence[str],
    default_simulations: int,
) -> tuple[Scenario, Scenario, int]:
    """Parse the positional form into two scenarios and a simulation count.

    Raises:
        click.UsageError: Wrong number of arguments or non-numeric values
        DiceCheckError: Values the engine rejects
    """
    if len(args) < MIN_POSITIONAL_ARGS:
        raise click.UsageError(
            "Invalid number of arguments. Use no arguments for interactive mode, "
            "or provide: dice1 sides1 condition1 value1 [count1] "
            "dice2 sides2 condition2 value2 [count2] [simulations]"
        )

    first, offset = _parse_scenario(args, 0, 1)
    second, offset = _parse_scenario(args, offset, 2)

    remaining = list(args[offset:])
    if len(remaining) > 1:
        raise click.UsageError(f"Unexpected extra arguments: {' '.join(remaining[1:])}")
    simulations = (
        _parse_int(remaining[0], "Number of simulations") if remaining else default_simulations
    )
    return first, second, simulations


def _prompt_scenario(number: int) -> Scenario:
    click.echo(f"\nScenario {number}:")
    count = click.prompt("Number of dice", type=int, default=1)
    sides = click.prompt("Number of sides per die", type=int, default=6)

    click.echo("\nCondition types:")
    for kind in ConditionType:
        click.echo(f"  {kind.ordinal}. {kind.label}")
    kind = ConditionType.parse(
        click.prompt("Select condition type (number)", type=str, default="0")
    )

    if kind is ConditionType.COUNT_MATCHING:
        match_count = click.prompt("How many matching dice?", type=int, default=1)
        value = click.prompt("What value to match?", type=int, default=1)
        condition = RollCondition.count_matching(match_count, value)
    else:
        value = click.prompt("Condition value", type=int, default=1)
        condition = RollCondition.create(kind, value)

    return Scenario(dice=DiceRoll(sides=sides, count=count), condition=condition)


def prompt_scenarios(default_simulations: int) -> tuple[Scenario, Scenario, int]:
    """Ask for both scenarios and the simulation count interactively."""
    first = _prompt_scenario(1)
    second = _prompt_scenario(2)
    simulations = click.prompt(
        f"\nNumber of simulations (default: {default_simulations:,})",
        type=int,
        default=default_simulations,
        show_default=False,
    )
    return first, second, simulations


def format_report(first: Scenario, second: Scenario, result: SimulationResult) -> str:
    """Render a finished comparison the way the console prints it."""
    lines = [
        f"\nResults after {result.simulations:,} simulations "
        f"(completed in {result.elapsed_ms:,.0f}ms):",
        f"Scenario 1: {first}",
        f"Probability: {result.probability_a:.3%}",
        f"Scenario 2: {second}",
        f"Probability: {result.probability_b:.3%}\n",
        f"Difference in probabilities: {result.difference:.3%}",
        result.verdict,
    ]
    return "\n".join(lines)


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed for reproducibility'
)
@click.option(
    '--batch-size',
    type=int,
    default=None,
    help='Simulations per parallel batch (default from settings: 10000)'
)
@click.option(
    '--workers',
    type=int,
    default=None,
    help='Worker threads (default: one per CPU)'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default=None,
    help='Log level (default from settings)'
)
def main(args, seed, batch_size, workers, log_level):
    """DiceCheck - Monte Carlo Dice Roll Simulator.

    Compare how likely two dice scenarios are. Run without arguments for
    interactive prompts.
    """
    settings = get_settings()
    configure_logging(log_level)

    click.echo("DiceCheck - Monte Carlo Dice Roll Simulator")

    try:
        if args:
            first, second, simulations = parse_scenario_args(
                args, settings.default_simulations
            )
        else:
            first, second, simulations = prompt_scenarios(settings.default_simulations)

        validate_simulations(simulations)
        engine = SimulationEngine(
            batch_size=batch_size if batch_size is not None else settings.batch_size,
            max_workers=workers if workers is not None else settings.max_workers,
            seed=seed if seed is not None else settings.seed,
        )
    except DiceCheckError as exc:
        raise click.UsageError(str(exc)) from exc

    result = engine.run(first, second, simulations)
    click.echo(format_report(first, second, result))


if __name__ == '__main__':
    main()
