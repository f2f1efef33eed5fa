"""
DiceCheck - Monte Carlo Simulation Engine

Compares two scenarios (a DiceRoll paired with a RollCondition) by rolling
both many times and counting how often each condition holds.

The run is split into fixed-size batches executed on a thread pool. Every
batch owns a private ``numpy.random.Generator`` built from its own child of a
single ``SeedSequence``, so no generator is ever touched by two threads and a
seeded run gives the same counts whatever the worker count or completion
order. Batch counts are merged into a lock-protected ``SuccessCounter``.
Within a batch, rolls are drawn in row chunks so memory stays bounded however
many dice a scenario rolls.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, Sequence, Union

import numpy as np

from dicecheck.engine.base import DiceRoll
from dicecheck.engine.conditions import RollCondition
from dicecheck.engine.validators import (
    InvalidArgumentError,
    SimulationCancelled,
    validate_batch_size,
    validate_max_workers,
    validate_simulations,
)

logger = logging.getLogger(__name__)

DEFAULT_SIMULATIONS = 1_000_000
DEFAULT_BATCH_SIZE = 10_000
# Upper bound on dice values held in memory at once by one batch
MAX_CHUNK_VALUES = 2 ** 21


@dataclass(frozen=True)
class Scenario:
    """
    One side of a comparison.

    Attributes:
        dice: What is rolled
        condition: What counts as a success
    """
    dice: DiceRoll
    condition: RollCondition

    def __post_init__(self) -> None:
        if not isinstance(self.dice, DiceRoll):
            raise InvalidArgumentError(
                f"Scenario dice must be a DiceRoll, got {type(self.dice).__name__}."
            )
        if not isinstance(self.condition, RollCondition):
            raise InvalidArgumentError(
                "Scenario condition must be a RollCondition, "
                f"got {type(self.condition).__name__}."
            )

    def __str__(self) -> str:
        return f"{self.dice} with condition {self.condition}"

    @classmethod
    def coerce(cls, scenario: ScenarioLike) -> Scenario:
        """Accept a Scenario or a ``(DiceRoll, RollCondition)`` pair."""
        if isinstance(scenario, cls):
            return scenario
        try:
            dice, condition = scenario
        except (TypeError, ValueError):
            raise InvalidArgumentError(
                "A scenario must be a Scenario or a (DiceRoll, RollCondition) pair."
            ) from None
        return cls(dice=dice, condition=condition)


ScenarioLike = Union[Scenario, Sequence]


@dataclass(frozen=True)
class BatchOutcome:
    """Success counts from one batch."""
    successes_a: int
    successes_b: int
    trials: int


@dataclass(frozen=True)
class SimulationResult:
    """
    Outcome of a comparison run.

    Unpacks as ``(probability_a, probability_b, elapsed)``.

    Attributes:
        probability_a: Empirical probability of scenario A (0-1)
        probability_b: Empirical probability of scenario B (0-1)
        successes_a: Raw success count for scenario A
        successes_b: Raw success count for scenario B
        simulations: Number of simulations that were run
        batches: Number of batches that were run
        elapsed: Wall-clock duration in seconds
        cancelled: True if the run stopped before all batches ran
    """
    probability_a: float
    probability_b: float
    successes_a: int
    successes_b: int
    simulations: int
    batches: int
    elapsed: float
    cancelled: bool = False

    def __iter__(self) -> Iterator[float]:
        return iter((self.probability_a, self.probability_b, self.elapsed))

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0

    @property
    def difference(self) -> float:
        """Absolute difference between the two probabilities."""
        return abs(self.probability_a - self.probability_b)

    @property
    def verdict(self) -> str:
        if self.probability_a > self.probability_b:
            return "Scenario 1 is more likely!"
        if self.probability_a < self.probability_b:
            return "Scenario 2 is more likely!"
        return "Both scenarios are equally likely!"


class SuccessCounter:
    """The two success counters shared by all batches of a run.

    ``add`` and ``snapshot`` hold the same lock, so a reader never sees one
    counter updated without the other.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._successes_a = 0
        self._successes_b = 0
        self._trials = 0
        self._batches = 0

    def add(self, outcome: BatchOutcome) -> None:
        with self._lock:
            self._successes_a += outcome.successes_a
            self._successes_b += outcome.successes_b
            self._trials += outcome.trials
            self._batches += 1

    def snapshot(self) -> tuple[int, int, int, int]:
        """Return ``(successes_a, successes_b, trials, batches)``."""
        with self._lock:
            return self._successes_a, self._successes_b, self._trials, self._batches


def plan_batches(total_simulations: int, batch_size: int) -> list[int]:
    """Split a run into full batches plus one smaller remainder batch.

    >>> plan_batches(25_000, 10_000)
    [10000, 10000, 5000]
    """
    full, remainder = divmod(total_simulations, batch_size)
    sizes = [batch_size] * full
    if remainder:
        sizes.append(remainder)
    return sizes


class SimulationEngine:
    """
    Reusable, configured Monte Carlo runner.

    The engine holds only configuration; each call to :meth:`run` creates
    its own counters, generators and thread pool.
    """

    def __init__(
        self,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_workers: int | None = None,
        seed: int | None = None,
    ) -> None:
        self.batch_size = validate_batch_size(batch_size)
        self.max_workers = validate_max_workers(max_workers)
        self.seed = seed

    def run(
        self,
        scenario_a: ScenarioLike,
        scenario_b: ScenarioLike,
        total_simulations: int = DEFAULT_SIMULATIONS,
        *,
        seed: int | None = None,
        cancel_event: threading.Event | None = None,
    ) -> SimulationResult:
        """Simulate both scenarios ``total_simulations`` times.

        Args:
            scenario_a: First scenario
            scenario_b: Second scenario
            total_simulations: Number of trials per scenario (>= 1)
            seed: Overrides the engine seed for this run
            cancel_event: When set, batches not yet started are skipped and
                probabilities cover only the completed simulations

        Returns:
            SimulationResult

        Raises:
            InvalidArgumentError: If a scenario or the count is invalid
            SimulationCancelled: If cancelled before any batch completed
        """
        first = Scenario.coerce(scenario_a)
        second = Scenario.coerce(scenario_b)
        total_simulations = validate_simulations(total_simulations)

        sizes = plan_batches(total_simulations, self.batch_size)
        run_seed = self.seed if seed is None else seed
        children = np.random.SeedSequence(run_seed).spawn(len(sizes))
        counter = SuccessCounter()

        logger.debug(
            "Running %d simulations in %d batches (batch size %d, workers %s)",
            total_simulations, len(sizes), self.batch_size,
            self.max_workers or "auto",
        )

        start = time.perf_counter()
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="dicecheck-batch"
        ) as pool:
            futures = [
                pool.submit(
                    _run_batch, first, second, size, child, counter, cancel_event
                )
                for size, child in zip(sizes, children)
            ]
            for future in futures:
                # Re-raises any exception from the worker thread
                future.result()
        elapsed = time.perf_counter() - start

        successes_a, successes_b, trials, batches = counter.snapshot()
        cancelled = trials < total_simulations

        if trials == 0:
            logger.warning("Simulation cancelled before any batch completed")
            raise SimulationCancelled("Simulation was cancelled before any batch completed.")
        if cancelled:
            logger.warning(
                "Simulation cancelled after %d of %d simulations",
                trials, total_simulations,
            )

        logger.info(
            "Completed %d simulations in %.0fms (%d batches)",
            trials, elapsed * 1000.0, batches,
        )

        return SimulationResult(
            probability_a=successes_a / trials,
            probability_b=successes_b / trials,
            successes_a=successes_a,
            successes_b=successes_b,
            simulations=trials,
            batches=batches,
            elapsed=elapsed,
            cancelled=cancelled,
        )


def _run_batch(
    scenario_a: Scenario,
    scenario_b: Scenario,
    size: int,
    seed_seq: np.random.SeedSequence,
    counter: SuccessCounter,
    cancel_event: threading.Event | None,
) -> None:
    """Roll and evaluate both scenarios ``size`` times, then merge counts."""
    if cancel_event is not None and cancel_event.is_set():
        return

    rng = np.random.default_rng(seed_seq)
    counter.add(BatchOutcome(
        successes_a=_count_successes(scenario_a, size, rng),
        successes_b=_count_successes(scenario_b, size, rng),
        trials=size,
    ))


def _count_successes(scenario: Scenario, size: int, rng: np.random.Generator) -> int:
    """Roll ``size`` times in row chunks of at most MAX_CHUNK_VALUES dice."""
    rows = max(1, MAX_CHUNK_VALUES // scenario.dice.count)
    successes = 0
    remaining = size
    while remaining:
        n = min(rows, remaining)
        rolls = scenario.dice.roll_batch(n, rng)
        successes += scenario.condition.count_successes(rolls)
        del rolls
        remaining -= n
    return successes


def simulate(
    scenario_a: ScenarioLike,
    scenario_b: ScenarioLike,
    total_simulations: int = DEFAULT_SIMULATIONS,
    *,
    seed: int | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
) -> SimulationResult:
    """Convenience wrapper: build a SimulationEngine and run it once."""
    engine = SimulationEngine(batch_size=batch_size, max_workers=max_workers)
    return engine.run(
        scenario_a,
        scenario_b,
        total_simulations,
        seed=seed,
        cancel_event=cancel_event,
    )
