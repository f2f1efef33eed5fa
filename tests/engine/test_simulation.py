"""
DiceCheck - Simulation Engine Tests

Tests for batch planning, the shared success counter, and Monte Carlo
comparisons (correctness, reproducibility, cancellation, bad input).
"""

import threading
import tracemalloc
from unittest.mock import patch

import numpy as np
import pytest

from dicecheck.engine.base import DiceRoll
from dicecheck.engine.conditions import ConditionType, RollCondition
from dicecheck.engine.simulation import (
    BatchOutcome,
    Scenario,
    SimulationEngine,
    SimulationResult,
    SuccessCounter,
    plan_batches,
    simulate,
)
from dicecheck.engine.validators import (
    InvalidArgumentError,
    SimulationCancelled,
)


# === Batch Planning ===


class TestPlanBatches:
    """Tests for plan_batches()."""

    def test_exact_multiple(self):
        assert plan_batches(30_000, 10_000) == [10_000, 10_000, 10_000]

    def test_remainder_batch(self):
        assert plan_batches(25_000, 10_000) == [10_000, 10_000, 5_000]

    def test_smaller_than_batch(self):
        assert plan_batches(7, 10_000) == [7]

    def test_sizes_sum_to_total(self):
        assert sum(plan_batches(1_234_567, 10_000)) == 1_234_567


# === Success Counter ===


class TestSuccessCounter:
    """Tests for the lock-protected shared counters."""

    def test_starts_at_zero(self):
        assert SuccessCounter().snapshot() == (0, 0, 0, 0)

    def test_add_accumulates(self):
        counter = SuccessCounter()
        counter.add(BatchOutcome(successes_a=3, successes_b=5, trials=10))
        counter.add(BatchOutcome(successes_a=1, successes_b=0, trials=4))
        assert counter.snapshot() == (4, 5, 14, 2)

    def test_concurrent_adds_are_not_lost(self):
        counter = SuccessCounter()
        outcome = BatchOutcome(successes_a=1, successes_b=2, trials=3)

        def worker():
            for _ in range(1_000):
                counter.add(outcome)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter.snapshot() == (8_000, 16_000, 24_000, 8_000)


# === Scenario ===


class TestScenario:
    """Tests for Scenario construction and coercion."""

    def test_coerce_tuple(self, seven_on_2d6):
        pair = (seven_on_2d6.dice, seven_on_2d6.condition)
        assert Scenario.coerce(pair) == seven_on_2d6

    def test_coerce_passes_scenario_through(self, seven_on_2d6):
        assert Scenario.coerce(seven_on_2d6) is seven_on_2d6

    def test_coerce_rejects_wrong_shape(self):
        with pytest.raises(InvalidArgumentError, match="pair"):
            Scenario.coerce((DiceRoll(sides=6, count=1),))

    def test_rejects_wrong_types(self):
        with pytest.raises(InvalidArgumentError, match="DiceRoll"):
            Scenario(dice=(6, 1), condition=RollCondition.create(ConditionType.ALL, 6))

    def test_str(self, seven_on_2d6):
        assert str(seven_on_2d6) == "2d6 with condition Sum equals 7"


# === Simulation Result ===


class TestSimulationResult:
    """Tests for SimulationResult helpers."""

    def _result(self, a, b):
        return SimulationResult(
            probability_a=a, probability_b=b, successes_a=0, successes_b=0,
            simulations=100, batches=1, elapsed=0.25,
        )

    def test_unpacks_to_probabilities_and_elapsed(self):
        prob_a, prob_b, elapsed = self._result(0.5, 0.25)
        assert (prob_a, prob_b, elapsed) == (0.5, 0.25, 0.25)

    def test_difference_is_absolute(self):
        assert self._result(0.25, 0.5).difference == pytest.approx(0.25)

    def test_elapsed_ms(self):
        assert self._result(0.1, 0.1).elapsed_ms == pytest.approx(250.0)

    @pytest.mark.parametrize("a,b,verdict", [
        (0.6, 0.4, "Scenario 1 is more likely!"),
        (0.4, 0.6, "Scenario 2 is more likely!"),
        (0.5, 0.5, "Both scenarios are equally likely!"),
    ])
    def test_verdict(self, a, b, verdict):
        assert self._result(a, b).verdict == verdict


# === Running Simulations ===


class TestSimulate:
    """Tests for simulate() and SimulationEngine.run()."""

    def test_identical_scenarios_agree(self, seven_on_2d6):
        result = simulate(seven_on_2d6, seven_on_2d6, 100_000)
        assert abs(result.probability_a - result.probability_b) < 0.01

    def test_single_face_converges_to_one_sixth(self, six_on_1d6, seven_on_2d6):
        result = simulate(six_on_1d6, seven_on_2d6, 200_000, seed=11)
        assert result.probability_a == pytest.approx(1 / 6, abs=0.01)
        assert result.probability_b == pytest.approx(6 / 36, abs=0.01)

    def test_at_least_one_six_beats_sum_of_seven(self, any_six_on_2d6, seven_on_2d6):
        result = simulate(any_six_on_2d6, seven_on_2d6, 100_000, seed=5)
        assert result.probability_a == pytest.approx(11 / 36, abs=0.01)
        assert result.verdict == "Scenario 1 is more likely!"

    def test_certain_and_impossible_conditions(self):
        certain = (DiceRoll(sides=6, count=3), RollCondition.create(ConditionType.SUM_GREATER_THAN, 2))
        impossible = (DiceRoll(sides=6, count=3), RollCondition.create(ConditionType.SUM_EQUALS, 19))
        result = simulate(certain, impossible, 12_345)
        assert result.probability_a == 1.0
        assert result.probability_b == 0.0
        assert result.successes_a == 12_345

    def test_accepts_tuple_scenarios(self):
        pair = (DiceRoll(sides=6, count=1), RollCondition.create(ConditionType.AT_LEAST_ONE, 6))
        result = simulate(pair, pair, 1_000, seed=1)
        assert 0.0 <= result.probability_a <= 1.0

    def test_counts_every_simulation_including_remainder(self, seven_on_2d6):
        result = simulate(seven_on_2d6, seven_on_2d6, 25_001, batch_size=10_000)
        assert result.simulations == 25_001
        assert result.batches == 3
        assert result.cancelled is False

    def test_probability_is_successes_over_total(self, seven_on_2d6, six_on_1d6):
        result = simulate(seven_on_2d6, six_on_1d6, 9_999, seed=3, batch_size=1_000)
        assert result.probability_a == result.successes_a / 9_999
        assert result.probability_b == result.successes_b / 9_999

    def test_elapsed_is_reported(self, seven_on_2d6):
        result = simulate(seven_on_2d6, seven_on_2d6, 1_000)
        assert result.elapsed >= 0.0

    def test_seeded_runs_are_identical(self, seven_on_2d6, six_on_1d6):
        first = simulate(seven_on_2d6, six_on_1d6, 50_000, seed=42)
        second = simulate(seven_on_2d6, six_on_1d6, 50_000, seed=42)
        assert (first.successes_a, first.successes_b) == (second.successes_a, second.successes_b)

    def test_seeded_runs_ignore_worker_count(self, seven_on_2d6, six_on_1d6):
        serial = simulate(seven_on_2d6, six_on_1d6, 50_000, seed=42, max_workers=1)
        parallel = simulate(seven_on_2d6, six_on_1d6, 50_000, seed=42, max_workers=8)
        assert (serial.successes_a, serial.successes_b) == (parallel.successes_a, parallel.successes_b)

    def test_engine_seed_is_default_for_runs(self, seven_on_2d6):
        engine = SimulationEngine(batch_size=1_000, seed=9)
        first = engine.run(seven_on_2d6, seven_on_2d6, 5_000)
        second = engine.run(seven_on_2d6, seven_on_2d6, 5_000)
        assert first.successes_a == second.successes_a

    def test_run_seed_overrides_engine_seed(self, seven_on_2d6):
        engine = SimulationEngine(batch_size=1_000, seed=9)
        default = engine.run(seven_on_2d6, seven_on_2d6, 5_000)
        same = engine.run(seven_on_2d6, seven_on_2d6, 5_000, seed=9)
        assert default.successes_a == same.successes_a


class TestChunkedBatches:
    """Rolls inside a batch are drawn in bounded row chunks."""

    def test_many_dice_keep_memory_bounded(self):
        scenario = (
            DiceRoll(sides=6, count=2_000),
            RollCondition.create(ConditionType.SUM_GREATER_THAN, 7_000),
        )
        tracemalloc.start()
        try:
            result = simulate(scenario, scenario, 10_000, seed=1, max_workers=1)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()

        # A whole 10,000 x 2,000 batch would need 160 MB per scenario
        assert peak < 64 * 1024 * 1024
        assert result.simulations == 10_000
        assert result.probability_a == pytest.approx(0.5, abs=0.05)

    def test_chunk_boundaries_do_not_lose_rolls(self):
        certain = (DiceRoll(sides=6, count=3), RollCondition.create(ConditionType.SUM_GREATER_THAN, 2))
        with patch("dicecheck.engine.simulation.MAX_CHUNK_VALUES", 7):
            result = simulate(certain, certain, 1_001, batch_size=500)
        assert result.successes_a == 1_001
        assert result.successes_b == 1_001

    def test_more_dice_than_chunk_budget(self):
        certain = (DiceRoll(sides=1, count=50), RollCondition.create(ConditionType.ALL, 1))
        with patch("dicecheck.engine.simulation.MAX_CHUNK_VALUES", 10):
            result = simulate(certain, certain, 20)
        assert result.probability_a == 1.0

    def test_chunked_runs_stay_reproducible(self, seven_on_2d6, six_on_1d6):
        with patch("dicecheck.engine.simulation.MAX_CHUNK_VALUES", 300):
            serial = simulate(seven_on_2d6, six_on_1d6, 5_000, seed=4, max_workers=1)
            parallel = simulate(seven_on_2d6, six_on_1d6, 5_000, seed=4, max_workers=4)
        assert (serial.successes_a, serial.successes_b) == (parallel.successes_a, parallel.successes_b)


class TestSimulateErrors:
    """Input errors are raised before any work starts."""

    @pytest.mark.parametrize("total", [0, -5])
    def test_non_positive_total_raises(self, seven_on_2d6, total):
        with pytest.raises(InvalidArgumentError, match="must be positive"):
            simulate(seven_on_2d6, seven_on_2d6, total)

    def test_zero_total_does_not_start_batches(self, seven_on_2d6):
        with patch("dicecheck.engine.simulation._run_batch") as run_batch:
            with pytest.raises(InvalidArgumentError):
                simulate(seven_on_2d6, seven_on_2d6, 0)
        run_batch.assert_not_called()

    def test_numpy_integer_total_accepted(self, seven_on_2d6):
        result = simulate(seven_on_2d6, seven_on_2d6, np.int64(1_000), batch_size=np.int32(300))
        assert result.simulations == 1_000
        assert type(result.simulations) is int
        assert result.batches == 4

    def test_float_total_raises(self, seven_on_2d6):
        with pytest.raises(InvalidArgumentError, match="must be an integer, got float"):
            simulate(seven_on_2d6, seven_on_2d6, 1_000.0)

    def test_argument_error_is_value_error(self, seven_on_2d6):
        with pytest.raises(ValueError):
            simulate(seven_on_2d6, seven_on_2d6, 0)

    def test_invalid_batch_size_raises(self):
        with pytest.raises(InvalidArgumentError, match="Batch size"):
            SimulationEngine(batch_size=0)

    def test_invalid_worker_count_raises(self):
        with pytest.raises(InvalidArgumentError, match="Worker count"):
            SimulationEngine(max_workers=0)

    def test_invalid_scenario_raises(self, seven_on_2d6):
        with pytest.raises(InvalidArgumentError):
            simulate("2d6", seven_on_2d6, 100)


class TestCancellation:
    """Tests for cancel_event handling."""

    def test_cancelled_before_start_raises(self, seven_on_2d6):
        event = threading.Event()
        event.set()
        with pytest.raises(SimulationCancelled):
            simulate(seven_on_2d6, seven_on_2d6, 10_000, cancel_event=event)

    def test_partial_run_uses_completed_simulations(self, seven_on_2d6):
        event = threading.Event()
        engine = SimulationEngine(batch_size=1_000, max_workers=1, seed=1)

        from dicecheck.engine import simulation

        original = simulation._run_batch
        calls = {"n": 0}

        def run_then_cancel(*args, **kwargs):
            original(*args, **kwargs)
            calls["n"] += 1
            if calls["n"] == 2:
                event.set()

        with patch.object(simulation, "_run_batch", side_effect=run_then_cancel):
            result = engine.run(seven_on_2d6, seven_on_2d6, 10_000, cancel_event=event)

        assert result.cancelled is True
        assert result.simulations == 2_000
        assert result.batches == 2
        assert result.probability_a == result.successes_a / 2_000

    def test_unset_event_runs_to_completion(self, seven_on_2d6):
        result = simulate(
            seven_on_2d6, seven_on_2d6, 5_000, cancel_event=threading.Event()
        )
        assert result.simulations == 5_000
        assert result.cancelled is False
