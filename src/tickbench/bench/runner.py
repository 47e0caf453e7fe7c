"""Adaptive benchmark execution with empty-loop baseline correction.

Each benchmark is re-run with a growing iteration count until its elapsed
time clears both twice the clock's instrumentation error and an absolute
floor. A suite measures the empty loop once and removes its per-iteration
cost from every benchmark, combining the two error bounds in quadrature.
That combination assumes the instrumentation error of the baseline and of
the benchmark are independent.
"""

from __future__ import annotations

from typing import Iterable

from tickbench.bench.config import RunnerConfig
from tickbench.bench.counter import IterationCounter, empty_loop
from tickbench.bench.errors import (
    CalibrationError,
    DegenerateWorkloadError,
    WorkloadContractError,
)
from tickbench.bench.registry import Benchmark, BenchmarkRegistry
from tickbench.bench.result import BenchmarkResult, SuiteResult
from tickbench.logging import Logger, default_logger
from tickbench.stats import combine_quadrature
from tickbench.timer.calibrate import Calibrator
from tickbench.timer.clock import ClockInfo, ClockSource, perf_counter_clock

BASELINE_NAME = "empty-loop"


def subtract_baseline(
    elapsed_ns: float,
    elapsed_err: float,
    iters_complete: int,
    loop_cost_per_iter: float,
    loop_cost_err_per_iter: float,
) -> tuple[float, float]:
    """Remove the empty-loop cost of ``iters_complete`` iterations.

    The corrected time is clamped at zero. Returns ``(elapsed_ns, elapsed_err)``.
    """
    overhead_ns = loop_cost_per_iter * iters_complete
    corrected_ns = elapsed_ns - overhead_ns if elapsed_ns > overhead_ns else 0.0
    corrected_err = combine_quadrature(
        elapsed_err, loop_cost_err_per_iter * iters_complete
    )
    return corrected_ns, corrected_err


class SuiteObserver:
    """Receives suite progress; every hook is optional."""

    def on_calibrated(self, clock: ClockInfo) -> None:
        """Called once the baseline clock is calibrated."""

    def on_baseline(self, baseline: BenchmarkResult) -> None:
        """Called after the empty loop has been measured."""

    def on_result(self, result: BenchmarkResult) -> None:
        """Called after each corrected benchmark measurement."""


class BenchmarkRunner:
    """Runs single benchmarks and whole suites.

    Args:
        config: Escalation and round settings.
        calibrator: Used for clocks that are not calibrated yet.
        logger: Destination for escalation diagnostics.
    """

    def __init__(
        self,
        config: RunnerConfig | None = None,
        calibrator: Calibrator | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.config = config if config is not None else RunnerConfig.default()
        self._logger = logger if logger is not None else default_logger("tickbench.bench")
        self.calibrator = (
            calibrator
            if calibrator is not None
            else Calibrator(logger=self._logger.child("tickbench.timer"))
        )

    def ensure_calibrated(self, clock: ClockSource) -> None:
        """Calibrate ``clock`` unless it already is.

        Raises:
            CalibrationError: If calibration does not converge.
        """
        if clock.calibrated:
            return
        if not self.calibrator.calibrate(clock):
            raise CalibrationError(
                f"Clock {clock.name!r} failed to calibrate after "
                f"{self.calibrator.attempts} attempts"
            )

    def run_one(self, bench: Benchmark) -> BenchmarkResult:
        """Measure ``bench`` with an escalating iteration count.

        Raises:
            CalibrationError: If the benchmark's clock cannot be calibrated.
            WorkloadContractError: If the workload returns before stop.
            DegenerateWorkloadError: If ``config.max_iters`` is exceeded.
        """
        cfg = self.config
        clock = bench.clock
        self.ensure_calibrated(clock)

        threshold_ns = 2.0 * clock.instr_err
        iters = cfg.initial_iters
        while True:
            if iters > cfg.max_iters:
                raise DegenerateWorkloadError(
                    f"{bench.name}: {bench.iters_complete} iterations took only "
                    f"{bench.elapsed_ns}ns; next attempt ({iters}) exceeds "
                    f"max_iters={cfg.max_iters}"
                )

            counter = IterationCounter(clock, iters, bench.arg)
            bench.fn(counter)
            if not counter.done:
                raise WorkloadContractError(
                    f"{bench.name}: workload returned in state {counter.state.name}; "
                    f"it must call step() until it returns False"
                )

            bench.iters_total = iters
            bench.iters_complete = counter.iters_complete
            bench.elapsed_ns = counter.elapsed_ns
            if counter.elapsed_ns > threshold_ns and counter.elapsed_ns > cfg.min_elapsed_ns:
                bench.elapsed_err = 2.0 * clock.instr_err
                break

            self._logger.trace(
                f"{bench.name}: {counter.iters_complete} iterations in "
                f"{counter.elapsed_ns}ns is below threshold; retrying"
            )
            iters *= cfg.growth_factor

        self._logger.debug(
            f"{bench.name}: accepted {bench.iters_complete} iterations in "
            f"{bench.elapsed_ns}ns (err {bench.elapsed_err:.3f}ns)"
        )
        return bench.result()

    def run_suite(
        self,
        benchmarks: BenchmarkRegistry | Iterable[Benchmark],
        baseline: Benchmark | None = None,
        num_rounds: int | None = None,
        observer: SuiteObserver | None = None,
    ) -> SuiteResult:
        """Measure the baseline once, then every benchmark ``num_rounds`` times.

        Benchmarks run in iteration order of ``benchmarks`` (registration
        order for a registry), round by round. A registry is sealed first.

        Args:
            benchmarks: Registry or sequence of benchmarks.
            baseline: Empty-loop benchmark; built on the registry clock (or
                the first benchmark's clock) when omitted.
            num_rounds: Defaults to ``config.num_runs``.
            observer: Receives progress callbacks.
        """
        num_rounds = num_rounds if num_rounds is not None else self.config.num_runs
        if num_rounds <= 0:
            raise ValueError(f"Invalid num_rounds; expected >0 but got {num_rounds}")
        observer = observer if observer is not None else SuiteObserver()

        default_clock = None
        if isinstance(benchmarks, BenchmarkRegistry):
            benchmarks.seal()
            default_clock = benchmarks.clock
        benches = list(benchmarks)

        if baseline is None:
            if default_clock is None:
                default_clock = benches[0].clock if benches else perf_counter_clock()
            baseline = Benchmark(BASELINE_NAME, empty_loop, default_clock)

        self.ensure_calibrated(baseline.clock)
        observer.on_calibrated(baseline.clock.info())

        baseline_result = self.run_one(baseline)
        loop_cost_per_iter = baseline.elapsed_ns / baseline.iters_complete
        loop_cost_err_per_iter = baseline.clock.instr_err / baseline.iters_complete
        observer.on_baseline(baseline_result)
        self._logger.debug(
            f"loop cost {loop_cost_per_iter:.4f}ns/iter "
            f"(err {loop_cost_err_per_iter:.6f}ns/iter)"
        )

        for bench in benches:
            if bench.clock is not baseline.clock:
                self._logger.warning(
                    f"{bench.name}: timed with {bench.clock.name!r} but the baseline "
                    f"was measured with {baseline.clock.name!r}"
                )

        results: list[BenchmarkResult] = []
        for round_index in range(num_rounds):
            for bench in benches:
                self.run_one(bench)
                raw_ns = bench.elapsed_ns
                bench.elapsed_ns, bench.elapsed_err = subtract_baseline(
                    raw_ns,
                    bench.elapsed_err,
                    bench.iters_complete,
                    loop_cost_per_iter,
                    loop_cost_err_per_iter,
                )
                if bench.elapsed_ns == 0.0:
                    self._logger.warning(
                        f"{bench.name}: baseline cost exceeds measured {raw_ns}ns; "
                        f"clamped to zero"
                    )

                result = bench.result(round_index)
                results.append(result)
                observer.on_result(result)

        self._logger.flush()
        return SuiteResult(
            clock=baseline.clock.info(),
            baseline=baseline_result,
            loop_cost_per_iter=loop_cost_per_iter,
            loop_cost_err_per_iter=loop_cost_err_per_iter,
            num_rounds=num_rounds,
            results=results,
        )
