"""Report formatting for benchmark results.

Renders calibrated clocks and corrected results as fixed-width lines
(``[t]`` for timers, ``[b]`` for benchmarks) and exports suites as JSON.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

import msgspec

from tickbench.bench.result import BenchmarkResult, SuiteResult
from tickbench.bench.runner import SuiteObserver

if TYPE_CHECKING:
    from tickbench.timer.clock import ClockInfo

TIME_UNITS = ("ns", "us", "ms", "s")


def scale_ns(value_ns: float) -> tuple[float, str]:
    """Step a nanosecond value up through us, ms and s while it exceeds 1000."""
    unit = 0
    while value_ns > 1000.0 and unit < len(TIME_UNITS) - 1:
        value_ns /= 1000.0
        unit += 1
    return value_ns, TIME_UNITS[unit]


def format_timer_header() -> str:
    return f"[t] {'TIMER':>10} {'PRECISION':>10} {'GET-COST':>10} {'ERROR':>10}"


def format_timer(clock: ClockInfo) -> str:
    return (
        f"[t] {clock.name:>10} {clock.precision_ns:>8}ns "
        f"{clock.get_cost_ns:>8.0f}ns {clock.instr_err:>8.3f}ns"
    )


def format_result_header() -> str:
    return f"[b] {'NAME':>10} {'ITERS':>10} {'TIME':>10} {'TIME/iter':>25}"


def format_result(result: BenchmarkResult) -> str:
    per_iter, unit = scale_ns(result.per_iter)
    per_iter_col = f"{per_iter:.4g}{unit}"
    return (
        f"[b] {result.name:>10} {result.iters_complete:>10} "
        f"{result.elapsed_ns / 1e9:>10.4f} {per_iter_col:>12} "
        f"err {result.per_iter_err:>6.4f}ns"
    )


def suite_to_json(suite: SuiteResult) -> bytes:
    return msgspec.json.encode(suite)


def suite_from_json(payload: bytes) -> SuiteResult:
    return msgspec.json.decode(payload, type=SuiteResult)


class BenchmarkReporter(SuiteObserver):
    """Prints suite progress as it happens.

    Args:
        stream: Output stream; defaults to stderr.
        print_timers: Print the calibrated clock before the results.
        print_empty_loop_baseline: Print the empty-loop measurement.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        print_timers: bool = False,
        print_empty_loop_baseline: bool = False,
    ) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.print_timers = print_timers
        self.print_empty_loop_baseline = print_empty_loop_baseline

    def _print(self, line: str) -> None:
        print(line, file=self.stream)

    def on_calibrated(self, clock: ClockInfo) -> None:
        if self.print_timers:
            self._print(format_timer_header())
            self._print(format_timer(clock))
            self._print("[t] " + "-" * 32)

    def on_baseline(self, baseline: BenchmarkResult) -> None:
        self._print(format_result_header())
        if self.print_empty_loop_baseline:
            self._print(format_result(baseline))

    def on_result(self, result: BenchmarkResult) -> None:
        self._print(format_result(result))

    def print_full_report(self, suite: SuiteResult) -> None:
        """Print a finished suite the same way it would have streamed."""
        self.on_calibrated(suite.clock)
        self.on_baseline(suite.baseline)
        for result in suite.results:
            self.on_result(result)
