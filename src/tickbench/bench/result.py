"""Immutable result records handed to reporting."""

from msgspec import Struct

from tickbench.timer.clock import ClockInfo


class BenchmarkResult(Struct, frozen=True):
    """One accepted measurement of one benchmark.

    ``elapsed_ns`` and ``elapsed_err`` cover all ``iters_complete``
    iterations; for suite results the empty-loop cost is already removed.
    """

    name: str
    iters_total: int
    iters_complete: int
    elapsed_ns: float
    elapsed_err: float
    round_index: int = 0

    @property
    def per_iter(self) -> float:
        return self.elapsed_ns / self.iters_complete

    @property
    def per_iter_err(self) -> float:
        return self.elapsed_err / self.iters_complete


class SuiteResult(Struct, frozen=True):
    """Everything a suite run produced, in execution order."""

    clock: ClockInfo
    baseline: BenchmarkResult
    loop_cost_per_iter: float
    loop_cost_err_per_iter: float
    num_rounds: int
    results: list[BenchmarkResult]

    def by_name(self, name: str) -> list[BenchmarkResult]:
        return [result for result in self.results if result.name == name]
