"""Runner settings."""

from typing import Self

from msgspec import Struct


class RunnerConfig(Struct):
    """Settings for ``BenchmarkRunner``.

    Args:
        num_runs: Rounds over the registered benchmarks.
        print_timers: Report the calibrated clock before the results.
        print_empty_loop_baseline: Report the empty-loop baseline measurement.
        initial_iters: Iteration count of the first attempt.
        growth_factor: Multiplier applied after each rejected attempt.
        min_elapsed_ns: Absolute floor an accepted attempt must exceed.
        max_iters: Largest iteration count attempted before giving up. At
            the default, a workload that never advances the clock fails after
            about 1.1e8 counter steps.
    """

    num_runs: int = 1
    print_timers: bool = False
    print_empty_loop_baseline: bool = False
    initial_iters: int = 100
    growth_factor: int = 10
    min_elapsed_ns: float = 1e6
    max_iters: int = 10**8

    def __post_init__(self):
        """Validate run counts and escalation bounds."""
        if self.num_runs <= 0:
            raise ValueError("Invalid num_runs; must be greater than 0")
        if self.initial_iters <= 0:
            raise ValueError("Invalid initial_iters; must be greater than 0")
        if self.growth_factor < 2:
            raise ValueError("Invalid growth_factor; must be at least 2")
        if self.min_elapsed_ns < 0.0:
            raise ValueError("Invalid min_elapsed_ns; must be >= 0")
        if self.max_iters < self.initial_iters:
            raise ValueError("Invalid max_iters; must be >= initial_iters")

    @classmethod
    def default(cls) -> Self:
        """Return one round, 100 starting iterations growing 10x, 1ms floor."""
        return cls()
