"""Hot-path iteration counter driven from inside a benchmarked loop."""

from enum import IntEnum
from typing import Any

from tickbench.bench.errors import CalibrationError
from tickbench.timer.clock import ClockSource


class CounterState(IntEnum):
    NOT_STARTED = 0
    RUNNING = 1
    DONE = 2


class IterationCounter:
    """Counts down iterations and timestamps the first and last transition.

    A workload drives it with::

        def workload(counter):
            while counter.step():
                do_work(counter.arg)

    The first ``step()`` captures the start time and consumes nothing. Each
    following call that still has ``iters`` remaining just decrements; the
    clock is not touched. The call that finds fewer than ``iters`` remaining
    reads the end time, records ``elapsed_ns`` and ``iters_complete`` and
    returns False. ``iters_remaining`` ends negative by at most ``iters``.

    Args:
        clock: A calibrated clock.
        iters_total: Iterations requested for this attempt.
        arg: Opaque payload handed to the workload.

    Raises:
        CalibrationError: If ``clock`` has not been calibrated.
    """

    __slots__ = (
        "_read_ns",
        "iters_total",
        "iters_remaining",
        "started",
        "done",
        "start_time_ns",
        "elapsed_ns",
        "iters_complete",
        "arg",
    )

    def __init__(self, clock: ClockSource, iters_total: int, arg: Any = None) -> None:
        if not clock.calibrated:
            raise CalibrationError(f"Clock {clock.name!r} is not calibrated")
        if iters_total <= 0:
            raise ValueError(f"Invalid iters_total; expected >0 but got {iters_total}")
        self._read_ns = clock.read_ns
        self.iters_total = iters_total
        self.iters_remaining = 0
        self.started = False
        self.done = False
        self.start_time_ns = 0
        self.elapsed_ns = 0
        self.iters_complete = 0
        self.arg = arg

    def step(self, iters: int = 1) -> bool:
        """Account for ``iters`` (>= 1) iterations; False means stop."""
        if self.iters_remaining >= iters:
            self.iters_remaining -= iters
            return True

        if not self.started:
            self.started = True
            self.iters_remaining = self.iters_total
            self.start_time_ns = self._read_ns()
            return True

        if self.done:
            return False

        end = self._read_ns()
        self.elapsed_ns = end - self.start_time_ns
        self.iters_remaining -= iters
        self.iters_complete = self.iters_total - self.iters_remaining
        self.done = True
        return False

    @property
    def state(self) -> CounterState:
        if self.done:
            return CounterState.DONE
        if self.started:
            return CounterState.RUNNING
        return CounterState.NOT_STARTED

    def __repr__(self) -> str:
        return (
            f"IterationCounter(state={self.state.name}, iters_total={self.iters_total}, "
            f"iters_remaining={self.iters_remaining}, elapsed_ns={self.elapsed_ns})"
        )


def empty_loop(counter: IterationCounter) -> None:
    """Baseline workload: nothing but the counter itself."""
    while counter.step():
        pass
