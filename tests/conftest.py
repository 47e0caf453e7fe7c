from collections.abc import Callable

import pytest

from tickbench.bench import IterationCounter
from tickbench.logging import BaseLogHandler, Logger, LoggerConfig, LogLevel
from tickbench.timer import Calibrator, SimulatedClock

Workload = Callable[[IterationCounter], None]


def pytest_configure(config: pytest.Config) -> None:
    """Register shared markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (real clocks, long loops)"
    )


class RecordingHandler(BaseLogHandler):
    """Keeps every pushed line in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.lines: list[str] = []
        self.pushes = 0
        self.closed = False

    def push(self, buffer: list[str]) -> None:
        self.pushes += 1
        self.lines.extend(buffer)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def quiet_logger() -> Logger:
    """Logger that only keeps errors and never writes to stderr."""
    return Logger(
        name="test",
        config=LoggerConfig(base_level=LogLevel.ERROR, do_stderr=False),
    )


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def recording_logger(recorder: RecordingHandler) -> Logger:
    """Warning-level logger capturing into ``recorder``."""
    return Logger(
        name="test",
        config=LoggerConfig(base_level=LogLevel.WARNING, do_stderr=False),
        handlers=[recorder],
    )


@pytest.fixture
def calibrate(quiet_logger: Logger) -> Callable[[SimulatedClock], SimulatedClock]:
    """Return a helper that calibrates a clock and asserts it converged."""

    def _calibrate(clock: SimulatedClock) -> SimulatedClock:
        assert Calibrator(logger=quiet_logger).calibrate(clock)
        return clock

    return _calibrate


@pytest.fixture
def frozen_clock(calibrate) -> SimulatedClock:
    """Calibrated clock that only moves when a workload advances it.

    Every read delta is zero, so calibration settles on get_cost 0 and
    instr_err 2 (twice the 1ns precision).
    """
    return calibrate(SimulatedClock(step_ns=0))


@pytest.fixture
def make_workload() -> Callable[[SimulatedClock, int], Workload]:
    """Return a factory for workloads costing a fixed number of ns per step."""

    def _make(clock: SimulatedClock, cost_ns: int) -> Workload:
        def workload(counter: IterationCounter) -> None:
            while counter.step():
                clock.advance(cost_ns)

        return workload

    return _make
