"""Clock sources and their calibration state."""

import math
import time
from typing import Callable

from msgspec import Struct

_CLOCK_READERS: dict[str, Callable[[], int]] = {
    "perf_counter": time.perf_counter_ns,
    "monotonic": time.monotonic_ns,
    "process_time": time.process_time_ns,
    "thread_time": time.thread_time_ns,
}

CLOCK_NAMES: tuple[str, ...] = tuple(_CLOCK_READERS)


class ClockInfo(Struct, frozen=True):
    """Snapshot of a clock's calibration state."""

    name: str
    precision_ns: int
    get_cost_ns: float
    instr_err: float
    calibrated: bool


class ClockSource:
    """A monotonic nanosecond clock plus the error figures derived for it.

    ``read_ns`` is stored as a plain attribute so the hot path calls the
    underlying clock function directly. ``get_cost_ns`` and ``instr_err``
    are only meaningful once ``calibrated`` is True.

    Args:
        name: Human readable clock name.
        read_ns: Zero-argument callable returning an integer nanosecond count.
        precision_ns: Resolution of the clock in nanoseconds.
    """

    __slots__ = (
        "_name",
        "read_ns",
        "precision_ns",
        "get_cost_ns",
        "instr_err",
        "calibrated",
    )

    def __init__(
        self,
        name: str,
        read_ns: Callable[[], int],
        precision_ns: int = 1,
    ) -> None:
        if precision_ns < 0:
            raise ValueError(
                f"Invalid precision_ns; expected >=0 but got {precision_ns}"
            )
        self._name = name
        self.read_ns = read_ns
        self.precision_ns = int(precision_ns)
        self.reset_calibration()

    @property
    def name(self) -> str:
        return self._name

    def reset_calibration(self) -> None:
        """Forget any previous calibration."""
        self.get_cost_ns = 0.0
        self.instr_err = 0.0
        self.calibrated = False

    def info(self) -> ClockInfo:
        return ClockInfo(
            name=self._name,
            precision_ns=self.precision_ns,
            get_cost_ns=self.get_cost_ns,
            instr_err=self.instr_err,
            calibrated=self.calibrated,
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, precision_ns={self.precision_ns}, "
            f"get_cost_ns={self.get_cost_ns:.3f}, instr_err={self.instr_err:.3f}, "
            f"calibrated={self.calibrated})"
        )


class SimulatedClock(ClockSource):
    """Deterministic clock returning ``start, start+step, start+2*step, ...``.

    ``advance()`` moves time forward without a read, which lets a workload
    model a fixed per-iteration cost.
    """

    __slots__ = ("_now_ns", "step_ns")

    def __init__(
        self,
        start_ns: int = 0,
        step_ns: int = 100,
        precision_ns: int = 1,
        name: str = "simulated",
    ) -> None:
        if step_ns < 0:
            raise ValueError(f"Invalid step_ns; expected >=0 but got {step_ns}")
        self._now_ns = start_ns
        self.step_ns = step_ns
        super().__init__(name, self._read, precision_ns)

    def _read(self) -> int:
        now = self._now_ns
        self._now_ns += self.step_ns
        return now

    @property
    def now_ns(self) -> int:
        return self._now_ns

    def advance(self, ns: int) -> None:
        if ns < 0:
            raise ValueError(f"Cannot move a monotonic clock backwards by {ns}ns")
        self._now_ns += ns


def _resolution_ns(name: str) -> int:
    resolution_s = time.get_clock_info(name).resolution
    # Guard against 1e-9 * 1e9 landing a hair above 1.0.
    return max(1, math.ceil(resolution_s * 1e9 - 1e-6))


def clock_from_name(name: str) -> ClockSource:
    """Build an uncalibrated ClockSource for one of ``CLOCK_NAMES``.

    Raises:
        ValueError: If the name is unknown.
    """
    reader = _CLOCK_READERS.get(name)
    if reader is None:
        raise ValueError(
            f"Unknown clock {name!r}; expected one of {', '.join(CLOCK_NAMES)}"
        )
    return ClockSource(name, reader, _resolution_ns(name))


def perf_counter_clock() -> ClockSource:
    """The default benchmark clock: ``time.perf_counter_ns``."""
    return clock_from_name("perf_counter")
