from time import gmtime, strftime
from time import time as _wall_s
from time import time_ns as _wall_ns


def time_s() -> float:
    """Wall-clock seconds since the epoch. Not for benchmarking; see ``tickbench.timer``."""
    return _wall_s()


def time_ns() -> int:
    """Wall-clock nanoseconds since the epoch."""
    return _wall_ns()


def time_iso8601() -> str:
    """
    Format the current wall-clock time for log lines.

    Returns
    -------
    str
        UTC with millisecond precision and a "Z" suffix,
        e.g. "2024-03-01T12:30:05.123Z".
    """
    secs, rem_ns = divmod(time_ns(), 1_000_000_000)
    return strftime("%Y-%m-%dT%H:%M:%S", gmtime(secs)) + f".{rem_ns // 1_000_000:03d}Z"
