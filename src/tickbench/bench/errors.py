"""Exceptions raised by the benchmark engine."""


class BenchmarkError(Exception):
    """Base class for benchmark engine failures."""


class CalibrationError(BenchmarkError):
    """A clock could not be calibrated, or was used before calibration.

    Fatal for every benchmark on that clock; never retried.
    """


class DegenerateWorkloadError(BenchmarkError):
    """Iteration escalation passed its bound without a trustworthy measurement."""


class WorkloadContractError(BenchmarkError):
    """A workload returned before its iteration counter signalled stop."""
