"""Clock calibration: read cost, jitter and instrumentation error."""

import numpy as np
from numpy.typing import NDArray

from tickbench.logging import Logger, default_logger
from tickbench.stats import DistributionShape, NormalityResult, detect_normal
from tickbench.timer.clock import ClockSource
from tickbench.timer.config import CalibrationConfig


def sample_read_deltas(clock: ClockSource, batch: int, ring_size: int) -> NDArray[np.float64]:
    """Take ``batch * ring_size`` back-to-back reads and return the deltas of the last ``ring_size``.

    Reads land in a ring indexed by ``i & (ring_size - 1)``; because the read
    count is a multiple of the ring size the ring ends in read order.
    """
    read_ns = clock.read_ns
    mask = ring_size - 1
    ring = [0] * ring_size
    for i in range(batch * ring_size):
        ring[i & mask] = read_ns()
    return np.diff(np.array(ring, dtype=np.int64)).astype(np.float64)


class Calibrator:
    """Derives read cost and instrumentation error for a ClockSource.

    Each attempt samples the deltas between consecutive reads and trims
    them with ``detect_normal``. A sample is accepted when it is normal,
    or when it is not swamped by outliers and its mean and median agree to
    within the clock's precision (integer clocks have integer medians).
    Attempts grow the batch multiplier until ``config.max_batch``.

    On acceptance::

        get_cost_ns = mean + z * stddev
        instr_err   = 2 * (precision_ns + z * stddev + get_cost_ns / 2)

    Args:
        config: Sampling and threshold settings.
        logger: Destination for attempt diagnostics.
    """

    def __init__(
        self,
        config: CalibrationConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        self.config = config if config is not None else CalibrationConfig.default()
        self._logger = logger if logger is not None else default_logger("tickbench.timer")
        self.last_result: NormalityResult | None = None
        self.attempts = 0

    def _accepts(self, clock: ClockSource, result: NormalityResult) -> bool:
        if result.shape == DistributionShape.NORMAL:
            return True
        if result.shape == DistributionShape.TOO_MANY_OUTLIERS:
            return False
        return abs(result.mean - result.median) < clock.precision_ns

    def calibrate(self, clock: ClockSource) -> bool:
        """Calibrate ``clock`` in place.

        Returns:
            True when calibration converged. On False the clock is left
            with ``calibrated = False`` and must not be used for benchmarks.
        """
        cfg = self.config
        clock.reset_calibration()
        self.last_result = None
        self.attempts = 0

        read_ns = clock.read_ns
        for _ in range(cfg.warmup_reads):
            read_ns()

        accepted = None
        for batch in cfg.batch_sizes:
            self.attempts += 1
            deltas = sample_read_deltas(clock, batch, cfg.ring_size)
            result = detect_normal(
                deltas,
                sigma=cfg.sigma,
                max_outlier_fraction=cfg.max_outlier_fraction,
                normal_threshold=cfg.normal_threshold,
            )
            self.last_result = result
            self._logger.debug(
                f"{clock.name}: batch={batch} shape={result.shape.name} "
                f"mean={result.mean:.3f}ns median={result.median:.3f}ns "
                f"stddev={result.stddev:.3f}ns outliers={result.outliers}"
            )
            if self._accepts(clock, result):
                accepted = result
                break

        if accepted is None:
            self._logger.error(
                f"{clock.name}: calibration did not converge after {self.attempts} attempts"
            )
            self._logger.flush()
            return False

        jitter_ns = cfg.confidence_z * accepted.stddev
        clock.get_cost_ns = accepted.mean + jitter_ns
        clock.instr_err = 2.0 * (clock.precision_ns + jitter_ns + clock.get_cost_ns / 2.0)
        clock.calibrated = True

        self._logger.info(
            f"{clock.name}: precision={clock.precision_ns}ns "
            f"get_cost={clock.get_cost_ns:.3f}ns instr_err={clock.instr_err:.3f}ns"
        )
        self._logger.flush()
        return True
