"""Tests for clock calibration."""

import itertools

import numpy as np
import pytest

from tickbench.logging import Logger, LoggerConfig, LogLevel
from tickbench.stats import DistributionShape
from tickbench.timer import (
    CalibrationConfig,
    Calibrator,
    ClockSource,
    SimulatedClock,
    perf_counter_clock,
    sample_read_deltas,
)

# Three quick attempts over a small ring.
TINY_CONFIG = CalibrationConfig(warmup_reads=0, ring_size=64, batch_step=1, max_batch=4)


def cycling_clock(steps: list[int], precision_ns: int = 1) -> ClockSource:
    """Clock whose consecutive reads differ by ``steps``, repeated."""
    now = 0
    deltas = itertools.cycle(steps)

    def read_ns() -> int:
        nonlocal now
        now += next(deltas)
        return now

    return ClockSource("cycling", read_ns, precision_ns)


class TestCalibrationConfig:
    """Validate CalibrationConfig inputs."""

    def test_default_batches(self):
        cfg = CalibrationConfig.default()
        assert list(cfg.batch_sizes) == [100, 200, 300, 400, 500, 600, 700, 800, 900]
        assert cfg.ring_size == 1024
        assert cfg.confidence_z == 1.96

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"ring_size": 1000},
            {"ring_size": 1},
            {"batch_step": 0},
            {"max_batch": 100},
            {"sigma": 0.0},
            {"max_outlier_fraction": 1.1},
            {"normal_threshold": 0.0},
            {"warmup_reads": -1},
            {"confidence_z": -1.0},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            CalibrationConfig(**kwargs)


class TestSampleReadDeltas:
    """Ring-buffered read sampling."""

    def test_constant_step(self):
        deltas = sample_read_deltas(SimulatedClock(step_ns=7), batch=2, ring_size=16)
        assert deltas.dtype == np.float64
        assert deltas.shape == (15,)
        assert np.all(deltas == 7.0)

    def test_ring_ends_in_read_order(self):
        clock = SimulatedClock(step_ns=1)
        deltas = sample_read_deltas(clock, batch=3, ring_size=8)
        # Only the last ring's worth of reads survives, still ascending.
        assert np.all(deltas == 1.0)
        assert clock.now_ns == 24


class TestCalibrator:
    """Acceptance rules and derived error figures."""

    def test_fixed_step_clock(self, quiet_logger):
        clock = SimulatedClock(step_ns=100)
        calibrator = Calibrator(logger=quiet_logger)
        assert calibrator.calibrate(clock)

        assert clock.calibrated
        assert clock.get_cost_ns == 100.0
        # 2 * (precision + z * 0 + get_cost / 2)
        assert clock.instr_err == 102.0
        assert calibrator.attempts == 1
        assert calibrator.last_result.shape == DistributionShape.NORMAL

    def test_frozen_clock_accepted_within_precision(self, quiet_logger):
        clock = SimulatedClock(step_ns=0)
        calibrator = Calibrator(logger=quiet_logger)
        assert calibrator.calibrate(clock)

        assert calibrator.last_result.shape == DistributionShape.NOT_NORMAL
        assert clock.get_cost_ns == 0.0
        assert clock.instr_err == 2.0

    def test_rare_spikes_are_trimmed(self, quiet_logger):
        clock = cycling_clock([100] * 63 + [5_000])
        calibrator = Calibrator(logger=quiet_logger)
        assert calibrator.calibrate(clock)

        assert calibrator.last_result.outliers > 0
        assert calibrator.last_result.shape == DistributionShape.NORMAL
        assert clock.get_cost_ns == 100.0
        assert clock.instr_err == 102.0

    def test_jitter_widens_error(self, quiet_logger):
        clock = cycling_clock([99, 100, 101])
        assert Calibrator(logger=quiet_logger).calibrate(clock)
        assert clock.get_cost_ns > 100.0
        assert clock.instr_err > 102.0

    def test_failure_leaves_clock_uncalibrated(self, quiet_logger):
        # Zero precision leaves no tolerance for a non-normal sample.
        clock = SimulatedClock(step_ns=0, precision_ns=0)
        calibrator = Calibrator(config=TINY_CONFIG, logger=quiet_logger)
        assert not calibrator.calibrate(clock)

        assert not clock.calibrated
        assert calibrator.attempts == len(TINY_CONFIG.batch_sizes) == 3

    def test_recalibration_resets_previous_state(self, quiet_logger):
        clock = SimulatedClock(step_ns=100, precision_ns=0)
        assert Calibrator(config=TINY_CONFIG, logger=quiet_logger).calibrate(clock)
        assert clock.calibrated

        clock.step_ns = 0
        assert not Calibrator(config=TINY_CONFIG, logger=quiet_logger).calibrate(clock)
        assert not clock.calibrated
        assert clock.instr_err == 0.0

    def test_attempts_are_logged(self, recorder):
        logger = Logger(
            name="calibrate",
            config=LoggerConfig(base_level=LogLevel.DEBUG, do_stderr=False),
            handlers=[recorder],
        )
        assert Calibrator(config=TINY_CONFIG, logger=logger).calibrate(SimulatedClock())
        assert any("batch=1" in line for line in recorder.lines)
        assert any("instr_err=102.000ns" in line for line in recorder.lines)

    def test_failure_is_logged_as_error(self, recorder):
        logger = Logger(
            name="calibrate",
            config=LoggerConfig(base_level=LogLevel.WARNING, do_stderr=False),
            handlers=[recorder],
        )
        clock = SimulatedClock(step_ns=0, precision_ns=0)
        assert not Calibrator(config=TINY_CONFIG, logger=logger).calibrate(clock)
        assert any("[ERROR]" in line and "3 attempts" in line for line in recorder.lines)

    @pytest.mark.slow
    def test_real_clock_terminates(self, quiet_logger):
        clock = perf_counter_clock()
        calibrator = Calibrator(logger=quiet_logger)
        accepted = calibrator.calibrate(clock)

        assert 1 <= calibrator.attempts <= len(calibrator.config.batch_sizes)
        assert clock.calibrated is accepted
        if accepted:
            assert clock.get_cost_ns >= 0.0
            assert clock.instr_err >= 2.0 * clock.precision_ns
