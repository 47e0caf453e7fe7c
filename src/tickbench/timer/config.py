"""Calibration settings."""

from typing import Self

from msgspec import Struct


class CalibrationConfig(Struct):
    """Settings for ``Calibrator``.

    Args:
        warmup_reads: Clock reads discarded before sampling.
        ring_size: Number of reads kept per batch; must be a power of two.
        batch_step: First batch multiplier and the increment between attempts.
        max_batch: Exclusive upper bound on the batch multiplier.
        sigma: Outlier band, in standard deviations.
        max_outlier_fraction: Outlier share above which a sample is rejected.
        normal_threshold: Relative mean/median distance accepted as normal.
        confidence_z: One-sided z-score applied to the read jitter.
    """

    warmup_reads: int = 100
    ring_size: int = 1024
    batch_step: int = 100
    max_batch: int = 1000
    sigma: float = 3.0
    max_outlier_fraction: float = 0.25
    normal_threshold: float = 0.005
    confidence_z: float = 1.96

    def __post_init__(self):
        """Validate sampling sizes and statistical thresholds."""
        if self.warmup_reads < 0:
            raise ValueError("Invalid warmup_reads; must be >= 0")
        if self.ring_size < 2 or self.ring_size & (self.ring_size - 1):
            raise ValueError("Invalid ring_size; must be a power of two >= 2")
        if self.batch_step <= 0:
            raise ValueError("Invalid batch_step; must be greater than 0")
        if self.max_batch <= self.batch_step:
            raise ValueError("Invalid max_batch; must be greater than batch_step")
        if self.sigma <= 0.0:
            raise ValueError("Invalid sigma; must be greater than 0")
        if not (0.0 <= self.max_outlier_fraction <= 1.0):
            raise ValueError("Invalid max_outlier_fraction; must be in [0, 1]")
        if self.normal_threshold <= 0.0:
            raise ValueError("Invalid normal_threshold; must be greater than 0")
        if self.confidence_z < 0.0:
            raise ValueError("Invalid confidence_z; must be >= 0")

    @classmethod
    def default(cls) -> Self:
        """Return the standard settings: 100..900 x 1024 reads, 3-sigma trimming."""
        return cls()

    @property
    def batch_sizes(self) -> range:
        return range(self.batch_step, self.max_batch, self.batch_step)
