"""Microbenchmarking with calibrated clocks and error-bounded, baseline-corrected results."""

from .bench import (
    Benchmark as Benchmark,
)
from .bench import (
    BenchmarkError as BenchmarkError,
)
from .bench import (
    BenchmarkRegistry as BenchmarkRegistry,
)
from .bench import (
    BenchmarkReporter as BenchmarkReporter,
)
from .bench import (
    BenchmarkResult as BenchmarkResult,
)
from .bench import (
    BenchmarkRunner as BenchmarkRunner,
)
from .bench import (
    CalibrationError as CalibrationError,
)
from .bench import (
    DegenerateWorkloadError as DegenerateWorkloadError,
)
from .bench import (
    IterationCounter as IterationCounter,
)
from .bench import (
    RunnerConfig as RunnerConfig,
)
from .bench import (
    SuiteResult as SuiteResult,
)
from .bench import (
    WorkloadContractError as WorkloadContractError,
)
from .logging import (
    Logger as Logger,
)
from .logging import (
    LoggerConfig as LoggerConfig,
)
from .logging import (
    LogLevel as LogLevel,
)
from .stats import (
    basic_stats as basic_stats,
)
from .stats import (
    combine_quadrature as combine_quadrature,
)
from .stats import (
    detect_normal as detect_normal,
)
from .timer import (
    CalibrationConfig as CalibrationConfig,
)
from .timer import (
    Calibrator as Calibrator,
)
from .timer import (
    ClockSource as ClockSource,
)
from .timer import (
    SimulatedClock as SimulatedClock,
)
from .timer import (
    clock_from_name as clock_from_name,
)

__all__ = [
    # Benchmarks
    "Benchmark",
    "BenchmarkRegistry",
    "BenchmarkRunner",
    "BenchmarkReporter",
    "BenchmarkResult",
    "IterationCounter",
    "RunnerConfig",
    "SuiteResult",
    # Errors
    "BenchmarkError",
    "CalibrationError",
    "DegenerateWorkloadError",
    "WorkloadContractError",
    # Clocks
    "CalibrationConfig",
    "Calibrator",
    "ClockSource",
    "SimulatedClock",
    "clock_from_name",
    # Statistics
    "basic_stats",
    "combine_quadrature",
    "detect_normal",
    # Logging
    "Logger",
    "LoggerConfig",
    "LogLevel",
]
