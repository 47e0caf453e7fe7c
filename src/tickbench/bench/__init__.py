"""Benchmark descriptors, the hot-path counter, the runner and its outer surfaces."""

from .config import (
    RunnerConfig as RunnerConfig,
)
from .counter import (
    CounterState as CounterState,
)
from .counter import (
    IterationCounter as IterationCounter,
)
from .counter import (
    empty_loop as empty_loop,
)
from .errors import (
    BenchmarkError as BenchmarkError,
)
from .errors import (
    CalibrationError as CalibrationError,
)
from .errors import (
    DegenerateWorkloadError as DegenerateWorkloadError,
)
from .errors import (
    WorkloadContractError as WorkloadContractError,
)
from .registry import (
    Benchmark as Benchmark,
)
from .registry import (
    BenchmarkRegistry as BenchmarkRegistry,
)
from .reporting import (
    BenchmarkReporter as BenchmarkReporter,
)
from .result import (
    BenchmarkResult as BenchmarkResult,
)
from .result import (
    SuiteResult as SuiteResult,
)
from .runner import (
    BenchmarkRunner as BenchmarkRunner,
)
from .runner import (
    SuiteObserver as SuiteObserver,
)
from .runner import (
    subtract_baseline as subtract_baseline,
)
