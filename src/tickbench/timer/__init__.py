"""Clock sources and their calibration."""

from .calibrate import (
    Calibrator as Calibrator,
)
from .calibrate import (
    sample_read_deltas as sample_read_deltas,
)
from .clock import (
    CLOCK_NAMES as CLOCK_NAMES,
)
from .clock import (
    ClockInfo as ClockInfo,
)
from .clock import (
    ClockSource as ClockSource,
)
from .clock import (
    SimulatedClock as SimulatedClock,
)
from .clock import (
    clock_from_name as clock_from_name,
)
from .clock import (
    perf_counter_clock as perf_counter_clock,
)
from .config import (
    CalibrationConfig as CalibrationConfig,
)
