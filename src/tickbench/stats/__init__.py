"""Descriptive statistics, outlier trimming and error combination."""

from .core import (
    DistributionShape as DistributionShape,
)
from .core import (
    NormalityResult as NormalityResult,
)
from .core import (
    basic_stats as basic_stats,
)
from .core import (
    combine_quadrature as combine_quadrature,
)
from .core import (
    detect_normal as detect_normal,
)

__all__ = [
    "DistributionShape",
    "NormalityResult",
    "basic_stats",
    "combine_quadrature",
    "detect_normal",
]
