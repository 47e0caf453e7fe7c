"""Synchronous buffered logging used by the calibrator, runner and CLI."""

from .config import (
    LoggerConfig as LoggerConfig,
)
from .config import (
    LogLevel as LogLevel,
)
from .handlers import (
    BaseLogHandler as BaseLogHandler,
)
from .handlers import (
    FileLogHandler as FileLogHandler,
)
from .logger import (
    Logger as Logger,
)
from .logger import (
    default_logger as default_logger,
)
