"""Logger levels and settings."""

from enum import IntEnum
from typing import Self

from msgspec import Struct


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


class LoggerConfig(Struct):
    """Settings shared by a logger, its children and its handlers.

    Args:
        base_level: Messages below this level are dropped before formatting.
        do_stderr: Also write flushed lines to stderr.
        str_format: %-style template over ``asctime``, ``levelname``,
            ``name`` and ``message``; ``%(message)s`` is required.
        flush_interval_s: Age after which the next message flushes the buffer.
        buffer_size: Buffered lines that force a flush.
    """

    base_level: LogLevel = LogLevel.INFO
    do_stderr: bool = True
    str_format: str = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
    flush_interval_s: float = 1.0
    buffer_size: int = 10000

    def __post_init__(self):
        if self.flush_interval_s <= 0.0:
            raise ValueError(
                f"Invalid flush interval; expected >0 but got {self.flush_interval_s}"
            )
        if "%(message)s" not in self.str_format:
            raise ValueError("Format string must contain '%(message)s' placeholder")
        if self.buffer_size <= 0:
            raise ValueError(
                f"Invalid buffer size; expected >0 but got {self.buffer_size}"
            )

    @classmethod
    def default(cls) -> Self:
        """INFO and above, to stderr, flushed at least once a second."""
        return cls()
