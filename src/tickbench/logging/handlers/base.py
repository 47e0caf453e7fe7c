from abc import ABC, abstractmethod

from tickbench.logging.config import LoggerConfig


class BaseLogHandler(ABC):
    """Destination for flushed log lines.

    A logger hands each handler its config on construction and again
    whenever the level changes, then calls ``push`` with every flushed
    batch and ``close`` on shutdown.
    """

    def __init__(self) -> None:
        self._primary_config: LoggerConfig | None = None

    @property
    def primary_config(self) -> LoggerConfig | None:
        return self._primary_config

    def add_primary_config(self, config: LoggerConfig) -> None:
        self._primary_config = config

    def close(self) -> None:
        """Release whatever ``push`` holds open; a no-op by default."""

    @abstractmethod
    def push(self, buffer: list[str]) -> None:
        """Write ``buffer``, already formatted and in logging order."""
