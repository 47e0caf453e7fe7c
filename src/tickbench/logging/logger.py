"""Synchronous single-process logger implementation."""

import sys

from tickbench.logging.config import LoggerConfig, LogLevel
from tickbench.logging.handlers import BaseLogHandler
from tickbench.time.time import time_iso8601, time_s


class Logger:
    """A synchronous logger that buffers messages.

    The buffer is pushed to stderr and the configured handlers once it
    fills, once the flush interval passes, on any error-level message, or
    on an explicit ``flush()``. Nothing runs in the background, so a
    message never lands in the middle of a timed region.
    """

    def __init__(
        self,
        name: str = "",
        config: LoggerConfig | None = None,
        handlers: list[BaseLogHandler] | None = None,
    ) -> None:
        """
        Args:
            name: Shown in the ``%(name)s`` field.
            config: Level, format and flush policy; shared with ``child()`` loggers.
            handlers: Receive every flushed batch after stderr.

        Raises:
            TypeError: If a handler does not inherit from BaseLogHandler.
        """
        self._name = name
        self._config = config if config is not None else LoggerConfig.default()
        self._handlers = handlers if handlers is not None else []

        for handler in self._handlers:
            if not isinstance(handler, BaseLogHandler):
                raise TypeError(
                    f"Invalid handler class; expected BaseLogHandler but got {type(handler)}"
                )
            handler.add_primary_config(self._config)

        self._buffer: list[str] = []
        self._buffer_start_time_s = time_s()
        self._is_running = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def base_level(self) -> LogLevel:
        return self._config.base_level

    def child(self, name: str) -> "Logger":
        """Create a logger sharing this logger's config and handlers under a new name."""
        return Logger(name=name, config=self._config, handlers=self._handlers)

    def flush(self) -> None:
        """Push buffered lines to stderr (if enabled), then to every handler."""
        if not self._buffer:
            return

        buffer = self._buffer
        self._buffer = []
        self._buffer_start_time_s = time_s()

        if self._config.do_stderr:
            sys.stderr.write("\n".join(buffer) + "\n")
            sys.stderr.flush()

        for handler in self._handlers:
            handler.push(buffer)

    def _process_log(self, level: LogLevel, msg: str) -> None:
        log_msg = self._config.str_format % {
            "asctime": time_iso8601(),
            "name": self._name,
            "levelname": level.name,
            "message": msg,
        }
        self._buffer.append(log_msg)

        is_buffer_full = len(self._buffer) >= self._config.buffer_size
        is_buffer_old = (
            time_s() - self._buffer_start_time_s
        ) >= self._config.flush_interval_s
        if level >= LogLevel.ERROR or is_buffer_full or is_buffer_old:
            self.flush()

    def set_log_level(self, level: LogLevel) -> None:
        """Change the level for this logger, its children and its handlers."""
        self.debug(f"Log level {self._config.base_level.name} -> {level.name}")
        self._config.base_level = level
        for handler in self._handlers:
            handler.add_primary_config(self._config)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return self._is_running and self._config.base_level <= level

    def trace(self, msg: str) -> None:
        if self.is_enabled_for(LogLevel.TRACE):
            self._process_log(LogLevel.TRACE, msg)

    def debug(self, msg: str) -> None:
        if self.is_enabled_for(LogLevel.DEBUG):
            self._process_log(LogLevel.DEBUG, msg)

    def info(self, msg: str) -> None:
        if self.is_enabled_for(LogLevel.INFO):
            self._process_log(LogLevel.INFO, msg)

    def warning(self, msg: str) -> None:
        if self.is_enabled_for(LogLevel.WARNING):
            self._process_log(LogLevel.WARNING, msg)

    def error(self, msg: str) -> None:
        if self.is_enabled_for(LogLevel.ERROR):
            self._process_log(LogLevel.ERROR, msg)

    def shutdown(self) -> None:
        """Flush remaining messages, close handlers and stop accepting logs."""
        self.flush()
        self._is_running = False
        for handler in self._handlers:
            handler.close()


def default_logger(name: str) -> Logger:
    """Logger used when a component is not handed one: warnings and errors to stderr."""
    return Logger(name=name, config=LoggerConfig(base_level=LogLevel.WARNING))
