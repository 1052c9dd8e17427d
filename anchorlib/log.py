"""A compact line logger with levels, module prefixes and timestamps."""

from __future__ import annotations

import contextlib
import os
import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, ContextManager, Optional


class Level(IntEnum):
    """Logging levels; DEFAULT means "use the system's default level"."""

    DEFAULT = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_LEVEL_PREFIX = {
    Level.DEFAULT: "????? ",
    Level.DEBUG: "DEBUG ",
    Level.INFO: "INFO  ",
    Level.WARN: "WARN  ",
    Level.ERROR: "ERROR ",
}
_LEVEL_PREFIX_LENGTH = 6
_FILE_NAME_LENGTH = 32
_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_MS_PER_DAY = 86_400_000


def is_leap_year(year: int) -> bool:
    """Return whether the given year is a Gregorian leap year."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


@dataclass
class TimestampComponents:
    """A millisecond timestamp split into clock (and optionally date) parts."""

    hour: int
    minute: int
    second: int
    ms: int
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None

    def __str__(self) -> str:
        clock = f"{self.minute:02d}:{self.second:02d}.{self.ms:03d}"
        if self.year is None:
            return f"{self.hour:3d}:{clock}"
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d} {self.hour:02d}:{clock}"


def timestamp_components(timestamp: int, use_datetime: bool = False) -> TimestampComponents:
    """Split a timestamp in ms into components.

    Without ``use_datetime`` the timestamp is an uptime and the hour count is
    unbounded; with it, the timestamp is ms since the Unix epoch.
    """
    remainder = timestamp % _MS_PER_DAY if use_datetime else timestamp
    remainder, ms = divmod(remainder, 1000)
    remainder, second = divmod(remainder, 60)
    hour, minute = divmod(remainder, 60)
    if not use_datetime:
        return TimestampComponents(hour, minute, second, ms)

    days = timestamp // _MS_PER_DAY + 1
    year = 1970
    days_in_year = 365
    while days > days_in_year:
        days -= days_in_year
        year += 1
        days_in_year = 366 if is_leap_year(year) else 365

    month = 0
    for number, length in enumerate(_DAYS_PER_MONTH, start=1):
        if number == 2 and is_leap_year(year):
            length = 29
        if days <= length:
            month = number
            break
        days -= length
    return TimestampComponents(hour, minute, second, ms, year, month, days)


@dataclass
class LogLine:
    """Everything captured for one log call, before formatting."""

    level: Level
    file: str
    line: int
    module_prefix: Optional[str]
    timestamp: int
    timestamp_components: TimestampComponents
    fmt: str
    args: tuple = ()

    def message(self) -> str:
        """The log message with its printf-style arguments applied."""
        return self.fmt % self.args if self.args else self.fmt


class LogSystem:
    """The logging back end that filters, formats and writes log lines."""

    def __init__(
        self,
        write_function: Optional[Callable[[str], Any]] = None,
        time_ms_function: Optional[Callable[[], int]] = None,
        default_level: Level = Level.DEBUG,
        lock: Optional[ContextManager[Any]] = None,
        handler: Optional[Callable[[LogLine], Any]] = None,
        use_datetime: bool = False,
        max_msg_length: int = 128,
    ) -> None:
        default_level = Level(default_level)
        if default_level == Level.DEFAULT:
            raise ValueError("default_level must be a concrete level")
        if handler is None and write_function is None:
            raise ValueError("either write_function or handler must be given")
        if max_msg_length < 0:
            raise ValueError("max_msg_length must not be negative")
        self.write_function = write_function
        self.time_ms_function = time_ms_function
        self.default_level = default_level
        self.handler = handler
        self.use_datetime = use_datetime
        self.max_msg_length = max_msg_length
        self._lock = lock if lock is not None else contextlib.nullcontext()

    @property
    def max_line_length(self) -> int:
        """The default buffer size used when formatting a line."""
        time_length = 24 if self.use_datetime else 14
        return (
            self.max_msg_length + _LEVEL_PREFIX_LENGTH + time_length + _FILE_NAME_LENGTH + 1
        )

    def log_line(
        self,
        level: Level,
        file: str,
        line: int,
        module_prefix: Optional[str],
        fmt: str,
        *args: Any,
    ) -> None:
        """Log a captured line, filtered by the default level."""
        if level < self.default_level:
            return
        self._emit(level, file, line, module_prefix, fmt, args)

    def log(
        self,
        level: Level,
        file: str,
        line: int,
        module_prefix: Optional[str],
        fmt: str,
        *args: Any,
    ) -> None:
        """Log a line unconditionally (filtering is up to the caller)."""
        self._emit(level, file, line, module_prefix, fmt, args)

    def level_is_active(self, logger: "Logger", level: Level) -> bool:
        """Whether the logger would emit a line at the given level."""
        minimum = self.default_level if logger.level == Level.DEFAULT else logger.level
        return level >= minimum

    def format_line(self, log_line: LogLine, size: Optional[int] = None) -> str:
        """Format a log line into at most ``size - 1`` characters.

        The result always ends in a newline, even if the message has to be
        cut short for it.
        """
        if size is None:
            size = self.max_line_length
        if size < 2:
            raise ValueError("size must be at least 2")
        parts = []
        if self.time_ms_function is not None or log_line.timestamp:
            components = timestamp_components(log_line.timestamp, self.use_datetime)
            parts.append(f"{components} ")
        parts.append(_LEVEL_PREFIX[Level(log_line.level)])
        if log_line.module_prefix:
            parts.append(log_line.module_prefix)
        parts.append(f"{log_line.file}:{log_line.line}: ")
        parts.append(log_line.message())
        body = "".join(parts)[: size - 1]
        if len(body) == size - 1:
            body = body[:-1]
        return body + "\n"

    def get_logger(self, module_name: Optional[str] = None, level: Level = Level.DEFAULT) -> "Logger":
        """Create a logger for a module, optionally with its own threshold."""
        prefix = f"{module_name}:" if module_name else None
        return Logger(self, prefix, Level(level))

    def _emit(
        self,
        level: Level,
        file: str,
        line: int,
        module_prefix: Optional[str],
        fmt: str,
        args: tuple,
    ) -> None:
        timestamp = self.time_ms_function() if self.time_ms_function is not None else 0
        timestamp &= 0xFFFF_FFFF_FFFF_FFFF if self.use_datetime else 0xFFFF_FFFF
        record = LogLine(
            level=Level(level),
            file=file,
            line=line,
            module_prefix=module_prefix,
            timestamp=timestamp,
            timestamp_components=timestamp_components(timestamp, self.use_datetime),
            fmt=fmt,
            args=args,
        )
        if self.handler is not None:
            self.handler(record)
            return
        with self._lock:
            self.write_function(self.format_line(record))


@dataclass
class Logger:
    """A per-module front end onto a :class:`LogSystem`."""

    system: LogSystem
    module_prefix: Optional[str] = None
    level: Level = field(default=Level.DEFAULT)

    def is_active(self, level: Level) -> bool:
        """Whether a line at this level would be emitted."""
        return self.system.level_is_active(self, level)

    def debug(self, fmt: str, *args: Any) -> None:
        """Log at DEBUG level."""
        self._emit(Level.DEBUG, fmt, args)

    def info(self, fmt: str, *args: Any) -> None:
        """Log at INFO level."""
        self._emit(Level.INFO, fmt, args)

    def warn(self, fmt: str, *args: Any) -> None:
        """Log at WARN level."""
        self._emit(Level.WARN, fmt, args)

    def error(self, fmt: str, *args: Any) -> None:
        """Log at ERROR level."""
        self._emit(Level.ERROR, fmt, args)

    def _emit(self, level: Level, fmt: str, args: tuple) -> None:
        if not self.is_active(level):
            return
        caller = sys._getframe(2)
        self.system.log(
            level,
            os.path.basename(caller.f_code.co_filename),
            caller.f_lineno,
            self.module_prefix,
            fmt,
            *args,
        )