import calendar
from datetime import datetime, timedelta

import pytest

from anchorlib.log import (
    Level,
    LogLine,
    LogSystem,
    is_leap_year,
    timestamp_components,
)


def make_system(**kwargs):
    lines = []
    kwargs.setdefault("write_function", lines.append)
    return LogSystem(**kwargs), lines


def make_line(system, level=Level.INFO, fmt="hello %d", args=(5,), timestamp=0):
    return LogLine(
        level=level,
        file="file.c",
        line=12,
        module_prefix="mod:",
        timestamp=timestamp,
        timestamp_components=timestamp_components(timestamp, system.use_datetime),
        fmt=fmt,
        args=args,
    )


@pytest.mark.parametrize("year", [1900, 1970, 1996, 2000, 2023, 2024, 2100, 2400])
def test_is_leap_year_matches_calendar(year):
    assert is_leap_year(year) == calendar.isleap(year)


@pytest.mark.parametrize("ts", [0, 999, 61_001, 3_723_004, 400_000_000])
def test_uptime_components_recompose(ts):
    c = timestamp_components(ts)
    assert c.year is None
    assert ((c.hour * 60 + c.minute) * 60 + c.second) * 1000 + c.ms == ts
    assert 0 <= c.minute < 60 and 0 <= c.second < 60 and 0 <= c.ms < 1000


@pytest.mark.parametrize(
    "ts", [0, 86_399_999, 951_782_400_000, 1_709_164_800_123, 1_735_689_599_999, 4_107_542_400_000]
)
def test_datetime_components_match_datetime(ts):
    expected = datetime(1970, 1, 1) + timedelta(milliseconds=ts)
    c = timestamp_components(ts, use_datetime=True)
    assert (c.year, c.month, c.day) == (expected.year, expected.month, expected.day)
    assert (c.hour, c.minute, c.second) == (expected.hour, expected.minute, expected.second)
    assert c.ms == expected.microsecond // 1000


def test_uptime_format_width():
    assert str(timestamp_components(3_723_004)) == "  1:02:03.004"


def test_format_line_without_timestamp():
    system, _ = make_system()
    text = system.format_line(make_line(system))
    assert text == "INFO  mod:file.c:12: hello 5\n"


def test_format_line_with_timestamp_prefix():
    system, _ = make_system(time_ms_function=lambda: 0)
    text = system.format_line(make_line(system, timestamp=3_723_004))
    assert text.startswith(str(timestamp_components(3_723_004)) + " INFO  ")
    assert text.endswith("hello 5\n")


def test_format_line_truncates_but_keeps_newline():
    system, _ = make_system()
    full = system.format_line(make_line(system))
    short = system.format_line(make_line(system), size=20)
    assert len(short) == 19
    assert short.endswith("\n")
    assert full.startswith(short[:-1])


def test_format_line_rejects_tiny_buffer():
    system, _ = make_system()
    with pytest.raises(ValueError):
        system.format_line(make_line(system), size=1)


def test_log_line_filtered_by_default_level():
    system, lines = make_system(default_level=Level.WARN)
    system.log_line(Level.INFO, "a.c", 1, None, "dropped")
    system.log_line(Level.ERROR, "a.c", 2, None, "kept %s", "x")
    assert len(lines) == 1
    assert lines[0].endswith("a.c:2: kept x\n")
    assert lines[0].startswith("ERROR ")


def test_log_is_not_filtered():
    system, lines = make_system(default_level=Level.ERROR)
    system.log(Level.DEBUG, "a.c", 3, None, "always")
    assert lines == ["DEBUG a.c:3: always\n"]


def test_logger_levels_and_prefix():
    system, lines = make_system(default_level=Level.INFO)
    logger = system.get_logger("net")
    logger.debug("nope")
    logger.info("value=%d", 7)
    assert len(lines) == 1
    assert lines[0].startswith("INFO  net:test_log.py:")
    assert lines[0].endswith(": value=7\n")


def test_logger_own_level_overrides_default():
    system, lines = make_system(default_level=Level.DEBUG)
    logger = system.get_logger(level=Level.ERROR)
    assert not logger.is_active(Level.WARN)
    logger.warn("hidden")
    logger.error("shown")
    assert len(lines) == 1
    logger.level = Level.DEBUG
    assert logger.is_active(Level.DEBUG)


def test_level_is_active_uses_default_for_default_logger():
    system, _ = make_system(default_level=Level.WARN)
    logger = system.get_logger()
    assert system.level_is_active(logger, Level.WARN)
    assert not system.level_is_active(logger, Level.INFO)


def test_custom_handler_receives_log_line():
    received = []
    system = LogSystem(handler=received.append, time_ms_function=lambda: 61_001)
    system.log(Level.WARN, "b.c", 9, "m:", "x=%s", "y")
    assert len(received) == 1
    line = received[0]
    assert line.message() == "x=y"
    assert line.timestamp == 61_001
    assert line.timestamp_components == timestamp_components(61_001)


def test_lock_wraps_write():
    events = []

    class RecordingLock:
        def __enter__(self):
            events.append("acquire")

        def __exit__(self, *exc):
            events.append("release")
            return False

    system = LogSystem(write_function=lambda s: events.append("write"), lock=RecordingLock())
    system.log(Level.INFO, "c.c", 1, None, "hi")
    assert events == ["acquire", "write", "release"]


def test_init_rejects_default_level():
    with pytest.raises(ValueError):
        LogSystem(write_function=print, default_level=Level.DEFAULT)


def test_init_requires_output():
    with pytest.raises(ValueError):
        LogSystem()