from __future__ import annotations

import logging

import pytest

from lib_log_telegram.domain.levels import LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("verbose", LogLevel.VERBOSE),
        ("debug", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("Information", LogLevel.INFO),
        ("Warning", LogLevel.WARNING),
        ("warn", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        ("FATAL", LogLevel.FATAL),
        ("critical", LogLevel.FATAL),
        ("trace", LogLevel.VERBOSE),
    ],
)
def test_from_name_accepts_case_insensitive_matches_and_aliases(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


def test_from_name_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        LogLevel.from_name("loud")


@pytest.mark.parametrize(
    "number, expected",
    [
        (logging.DEBUG, LogLevel.DEBUG),
        (logging.INFO, LogLevel.INFO),
        (logging.WARNING, LogLevel.WARNING),
        (logging.ERROR, LogLevel.ERROR),
        (logging.CRITICAL, LogLevel.FATAL),
        (5, LogLevel.VERBOSE),
        (0, LogLevel.VERBOSE),
        (15, LogLevel.DEBUG),
        (45, LogLevel.ERROR),
        (60, LogLevel.FATAL),
    ],
)
def test_from_python_level_maps_to_closest_lower_member(number: int, expected: LogLevel) -> None:
    assert LogLevel.from_python_level(number) is expected


def test_levels_are_ordered_from_verbose_to_fatal() -> None:
    ordered = [LogLevel.VERBOSE, LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING, LogLevel.ERROR, LogLevel.FATAL]
    assert sorted(reversed(ordered)) == ordered
    assert LogLevel.WARNING <= LogLevel.ERROR
    assert not LogLevel.FATAL < LogLevel.DEBUG


def test_to_python_level_round_trips_standard_levels() -> None:
    assert LogLevel.FATAL.to_python_level() == logging.CRITICAL
    assert LogLevel.INFO.to_python_level() == logging.INFO
    assert LogLevel.VERBOSE.to_python_level() == 5


def test_severity_is_lowercase_name() -> None:
    assert LogLevel.WARNING.severity == "warning"
