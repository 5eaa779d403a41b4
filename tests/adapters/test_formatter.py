from __future__ import annotations

import logging
import os

import pytest

from lib_log_telegram.adapters.formatter import (
    CODE_FENCE,
    LEVEL_PREFIXES,
    CallableFormatter,
    TelegramDefaultFormatter,
    resolve_formatter,
)
from lib_log_telegram.application.ports.formatter import MessageFormatterPort
from lib_log_telegram.domain.levels import LogLevel


@pytest.mark.parametrize(
    "level, prefix",
    [
        (LogLevel.VERBOSE, "*VERBOSE* "),
        (LogLevel.DEBUG, "*DEBUG* "),
        (LogLevel.INFO, "*INFO* "),
        (LogLevel.WARNING, "*WARNING* "),
        (LogLevel.ERROR, "ERROR: "),
        (LogLevel.FATAL, "*FATAL* "),
    ],
)
def test_each_level_gets_its_literal_prefix(level: LogLevel, prefix: str) -> None:
    text = TelegramDefaultFormatter().format(level, "payload", None)
    assert text == f"```{prefix}payload```"
    others = [value for key, value in LEVEL_PREFIXES.items() if key is not level]
    assert not any(text[len(CODE_FENCE):].startswith(other) for other in others)


def test_unknown_level_gets_no_prefix() -> None:
    text = TelegramDefaultFormatter().format("NOTICE", "payload", None)  # type: ignore[arg-type]
    assert text == "```payload```"


def test_exception_text_follows_two_line_breaks_before_closing_fence() -> None:
    error = 'Traceback (most recent call last):\n  File "app.py", line 1\nValueError: boom'
    text = TelegramDefaultFormatter().format(LogLevel.ERROR, "failed", error)
    assert text == f"```ERROR: failed{os.linesep * 2}{error}```"


def test_newline_is_configurable() -> None:
    text = TelegramDefaultFormatter(newline="\n").format(LogLevel.FATAL, "down", "Boom")
    assert text == "```*FATAL* down\n\nBoom```"


def test_no_suffix_without_exception() -> None:
    text = TelegramDefaultFormatter().format(LogLevel.WARNING, "careful", None)
    assert os.linesep not in text


@pytest.mark.parametrize("level", list(LogLevel))
@pytest.mark.parametrize("exc_info", [None, "ValueError: x"])
def test_output_is_always_wrapped_in_code_fences(level: LogLevel, exc_info: str | None) -> None:
    text = TelegramDefaultFormatter().format(level, "m", exc_info)
    assert text.startswith(CODE_FENCE)
    assert text.endswith(CODE_FENCE)


def test_long_messages_are_not_truncated() -> None:
    message = "x" * 10_000
    assert message in TelegramDefaultFormatter().format(LogLevel.INFO, message, None)


def test_resolve_formatter_defaults_to_telegram_formatter() -> None:
    assert isinstance(resolve_formatter(None), TelegramDefaultFormatter)


def test_resolve_formatter_keeps_port_instances() -> None:
    class Plain:
        def format(self, level: LogLevel, message: str, exc_info: str | None) -> str:
            return message

    formatter = Plain()
    assert resolve_formatter(formatter) is formatter
    assert isinstance(formatter, MessageFormatterPort)


def test_resolve_formatter_wraps_plain_functions() -> None:
    resolved = resolve_formatter(lambda level, message, exc_info: f"{level.name}|{message}|{exc_info}")
    assert isinstance(resolved, CallableFormatter)
    assert resolved.format(LogLevel.DEBUG, "m", None) == "DEBUG|m|None"


def test_resolve_formatter_rejects_other_objects() -> None:
    with pytest.raises(TypeError, match="formatter must provide"):
        resolve_formatter(42)  # type: ignore[arg-type]


@pytest.mark.parametrize("formatter", [logging.Formatter("%(message)s"), "{level}: {message}", b"raw"])
def test_resolve_formatter_rejects_objects_with_incompatible_format(formatter: object) -> None:
    with pytest.raises(TypeError, match="formatter must provide"):
        resolve_formatter(formatter)  # type: ignore[arg-type]
