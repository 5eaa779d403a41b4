"""Configuration helpers: ``.env`` loading and environment-backed settings.

Purpose
-------
Support the bootstrap code that builds a :class:`TelegramSink` from the
process environment. The sink itself never reads environment variables; the
CLI and host applications call :func:`load_settings` and pass the result on.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` once per process.
* :class:`SinkSettings` / :func:`load_settings` - typed view of the
  ``TELEGRAM_*`` variables.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .domain.throttle import DEFAULT_MIN_INTERVAL, WaitPolicy
from .errors import ConfigurationError

DOTENV_ENV_VAR = "LOG_TELEGRAM_USE_DOTENV"
"""Environment toggle that makes the CLI load ``.env`` without ``--use-dotenv``."""

ENV_BOT_ID = "TELEGRAM_BOT_ID"
ENV_CHAT_ID = "TELEGRAM_CHAT_ID"
ENV_MIN_INTERVAL = "TELEGRAM_MIN_INTERVAL"
ENV_TIMEOUT = "TELEGRAM_TIMEOUT"
ENV_WAIT_POLICY = "TELEGRAM_WAIT_POLICY"
ENV_RAISE_ON_FAILURE = "TELEGRAM_RAISE_ON_FAILURE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_DOTENV_LOCK = threading.Lock()
_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upwards from ``search_from`` (or cwd).

    Existing environment variables keep precedence. Repeated calls return the
    file found by the first call without reloading it.
    """

    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    with _DOTENV_LOCK:
        if _DOTENV_ATTEMPTED:
            return _DOTENV_LOADED
        _DOTENV_ATTEMPTED = True
        candidate = _find_dotenv(Path(search_from) if search_from is not None else Path.cwd())
        if candidate is None:
            return None
        load_dotenv(candidate, override=False)
        _DOTENV_LOADED = candidate
        return candidate


def _find_dotenv(start: Path) -> Path | None:
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    with _DOTENV_LOCK:
        _DOTENV_LOADED = None
        _DOTENV_ATTEMPTED = False


def env_flag(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Interpret ``name`` as a boolean switch; unset means ``False``."""

    source = os.environ if environ is None else environ
    raw = source.get(name)
    if raw is None:
        return False
    return _parse_bool(name, raw)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_seconds(name: str, raw: str) -> float:
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from exc
    if seconds < 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return seconds


@dataclass(frozen=True)
class SinkSettings:
    """Resolved construction parameters for :class:`TelegramSink`."""

    bot_id: str
    chat_id: str
    min_interval: timedelta = DEFAULT_MIN_INTERVAL
    timeout: float | None = 10.0
    wait_policy: WaitPolicy = WaitPolicy.DOUBLE_ELAPSED
    raise_on_failure: bool = False

    def sink_options(self) -> dict[str, Any]:
        """Return keyword arguments accepted by :class:`TelegramSink`."""

        return {
            "min_interval": self.min_interval,
            "timeout": self.timeout,
            "wait_policy": self.wait_policy,
            "raise_on_failure": self.raise_on_failure,
        }

    def __repr__(self) -> str:
        return (
            f"SinkSettings(bot_id='***', chat_id={self.chat_id!r}, min_interval={self.min_interval!r}, "
            f"timeout={self.timeout!r}, wait_policy={self.wait_policy!r}, raise_on_failure={self.raise_on_failure!r})"
        )


def load_settings(environ: Mapping[str, str] | None = None, **overrides: Any) -> SinkSettings:
    """Build :class:`SinkSettings` from ``environ`` (default ``os.environ``).

    Keyword ``overrides`` whose value is not ``None`` win over the environment.

    Raises
    ------
    ConfigurationError
        When the bot id or chat id is missing, or a value cannot be parsed.
    """

    source = os.environ if environ is None else environ
    unknown = set(overrides) - {"bot_id", "chat_id", "min_interval", "timeout", "wait_policy", "raise_on_failure"}
    if unknown:
        raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")
    values = {key: value for key, value in overrides.items() if value is not None}

    bot_id = str(values.get("bot_id") or source.get(ENV_BOT_ID, "")).strip()
    chat_id = str(values.get("chat_id") or source.get(ENV_CHAT_ID, "")).strip()
    if not bot_id:
        raise ConfigurationError(f"Bot id missing; set {ENV_BOT_ID} or pass bot_id")
    if not chat_id:
        raise ConfigurationError(f"Chat id missing; set {ENV_CHAT_ID} or pass chat_id")

    min_interval = values.get("min_interval")
    if min_interval is None:
        raw = source.get(ENV_MIN_INTERVAL)
        min_interval = DEFAULT_MIN_INTERVAL if raw is None else timedelta(seconds=_parse_seconds(ENV_MIN_INTERVAL, raw))
    elif not isinstance(min_interval, timedelta):
        min_interval = timedelta(seconds=float(min_interval))

    timeout = values.get("timeout")
    if timeout is None:
        raw = source.get(ENV_TIMEOUT)
        timeout = 10.0 if raw is None else _parse_seconds(ENV_TIMEOUT, raw)

    wait_policy = values.get("wait_policy")
    if wait_policy is None:
        wait_policy = source.get(ENV_WAIT_POLICY, WaitPolicy.DOUBLE_ELAPSED.value)
    if isinstance(wait_policy, str):
        try:
            wait_policy = WaitPolicy.from_name(wait_policy)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc

    raise_on_failure = values.get("raise_on_failure")
    if raise_on_failure is None:
        raise_on_failure = env_flag(ENV_RAISE_ON_FAILURE, source)

    return SinkSettings(
        bot_id=bot_id,
        chat_id=chat_id,
        min_interval=min_interval,
        timeout=float(timeout),
        wait_policy=wait_policy,
        raise_on_failure=bool(raise_on_failure),
    )


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_BOT_ID",
    "ENV_CHAT_ID",
    "ENV_MIN_INTERVAL",
    "ENV_RAISE_ON_FAILURE",
    "ENV_TIMEOUT",
    "ENV_WAIT_POLICY",
    "SinkSettings",
    "enable_dotenv",
    "env_flag",
    "load_settings",
]
