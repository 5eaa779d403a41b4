"""Click command group for previewing and sending Telegram log messages.

Purpose
-------
Give operators a quick way to check the configured bot credentials and see
how the default formatter renders a message, without writing Python.

Contents
--------
* :func:`cli` - root group with ``--version`` and ``.env`` toggles.
* ``info`` / ``preview`` / ``send`` subcommands.
* :func:`main` - test-friendly runner returning an exit code.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

import click
from rich.console import Console

from . import __init__conf__
from . import config as sink_config
from .adapters.formatter import TelegramDefaultFormatter
from .domain.events import LogEvent
from .domain.levels import LogLevel
from .errors import ConfigurationError, TelegramDeliveryError
from .sink import TelegramSink

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_LEVEL_CHOICES = [level.name.lower() for level in LogLevel]


def summary_info() -> str:
    """Return the metadata banner used by the ``info`` command."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(__init__conf__.version, "--version", "-V", prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading settings (env toggle: {sink_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None) -> None:
    """Rate-limited Telegram sink utilities."""

    if use_dotenv is None:
        use_dotenv = sink_config.env_flag(sink_config.DOTENV_ENV_VAR)
    if use_dotenv:
        sink_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("preview", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level", type=click.Choice(_LEVEL_CHOICES, case_sensitive=False))
@click.argument("message")
@click.option("--error", "error_text", default=None, help="Exception text appended after the message.")
def cli_preview(level: str, message: str, error_text: str | None) -> None:
    """Show the text the default formatter would send."""

    text = TelegramDefaultFormatter(newline="\n").format(LogLevel.from_name(level), message, error_text)
    _console().print(text, markup=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level", type=click.Choice(_LEVEL_CHOICES, case_sensitive=False))
@click.argument("message")
@click.option("--bot-id", default=None, help=f"Bot token (default: ${sink_config.ENV_BOT_ID}).")
@click.option("--chat-id", default=None, help=f"Target chat (default: ${sink_config.ENV_CHAT_ID}).")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds.")
def cli_send(level: str, message: str, bot_id: str | None, chat_id: str | None, timeout: float | None) -> None:
    """Send one message through the sink and report the outcome."""

    try:
        settings = sink_config.load_settings(bot_id=bot_id, chat_id=chat_id, timeout=timeout)
    except ConfigurationError as exc:
        raise click.UsageError(str(exc)) from exc

    options = settings.sink_options()
    options["raise_on_failure"] = True
    options["min_interval"] = timedelta(0)
    event = LogEvent(datetime.now(timezone.utc), LogLevel.from_name(level), message, logger_name="cli")
    with TelegramSink(settings.bot_id, settings.chat_id, **options) as sink:
        try:
            sink.emit(event)
        except TelegramDeliveryError as exc:
            _console().print(f"Delivery failed: {exc}", style="red", markup=False)
            raise click.exceptions.Exit(1) from exc
    _console().print(f"Sent to chat {settings.chat_id}", style="green", markup=False)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group in a test-friendly manner.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0.1...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    return result if isinstance(result, int) else 0


__all__ = ["cli", "main", "summary_info"]
