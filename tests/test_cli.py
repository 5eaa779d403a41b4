"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import json

import httpx
import pytest
from click.testing import CliRunner

from lib_log_telegram import __init__conf__
from lib_log_telegram import cli as cli_mod
from lib_log_telegram import sink as sink_mod
from lib_log_telegram.adapters.telegram import TelegramBotClient

CREDENTIALS = {"TELEGRAM_BOT_ID": "123:abc", "TELEGRAM_CHAT_ID": "-100"}


class _Api:
    def __init__(self, status: int = 200, body: object | None = None) -> None:
        self.status = status
        self.body = body if body is not None else {"ok": True, "result": {}}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch) -> _Api:
    """Route the sink's default client through a mock Bot API."""

    mock = _Api()

    def build_client(*, timeout: float | None = 10.0) -> TelegramBotClient:
        return TelegramBotClient(timeout=timeout, transport=httpx.MockTransport(mock))

    monkeypatch.setattr(sink_mod, "TelegramBotClient", build_client)
    return mock


def test_cli_without_subcommand_prints_summary() -> None:
    result = CliRunner().invoke(cli_mod.cli, [], prog_name=__init__conf__.shell_command)

    assert result.exit_code == 0
    assert result.output == cli_mod.summary_info()


def test_cli_info_command_matches_summary() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["info"])

    assert result.exit_code == 0
    assert result.output.startswith("Info for lib_log_telegram:")
    assert "shell_command" in result.output


def test_cli_version_option() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __init__conf__.version


def test_preview_prints_formatted_message() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["preview", "warning", "disk [90%] full"])

    assert result.exit_code == 0
    assert result.output.strip() == "```*WARNING* disk [90%] full```"


def test_preview_appends_error_text() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["preview", "ERROR", "boom", "--error", "ValueError: bad"])

    assert result.exit_code == 0
    assert result.output == "```ERROR: boom\n\nValueError: bad```\n"


def test_preview_rejects_unknown_level() -> None:
    result = CliRunner().invoke(cli_mod.cli, ["preview", "loud", "x"])

    assert result.exit_code == 2


def test_send_posts_to_the_bot_api(api: _Api) -> None:
    result = CliRunner().invoke(cli_mod.cli, ["send", "info", "deploy finished"], env=CREDENTIALS)

    assert result.exit_code == 0, result.output
    assert "Sent to chat -100" in result.output
    request = api.requests[0]
    assert request.url.path == "/bot123:abc/sendMessage"
    assert json.loads(request.content) == {"text": "```*INFO* deploy finished```", "chat_id": "-100", "parse_mode": "markdown"}


def test_send_options_override_environment(api: _Api) -> None:
    result = CliRunner().invoke(cli_mod.cli, ["send", "debug", "x", "--chat-id", "777"], env=CREDENTIALS)

    assert result.exit_code == 0, result.output
    assert json.loads(api.requests[0].content)["chat_id"] == "777"


def test_send_reports_api_failure(api: _Api) -> None:
    api.status = 400
    api.body = {"ok": False, "description": "Bad Request: chat not found"}

    result = CliRunner().invoke(cli_mod.cli, ["send", "error", "x"], env=CREDENTIALS)

    assert result.exit_code == 1
    assert "Delivery failed: Telegram API responded with HTTP 400: Bad Request: chat not found" in result.output
    assert "123:abc" not in result.output


def test_send_without_credentials_is_a_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TELEGRAM_BOT_ID", raising=False)
    monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)

    result = CliRunner().invoke(cli_mod.cli, ["send", "info", "x"])

    assert result.exit_code == 2
    assert "Bot id missing" in result.output


def test_main_returns_exit_codes(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("TELEGRAM_BOT_ID", raising=False)
    monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)

    assert cli_mod.main(["info"]) == 0
    assert cli_mod.main(["send", "info", "x"]) == 2
    assert "Bot id missing" in capsys.readouterr().err
