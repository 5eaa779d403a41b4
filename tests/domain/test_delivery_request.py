from __future__ import annotations

import pytest

from lib_log_telegram.domain.delivery import DeliveryRequest


def test_payload_contains_exactly_text_chat_id_and_parse_mode() -> None:
    request = DeliveryRequest(bot_id="123:abc", chat_id="-100200", text="```*INFO* hi```")
    assert request.payload() == {"text": "```*INFO* hi```", "chat_id": "-100200", "parse_mode": "markdown"}


def test_endpoint_embeds_bot_id_and_strips_trailing_slash() -> None:
    request = DeliveryRequest(bot_id="123:abc", chat_id="1", text="x")
    assert request.endpoint("https://bots.example/") == "https://bots.example/bot123:abc/sendMessage"


def test_repr_hides_the_bot_credential() -> None:
    request = DeliveryRequest(bot_id="123:secret-token", chat_id="1", text="x")
    assert "secret-token" not in repr(request)


def test_request_is_frozen() -> None:
    request = DeliveryRequest(bot_id="1", chat_id="1", text="x")
    with pytest.raises(AttributeError):
        request.text = "y"  # type: ignore[misc]
