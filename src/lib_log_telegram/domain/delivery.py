"""Outbound request value sent to the Telegram Bot API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_API_URL = "https://api.telegram.org"
PARSE_MODE = "markdown"


@dataclass(slots=True, frozen=True)
class DeliveryRequest:
    """One ``sendMessage`` call, built per emission and never persisted."""

    bot_id: str
    chat_id: str
    text: str
    parse_mode: str = PARSE_MODE

    def payload(self) -> dict[str, Any]:
        """Return the JSON body expected by ``sendMessage``."""

        return {"text": self.text, "chat_id": self.chat_id, "parse_mode": self.parse_mode}

    def endpoint(self, base_url: str = DEFAULT_API_URL) -> str:
        """Return the ``sendMessage`` URL for this request's bot.

        Examples
        --------
        >>> DeliveryRequest("123:abc", "42", "hi").endpoint()
        'https://api.telegram.org/bot123:abc/sendMessage'
        """

        return f"{base_url.rstrip('/')}/bot{self.bot_id}/sendMessage"

    def __repr__(self) -> str:
        return f"DeliveryRequest(bot_id='***', chat_id={self.chat_id!r}, text={self.text!r}, parse_mode={self.parse_mode!r})"


__all__ = ["DEFAULT_API_URL", "PARSE_MODE", "DeliveryRequest"]
