"""httpx-backed Telegram Bot API client implementing :class:`DeliveryPort`.

Purpose
-------
Issue the ``sendMessage`` POST for each formatted message and translate
transport failures and non-2xx answers into :class:`TelegramDeliveryError`.

Contents
--------
* :class:`TelegramBotClient` - synchronous client reusing one
  :class:`httpx.Client` across calls.

System Role
-----------
Outermost adapter of the emit pipeline. The bot credential is part of the URL
path, so error messages are built from the status and the API description
only and never include the URL.
"""

from __future__ import annotations

import json
import logging
import threading

import httpx

from lib_log_telegram.application.ports.delivery import DeliveryPort
from lib_log_telegram.domain.delivery import DEFAULT_API_URL, DeliveryRequest
from lib_log_telegram.errors import TelegramDeliveryError

LOGGER = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


class TelegramBotClient(DeliveryPort):
    """Send messages through ``POST {base_url}/bot{token}/sendMessage``.

    Parameters
    ----------
    base_url:
        API root; overridable for self-hosted Bot API servers.
    timeout:
        Seconds allowed for connect/read/write; ``None`` waits forever.
    client:
        Optional pre-built :class:`httpx.Client`. The caller keeps ownership
        and :meth:`close` leaves it open.
    transport:
        Optional transport used when the client is created lazily (tests pass
        :class:`httpx.MockTransport`).
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float | None = 10.0,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._transport = transport
        self._client_lock = threading.Lock()

    def send(self, request: DeliveryRequest) -> None:
        """POST ``request`` and raise :class:`TelegramDeliveryError` unless 2xx."""
        body = json.dumps(request.payload(), ensure_ascii=False).encode("utf-8")
        client = self._ensure_client()
        try:
            response = client.post(request.endpoint(self._base_url), content=body, headers=_HEADERS)
        except httpx.HTTPError as exc:
            raise TelegramDeliveryError(f"Telegram request failed: {type(exc).__name__}") from None
        if response.is_success:
            LOGGER.debug("Telegram message delivered to chat %s", request.chat_id)
            return
        description = _extract_description(response)
        message = f"Telegram API responded with HTTP {response.status_code}"
        if description:
            message = f"{message}: {description}"
        raise TelegramDeliveryError(message, status_code=response.status_code, description=description)

    def close(self) -> None:
        """Close the lazily created HTTP client; injected clients stay open."""
        with self._client_lock:
            client = self._client
            if client is None or not self._owns_client:
                return
            self._client = None
        client.close()

    def _ensure_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self._timeout, transport=self._transport)
                self._owns_client = True
            return self._client


def _extract_description(response: httpx.Response) -> str | None:
    """Return the Bot API ``description`` field when the body is JSON."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        description = payload.get("description")
        if isinstance(description, str):
            return description
    return None


__all__ = ["TelegramBotClient"]
