"""Minimal async Telegram Bot API client over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

log = logging.getLogger(__name__)


class TelegramApiError(Exception):
    """The Bot API rejected a request or could not be reached."""

    def __init__(self, method: str, description: str, error_code: int | None = None) -> None:
        super().__init__(f"{method} failed: {description}")
        self.method = method
        self.description = description
        self.error_code = error_code


class TelegramBotApi:
    """Calls Bot API methods at ``{api_url}/bot{token}/{method}``.

    Implements the ChatMessenger protocol via send_message().
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.telegram.org",
        timeout: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not token:
            raise ValueError("Telegram bot token is required")
        self._base_url = f"{api_url.rstrip('/')}/bot{token}"
        self._timeout = timeout
        self._transport = transport

    async def _call(self, method: str, payload: dict[str, Any] | None = None, timeout: float | None = None) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(timeout or self._timeout, connect=10),
                transport=self._transport,
            ) as client:
                resp = await client.post(f"{self._base_url}/{method}", json=payload or {})
        except httpx.HTTPError as exc:
            raise TelegramApiError(method, f"transport error: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            raise TelegramApiError(
                method, f"HTTP {resp.status_code}", resp.status_code,
            ) from None

        if not data.get("ok"):
            raise TelegramApiError(
                method,
                data.get("description", f"HTTP {resp.status_code}"),
                data.get("error_code", resp.status_code),
            )
        return data.get("result")

    async def get_me(self) -> dict[str, Any]:
        return await self._call("getMe")

    async def send_message(
        self, chat_id: str, text: str, parse_mode: str | None = "Markdown"
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        return await self._call("sendMessage", payload)

    async def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict[str, Any]]:
        """Long-poll for new updates. ``offset`` acknowledges earlier ones."""
        payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        return await self._call("getUpdates", payload, timeout=timeout + 10) or []
