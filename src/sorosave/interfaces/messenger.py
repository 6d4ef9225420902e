"""ChatMessenger protocol - outbound chat delivery for the notification relay."""

from __future__ import annotations

from typing import Any, Protocol


class ChatMessenger(Protocol):
    """Sends text messages to chat ids."""

    async def send_message(
        self, chat_id: str, text: str, parse_mode: str | None = "Markdown"
    ) -> Any:
        """Deliver ``text`` to ``chat_id``. Raises on delivery failure."""
        ...
