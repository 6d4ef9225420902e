"""Notification relay - fans group lifecycle alerts out to subscribed chats."""

from __future__ import annotations

import logging

from sorosave.interfaces.messenger import ChatMessenger
from sorosave.notify import messages
from sorosave.notify.subscriptions import SubscriptionRegistry

log = logging.getLogger(__name__)


class NotificationRelay:
    """Formats alerts and delivers them to every subscriber of a group.

    A failed delivery to one chat is logged and skipped; the rest still
    receive the alert.
    """

    def __init__(self, registry: SubscriptionRegistry, messenger: ChatMessenger) -> None:
        self._registry = registry
        self._messenger = messenger

    async def _broadcast(self, group_id: str, text: str) -> int:
        subscribers = self._registry.subscribers(group_id)
        if not subscribers:
            return 0

        delivered = 0
        for chat_id in subscribers:
            try:
                await self._messenger.send_message(chat_id, text, parse_mode="Markdown")
                delivered += 1
            except Exception as exc:
                log.warning("Failed to send notification to %s: %s", chat_id, exc)

        log.info("Notified %d/%d subscribers of group %s", delivered, len(subscribers), group_id)
        return delivered

    async def notify_new_contribution(self, group_id: str, contributor: str, amount: str) -> int:
        return await self._broadcast(
            group_id, messages.new_contribution(group_id, contributor, amount),
        )

    async def notify_payout_distributed(self, group_id: str, amount: str, round_number: int) -> int:
        return await self._broadcast(
            group_id, messages.payout_distributed(group_id, amount, round_number),
        )

    async def notify_round_started(self, group_id: str, round_number: int, start_date: str) -> int:
        return await self._broadcast(
            group_id, messages.round_started(group_id, round_number, start_date),
        )
