"""In-memory subscription registry: which chats follow which groups."""

from __future__ import annotations


class SubscriptionRegistry:
    """Two-way map between group ids and chat ids.

    Held in process memory only; subscriptions are lost on restart.
    Iteration order is subscription order.
    """

    def __init__(self) -> None:
        self._by_group: dict[str, dict[str, None]] = {}
        self._by_chat: dict[str, dict[str, None]] = {}

    def subscribe(self, chat_id: str, group_id: str) -> bool:
        """Subscribe ``chat_id`` to ``group_id``. Returns False if already subscribed."""
        chats = self._by_group.setdefault(group_id, {})
        if chat_id in chats:
            return False
        chats[chat_id] = None
        self._by_chat.setdefault(chat_id, {})[group_id] = None
        return True

    def unsubscribe(self, chat_id: str, group_id: str) -> bool:
        """Remove a subscription. Returns False if there was none."""
        chats = self._by_group.get(group_id, {})
        groups = self._by_chat.get(chat_id, {})
        found = chat_id in chats
        chats.pop(chat_id, None)
        groups.pop(group_id, None)
        if not chats:
            self._by_group.pop(group_id, None)
        if not groups:
            self._by_chat.pop(chat_id, None)
        return found

    def subscribers(self, group_id: str) -> list[str]:
        return list(self._by_group.get(group_id, {}))

    def groups_for(self, chat_id: str) -> list[str]:
        return list(self._by_chat.get(chat_id, {}))

    def __len__(self) -> int:
        return sum(len(chats) for chats in self._by_group.values())
