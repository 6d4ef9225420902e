"""Telegram command bot: manages subscriptions and hosts the relay."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Any

from sorosave.models.config import TelegramConfig
from sorosave.notify import messages
from sorosave.notify.relay import NotificationRelay
from sorosave.notify.subscriptions import SubscriptionRegistry
from sorosave.notify.telegram import TelegramBotApi

log = logging.getLogger(__name__)


def parse_command(text: str) -> tuple[str, str] | None:
    """Split ``/cmd@bot args`` into ``("cmd", "args")``. None if not a command."""
    text = text.strip()
    if not text.startswith("/"):
        return None
    head, _, args = text.partition(" ")
    command = head[1:].split("@", 1)[0].lower()
    return command, args.strip()


class RelayBot:
    """Long-polling Telegram bot handling /subscribe, /unsubscribe, /status, /help."""

    def __init__(
        self,
        api: TelegramBotApi,
        registry: SubscriptionRegistry | None = None,
        poll_timeout: int = 30,
        error_backoff: int = 5,
    ) -> None:
        self.api = api
        self.registry = registry or SubscriptionRegistry()
        self.relay = NotificationRelay(self.registry, api)
        self._poll_timeout = poll_timeout
        self._error_backoff = error_backoff
        self._offset: int | None = None
        self._running = False

    def handle_text(self, chat_id: str, text: str) -> str | None:
        """Apply one incoming message and return the reply, if any."""
        parsed = parse_command(text)
        if parsed is None:
            return None
        command, args = parsed

        if command == "subscribe":
            if not args:
                return messages.SUBSCRIBE_USAGE
            self.registry.subscribe(chat_id, args)
            log.info("Chat %s subscribed to group %s", chat_id, args)
            return messages.subscribed(args)

        if command == "unsubscribe":
            if not args:
                return messages.unsubscribe_usage(self.registry.groups_for(chat_id))
            self.registry.unsubscribe(chat_id, args)
            log.info("Chat %s unsubscribed from group %s", chat_id, args)
            return messages.unsubscribed(args)

        if command == "status":
            return messages.subscription_status(self.registry.groups_for(chat_id))

        if command in ("help", "start"):
            return messages.HELP_TEXT

        return messages.UNKNOWN_COMMAND

    async def handle_update(self, update: dict[str, Any]) -> None:
        message = update.get("message") or {}
        text = message.get("text")
        chat = message.get("chat") or {}
        if not text or "id" not in chat:
            return
        chat_id = str(chat["id"])
        reply = self.handle_text(chat_id, text)
        if reply is not None:
            await self.api.send_message(chat_id, reply, parse_mode="Markdown")

    async def poll_once(self) -> int:
        """Fetch and handle one batch of updates. Returns how many were seen."""
        updates = await self.api.get_updates(self._offset, timeout=self._poll_timeout)
        for update in updates:
            self._offset = int(update["update_id"]) + 1
            try:
                await self.handle_update(update)
            except Exception as exc:
                log.error("Failed to handle update %s: %s", update.get("update_id"), exc)
        return len(updates)

    async def start(self) -> None:
        """Announce the bot and run the polling loop until stopped."""
        me = await self.api.get_me()
        log.info("Bot started as @%s", me.get("username", "?"))
        self._running = True
        try:
            await self._main_loop()
        finally:
            log.info("Bot shut down cleanly")

    async def stop(self) -> None:
        log.info("Stop requested")
        self._running = False

    async def _main_loop(self) -> None:
        while self._running:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                log.info("Polling loop cancelled")
                break
            except Exception as exc:
                log.error("Polling error: %s", exc, exc_info=True)
                await asyncio.sleep(self._error_backoff)


async def run_bot(cfg: TelegramConfig) -> None:
    """Entry point for running the notification bot."""
    api = TelegramBotApi(cfg.bot_token, cfg.api_url)
    bot = RelayBot(api, poll_timeout=cfg.poll_timeout, error_backoff=cfg.error_backoff)

    loop = asyncio.get_running_loop()

    def _signal_handler():
        asyncio.ensure_future(bot.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    await bot.start()
