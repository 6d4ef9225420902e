"""Chat notification relay for SoroSave group events."""

from sorosave.notify.bot import RelayBot, run_bot
from sorosave.notify.relay import NotificationRelay
from sorosave.notify.subscriptions import SubscriptionRegistry
from sorosave.notify.telegram import TelegramApiError, TelegramBotApi

__all__ = [
    "NotificationRelay",
    "RelayBot",
    "SubscriptionRegistry",
    "TelegramApiError",
    "TelegramBotApi",
    "run_bot",
]
