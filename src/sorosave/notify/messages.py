"""Markdown message templates for the notification bot."""

from __future__ import annotations

from typing import Sequence

SUBSCRIBE_USAGE = "⚠️ Please provide a group ID.\n\nUsage: /subscribe <group_id>"
UNKNOWN_COMMAND = "❓ Unknown command. Use /help to see available commands."

HELP_TEXT = """🤖 **SoroSave Telegram Bot Help**

**Commands:**

`/subscribe <group_id>` - Subscribe to notifications for a SoroSave group
`/unsubscribe <group_id>` - Unsubscribe from a group
`/status` - View your current subscriptions
`/help` - Show this help message

**Notifications you'll receive:**
• 💰 New contribution events
• 🎉 Payout distributed events
• 🔄 Round started events

**Example:**
`/subscribe 42`"""


def shorten_address(address: str) -> str:
    """``GDNAG4...O4GD``; short strings are returned unchanged."""
    if len(address) <= 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def subscribed(group_id: str) -> str:
    return (
        f"✅ Successfully subscribed to group: *{group_id}*\n\n"
        "You'll receive notifications for:\n"
        "• New contributions\n"
        "• Payout distributions\n"
        "• New rounds started"
    )


def unsubscribed(group_id: str) -> str:
    return f"✅ Successfully unsubscribed from group: *{group_id}*"


def unsubscribe_usage(current: Sequence[str]) -> str:
    listing = "\n".join(current) or "None"
    return (
        "⚠️ Please provide a group ID.\n\nUsage: /unsubscribe <group_id>\n\n"
        f"Current subscriptions:\n{listing}"
    )


def subscription_status(groups: Sequence[str]) -> str:
    if not groups:
        return (
            "📊 **Your Subscriptions**\n\n"
            "You are not subscribed to any groups yet.\n\n"
            "Use /subscribe <group_id> to start receiving notifications."
        )
    lines = "\n".join(f"{i}. `{g}` - Active" for i, g in enumerate(groups, start=1))
    return (
        "📊 **Your Subscriptions**\n\n"
        f"You are monitoring {len(groups)} group(s):\n\n{lines}"
    )


def new_contribution(group_id: str, contributor: str, amount: str) -> str:
    return (
        "💰 **New Contribution**\n\n"
        f"**Group:** `{group_id}`\n"
        f"**Contributor:** `{shorten_address(contributor)}`\n"
        f"**Amount:** {amount}\n\n"
        "A new contribution has been made to the group pot!"
    )


def payout_distributed(group_id: str, amount: str, round_number: int) -> str:
    return (
        "🎉 **Payout Distributed**\n\n"
        f"**Group:** `{group_id}`\n"
        f"**Round:** #{round_number}\n"
        f"**Amount:** {amount}\n\n"
        "The round has ended and payouts have been distributed to members!"
    )


def round_started(group_id: str, round_number: int, start_date: str) -> str:
    return (
        "🔄 **New Round Started**\n\n"
        f"**Group:** `{group_id}`\n"
        f"**Round:** #{round_number}\n"
        f"**Start Date:** {start_date}\n\n"
        "A new savings round has started! Members can now make contributions."
    )
