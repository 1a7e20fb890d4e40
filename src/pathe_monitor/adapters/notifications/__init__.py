"""Notification adapters."""

from pathe_monitor.adapters.notifications.discord_notifier import DiscordNotifier
from pathe_monitor.adapters.notifications.embed_builder import build_fields, build_notification

__all__ = ["DiscordNotifier", "build_fields", "build_notification"]
