"""Core domain layer."""

from pathe_monitor.core.entities import (
    CheckOutcome,
    Cinema,
    Notification,
    NotificationEmbed,
    NotificationField,
    ScheduleBlock,
    ShowtimeRecord,
    WatchList,
    WatchRequest,
)
from pathe_monitor.core.errors import (
    ConfigError,
    FetchError,
    PatheMonitorError,
    ScheduleLayoutError,
)
from pathe_monitor.core.interfaces import NotificationService, ScheduleSource
from pathe_monitor.core.watch_list import WatchListStore

__all__ = [
    "Cinema",
    "WatchRequest",
    "WatchList",
    "ShowtimeRecord",
    "ScheduleBlock",
    "NotificationField",
    "NotificationEmbed",
    "Notification",
    "CheckOutcome",
    "PatheMonitorError",
    "ConfigError",
    "FetchError",
    "ScheduleLayoutError",
    "ScheduleSource",
    "NotificationService",
    "WatchListStore",
]
