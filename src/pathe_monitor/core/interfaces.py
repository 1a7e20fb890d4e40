"""Core interfaces for adapters."""

from abc import ABC, abstractmethod

from pathe_monitor.core.entities import Notification, WatchRequest


class ScheduleSource(ABC):
    """Interface for fetching schedule pages."""

    @abstractmethod
    async def fetch_schedule(self, request: WatchRequest) -> str:
        """Return the raw schedule markup for the request's cinema and date.

        Raises:
            FetchError: on transport failures or non-success responses
        """
        pass


class NotificationService(ABC):
    """Interface for delivering notifications."""

    @abstractmethod
    async def send(self, notification: Notification) -> bool:
        """Deliver notification; report failures as False instead of raising."""
        pass
