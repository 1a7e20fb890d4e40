"""Pathé schedule page source."""

import logging

import httpx

from pathe_monitor.core import FetchError, ScheduleSource, WatchRequest

logger = logging.getLogger(__name__)


class PatheScheduleSource(ScheduleSource):
    """Fetch schedule fragments from the Pathé website."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    async def fetch_schedule(self, request: WatchRequest) -> str:
        """Fetch the schedule of the request's cinema on the request's date."""
        url = request.api_url
        logger.debug(f"GET {url}")

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise FetchError(url, f"HTTP {e.response.status_code}") from e
            except httpx.HTTPError as e:
                raise FetchError(url, str(e) or e.__class__.__name__) from e

        return response.text
