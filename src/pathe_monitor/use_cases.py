"""Business logic use cases."""

import logging

from pathe_monitor.adapters.notifications import build_notification
from pathe_monitor.adapters.sources import find_schedule_block
from pathe_monitor.core import (
    CheckOutcome,
    ConfigError,
    FetchError,
    NotificationService,
    ScheduleLayoutError,
    ScheduleSource,
    WatchListStore,
    WatchRequest,
)

logger = logging.getLogger(__name__)


class WatchRequestProcessor:
    """Check a single watch request and notify when tickets are on sale."""

    def __init__(self, source: ScheduleSource, notifier: NotificationService) -> None:
        self.source = source
        self.notifier = notifier

    async def process(self, request: WatchRequest) -> CheckOutcome:
        """Fetch, parse and, on a match, notify.

        Per-request failures are logged here and reduced to an outcome;
        nothing is raised to the caller.
        """
        logger.info(f"Processing {request}")

        try:
            html = await self.source.fetch_schedule(request)
        except FetchError as e:
            logger.error(f"Fetching schedule for {request} failed: {e}")
            return CheckOutcome.FETCH_FAILED

        logger.debug(f"handling {request} response ({len(html)} bytes)")

        try:
            block = find_schedule_block(html, request.movie)
        except ScheduleLayoutError as e:
            logger.error(f"Schedule page layout changed, cannot parse {request}: {e}")
            return CheckOutcome.PARSE_FAILED

        if block is None:
            return CheckOutcome.NOT_MATCHED

        logger.info(f"Found {len(block.showtimes)} showtimes for {request}")
        notification = build_notification(request, block)
        await self.notifier.send(notification)

        return CheckOutcome.MATCHED


class MonitoringService:
    """Run the processor over the whole watch list."""

    def __init__(self, store: WatchListStore, processor: WatchRequestProcessor) -> None:
        self.store = store
        self.processor = processor

    async def check_watch_list(self) -> list[tuple[WatchRequest, CheckOutcome]]:
        """Evaluate every watch request once, sequentially.

        The watch list is reloaded on every call. Satisfied requests are
        kept, so they are notified again on the next tick.

        Returns:
            (request, outcome) pairs in watch-list order
        """
        try:
            watch_list = self.store.load()
        except ConfigError as e:
            logger.error(f"Skipping check, cannot read watch list: {e}")
            return []

        logger.info(f"Processing {len(watch_list)} movie requests")

        results: list[tuple[WatchRequest, CheckOutcome]] = []
        for request in watch_list.requests:
            try:
                outcome = await self.processor.process(request)
            except Exception:
                logger.exception(f"Unexpected error processing {request}")
                outcome = CheckOutcome.ERROR

            if outcome is CheckOutcome.NOT_MATCHED:
                logger.info(f"No tickets available for {request}")
            elif outcome in (CheckOutcome.FETCH_FAILED, CheckOutcome.PARSE_FAILED, CheckOutcome.ERROR):
                logger.error(f"Something went wrong processing {request}")

            results.append((request, outcome))

        matched = sum(1 for _, outcome in results if outcome is CheckOutcome.MATCHED)
        logger.info(f"Finished check: {matched}/{len(results)} requests have tickets available")

        return results
