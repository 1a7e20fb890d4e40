"""Extraction of schedule blocks from Pathé schedule markup."""

import logging
from typing import Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

from pathe_monitor.core import ScheduleBlock, ScheduleLayoutError, ShowtimeRecord
from pathe_monitor.core.entities import SITE_ORIGIN

SITE_HOST = urlsplit(SITE_ORIGIN).hostname

logger = logging.getLogger(__name__)

SCHEDULE_ITEM_SELECTOR = "div.schedule-simple__item"
TITLE_SELECTOR = "h4 a"
THUMBNAIL_SELECTOR = "div.schedule-simple__poster img"
SHOWTIME_SELECTOR = "a.schedule-time"
START_SELECTOR = "span.schedule-time__start"
END_SELECTOR = "span.schedule-time__end"
LABEL_SELECTOR = "span.schedule-time__label"


def find_schedule_block(html: str, movie: str) -> Optional[ScheduleBlock]:
    """Find the schedule block of a movie on a schedule page.

    Titles are compared after lowercasing both sides; there is no trimming
    or fuzzy matching. The first matching block wins.

    Args:
        html: Raw schedule page (fragment) markup
        movie: Movie title to look for

    Returns:
        The extracted block, or None if no block has a matching title

    Raises:
        ScheduleLayoutError: if the matched block misses an expected element
    """
    soup = BeautifulSoup(html, "html.parser")
    wanted = movie.lower()

    for item in soup.select(SCHEDULE_ITEM_SELECTOR):
        title_element = item.select_one(TITLE_SELECTOR)
        if title_element is None:
            logger.warning(f"schedule item without title, skipping: {str(item)[:80]}")
            continue

        title = _first_text(title_element) or ""
        if title.lower() == wanted:
            return _extract_block(item, title_element, title)

    return None


def _extract_block(item: Tag, title_element: Tag, title: str) -> ScheduleBlock:
    href = title_element.get("href")
    if not href:
        raise ScheduleLayoutError(f"title link of '{title}' has no href")

    thumbnail = item.select_one(THUMBNAIL_SELECTOR)
    if thumbnail is None or not thumbnail.get("src"):
        raise ScheduleLayoutError(f"no poster thumbnail for '{title}'")

    showtimes = [
        _extract_showtime(time_element, title)
        for time_element in item.select(SHOWTIME_SELECTOR)
    ]

    return ScheduleBlock(
        title=title,
        detail_url=_site_url(href, title),
        thumbnail_url=thumbnail["src"],
        showtimes=showtimes,
    )


def _extract_showtime(time_element: Tag, title: str) -> ShowtimeRecord:
    start = _required_text(time_element, START_SELECTOR, title)
    end = _required_text(time_element, END_SELECTOR, title)
    label = _required_text(time_element, LABEL_SELECTOR, title)

    booking_path = time_element.get("data-href")
    if not booking_path:
        raise ScheduleLayoutError(f"showtime {start} of '{title}' has no booking link")

    return ShowtimeRecord(
        label=label,
        start=start,
        end=end,
        booking_link=_site_url(booking_path, title),
    )


def _site_url(path: str, title: str) -> str:
    """Prefix a site-relative path with the site origin.

    Absolute links are accepted only when they point at the Pathé site.
    """
    if path.startswith("/") and not path.startswith("//"):
        return f"{SITE_ORIGIN}{path}"

    try:
        parts = urlsplit(path)
        host = parts.hostname or ""
    except ValueError:
        raise ScheduleLayoutError(f"malformed link {path!r} in block of '{title}'") from None

    if host == SITE_HOST or host.endswith(f".{SITE_HOST}"):
        return path if parts.scheme else f"https:{path}"
    raise ScheduleLayoutError(f"unexpected link {path!r} in block of '{title}'")


def _required_text(element: Tag, selector: str, title: str) -> str:
    child = element.select_one(selector)
    text = _first_text(child) if child is not None else None
    if text is None:
        raise ScheduleLayoutError(f"missing `{selector}` in showtime of '{title}'")
    return text


def _first_text(element: Tag) -> Optional[str]:
    """First text node of an element, as rendered in the page."""
    return next(iter(element.strings), None)
