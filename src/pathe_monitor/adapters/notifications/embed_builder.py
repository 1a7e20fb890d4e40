"""Build webhook notifications for matched schedule blocks."""

from pathe_monitor.core import (
    Notification,
    NotificationEmbed,
    NotificationField,
    ScheduleBlock,
    ShowtimeRecord,
    WatchRequest,
)

AGENDA_ANCHOR = "#agenda"
FOOTER_TEXT = "Generated by *pathe-monitor*"
EMBED_COLUMNS = 3

# Filler that completes the last row of the embed grid
PADDING_NAME = ":rooster:"
PADDING_VALUE = ":popcorn:"


def build_fields(showtimes: list[ShowtimeRecord]) -> list[NotificationField]:
    """Turn showtimes into inline embed fields.

    Embeds render inline fields in rows of three. When more than one row is
    needed and the last row is one field short, a decorative field is
    appended so the grid stays aligned.
    """
    fields = [
        NotificationField(
            name=showtime.label,
            value=f"[{showtime.start} - {showtime.end}]({showtime.booking_link})",
            inline=True,
        )
        for showtime in showtimes
    ]

    if len(fields) > EMBED_COLUMNS and len(fields) % EMBED_COLUMNS == EMBED_COLUMNS - 1:
        fields.append(NotificationField(name=PADDING_NAME, value=PADDING_VALUE, inline=True))

    return fields


def build_notification(request: WatchRequest, block: ScheduleBlock) -> Notification:
    """Create the "tickets available" message for a matched request."""
    embed = NotificationEmbed(
        title=request.movie,
        url=f"{block.detail_url}{AGENDA_ANCHOR}",
        fields=build_fields(block.showtimes),
        thumbnail_url=block.thumbnail_url,
        footer_text=FOOTER_TEXT,
    )

    return Notification(
        content=f"Er zijn tickets beschikbaar voor {request.describe(bold=True)}.",
        embeds=[embed],
    )
