"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

API_ORIGIN = "https://www.pathe.nl"
SITE_ORIGIN = "https://pathe.nl"


class Cinema(int, Enum):
    """Monitored Pathé venue, valued by its numeric cinema id."""

    BUITENHOF = 7
    SPUIMARKT = 13
    DELFT = 18

    @property
    def label(self) -> str:
        """Name used in the watch-list document, e.g. ``Buitenhof``."""
        return self.name.capitalize()

    @property
    def display_name(self) -> str:
        return f"Pathé {self.label}"

    @classmethod
    def from_label(cls, label: str) -> "Cinema":
        """Parse a document label (case-insensitive)."""
        try:
            return cls[str(label).upper()]
        except KeyError:
            known = ", ".join(c.label for c in cls)
            raise ValueError(f"Unknown cinema {label!r} (expected one of: {known})") from None

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class WatchRequest:
    """One (cinema, date, movie) tuple to monitor."""

    cinema: Cinema
    date: str
    movie: str

    def __post_init__(self) -> None:
        if not isinstance(self.cinema, Cinema):
            raise ValueError(f"Cinema must be a Cinema, got {self.cinema!r}")
        if not isinstance(self.date, str):
            raise ValueError(f"Date must be a string, got {self.date!r}")
        if not isinstance(self.movie, str):
            raise ValueError(f"Movie must be a string, got {self.movie!r}")
        if not self.date:
            raise ValueError("Date cannot be empty")
        if not self.movie:
            raise ValueError("Movie cannot be empty")

    @property
    def api_url(self) -> str:
        return f"{API_ORIGIN}/cinema/schedules?cinemaId={self.cinema.value}&date={self.date}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchRequest":
        return cls(
            cinema=Cinema.from_label(data["cinema"]),
            date=data["date"],
            movie=data["movie"],
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "cinema": self.cinema.label,
            "date": self.date,
            "movie": self.movie,
        }

    def describe(self, bold: bool = False) -> str:
        """Render cinema, date and movie; ``bold`` adds markdown emphasis."""
        mark = "**" if bold else ""
        return (
            f"'{mark}{self.movie}{mark}' op {mark}{self.date}{mark} "
            f"in {mark}{self.cinema.display_name}{mark}"
        )

    def __str__(self) -> str:
        return self.describe()


@dataclass
class WatchList:
    """Ordered collection of watch requests."""

    requests: list[WatchRequest] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatchList":
        return cls(requests=[WatchRequest.from_dict(r) for r in data["requests"]])

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {"requests": [r.to_dict() for r in self.requests]}

    def __len__(self) -> int:
        return len(self.requests)


@dataclass
class ShowtimeRecord:
    """One bookable time slot of a schedule block."""

    label: str
    start: str
    end: str
    booking_link: str


@dataclass
class ScheduleBlock:
    """Schedule listing of a single movie on a schedule page."""

    title: str
    detail_url: str
    thumbnail_url: str
    showtimes: list[ShowtimeRecord]


@dataclass
class NotificationField:
    name: str
    value: str
    inline: Optional[bool] = None


@dataclass
class NotificationEmbed:
    """Rich message block rendered by the chat client."""

    title: str
    url: str
    fields: list[NotificationField]
    thumbnail_url: str
    footer_text: str
    description: Optional[str] = None


@dataclass
class Notification:
    """Webhook message announcing available tickets."""

    content: str
    embeds: list[NotificationEmbed]

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the webhook JSON body."""
        return {
            "content": self.content,
            "embeds": [
                {
                    "title": embed.title,
                    "description": embed.description,
                    "url": embed.url,
                    "fields": [
                        {"name": f.name, "value": f.value, "inline": f.inline}
                        for f in embed.fields
                    ],
                    "thumbnail": {"url": embed.thumbnail_url},
                    "footer": {"text": embed.footer_text},
                }
                for embed in self.embeds
            ],
        }


class CheckOutcome(str, Enum):
    """Terminal state of one watch request within one tick."""

    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"
    # Unexpected exception while processing
    ERROR = "error"
