"""Error taxonomy."""


class PatheMonitorError(Exception):
    """Base class for all monitor errors."""


class ConfigError(PatheMonitorError):
    """Missing or invalid configuration; fatal at startup."""


class FetchError(PatheMonitorError):
    """Schedule page could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"error calling {url}: {reason}")
        self.url = url
        self.reason = reason


class ScheduleLayoutError(PatheMonitorError):
    """Expected element missing from a matched schedule block.

    Signals that the schedule page changed shape, not a transient problem.
    """
