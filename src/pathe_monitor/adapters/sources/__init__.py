"""Source adapters for schedule pages."""

from pathe_monitor.adapters.sources.pathe_source import PatheScheduleSource
from pathe_monitor.adapters.sources.schedule_parser import find_schedule_block

__all__ = ["PatheScheduleSource", "find_schedule_block"]
