"""Functional core - pure business logic with no I/O."""

from .events import Attendee, CalendarEvent, ResponseStatus, is_qualifying_meeting
from .durations import EventContribution, WorkWindow, split_duration
from .stats import Averages, MeetingStatsAggregator, RunningStats, SummaryReport, percent, summarize
from .report import NO_DATA_MESSAGE, format_report

__all__ = [
    # Events
    "Attendee",
    "CalendarEvent",
    "ResponseStatus",
    "is_qualifying_meeting",
    # Durations
    "EventContribution",
    "WorkWindow",
    "split_duration",
    # Stats
    "Averages",
    "MeetingStatsAggregator",
    "RunningStats",
    "SummaryReport",
    "percent",
    "summarize",
    # Report
    "NO_DATA_MESSAGE",
    "format_report",
]
