"""Meeting-load aggregation - pure fold over filtered, split events."""

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from dateutil.relativedelta import relativedelta

from .durations import WorkWindow, elapsed_hours, split_duration
from .events import CalendarEvent, is_qualifying_meeting

logger = logging.getLogger(__name__)

HOURS_PER_WEEK = 7 * 24
# Fractional remainders after whole calendar months/years use fixed lengths.
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def percent(part: float, whole: float) -> float:
    """Share of part in whole as a rounded percentage; 0 when whole is 0."""
    if whole == 0:
        return 0.0
    return round2(part / whole * 100)


def weeks_between(start: datetime, end: datetime) -> float:
    """Weeks of elapsed real time."""
    return elapsed_hours(start, end) / HOURS_PER_WEEK


def months_between(start: datetime, end: datetime) -> float:
    """Whole calendar months plus the remainder in 30-day months."""
    delta = relativedelta(end, start)
    whole = delta.years * 12 + delta.months
    cursor = start + relativedelta(months=whole)
    return whole + elapsed_hours(cursor, end) / (DAYS_PER_MONTH * 24)


def years_between(start: datetime, end: datetime) -> float:
    """Whole calendar years plus the remainder in 365-day years."""
    whole = relativedelta(end, start).years
    cursor = start + relativedelta(years=whole)
    return whole + elapsed_hours(cursor, end) / (DAYS_PER_YEAR * 24)


@dataclass
class RunningStats:
    """Totals accumulated while folding qualifying meetings."""

    meeting_count: int = 0
    outside_meeting_count: int = 0
    total_hours: float = 0.0
    outside_hours: float = 0.0
    earliest_start: datetime | None = None


@dataclass(frozen=True)
class Averages:
    """Meetings and hours per week and per month."""

    meetings_per_week: float
    hours_per_week: float
    meetings_per_month: float
    hours_per_month: float

    @classmethod
    def over_span(cls, meetings: int, hours: float, weeks: float, months: float) -> "Averages":
        return cls(
            meetings_per_week=round2(meetings / weeks),
            hours_per_week=round2(hours / weeks),
            meetings_per_month=round2(meetings / months),
            hours_per_month=round2(hours / months),
        )


@dataclass(frozen=True)
class SummaryReport:
    """Final meeting-load statistics for one run."""

    range_start: date
    range_end: date
    span_years: float
    meeting_count: int
    outside_meeting_count: int
    meetings_outside_percent: float
    total_hours: float
    outside_hours: float
    hours_outside_percent: float
    all_meetings: Averages
    outside_only: Averages

    def to_dict(self) -> dict:
        data = asdict(self)
        data["range_start"] = self.range_start.isoformat()
        data["range_end"] = self.range_end.isoformat()
        return data


class MeetingStatsAggregator:
    """
    Folds calendar events into meeting-load statistics.

    Each event is filtered for participation, split against the work window,
    and added to the running totals. build_report() returns None when no
    meeting ever qualified.
    """

    def __init__(self, reference_user: str, window: WorkWindow, now: datetime):
        self.reference_user = reference_user
        self.window = window
        self.now = window.to_local(now)
        self.stats = RunningStats()

    def add(self, event: CalendarEvent) -> bool:
        """Fold one event in. Returns True if it counted as a meeting."""
        event = self._localize(event)
        if not is_qualifying_meeting(event, self.reference_user, self.now):
            return False

        contribution = split_duration(event.start, event.end, self.window)
        if contribution.is_zero:
            logger.debug(f"Skipping zero-length or all-day event {event.uid or event.title!r}")
            return False

        stats = self.stats
        stats.meeting_count += 1
        stats.total_hours += contribution.total_hours

        if contribution.outside_hours > 0:
            stats.outside_meeting_count += 1
            stats.outside_hours += contribution.outside_hours

        if stats.earliest_start is None or event.start < stats.earliest_start:
            stats.earliest_start = event.start

        return True

    def _localize(self, event: CalendarEvent) -> CalendarEvent:
        """Put event instants in the window zone so they compare with now."""
        if event.start is None or event.end is None:
            return event
        try:
            return replace(
                event,
                start=self.window.to_local(event.start),
                end=self.window.to_local(event.end),
            )
        except OverflowError:
            # split_duration turns out-of-range instants into no contribution
            return event

    def add_all(self, events: Iterable[CalendarEvent]) -> int:
        """Fold a sequence of events, returning how many counted."""
        return sum(1 for event in events if self.add(event))

    def build_report(self) -> SummaryReport | None:
        stats = self.stats
        if stats.earliest_start is None:
            return None

        logger.debug(
            f"Folded {stats.meeting_count} meetings "
            f"({stats.outside_meeting_count} outside hours) since {stats.earliest_start.isoformat()}"
        )

        span_weeks = max(weeks_between(stats.earliest_start, self.now), 1)
        span_months = max(months_between(stats.earliest_start, self.now), 1)

        return SummaryReport(
            range_start=stats.earliest_start.date(),
            range_end=self.now.date(),
            span_years=round2(years_between(stats.earliest_start, self.now)),
            meeting_count=stats.meeting_count,
            outside_meeting_count=stats.outside_meeting_count,
            meetings_outside_percent=percent(stats.outside_meeting_count, stats.meeting_count),
            total_hours=round2(stats.total_hours),
            outside_hours=round2(stats.outside_hours),
            hours_outside_percent=percent(stats.outside_hours, stats.total_hours),
            all_meetings=Averages.over_span(
                stats.meeting_count, stats.total_hours, span_weeks, span_months
            ),
            outside_only=Averages.over_span(
                stats.outside_meeting_count, stats.outside_hours, span_weeks, span_months
            ),
        )


def summarize(
    events: Iterable[CalendarEvent],
    reference_user: str,
    window: WorkWindow,
    now: datetime | None = None,
) -> SummaryReport | None:
    """
    Compute meeting-load statistics for a whole feed.

    Pure function apart from defaulting `now` to the current time.
    Returns None when no event qualifies.
    """
    now = now or datetime.now(window.zone)
    aggregator = MeetingStatsAggregator(reference_user, window, now)
    aggregator.add_all(events)
    return aggregator.build_report()
