"""Working-hours window and per-event duration split - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Anything this long is treated as an all-day or out-of-office block.
MAX_MEETING_HOURS = 8


@dataclass(frozen=True)
class WorkWindow:
    """Daily working hours, interpreted as wall-clock time in a zone."""

    start_hour: int
    end_hour: int
    timezone: str

    def __post_init__(self):
        for hour in (self.start_hour, self.end_hour):
            if not 0 <= hour <= 23:
                raise ValueError(f"Work hour out of range 0-23: {hour}")
        if self.start_hour >= self.end_hour:
            raise ValueError(
                f"Work day must start before it ends: {self.start_hour}-{self.end_hour}"
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {self.timezone}") from e

    @classmethod
    def parse(cls, work_hours: str, timezone: str) -> "WorkWindow":
        """Build a window from a "HH:MM-HH:MM" string."""
        try:
            start_str, end_str = work_hours.split("-")
            start_hour = int(start_str.split(":")[0])
            end_hour = int(end_str.split(":")[0])
        except ValueError as e:
            raise ValueError(f"Invalid work hours '{work_hours}', expected HH:MM-HH:MM") from e
        return cls(start_hour=start_hour, end_hour=end_hour, timezone=timezone)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def label(self) -> str:
        return f"{self.start_hour}-{self.end_hour}"

    def to_local(self, dt: datetime) -> datetime:
        """Express an instant in this window's zone; naive values are taken as local."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.zone)
        return dt.astimezone(self.zone)

    def bounds_for(self, local_dt: datetime) -> tuple[datetime, datetime]:
        """Working window on the calendar date of a local datetime."""
        day_start = local_dt.replace(hour=self.start_hour, minute=0, second=0, microsecond=0)
        day_end = local_dt.replace(hour=self.end_hour, minute=0, second=0, microsecond=0)
        return day_start, day_end


@dataclass(frozen=True)
class EventContribution:
    """Hours one meeting adds to the totals."""

    total_hours: float
    outside_hours: float

    @property
    def inside_hours(self) -> float:
        return self.total_hours - self.outside_hours

    @property
    def is_zero(self) -> bool:
        return self.total_hours == 0


NO_CONTRIBUTION = EventContribution(total_hours=0.0, outside_hours=0.0)


def elapsed_hours(start: datetime, end: datetime) -> float:
    """Hours between two aware instants."""
    # Same-zone aware datetimes subtract as wall clock; go through UTC.
    delta = end.astimezone(timezone.utc) - start.astimezone(timezone.utc)
    return delta / timedelta(hours=1)


def split_duration(
    start: datetime,
    end: datetime,
    window: WorkWindow,
) -> EventContribution:
    """
    Split an event's duration into total and outside-working-hours parts.

    Pure function - no I/O.

    The working window is anchored to the start's local date, even when the
    event runs past midnight. Events of zero, negative, or 8+ hours return
    NO_CONTRIBUTION so they drop out of every total.
    """
    try:
        local_start = window.to_local(start)
        local_end = window.to_local(end)
        total_hours = elapsed_hours(local_start, local_end)
    except (OverflowError, ValueError):
        return NO_CONTRIBUTION

    if total_hours <= 0 or total_hours >= MAX_MEETING_HOURS:
        return NO_CONTRIBUTION

    work_start, work_end = window.bounds_for(local_start)

    inside_start = max(local_start, work_start)
    inside_end = min(local_end, work_end)

    inside_hours = 0.0
    if inside_end > inside_start:
        inside_hours = elapsed_hours(inside_start, inside_end)

    return EventContribution(
        total_hours=total_hours,
        outside_hours=total_hours - inside_hours,
    )
