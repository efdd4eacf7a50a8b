"""iCalendar file adapter - reads an .ics export from disk."""

import logging
from datetime import date, datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

from icalendar import Calendar

from meetload.core.events import Attendee, CalendarEvent, normalize_attendees

logger = logging.getLogger(__name__)

# iCalendar component name -> CalendarEvent.kind
COMPONENT_KINDS = {
    "VEVENT": "event",
    "VTODO": "todo",
    "VJOURNAL": "journal",
}


class FeedError(Exception):
    """Raised when the calendar feed cannot be read or parsed."""

    pass


class IcsFileAdapter:
    """
    iCalendar file adapter.

    Loads every event, to-do, and journal entry from an .ics export.
    Floating and date-only times are read as wall-clock time in `timezone`.

    Implements EventSource protocol.
    """

    def __init__(self, path: str | Path, timezone: str = "Europe/Stockholm"):
        self.path = Path(path).expanduser()
        self.timezone = timezone

    def fetch_events(self) -> list[CalendarEvent]:
        """Parse the whole file into CalendarEvents."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            raise FeedError(f"Calendar file not found: {self.path}")
        except OSError as e:
            raise FeedError(f"Could not read calendar file {self.path}: {e}") from e

        try:
            calendar = Calendar.from_ical(raw)
        except ValueError as e:
            raise FeedError(f"Failed to parse {self.path} as iCalendar: {e}") from e

        events = self._parse_components(calendar)
        logger.info(f"Loaded {len(events)} entries from {self.path}")
        return events

    def _parse_components(self, calendar: Calendar) -> list[CalendarEvent]:
        zone = ZoneInfo(self.timezone)
        events = []

        for component in calendar.walk():
            kind = COMPONENT_KINDS.get(component.name)
            if kind is None:
                continue

            try:
                events.append(self._parse_component(component, kind, zone))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.debug(f"Skipping malformed {component.name}: {e}")
                continue

        return events

    def _parse_component(self, component, kind: str, zone: ZoneInfo) -> CalendarEvent:
        """Parse a single iCalendar component."""
        start = _to_datetime(component.get("DTSTART"), zone)
        end = _to_datetime(component.get("DTEND"), zone)

        duration = component.get("DURATION")
        if end is None and start is not None and duration is not None:
            end = start + duration.dt

        return CalendarEvent(
            kind=kind,
            start=start,
            end=end,
            attendees=_parse_attendees(component.get("ATTENDEE")),
            uid=str(component.get("UID", "")),
            title=str(component.get("SUMMARY", "Untitled")),
        )


def _to_datetime(prop, zone: ZoneInfo) -> datetime | None:
    """Decode a DTSTART/DTEND property into an aware datetime."""
    if prop is None:
        return None

    value = prop.dt
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=zone)
        return value
    if isinstance(value, date):
        # All-day entry: local midnight
        return datetime.combine(value, time(0, 0), tzinfo=zone)
    return None


def _parse_attendees(value) -> tuple[Attendee, ...]:
    """Normalize one or many ATTENDEE properties into Attendee records."""
    attendees = []
    for prop in normalize_attendees(value):
        params = getattr(prop, "params", {})
        attendees.append(Attendee.from_raw(str(prop), params.get("PARTSTAT")))
    return tuple(attendees)
