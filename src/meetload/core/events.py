"""Pure calendar event model and meeting filter - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ResponseStatus(Enum):
    """An attendee's reply to an invitation (iCalendar PARTSTAT)."""

    ACCEPTED = "ACCEPTED"
    TENTATIVE = "TENTATIVE"
    DECLINED = "DECLINED"
    NEEDS_ACTION = "NEEDS-ACTION"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "ResponseStatus":
        """Map a raw PARTSTAT value, defaulting to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        normalized = str(value).strip().upper().replace("_", "-")
        for status in cls:
            if status.value == normalized:
                return status
        return cls.UNKNOWN


@dataclass(frozen=True)
class Attendee:
    """A single invitee on a calendar event."""

    address: str
    status: ResponseStatus = ResponseStatus.UNKNOWN

    @classmethod
    def from_raw(cls, address: str, status: str | None = None) -> "Attendee":
        return cls(address=strip_mailto(address), status=ResponseStatus.parse(status))


@dataclass(frozen=True)
class CalendarEvent:
    """A calendar entry as handed over by a feed adapter."""

    kind: str
    start: datetime | None
    end: datetime | None
    attendees: tuple[Attendee, ...] = ()
    uid: str = ""
    title: str = field(default="", compare=False)


EVENT_KIND = "event"


def strip_mailto(address: str) -> str:
    """Drop a leading mailto: scheme from a calendar address."""
    address = str(address or "").strip()
    if address.lower().startswith("mailto:"):
        return address[len("mailto:"):]
    return address


def normalize_attendees(value) -> tuple:
    """Treat a missing, single, or repeated attendee field as one sequence."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def is_qualifying_meeting(
    event: CalendarEvent,
    reference_user: str,
    now: datetime,
) -> bool:
    """
    Decide whether an event is a past meeting the reference user attended.

    Pure function - no I/O.

    The first attendee entry matching the user decides: DECLINED rejects the
    event, any other reply (including none at all) accepts it. Events without
    attendees are personal blocks, not meetings.
    """
    if event.kind != EVENT_KIND or event.start is None or event.end is None:
        return False

    if event.start > now:
        return False

    attendees = normalize_attendees(event.attendees)
    if not attendees:
        return False

    user = strip_mailto(reference_user).lower()

    for attendee in attendees:
        address = strip_mailto(attendee.address).lower()
        if "@" not in address:
            continue
        if address != user:
            continue
        return attendee.status is not ResponseStatus.DECLINED

    return False
