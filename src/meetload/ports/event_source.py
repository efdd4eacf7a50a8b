"""Event source interface."""

from typing import Protocol

from meetload.core.events import CalendarEvent


class EventSource(Protocol):
    """Interface for loading calendar events from any feed."""

    def fetch_events(self) -> list[CalendarEvent]:
        """Load every event in the feed."""
        ...
