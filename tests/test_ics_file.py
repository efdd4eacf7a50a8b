"""Tests for the iCalendar file adapter."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from meetload.adapters.ics_file import FeedError, IcsFileAdapter
from meetload.core.durations import WorkWindow
from meetload.core.events import ResponseStatus
from meetload.core.stats import summarize

TZ = ZoneInfo("Europe/Stockholm")

SAMPLE_ICS = """\
BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test//meetload//EN
BEGIN:VEVENT
UID:standup-1
SUMMARY:Standup
DTSTART:20250108T080000Z
DTEND:20250108T090000Z
ORGANIZER:mailto:boss@example.org
ATTENDEE;PARTSTAT=ACCEPTED:mailto:boss@example.org
ATTENDEE;CN=Name;PARTSTAT=DECLINED:mailto:Name@Example.org
END:VEVENT
BEGIN:VEVENT
UID:early-1
SUMMARY:Early sync
DTSTART:20250109T060000Z
DTEND:20250109T080000Z
ATTENDEE;PARTSTAT=TENTATIVE:mailto:name@example.org
END:VEVENT
BEGIN:VEVENT
UID:allday-1
SUMMARY:Offsite
DTSTART;VALUE=DATE:20250110
DTEND;VALUE=DATE:20250111
ATTENDEE;PARTSTAT=ACCEPTED:mailto:name@example.org
END:VEVENT
BEGIN:VEVENT
UID:floating-1
SUMMARY:Evening call
DTSTART:20250110T180000
DURATION:PT1H30M
ATTENDEE;PARTSTAT=NEEDS-ACTION:mailto:name@example.org
ATTENDEE:mailto:colleague@example.org
END:VEVENT
BEGIN:VEVENT
UID:focus-1
SUMMARY:Focus time
DTSTART:20250113T090000Z
DTEND:20250113T110000Z
END:VEVENT
BEGIN:VTODO
UID:todo-1
SUMMARY:Write report
DTSTART:20250110T100000Z
END:VTODO
END:VCALENDAR
"""


@pytest.fixture
def ics_file(tmp_path):
    path = tmp_path / "calendar.ics"
    path.write_text(SAMPLE_ICS)
    return path


@pytest.fixture
def events(ics_file):
    adapter = IcsFileAdapter(ics_file, timezone="Europe/Stockholm")
    return {e.uid: e for e in adapter.fetch_events()}


class TestIcsFileAdapter:
    def test_loads_all_components(self, events):
        assert set(events) == {"standup-1", "early-1", "allday-1", "floating-1", "focus-1", "todo-1"}

    def test_component_kinds(self, events):
        assert events["standup-1"].kind == "event"
        assert events["todo-1"].kind == "todo"

    def test_utc_times(self, events):
        event = events["standup-1"]
        assert event.start == datetime(2025, 1, 8, 8, 0, tzinfo=timezone.utc)
        assert event.end == datetime(2025, 1, 8, 9, 0, tzinfo=timezone.utc)
        assert event.title == "Standup"

    def test_multiple_attendees_keep_order(self, events):
        attendees = events["standup-1"].attendees
        assert [a.address for a in attendees] == ["boss@example.org", "Name@Example.org"]
        assert [a.status for a in attendees] == [ResponseStatus.ACCEPTED, ResponseStatus.DECLINED]

    def test_single_attendee_becomes_sequence(self, events):
        attendees = events["early-1"].attendees
        assert len(attendees) == 1
        assert attendees[0].address == "name@example.org"
        assert attendees[0].status is ResponseStatus.TENTATIVE

    def test_missing_partstat_is_unknown(self, events):
        assert events["floating-1"].attendees[1].status is ResponseStatus.UNKNOWN

    def test_no_attendees(self, events):
        assert events["focus-1"].attendees == ()

    def test_all_day_is_local_midnight(self, events):
        event = events["allday-1"]
        assert event.start == datetime(2025, 1, 10, 0, 0, tzinfo=TZ)
        assert event.end - event.start == timedelta(days=1)

    def test_floating_time_is_local(self, events):
        event = events["floating-1"]
        assert event.start == datetime(2025, 1, 10, 18, 0, tzinfo=TZ)

    def test_duration_fills_missing_end(self, events):
        event = events["floating-1"]
        assert event.end - event.start == timedelta(minutes=90)

    def test_todo_without_end(self, events):
        assert events["todo-1"].end is None

    def test_missing_file(self, tmp_path):
        adapter = IcsFileAdapter(tmp_path / "missing.ics")
        with pytest.raises(FeedError, match="not found"):
            adapter.fetch_events()

    def test_not_a_calendar(self, tmp_path):
        path = tmp_path / "notes.ics"
        path.write_text("just some notes\n")
        with pytest.raises(FeedError, match="Failed to parse"):
            IcsFileAdapter(path).fetch_events()

    def test_expands_user_path(self):
        adapter = IcsFileAdapter("~/calendar.ics")
        assert "~" not in str(adapter.path)


class TestIcsToReport:
    def test_summary_from_file(self, ics_file):
        window = WorkWindow(start_hour=8, end_hour=17, timezone="Europe/Stockholm")
        now = datetime(2025, 1, 15, 12, 0, tzinfo=TZ)
        events = IcsFileAdapter(ics_file, timezone="Europe/Stockholm").fetch_events()

        report = summarize(events, "name@example.org", window, now)

        # Standup declined, offsite is all-day, focus time has no attendees
        assert report.meeting_count == 2
        assert report.outside_meeting_count == 2
        assert report.total_hours == 3.5
        assert report.outside_hours == 2.5
        assert report.range_start.isoformat() == "2025-01-09"
