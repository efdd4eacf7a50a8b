"""Pure report formatting logic - no I/O dependencies."""

from .durations import WorkWindow
from .stats import SummaryReport

NO_DATA_MESSAGE = "No past meetings found where you are an attendee (and not declined)."


def format_number(value: float) -> str:
    """Shortest display form: 12.0 -> "12", 1.50 -> "1.5"."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_report(report: SummaryReport, reference_user: str, window: WorkWindow) -> str:
    """
    Format a summary report as plain text lines.

    Pure function - no I/O.
    """
    n = format_number
    hours = window.label
    everyone = report.all_meetings
    outside = report.outside_only

    lines = [
        f"Range: {report.range_start.isoformat()} → {report.range_end.isoformat()} "
        f"({n(report.span_years)} years)",
        f"Total meetings (you listed as attendee, not declined): {report.meeting_count} "
        f"(for {reference_user})",
        f"Meetings outside {hours}: {report.outside_meeting_count} "
        f"({n(report.meetings_outside_percent)}%)",
        f"Total hours in meetings: {n(report.total_hours)}h",
        f"Hours outside {hours}: {n(report.outside_hours)}h ({n(report.hours_outside_percent)}%)",
        "",
        "Averages (all meetings where you participated):",
        f"Per week: {n(everyone.meetings_per_week)} meetings, {n(everyone.hours_per_week)}h in meetings",
        f"Per month: {n(everyone.meetings_per_month)} meetings, {n(everyone.hours_per_month)}h in meetings",
        "",
        "Averages (outside working hours only):",
        f"Per week: {n(outside.meetings_per_week)} meetings, {n(outside.hours_per_week)}h",
        f"Per month: {n(outside.meetings_per_month)} meetings, {n(outside.hours_per_month)}h",
    ]
    return "\n".join(lines)


def report_to_json_dict(
    report: SummaryReport | None,
    reference_user: str,
    window: WorkWindow,
) -> dict:
    """JSON-ready mapping; the report key is None when nothing qualified."""
    return {
        "user": reference_user,
        "work_hours": window.label,
        "timezone": window.timezone,
        "report": report.to_dict() if report else None,
    }
