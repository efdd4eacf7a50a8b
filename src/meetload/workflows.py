"""Workflow layer between the CLI and the functional core.

Each function resolves configuration, loads the feed through an adapter,
and hands the events to the core.
"""

import logging
from datetime import datetime
from pathlib import Path

from .adapters.ics_file import IcsFileAdapter
from .config import Config
from .core.durations import WorkWindow
from .core.report import NO_DATA_MESSAGE, format_report, report_to_json_dict
from .core.stats import SummaryReport, summarize
from .ports.event_source import EventSource

logger = logging.getLogger(__name__)


def get_event_source(config: Config) -> EventSource:
    """Resolve the calendar feed from config."""
    if not config.ics_path:
        raise ValueError("No calendar file given; pass ICS_PATH or set ICS_PATH in meetload.conf")
    return IcsFileAdapter(Path(config.ics_path).expanduser(), timezone=config.timezone)


def validate_config(config: Config) -> WorkWindow:
    """Check the settings a run needs and return the work window."""
    if not config.user_email:
        raise ValueError("No user email configured; pass --email or set USER_EMAIL in meetload.conf")
    return config.work_window()


def compute_stats(
    config: Config,
    now: datetime | None = None,
    source: EventSource | None = None,
) -> SummaryReport | None:
    """Load the feed and fold it into a report (None when nothing qualified)."""
    window = validate_config(config)
    source = source or get_event_source(config)
    events = source.fetch_events()

    report = summarize(events, config.user_email, window, now=now)
    if report is None:
        logger.info(f"No qualifying meetings among {len(events)} entries")
    else:
        logger.info(f"{report.meeting_count} qualifying meetings among {len(events)} entries")
    return report


def generate_summary(
    config: Config,
    now: datetime | None = None,
    source: EventSource | None = None,
) -> str:
    """Compute stats and return the printable summary."""
    report = compute_stats(config, now=now, source=source)
    if report is None:
        return NO_DATA_MESSAGE
    return format_report(report, config.user_email, config.work_window())


def generate_summary_json(
    config: Config,
    now: datetime | None = None,
    source: EventSource | None = None,
) -> dict:
    """Compute stats and return a JSON-ready mapping."""
    report = compute_stats(config, now=now, source=source)
    return report_to_json_dict(report, config.user_email, config.work_window())
