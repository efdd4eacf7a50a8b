"""meetload CLI - meeting-load statistics from a calendar export."""

import json
import logging
import sys
from dataclasses import replace
from datetime import datetime

import click

from .adapters.ics_file import FeedError
from .config import CONFIG_FILE, load_config
from .workflows import generate_summary, generate_summary_json, get_event_source, validate_config


@click.group()
@click.version_option(package_name="meetload")
def main():
    """meetload - how much of your time goes to meetings."""
    pass


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"'{value}' is not an ISO 8601 datetime", param_hint="--now")


@main.command()
@click.argument("ics_path", required=False, type=click.Path(dir_okay=False))
@click.option("--email", default=None, help="Your calendar email address")
@click.option("--timezone", "tz", default=None, help="IANA time zone for working hours")
@click.option("--work-hours", default=None, help="Working hours, e.g. 08:00-17:00")
@click.option("--now", "now_str", default=None, help="Reference time (ISO 8601), defaults to now")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def stats(
    ics_path: str | None,
    email: str | None,
    tz: str | None,
    work_hours: str | None,
    now_str: str | None,
    as_json: bool,
    debug: bool,
):
    """Summarize meetings you attended in an .ics export."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    config = load_config()
    overrides = {
        "ics_path": ics_path,
        "user_email": email,
        "timezone": tz,
        "work_hours": work_hours,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    now = _parse_now(now_str)

    try:
        validate_config(config)
        source = get_event_source(config)
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        if as_json:
            click.echo(json.dumps(generate_summary_json(config, now=now, source=source), indent=2))
        else:
            click.echo(generate_summary(config, now=now, source=source))
    except FeedError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("config")
def show_config():
    """Show the effective configuration."""
    config = load_config()
    source = CONFIG_FILE if CONFIG_FILE.exists() else f"{CONFIG_FILE} (not found, using defaults)"

    click.echo(f"Config file: {source}")
    click.echo(f"  USER_EMAIL = {config.user_email or '(not set)'}")
    click.echo(f"  TIMEZONE   = {config.timezone}")
    click.echo(f"  WORK_HOURS = {config.work_hours}")
    click.echo(f"  ICS_PATH   = {config.ics_path or '(not set)'}")


if __name__ == "__main__":
    main()
