"""Flask CLI commands for development database seeding."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy import func, select

from taskapi.core.extensions import db
from taskapi.models import Task, User

LOGGER = logging.getLogger(__name__)

DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password1"

DEMO_TASKS = (
    ("Buy groceries", "Milk, eggs and bread", 0),
    ("Write weekly report", None, 1),
    ("Book dentist appointment", "Morning slot if possible", 3),
)


def _ensure_non_production() -> None:
    """Abort seeding commands when running in production."""
    config = current_app.config
    app_env = str(config.get("APP_ENV", "")).lower()
    if app_env == "production":
        raise click.UsageError("Seeding commands are restricted to non-production environments.")


def seed_demo() -> dict[str, dict[str, int]]:
    """Create the demo user and sample tasks if they are missing.

    :returns: Per-table ``created``/``existing`` counters.
    """
    summary: dict[str, dict[str, int]] = {}

    user = db.session.execute(select(User).where(User.email == DEMO_EMAIL)).scalars().first()
    if user is None:
        user = User(name=DEMO_NAME, email=DEMO_EMAIL)
        user.password = DEMO_PASSWORD
        db.session.add(user)
        summary["users"] = {"created": 1, "existing": 0}
    else:
        summary["users"] = {"created": 0, "existing": 1}

    existing = int(db.session.execute(select(func.count(Task.id))).scalar_one())
    created = 0
    if existing == 0:
        now = datetime.now(UTC).replace(microsecond=0)
        for title, description, days in DEMO_TASKS:
            when = now + timedelta(days=days)
            db.session.add(
                Task(
                    title=title,
                    description=description,
                    task_date_time=when,
                    reminder_date_time=when - timedelta(hours=1),
                )
            )
            created += 1
    summary["tasks"] = {"created": created, "existing": existing}

    db.session.commit()
    return summary


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


@click.group("seed")
def seed_cli() -> None:
    """Collection of database seeding commands."""


@seed_cli.command("demo")
@with_appcontext
def demo_command() -> None:
    """Create a demo account and a few sample tasks."""
    _ensure_non_production()
    try:
        summary = seed_demo()
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    LOGGER.info("seed.demo.done")
    _echo_summary(summary)
    click.echo(f"Login with {DEMO_EMAIL} / {DEMO_PASSWORD}")
