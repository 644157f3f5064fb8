"""Tests for the ``flask seed`` command group."""

from __future__ import annotations

from sqlalchemy import func, select

from taskapi.cli.seed import DEMO_EMAIL, DEMO_PASSWORD
from taskapi.models import Task, User


def test_seed_demo_creates_user_and_tasks(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed", "demo"])

    assert result.exit_code == 0, result.output
    assert "Seed summary" in result.output
    user = session.execute(select(User).where(User.email == DEMO_EMAIL)).scalar_one()
    assert user.verify_password(DEMO_PASSWORD)
    assert session.execute(select(func.count(Task.id))).scalar_one() == 3


def test_seed_demo_is_idempotent(app, session):
    runner = app.test_cli_runner()
    runner.invoke(args=["seed", "demo"])

    result = runner.invoke(args=["seed", "demo"])

    assert result.exit_code == 0, result.output
    assert session.execute(select(func.count(User.id))).scalar_one() == 1
    assert session.execute(select(func.count(Task.id))).scalar_one() == 3


def test_seed_refuses_production(app, session, monkeypatch):
    monkeypatch.setitem(app.config, "APP_ENV", "production")

    result = app.test_cli_runner().invoke(args=["seed", "demo"])

    assert result.exit_code != 0
    assert "non-production" in result.output
