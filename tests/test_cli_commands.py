from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from fitroster.cli.app import app
from fitroster.cli.deps import reset_container


def _env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    db_url = f"sqlite+aiosqlite:///{tmp_path/'cli.db'}"
    monkeypatch.setenv("FITROSTER_DATABASE_URL", db_url)
    monkeypatch.setenv("FITROSTER_ENV", "test")
    monkeypatch.delenv("FITROSTER_NOTIFICATION_WEBHOOK_URL", raising=False)
    reset_container()


def test_show_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _env(monkeypatch, tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["show-settings"])

    assert result.exit_code == 0
    assert "Environment:\ttest" in result.stdout
    assert "cli.db" in result.stdout


def test_enroll_waitlist_and_cancel_flow(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _env(monkeypatch, tmp_path)
    runner = CliRunner()

    created = runner.invoke(
        app,
        ["create-class", "Core Blast", "--instructor", "coach-1", "--capacity", "1", "--id", "c1"],
    )
    assert created.exit_code == 0
    assert "Created class c1" in created.stdout

    first = runner.invoke(app, ["enroll", "c1", "alice"])
    assert first.exit_code == 0
    assert "Result:\tenrolled" in first.stdout

    second = runner.invoke(app, ["enroll", "c1", "bob"])
    assert second.exit_code == 0
    assert "Result:\twaitlisted" in second.stdout

    cancelled = runner.invoke(app, ["cancel", "c1", "alice"])
    assert cancelled.exit_code == 0
    assert "Promoted:\tbob" in cancelled.stdout

    roster = runner.invoke(app, ["roster", "c1"])
    assert roster.exit_code == 0
    assert "Seats:\t1/1" in roster.stdout
    assert "1. bob" in roster.stdout

    listing = runner.invoke(app, ["list-classes"])
    assert "c1\tCore Blast\t1/1" in listing.stdout

    inbox = runner.invoke(app, ["notifications", "bob"])
    assert inbox.exit_code == 0
    assert "seat_freed" in inbox.stdout
    assert "waitlisted" in inbox.stdout


def test_enroll_unknown_class_fails(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _env(monkeypatch, tmp_path)
    runner = CliRunner()

    result = runner.invoke(app, ["enroll", "missing", "alice"])

    assert result.exit_code == 1
    assert "not found" in result.stdout


def test_enroll_in_closed_class_exits_nonzero(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _env(monkeypatch, tmp_path)
    runner = CliRunner()
    runner.invoke(
        app,
        [
            "create-class",
            "Old Class",
            "--instructor",
            "coach-2",
            "--capacity",
            "5",
            "--id",
            "old",
            "--status",
            "completed",
        ],
    )

    result = runner.invoke(app, ["enroll", "old", "alice"])

    assert result.exit_code == 2
    assert "class_unavailable" in result.stdout
