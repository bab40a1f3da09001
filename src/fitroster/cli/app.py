"""Typer CLI wiring Fitroster services."""

from __future__ import annotations

import asyncio
from datetime import datetime
from uuid import uuid4

import typer

from fitroster.domain import (
    ClassId,
    ClassRecord,
    ClassStatus,
    EnrollmentOutcome,
    EnrollmentResult,
    InstructorId,
    MemberId,
)
from fitroster.enrollment import EnrollmentError
from fitroster.persistence import NotFoundError, RepositoryError
from fitroster.utils import to_utc

from .deps import get_container

app = typer.Typer(help="Fitroster group-class enrollment")


def _parse_status(value: str) -> ClassStatus:
    try:
        return ClassStatus(value.lower())
    except ValueError as exc:
        choices = ", ".join(status.value for status in ClassStatus)
        raise typer.BadParameter(f"status must be one of: {choices}") from exc


def _parse_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return to_utc(value)
    except ValueError as exc:
        raise typer.BadParameter("expected an ISO 8601 timestamp") from exc


def _echo_outcome(outcome: EnrollmentOutcome) -> None:
    typer.echo(f"Result:\t{outcome.result.value}")
    if outcome.promoted is not None:
        typer.echo(f"Promoted:\t{outcome.promoted}")
    typer.echo("Enrolled:\t" + (", ".join(outcome.enrolled) or "(none)"))
    typer.echo("Waitlist:\t" + (", ".join(outcome.waitlist) or "(none)"))


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved application settings."""

    container = get_container()
    settings = container.settings
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("Database URL:\t" + settings.database_url)
    typer.echo(f"Max attempts:\t{settings.max_attempts}")
    typer.echo("Webhook:\t" + (settings.notification_webhook_url or "(disabled)"))


@app.command("create-class")
def create_class(
    name: str,
    instructor: str = typer.Option(..., help="Instructor id"),
    capacity: int = typer.Option(..., min=1),
    class_id: str | None = typer.Option(None, "--id", help="Class id (generated if omitted)"),
    status: str = typer.Option(ClassStatus.SCHEDULED.value, help="Initial class status"),
    start: str | None = typer.Option(None, help="Start time, ISO 8601"),
    location: str | None = typer.Option(None),
) -> None:
    """Create a class with an empty roster."""

    container = get_container()
    record = ClassRecord(
        id=ClassId(class_id or uuid4().hex),
        name=name,
        instructor_id=InstructorId(instructor),
        capacity=capacity,
        status=_parse_status(status),
        start_time=_parse_datetime(start),
        location=location,
    )

    try:
        asyncio.run(container.class_store.add(record))
    except RepositoryError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc
    typer.echo(f"Created class {record.id}")


@app.command("list-classes")
def list_classes(
    status: str = typer.Option(ClassStatus.SCHEDULED.value, help="Filter by status"),
) -> None:
    """List classes with their seat usage."""

    container = get_container()
    records = asyncio.run(container.class_store.list_by_status(_parse_status(status)))
    if not records:
        typer.echo("No classes found")
        return
    for record in records:
        typer.echo(
            f"{record.id}\t{record.name}\t{len(record.enrolled)}/{record.capacity}"
            f"\twaitlist {len(record.waitlist)}"
        )


@app.command("roster")
def roster(class_id: str) -> None:
    """Show the enrolled members and waitlist of a class."""

    container = get_container()
    try:
        record = asyncio.run(container.enrollment_service.roster(ClassId(class_id)))
    except NotFoundError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    typer.echo(f"Class:\t{record.name} ({record.status.value})")
    typer.echo(f"Seats:\t{len(record.enrolled)}/{record.capacity}")
    typer.echo(f"Revision:\t{record.revision}")
    for position, member in enumerate(record.enrolled, start=1):
        typer.echo(f"  {position}. {member}")
    if record.waitlist:
        typer.echo("Waitlist:")
        for position, member in enumerate(record.waitlist, start=1):
            typer.echo(f"  {position}. {member}")


def _run_roster_action(
    action: str,
    class_id: str,
    member_id: str,
    timeout: float | None,
) -> None:
    container = get_container()
    service = container.enrollment_service
    operation = service.enroll if action == "enroll" else service.cancel

    async def _run() -> EnrollmentOutcome:
        outcome = await operation(ClassId(class_id), MemberId(member_id), timeout=timeout)
        await container.dispatcher.drain()
        return outcome

    try:
        outcome = asyncio.run(_run())
    except (RepositoryError, EnrollmentError) as exc:
        typer.echo(f"{action} failed: {exc}")
        raise typer.Exit(code=1) from exc

    _echo_outcome(outcome)
    if outcome.result is EnrollmentResult.CLASS_UNAVAILABLE:
        raise typer.Exit(code=2)


@app.command("enroll")
def enroll(
    class_id: str,
    member_id: str,
    timeout: float | None = typer.Option(None, min=0.0, help="Seconds before giving up"),
) -> None:
    """Enroll a member, joining the waitlist when the class is full."""

    _run_roster_action("enroll", class_id, member_id, timeout)


@app.command("cancel")
def cancel(
    class_id: str,
    member_id: str,
    timeout: float | None = typer.Option(None, min=0.0, help="Seconds before giving up"),
) -> None:
    """Cancel a member's seat or waitlist slot."""

    _run_roster_action("cancel", class_id, member_id, timeout)


@app.command("notifications")
def notifications(
    recipient_id: str,
    limit: int = typer.Option(10, min=1),
) -> None:
    """Show the most recent inbox notifications for a member or instructor."""

    container = get_container()
    repository = container.notification_repository

    async def _run() -> tuple[list[str], int]:
        items = await repository.list_for_recipient(recipient_id, limit=limit)
        unread = await repository.unread_count(recipient_id)
        lines = [
            f"{item.created_at:%Y-%m-%d %H:%M}\t{item.kind.value}\t{item.title}"
            for item in items
        ]
        return lines, unread

    lines, unread = asyncio.run(_run())
    if not lines:
        typer.echo("No notifications")
        return
    typer.echo(f"Unread: {unread}")
    for line in lines:
        typer.echo(line)
