"""Real-estate CRM commands (Follow Up Boss, DotLoop).

Credentials come from ``AppSettings`` (``POCKET_FUB_*``, ``POCKET_DOTLOOP_*``);
``pocket doctor setup-realestate`` stores them in the user config.
"""

from __future__ import annotations

from typing import Optional

import typer

from adapters.realestate.dotloop import DEFAULT_DOCUMENT_LIMIT, DotloopClient
from adapters.realestate.dotloop import DEFAULT_LIMIT as DOTLOOP_DEFAULT_LIMIT
from adapters.realestate.followupboss import DEFAULT_LIMIT as FUB_DEFAULT_LIMIT
from adapters.realestate.followupboss import FollowUpBossClient
from cli.output import emit, get_state, handle_errors

app = typer.Typer(no_args_is_help=True, help="Real-estate CRM integrations.")

fub_app = typer.Typer(no_args_is_help=True, help="Follow Up Boss: contacts, leads, tasks and events.")
dotloop_app = typer.Typer(no_args_is_help=True, help="DotLoop: loops, profiles, tasks and documents.")

app.add_typer(fub_app, name="followupboss")
app.add_typer(fub_app, name="fub", hidden=True)
app.add_typer(dotloop_app, name="dotloop")


# Follow Up Boss


@fub_app.command("contacts")
def fub_contacts(
    ctx: typer.Context,
    limit: int = typer.Option(FUB_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status."),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Search query."),
) -> None:
    """List contacts."""

    with handle_errors():
        with FollowUpBossClient(get_state(ctx).settings) as client:
            page = client.contacts(limit=limit, status=status, search=search)
        emit(ctx, {"count": len(page.contacts), "total": page.total, "contacts": page.contacts})


@fub_app.command("contact")
def fub_contact(ctx: typer.Context, contact_id: str = typer.Argument(..., help="Contact id.")) -> None:
    """Get one contact."""

    with handle_errors():
        with FollowUpBossClient(get_state(ctx).settings) as client:
            emit(ctx, client.contact(contact_id))


@fub_app.command("leads")
def fub_leads(
    ctx: typer.Context,
    limit: int = typer.Option(FUB_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status."),
) -> None:
    """List leads (opportunities)."""

    with handle_errors():
        with FollowUpBossClient(get_state(ctx).settings) as client:
            page = client.leads(limit=limit, status=status)
        emit(ctx, {"count": len(page.opportunities), "total": page.total, "leads": page.opportunities})


@fub_app.command("tasks")
def fub_tasks(
    ctx: typer.Context,
    limit: int = typer.Option(FUB_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
    completed: Optional[str] = typer.Option(None, "--completed", "-c", help="Filter by completed (true/false)."),
) -> None:
    """List tasks."""

    with handle_errors():
        with FollowUpBossClient(get_state(ctx).settings) as client:
            page = client.tasks(limit=limit, completed=completed)
        emit(ctx, {"count": len(page.tasks), "total": page.total, "tasks": page.tasks})


@fub_app.command("events")
def fub_events(
    ctx: typer.Context,
    limit: int = typer.Option(FUB_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
    start_date: Optional[str] = typer.Option(None, "--start", "-s", help="Start date (YYYY-MM-DD)."),
    end_date: Optional[str] = typer.Option(None, "--end", "-e", help="End date (YYYY-MM-DD)."),
) -> None:
    """List events and appointments."""

    with handle_errors():
        with FollowUpBossClient(get_state(ctx).settings) as client:
            page = client.events(limit=limit, start_date=start_date, end_date=end_date)
        emit(ctx, {"count": len(page.events), "total": page.total, "events": page.events})


# DotLoop


@dotloop_app.command("loops")
def dotloop_loops(
    ctx: typer.Context,
    limit: int = typer.Option(DOTLOOP_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status."),
) -> None:
    """List loops (transactions)."""

    with handle_errors():
        with DotloopClient(get_state(ctx).settings) as client:
            loops = client.loops(limit=limit, status=status)
        emit(ctx, {"count": len(loops), "loops": loops})


@dotloop_app.command("loop")
def dotloop_loop(ctx: typer.Context, loop_id: str = typer.Argument(..., help="Loop id.")) -> None:
    """Get one loop."""

    with handle_errors():
        with DotloopClient(get_state(ctx).settings) as client:
            emit(ctx, client.loop(loop_id))


@dotloop_app.command("profiles")
def dotloop_profiles(
    ctx: typer.Context,
    limit: int = typer.Option(DOTLOOP_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
) -> None:
    """List profiles."""

    with handle_errors():
        with DotloopClient(get_state(ctx).settings) as client:
            profiles = client.profiles(limit=limit)
        emit(ctx, {"count": len(profiles), "profiles": profiles})


@dotloop_app.command("tasks")
def dotloop_tasks(
    ctx: typer.Context,
    limit: int = typer.Option(DOTLOOP_DEFAULT_LIMIT, "--limit", "-l", help="Number of results."),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status."),
) -> None:
    """List tasks."""

    with handle_errors():
        with DotloopClient(get_state(ctx).settings) as client:
            tasks = client.tasks(limit=limit, status=status)
        emit(ctx, {"count": len(tasks), "tasks": tasks})


@dotloop_app.command("documents")
def dotloop_documents(
    ctx: typer.Context,
    loop_id: str = typer.Argument(..., help="Loop id."),
    limit: int = typer.Option(DEFAULT_DOCUMENT_LIMIT, "--limit", "-l", help="Number of results."),
) -> None:
    """List the documents of a loop."""

    with handle_errors():
        with DotloopClient(get_state(ctx).settings) as client:
            documents = client.documents(loop_id, limit=limit)
        emit(ctx, {"loop_id": loop_id, "count": len(documents), "documents": documents})
