"""Apple Contacts commands (macOS only)."""

from __future__ import annotations

from typing import Any

import typer

from adapters.system_sources.apple_contacts import AppleContacts
from cli.output import emit, get_state, handle_errors
from core.domain.contacts import NewContact
from core.errors import InputValidationError

app = typer.Typer(no_args_is_help=True, help="Apple Contacts via AppleScript / JXA (macOS only).")


def _source(ctx: typer.Context) -> AppleContacts:
    return AppleContacts(get_state(ctx).settings)


@app.command("list")
def list_contacts(
    ctx: typer.Context,
    limit: int = typer.Option(0, "--limit", "-l", help="Max contacts (0 = default of 100)."),
) -> None:
    """List contacts with their primary email and phone."""

    with handle_errors():
        contacts, total = _source(ctx).list_contacts(limit)
        emit(ctx, {"contacts": contacts, "count": len(contacts), "total": total})


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Matches name, organization, email or phone."),
    limit: int = typer.Option(0, "--limit", "-l", help="Max results (0 = default of 50)."),
) -> None:
    """Search contacts by name, organization, email or phone."""

    with handle_errors():
        contacts = _source(ctx).search(query, limit)
        emit(ctx, {"query": query, "contacts": contacts, "count": len(contacts)})


@app.command()
def get(ctx: typer.Context, name: str = typer.Argument(..., help="Exact contact name.")) -> None:
    """Full details of one contact."""

    with handle_errors():
        emit(ctx, _source(ctx).get(name))


@app.command()
def groups(ctx: typer.Context) -> None:
    """List contact groups with member counts."""

    with handle_errors():
        found = _source(ctx).groups()
        emit(ctx, {"groups": found, "count": len(found)})


@app.command()
def group(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Group name."),
    limit: int = typer.Option(0, "--limit", "-l", help="Max contacts (0 = no limit)."),
) -> None:
    """List the contacts of one group."""

    with handle_errors():
        members = _source(ctx).group(name, limit)
        emit(ctx, {"group": name, "contacts": members, "count": len(members)})


@app.command()
def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Full name; split at the first space."),
    email: str = typer.Option("", "--email", "-e", help="Work email."),
    phone: str = typer.Option("", "--phone", "-p", help="Mobile phone."),
    company: str = typer.Option("", "--company", "-c", help="Organization."),
    note: str = typer.Option("", "--note", "-n", help="Note."),
) -> None:
    """Create a contact."""

    with handle_errors():
        if not name.strip():
            raise InputValidationError("Contact name must not be empty")
        contact = NewContact(name=name, email=email, phone=phone, company=company, note=note)
        created = _source(ctx).create(contact)

        response: dict[str, Any] = {
            "success": True,
            "message": "Contact created successfully",
            "name": created,
        }
        response.update({key: value for key, value in contact.model_dump(exclude={"name"}).items() if value})
        emit(ctx, response)
