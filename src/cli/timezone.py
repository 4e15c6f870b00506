"""Timezone commands."""

from __future__ import annotations

import typer

from adapters.web_sources.timeapi import TimeApiClient, list_timezones, time_in_zone
from cli.output import emit, get_state, handle_errors

app = typer.Typer(no_args_is_help=True, help="Current time by IANA zone or IP address.")


@app.command()
def get(ctx: typer.Context, zone: str = typer.Argument(..., help="IANA name, e.g. America/New_York.")) -> None:
    """Current time in a zone (local tz database)."""

    with handle_errors():
        emit(ctx, time_in_zone(zone))


@app.command()
def ip(ctx: typer.Context, address: str = typer.Argument(..., help="IPv4 or IPv6 address.")) -> None:
    """Zone and current time for an IP address (timeapi.io)."""

    with handle_errors():
        with TimeApiClient(get_state(ctx).settings) as client:
            emit(ctx, client.time_for_ip(address))


@app.command("list")
def list_zones(ctx: typer.Context) -> None:
    """List known zones grouped by region."""

    emit(ctx, list_timezones())
