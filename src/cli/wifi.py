"""WiFi commands (macOS system_profiler / Linux nmcli)."""

from __future__ import annotations

import typer

from adapters.system_sources.wifi import WifiInspector
from cli.output import emit, get_state, handle_errors

app = typer.Typer(no_args_is_help=True, help="Nearby WiFi networks and the current connection.")


@app.command()
def scan(ctx: typer.Context) -> None:
    """Scan nearby networks with signal strength."""

    with handle_errors():
        emit(ctx, WifiInspector(get_state(ctx).settings).scan())


@app.command()
def current(ctx: typer.Context) -> None:
    """Show the current connection."""

    with handle_errors():
        emit(ctx, WifiInspector(get_state(ctx).settings).current())
