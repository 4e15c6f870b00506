"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil
import sys

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from cli.output import get_state
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_TOOLS: tuple[tuple[str, str], ...] = (
    ("osascript", "contacts (macOS)"),
    ("system_profiler", "wifi (macOS)"),
    ("nmcli", "wifi (Linux)"),
)


def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = get_state(ctx).settings

    table = Table(title="pocket doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Platform", "OK", sys.platform)

    # Local tools
    for tool, used_by in _TOOLS:
        path = shutil.which(tool)
        table.add_row(tool, "OK" if path else "MISSING", path or f"needed by {used_by}")

    # Connectivity (best-effort)
    for label, url in (
        ("MyMemory API", settings.translate_base_url),
        ("timeapi.io", settings.timezone_base_url),
    ):
        ok_http, detail_http = _check_http(settings, url)
        table.add_row(label, "OK" if ok_http else "FAIL", detail_http)

    # Credentials
    fub_ready = all((settings.fub_api_key, settings.fub_system_key, settings.fub_system_name))
    table.add_row(
        "Follow Up Boss",
        "OK" if fub_ready else "OPTIONAL",
        "Credentials configured" if fub_ready else "Run `pocket doctor setup-realestate`",
    )
    table.add_row(
        "DotLoop",
        "OK" if settings.dotloop_token else "OPTIONAL",
        "Token configured" if settings.dotloop_token else "Run `pocket doctor setup-realestate`",
    )

    _console.print(table)


@app.command(name="setup-realestate")
def setup_realestate() -> None:
    """Interactive CRM setup (stores credentials in the user config .env).

    Empty answers keep the current value.
    """

    fub_api_key = typer.prompt("Follow Up Boss API key", default="", show_default=False, hide_input=True).strip()
    fub_system_key = typer.prompt("Follow Up Boss system key", default="", show_default=False, hide_input=True).strip()
    fub_system_name = typer.prompt("Follow Up Boss system name", default="", show_default=False).strip()
    dotloop_token = typer.prompt("DotLoop token", default="", show_default=False, hide_input=True).strip()
    dotloop_company_id = typer.prompt("DotLoop company id", default="", show_default=False).strip()

    values = {
        "POCKET_FUB_API_KEY": fub_api_key,
        "POCKET_FUB_SYSTEM_KEY": fub_system_key,
        "POCKET_FUB_SYSTEM_NAME": fub_system_name,
        "POCKET_DOTLOOP_TOKEN": dotloop_token,
        "POCKET_DOTLOOP_COMPANY_ID": dotloop_company_id,
    }
    if not any(values.values()):
        _console.print("[yellow]Nothing entered; configuration unchanged.[/yellow]")
        return

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved real-estate config to:[/green] {env_path}")
