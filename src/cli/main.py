"""pocket CLI (Typer).

One sub-app per data source. Aliases are registered as hidden duplicates so
``--help`` lists each group once.
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from cli import contacts, doctor, realestate, timezone, translate, wifi
from cli.output import CliState, OutputFormat, handle_errors
from core.config import AppSettings
from core.errors import ConfigurationError

app = typer.Typer(
    no_args_is_help=True,
    help="pocket: small CLI wrappers around local and web data sources.",
)


def _add_group(sub_app: typer.Typer, name: str, *aliases: str) -> None:
    app.add_typer(sub_app, name=name)
    for alias in aliases:
        app.add_typer(sub_app, name=alias, hidden=True)


_add_group(contacts.app, "contacts", "contact", "addr", "addressbook")
_add_group(translate.app, "translate", "trans", "tr")
_add_group(wifi.app, "wifi", "wf")
_add_group(timezone.app, "timezone", "tz", "time")
_add_group(realestate.app, "realestate", "re", "estate")
app.add_typer(doctor.app, name="doctor")


def load_settings() -> AppSettings:
    """Build settings, reporting bad ``POCKET_*`` values as a configuration error."""

    try:
        return AppSettings()
    except ValidationError as exc:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in exc.errors()})
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}",
            kind="invalid_config",
            details={
                "fields": fields,
                "env_vars": [f"POCKET_{field.upper()}" for field in fields],
            },
        ) from exc


def configure_logging(level: str, *, verbose: bool = False) -> None:
    resolved = logging.DEBUG if verbose else getattr(logging, (level or "WARNING").upper(), logging.WARNING)
    logging.basicConfig(
        level=resolved,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log external calls to stderr."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--format",
        "-o",
        case_sensitive=False,
        help="Output format for results.",
    ),
) -> None:
    with handle_errors():
        settings = load_settings()
    configure_logging(settings.log_level, verbose=verbose)
    ctx.obj = CliState(settings=settings, output_format=output_format)


def run() -> None:
    app()
