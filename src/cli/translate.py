"""Translation commands (MyMemory)."""

from __future__ import annotations

from typing import List

import typer

from adapters.web_sources.mymemory import SUPPORTED_LANGUAGES, MyMemoryClient
from cli.output import emit, get_state, handle_errors
from core.errors import InputValidationError

app = typer.Typer(no_args_is_help=True, help="Translate text with the MyMemory API.")


@app.command()
def text(
    ctx: typer.Context,
    words: List[str] = typer.Argument(..., help="Text to translate (joined with spaces)."),
    source_lang: str = typer.Option("en", "--from", "-f", help="Source language code."),
    target_lang: str = typer.Option("es", "--to", "-t", help="Target language code."),
) -> None:
    """Translate text between two languages."""

    with handle_errors():
        joined = " ".join(words)
        if not joined.strip():
            raise InputValidationError("Nothing to translate")
        with MyMemoryClient(get_state(ctx).settings) as client:
            emit(ctx, client.translate(joined, source_lang, target_lang))


@app.command()
def languages(ctx: typer.Context) -> None:
    """List common language codes."""

    emit(ctx, list(SUPPORTED_LANGUAGES))
