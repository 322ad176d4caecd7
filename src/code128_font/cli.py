"""CLI for the Code 128 font encoder."""

import logging
from typing import NoReturn, Optional

import structlog
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from code128_font.config import get_settings
from code128_font.core import isbt
from code128_font.core.decoder import decode_text
from code128_font.core.encoder import EncodeRequest, get_encoder
from code128_font.core.exceptions import DecodeError, InvalidInputError
from code128_font.core.models import CodeSet, CodeSetPreference, Symbology
from code128_font.core.symbols import SYMBOLS

app = typer.Typer(
    name="code128",
    help="Code 128 font encoder - encode, validate and inspect barcodes",
    add_completion=False,
)
console = Console()


@app.callback()
def main():
    """Configure logging from settings."""
    level = logging.getLevelName(get_settings().log_level.upper())
    if isinstance(level, int):
        structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def _request(
    text: str, symbology: Symbology | None, code_set: CodeSetPreference, extended: bool | None
) -> EncodeRequest:
    return EncodeRequest(
        text=text, symbology=symbology, code_set=code_set, allow_extended=extended
    )


def _fail(e: InvalidInputError) -> NoReturn:
    where = f" (position {e.position})" if e.position is not None else ""
    console.print(f"[red]✗ {e}{where}[/red]")
    raise typer.Exit(1)


@app.command()
def encode(
    text: str = typer.Argument(..., help="Text to encode"),
    symbology: Optional[Symbology] = typer.Option(None, "--symbology", "-s", help="Symbology"),
    code_set: CodeSetPreference = typer.Option(
        CodeSetPreference.AUTO, "--code-set", "-c", help="Start code set hint"
    ),
    extended: Optional[bool] = typer.Option(
        None, "--extended/--no-extended", help="Encode Latin-1 characters with FNC4"
    ),
):
    """Print the font text for TEXT."""
    try:
        encoded = get_encoder().encode(_request(text, symbology, code_set, extended))
    except InvalidInputError as e:
        _fail(e)
    typer.echo(encoded)


@app.command()
def validate(
    text: str = typer.Argument(..., help="Text to check"),
    symbology: Optional[Symbology] = typer.Option(None, "--symbology", "-s", help="Symbology"),
    extended: Optional[bool] = typer.Option(
        None, "--extended/--no-extended", help="Allow Latin-1 characters"
    ),
):
    """Check whether TEXT can be encoded."""
    request = _request(text, symbology, CodeSetPreference.AUTO, extended)
    if get_encoder().validate(request):
        console.print("[green]✓ Valid[/green]")
    else:
        console.print("[red]✗ Not encodable[/red]")
        raise typer.Exit(1)


@app.command()
def inspect(
    text: str = typer.Argument(..., help="Text to encode"),
    symbology: Optional[Symbology] = typer.Option(None, "--symbology", "-s", help="Symbology"),
    code_set: CodeSetPreference = typer.Option(
        CodeSetPreference.AUTO, "--code-set", "-c", help="Start code set hint"
    ),
    extended: Optional[bool] = typer.Option(
        None, "--extended/--no-extended", help="Encode Latin-1 characters with FNC4"
    ),
):
    """Show the symbol sequence encoding TEXT."""
    encoder = get_encoder()
    try:
        result = encoder.encode_symbols(_request(text, symbology, code_set, extended))
    except InvalidInputError as e:
        _fail(e)

    console.print(Panel.fit(
        f"[bold]Symbology:[/bold] {result.symbology.value}\n"
        f"[bold]Start code set:[/bold] {result.start_code_set.value}\n"
        f"[bold]Checksum:[/bold] {result.checksum}\n"
        f"[bold]Width:[/bold] {result.module_count} modules",
        title="Code 128",
    ))

    table = Table("#", "Value", "Meaning", "Font", "Widths")
    code_set = result.start_code_set
    shifted = None
    last = len(result.symbols) - 1
    for position, value in enumerate(result.symbols):
        symbol = SYMBOLS[value]
        if position in (0, last):
            meaning = symbol.a
        elif position == last - 1:
            meaning = "Checksum"
        else:
            meaning = symbol.meaning(shifted or code_set)
            shifted = None
            if meaning.startswith("Shift"):
                shifted = CodeSet(meaning[-1])
            elif meaning.startswith("Code"):
                code_set = CodeSet(meaning[-1])
        table.add_row(
            str(position), str(value), repr(meaning), encoder.font.to_char(value), symbol.widths
        )
    console.print(table)


@app.command()
def decode(
    text: str = typer.Argument(..., help="Font text to decode"),
):
    """Decode font text produced by the encoder."""
    try:
        decoded = decode_text(text, get_encoder().font)
    except DecodeError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)
    if decoded.gs1:
        console.print("[blue]GS1-128 data[/blue]")
    typer.echo(decoded.text)


@app.command()
def isbt_check(
    data: str = typer.Argument(..., help="ISBT 128 data content without identifier"),
):
    """Print the ISO/IEC 7064 Mod 37-2 check character for DATA."""
    try:
        typer.echo(isbt.check_character(data))
    except InvalidInputError as e:
        _fail(e)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address"),
    port: Optional[int] = typer.Option(None, help="Port"),
):
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings().api
    uvicorn.run(
        "code128_font.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
    )


if __name__ == "__main__":
    app()
