"""CLI de http-glue (Typer).

Por qué una CLI para helpers:
- Depurar headers `Host`/`Location` y encodings sin escribir scripts.
- El comando `doctor` expone la configuración efectiva (encoding de respaldo,
  logging, conectividad).
"""

from __future__ import annotations

import typer
from rich.console import Console

from cli import doctor
from cli.ui_components import build_endpoint_table, print_error
from core.codec import UTF8_ENCODING, encode_string, url_encode
from core.domain.errors import InvalidEndpointError
from core.endpoints import parse_endpoint, replace_host_in_endpoint
from core.logging_setup import configure_logging

app = typer.Typer(no_args_is_help=True, help="HTTP client helpers: endpoints, encodings, URL-encoding.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def _setup() -> None:
    configure_logging()


@app.command()
def endpoint(
    header: str = typer.Argument(..., help="Valor tipo Host/Location, p.ej. https://example.com"),
    table: bool = typer.Option(False, "--table", help="Mostrar las partes en una tabla."),
) -> None:
    """Normaliza un header a scheme://host:port."""

    try:
        parsed = parse_endpoint(header)
    except InvalidEndpointError as exc:
        print_error(_console, str(exc))
        raise typer.Exit(code=1) from exc

    if table:
        _console.print(build_endpoint_table(parsed, source=header))
    else:
        typer.echo(str(parsed))


@app.command(name="replace-host")
def replace_host(
    uri: str = typer.Argument(..., help="URI original."),
    host: str = typer.Argument(..., help="Host nuevo."),
) -> None:
    """Sustituye el host de una URI."""

    try:
        typer.echo(replace_host_in_endpoint(uri, host))
    except InvalidEndpointError as exc:
        print_error(_console, str(exc))
        raise typer.Exit(code=1) from exc


@app.command()
def urlencode(text: str = typer.Argument(..., help="Texto a codificar.")) -> None:
    """Codifica como application/x-www-form-urlencoded."""

    typer.echo(url_encode(text))


@app.command()
def encode(
    text: str = typer.Argument(..., help="Texto a codificar."),
    encoding: str = typer.Option(UTF8_ENCODING, "--encoding", "-e", help="Encoding pedido."),
) -> None:
    """Muestra en hex los bytes de TEXT (con fallback si el encoding no existe)."""

    typer.echo(encode_string(text, encoding).hex())


def run() -> None:
    app()
