"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import codecs
import locale

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.codec import UTF8_ENCODING, get_fallback_encoding
from core.config import get_settings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, transport: httpx.AsyncBaseTransport | None = None) -> tuple[bool, str]:
    try:
        async with build_async_client(transport=transport) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


def _check_encoding(name: str) -> tuple[bool, str]:
    try:
        return True, codecs.lookup(name).name
    except LookupError as exc:
        return False, str(exc)


@app.command()
def run(
    url: str = typer.Option("https://example.com", "--url", help="URL para la prueba de conectividad."),
    offline: bool = typer.Option(False, "--offline", help="Saltar la prueba de conectividad."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = get_settings()

    table = Table(title="http-glue Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Encodings
    ok_utf8, detail_utf8 = _check_encoding(UTF8_ENCODING)
    table.add_row("UTF-8 codec", "OK" if ok_utf8 else "FAIL", detail_utf8)

    if settings.fallback_encoding:
        # Un valor configurado inválido se ignora en runtime; aquí se reporta.
        ok_fallback, detail_fallback = _check_encoding(settings.fallback_encoding)
        source = "configured"
    else:
        ok_fallback, detail_fallback = _check_encoding(get_fallback_encoding())
        source = f"platform ({locale.getpreferredencoding(False)})"
    table.add_row("Fallback encoding", "OK" if ok_fallback else "FAIL", f"{detail_fallback} [{source}]")

    table.add_row("Log level", "OK", settings.log_level)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    # Connectivity (best-effort)
    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = asyncio.run(_check_http(url))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_fallback:
        _console.print(
            "\n[yellow]Note:[/yellow] Set HTTP_GLUE_FALLBACK_ENCODING to a codec Python knows (e.g. utf-8)."
        )
        raise typer.Exit(code=1)
