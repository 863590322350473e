"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Endpoint


def build_endpoint_table(endpoint: Endpoint, *, source: str) -> Table:
    """Tabla Rich con las partes de un endpoint normalizado."""

    table = Table(title=str(endpoint), show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("source", source)
    table.add_row("scheme", endpoint.scheme)
    table.add_row("host", endpoint.host)
    table.add_row("port", str(endpoint.port))
    return table


def print_error(console: Console, message: str) -> None:
    """Imprime un error de usuario en un panel rojo."""

    console.print(Panel(Text(message, style="red"), title="error", border_style="red"))
