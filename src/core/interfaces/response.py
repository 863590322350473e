"""Contrato de una respuesta con cuerpo en stream.

Por qué Protocol:
- Los helpers tratan la respuesta como un contenedor opaco: solo necesitan
  leer y reemplazar el stream del cuerpo.
- Cualquier objeto con un atributo `content` (stream binario o `None`) sirve,
  sin heredar de nada.
"""

from __future__ import annotations

from typing import IO, Protocol, runtime_checkable


@runtime_checkable
class ResponsePayload(Protocol):
    """Respuesta HTTP cuyo cuerpo es un stream binario reemplazable."""

    content: IO[bytes] | None
