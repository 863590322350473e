"""Errores del dominio y resultado etiquetado del rethrow.

Reglas:
- Fallos de entorno/programación (encoding inexistente) son `RuntimeError`.
- Fallos de validación de entrada (headers, URIs) son `ValueError`.
- Sin I/O, sin config, sin lógica compleja.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx


class EncodingUnavailableError(RuntimeError):
    """El charset fijo de URL-encoding no existe en el runtime (no recuperable)."""


class InvalidEndpointError(ValueError):
    """Un header/URI no se pudo interpretar como endpoint http(s)."""


class ExecutionFailure(Exception):
    """Envuelve un fallo producido por ejecución diferida/asíncrona.

    El error original viaja en `__cause__` (usar `raise ExecutionFailure() from exc`
    o `ExecutionFailure.wrap(exc)`).
    """

    @classmethod
    def wrap(cls, exc: BaseException) -> "ExecutionFailure":
        failure = cls(str(exc) or type(exc).__name__)
        failure.__cause__ = exc
        return failure


# Familias "checked": fallos operativos que el llamador debe manejar.
DEFAULT_CHECKED_ERRORS: tuple[type[Exception], ...] = (OSError, httpx.HTTPError)


@dataclass(frozen=True)
class Unmatched:
    """Fallo que no se relanzó: ni fatal, ni unchecked, ni del tipo esperado."""

    error: BaseException
    expected: type[BaseException] | None = None

    def reraise(self) -> None:
        raise self.error
