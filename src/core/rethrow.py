"""Relanzado condicional de fallos envueltos.

Clasificación (después de desenvolver `ExecutionFailure`/grupos de uno):
- Fatal: todo lo que no deriva de `Exception` (KeyboardInterrupt, SystemExit...)
  y `MemoryError`. Siempre se relanza.
- Unchecked: cualquier `Exception` fuera de `checked`. Siempre se relanza.
- Checked: se devuelve como `Unmatched` para que el llamador decida, en vez de
  descartarse en silencio.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from core.domain.errors import DEFAULT_CHECKED_ERRORS, ExecutionFailure, Unmatched

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseException)


def unwrap_execution_failure(exc: BaseException) -> BaseException:
    if isinstance(exc, ExecutionFailure) and exc.__cause__ is not None:
        return exc.__cause__
    if isinstance(exc, BaseExceptionGroup) and len(exc.exceptions) == 1:
        return exc.exceptions[0]
    return exc


def _is_fatal(exc: BaseException) -> bool:
    return not isinstance(exc, Exception) or isinstance(exc, MemoryError)


def _classify(exc: BaseException, checked: tuple[type[BaseException], ...]) -> BaseException:
    """Desenvuelve y relanza lo fatal/unchecked; devuelve el error checked."""

    nested = unwrap_execution_failure(exc)
    if _is_fatal(nested):
        raise nested
    if not isinstance(nested, checked):
        raise nested
    return nested


def rethrow_if_runtime(
    exc: BaseException,
    *,
    checked: tuple[type[BaseException], ...] = DEFAULT_CHECKED_ERRORS,
) -> Unmatched:
    """Relanza fallos fatales o unchecked; devuelve los checked como `Unmatched`."""

    nested = _classify(exc, checked)
    logger.debug("Not rethrowing checked error %r", nested)
    return Unmatched(error=nested)


def rethrow_if_runtime_or_same_type(
    exc: BaseException,
    expected: type[E],
    *,
    checked: tuple[type[BaseException], ...] = DEFAULT_CHECKED_ERRORS,
) -> Unmatched:
    """Como `rethrow_if_runtime`, pero además relanza si el error es `expected`."""

    nested = _classify(exc, checked)
    if isinstance(nested, expected):
        raise nested
    logger.debug("Checked error %r does not match %s", nested, expected.__name__)
    return Unmatched(error=nested, expected=expected)
