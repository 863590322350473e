"""Inicialización/teardown del logging del proceso.

Por qué existe:
- Los helpers son funciones sin estado; cada módulo usa su propio
  `logging.getLogger(__name__)` en vez de un logger inyectado.
- La configuración (handler + nivel) vive en un solo lugar, con un teardown
  explícito para tests y para quien embeba la librería.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from core.config import AppSettings, get_settings

PACKAGE_LOGGERS = ("core", "adapters", "cli")

_HANDLER_NAME = "http-glue"


def _build_handler(settings: AppSettings) -> logging.Handler:
    if settings.rich_logging:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler.set_name(_HANDLER_NAME)
    return handler


def configure_logging(settings: AppSettings | None = None) -> None:
    """Instala un handler en cada logger de paquete. Idempotente."""

    settings = settings or get_settings()
    reset_logging()
    handler = _build_handler(settings)
    for name in PACKAGE_LOGGERS:
        pkg_logger = logging.getLogger(name)
        pkg_logger.setLevel(settings.log_level)
        pkg_logger.addHandler(handler)


def reset_logging() -> None:
    """Quita los handlers instalados por `configure_logging` y restaura el nivel."""

    for name in PACKAGE_LOGGERS:
        pkg_logger = logging.getLogger(name)
        for handler in list(pkg_logger.handlers):
            if handler.get_name() == _HANDLER_NAME:
                pkg_logger.removeHandler(handler)
                handler.close()
        pkg_logger.setLevel(logging.NOTSET)
