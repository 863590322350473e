"""Buffer del cuerpo de una respuesta.

El contenido puede necesitar leerse más de una vez, pero la conexión HTTP
debe cerrarse siempre: se copia el cuerpo a memoria, se re-expone como un
`BytesIO` nuevo y se cierra el stream original.
"""

from __future__ import annotations

import io
import logging
from http.client import HTTPException

from core.codec import close_quietly
from core.interfaces.response import ResponsePayload

logger = logging.getLogger(__name__)


def close_connection_but_keep_content_stream(response: ResponsePayload) -> bytes | None:
    """Drena `response.content` a memoria y lo reemplaza por un stream re-legible.

    Devuelve los bytes leídos, o `None` si no hay cuerpo o la lectura falla
    (el fallo se loguea, no se propaga). El stream original se cierra siempre.
    """

    original = response.content
    if original is None:
        return None
    try:
        data = original.read()
        response.content = io.BytesIO(data)
        return data
    except (OSError, HTTPException):
        logger.error("Error consuming input", exc_info=True)
        return None
    finally:
        close_quietly(original)
