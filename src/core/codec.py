"""Conversión texto <-> bytes con encoding de respaldo.

Reglas:
- `url_encode` usa un charset fijo; si no existe, es un fallo fatal.
- `encode_string`/`decode_string` son best-effort: si el encoding pedido no
  existe se loguea un warning y se usa el encoding de respaldo. Los datos no
  representables se reemplazan (`?` / U+FFFD) sin cambiar de encoding.
"""

from __future__ import annotations

import codecs
import io
import locale
import logging
from typing import IO
from urllib.parse import quote_plus

from core.config import get_settings
from core.domain.errors import EncodingUnavailableError

logger = logging.getLogger(__name__)

UTF8_ENCODING = "utf-8"
URL_ENCODING = UTF8_ENCODING


def get_fallback_encoding() -> str:
    """Encoding de respaldo: el configurado o el preferido de la plataforma.

    Un encoding configurado que no existe se ignora (con warning) para que el
    respaldo nunca falle.
    """

    platform = locale.getpreferredencoding(False)
    configured = get_settings().fallback_encoding
    if not configured:
        return platform
    try:
        codecs.lookup(configured)
    except LookupError:
        logger.warning("Unknown fallback encoding %s configured, using platform encoding %s", configured, platform)
        return platform
    return configured


def url_encode(text: str) -> str:
    """Codifica `text` como `application/x-www-form-urlencoded` (espacio -> `+`)."""

    try:
        # `~` queda sin codificar, a diferencia de URLEncoder.
        return quote_plus(text, safe="*", encoding=URL_ENCODING)
    except LookupError as exc:
        raise EncodingUnavailableError(f"Bad encoding on input: {text}") from exc


def encode_string(text: str, encoding: str = UTF8_ENCODING) -> bytes:
    """Codifica con `encoding` (caracteres no representables -> `?`).

    Si el encoding no existe, usa el encoding de respaldo.
    """

    try:
        return text.encode(encoding, errors="replace")
    except LookupError:
        fallback = get_fallback_encoding()
        logger.warning(
            "Failed to encode string to bytes with encoding %s. Falling back to default encoding %s",
            encoding,
            fallback,
            exc_info=True,
        )
        return text.encode(fallback, errors="replace")


def decode_string(data: bytes, encoding: str = UTF8_ENCODING) -> str:
    """Decodifica con `encoding` (bytes inválidos -> U+FFFD).

    Si el encoding no existe, usa el encoding de respaldo.
    """

    try:
        return data.decode(encoding, errors="replace")
    except LookupError:
        fallback = get_fallback_encoding()
        logger.warning(
            "Failed to decode bytes to string with encoding %s. Falling back to default encoding %s",
            encoding,
            fallback,
            exc_info=True,
        )
        return data.decode(fallback, errors="replace")


def to_string_and_close(stream: IO[str] | IO[bytes], encoding: str = UTF8_ENCODING) -> str:
    """Lee todo el stream como texto y lo cierra siempre.

    Los errores de lectura se propagan; los de cierre se ignoran.
    """

    try:
        raw = stream.read()
        if isinstance(raw, (bytes, bytearray)):
            return decode_string(bytes(raw), encoding)
        return raw
    finally:
        close_quietly(stream)


def close_quietly(stream: io.IOBase | IO[str] | IO[bytes] | None) -> None:
    if stream is None:
        return
    try:
        stream.close()
    except OSError:
        logger.debug("Ignoring error while closing %r", stream, exc_info=True)
