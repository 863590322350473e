"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirecciones en un solo builder.
- Aplica los helpers del Core (buffer del cuerpo, endpoints) a
  `httpx.Response` sin que el resto del código conozca httpx.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings, get_settings
from core.domain.errors import InvalidEndpointError
from core.domain.models import Endpoint
from core.endpoints import parse_endpoint

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "Accept": "*/*",
}


def _client_options(
    settings: AppSettings | None,
    extra_headers: dict[str, str] | None,
) -> dict[str, object]:
    settings = settings or get_settings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent, **_DEFAULT_HEADERS}
    if extra_headers:
        headers.update(extra_headers)
    return {
        "timeout": httpx.Timeout(settings.http_timeout_seconds),
        "follow_redirects": True,
        "headers": headers,
    }


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros."""

    return httpx.Client(transport=transport, **_client_options(settings, extra_headers))  # type: ignore[arg-type]


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los consumidores se comporten igual.
    - Facilita testeo y futuras políticas (proxies, retries) fuera de este paquete.
    """

    return httpx.AsyncClient(transport=transport, **_client_options(settings, extra_headers))  # type: ignore[arg-type]


def keep_content_and_close(response: httpx.Response) -> bytes | None:
    """Lee el cuerpo completo a memoria y cierra la respuesta siempre.

    Tras la llamada `response.content` (y `iter_bytes`) se pueden leer de nuevo.
    Un fallo de lectura se loguea y devuelve `None`.
    """

    try:
        return response.read()
    except (httpx.StreamError, httpx.TransportError):
        logger.error("Error consuming input from %s", _request_url(response), exc_info=True)
        return None
    finally:
        response.close()


def redirect_endpoint(response: httpx.Response) -> Endpoint | None:
    """Endpoint al que apunta una redirección (header `Location`).

    Las ubicaciones relativas se resuelven contra la URL de la request.
    """

    if not response.is_redirect:
        return None
    location = response.headers.get("Location")
    if not location:
        return None
    try:
        target = response.request.url.join(location)
    except RuntimeError:
        # Respuesta construida a mano, sin request asociada.
        target = httpx.URL(location)
    try:
        return parse_endpoint(str(target))
    except InvalidEndpointError:
        logger.warning("Redirect with unusable Location %r", location)
        raise


def _request_url(response: httpx.Response) -> str:
    try:
        return str(response.request.url)
    except RuntimeError:
        return "<no request>"
