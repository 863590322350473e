"""Parseo de endpoints a partir de headers `Host`/`Location` y cambio de host.

Por qué aquí (y no en el adaptador HTTP):
- Es lógica pura sobre strings/URIs; el adaptador `httpx` la reutiliza para
  redirecciones y la CLI para depuración.
"""

from __future__ import annotations

import logging
from typing import TypeVar
from urllib.parse import SplitResult, urlsplit

import httpx
from pydantic import ValidationError

from core.domain.errors import InvalidEndpointError
from core.domain.models import Endpoint

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443}

UriT = TypeVar("UriT", str, httpx.URL, Endpoint)


def _split(value: str) -> SplitResult:
    try:
        return urlsplit(value.strip())
    except ValueError as exc:
        raise InvalidEndpointError(f"header {value} is not a valid URI: {exc}") from exc


def parse_endpoint(host_header: str) -> Endpoint:
    """Normaliza `host_header` a `scheme://host:port`.

    - El esquema debe empezar por `http`.
    - Puerto explícito o, si no hay, 443 para https y 80 para el resto.
    - El host no puede faltar ni ser una barra suelta.
    """

    parts = _split(host_header)
    scheme = parts.scheme.lower()
    if not scheme.startswith("http"):
        raise InvalidEndpointError(f"header {host_header} didn't parse an http scheme: [{scheme}]")

    try:
        explicit_port = parts.port
    except ValueError as exc:
        raise InvalidEndpointError(f"header {host_header} didn't parse a valid port") from exc
    port = explicit_port or (443 if scheme == "https" else DEFAULT_PORTS["http"])

    host = parts.hostname
    if not host or host == "/":
        raise InvalidEndpointError(f"header {host_header} didn't parse an http host correctly: [{host}]")

    try:
        endpoint = Endpoint(scheme=scheme, host=host, port=port)
    except ValidationError as exc:
        raise InvalidEndpointError(f"header {host_header} didn't parse an http endpoint: {exc}") from exc
    logger.debug("Parsed endpoint %s from header %r", endpoint, host_header)
    return endpoint


def _replace_host_text(uri: str, host: str) -> str:
    parts = _split(uri)
    if not parts.hostname:
        raise InvalidEndpointError(f"uri {uri} has no host to replace")

    # Solo se toca el host: userinfo y puerto se conservan tal cual.
    userinfo, sep, hostport = parts.netloc.rpartition("@")
    if hostport.startswith("["):
        port_part = hostport[hostport.index("]") + 1 :]
    else:
        _, colon, port = hostport.partition(":")
        port_part = f"{colon}{port}"
    new_host = f"[{host}]" if ":" in host and not host.startswith("[") else host
    netloc = f"{userinfo}{sep}{new_host}{port_part}"
    return parts._replace(netloc=netloc).geturl()


def replace_host_in_endpoint(endpoint: UriT, host: str) -> UriT:
    """Sustituye el host de `endpoint` y devuelve el mismo tipo recibido."""

    if isinstance(endpoint, Endpoint):
        try:
            return endpoint.with_host(host)
        except ValidationError as exc:
            raise InvalidEndpointError(f"host {host!r} is not valid for {endpoint}") from exc
    if isinstance(endpoint, httpx.URL):
        return httpx.URL(_replace_host_text(str(endpoint), host))
    return _replace_host_text(endpoint, host)
