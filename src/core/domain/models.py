"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Un endpoint normalizado es un valor inmutable: se compara y se imprime igual
  venga de donde venga (header Host, Location, config).
"""

from __future__ import annotations

import httpx
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Endpoint(BaseModel):
    """Endpoint normalizado `scheme://host:port`.

    A diferencia de `httpx.URL`, el puerto se conserva siempre en la forma
    textual, aunque sea el puerto por defecto del esquema.
    """

    model_config = ConfigDict(frozen=True)

    scheme: str = Field(
        ...,
        min_length=1,
        description="Esquema http/https (en minúsculas).",
    )
    host: str = Field(
        ...,
        min_length=1,
        description="Host (nombre, IPv4 o IPv6 sin corchetes).",
    )
    port: int = Field(
        ...,
        ge=1,
        le=65535,
        description="Puerto explícito o el puerto por defecto del esquema.",
    )

    @field_validator("scheme")
    @classmethod
    def _http_scheme(cls, value: str) -> str:
        value = value.lower()
        if not value.startswith("http"):
            raise ValueError(f"scheme {value!r} is not http")
        return value

    @field_validator("host")
    @classmethod
    def _valid_host(cls, value: str) -> str:
        if "/" in value:
            raise ValueError(f"host {value!r} contains a slash")
        return value.lower()

    @property
    def authority(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}"

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}"

    def to_url(self) -> httpx.URL:
        """Equivalente en `httpx.URL` (httpx omite el puerto si es el default)."""

        return httpx.URL(str(self))

    def with_host(self, host: str) -> "Endpoint":
        return Endpoint(scheme=self.scheme, host=host, port=self.port)
