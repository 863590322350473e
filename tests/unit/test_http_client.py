"""
Unit tests for adapters.http_client (httpx.MockTransport, no network).
"""

import asyncio
import logging
from collections.abc import Iterator

import httpx
import pytest

from adapters.http_client import (
    build_async_client,
    build_client,
    keep_content_and_close,
    redirect_endpoint,
)
from core.config import AppSettings
from core.domain.errors import InvalidEndpointError
from core.domain.models import Endpoint


def _echo_headers(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"user-agent": request.headers["user-agent"], "x-extra": request.headers.get("x-extra")})


class _BrokenStream(httpx.SyncByteStream):
    def __iter__(self) -> Iterator[bytes]:
        yield b"partial"
        raise httpx.ReadError("connection dropped")


class TestBuilders:
    """Tests for build_client / build_async_client."""

    @pytest.mark.unit
    def test_client_uses_settings(self) -> None:
        settings = AppSettings(user_agent="ua-test", http_timeout_seconds=3.5)
        with build_client(settings, extra_headers={"X-Extra": "1"}, transport=httpx.MockTransport(_echo_headers)) as client:
            assert client.timeout.read == 3.5
            assert client.follow_redirects
            payload = client.get("https://example.com/").json()
        assert payload == {"user-agent": "ua-test", "x-extra": "1"}

    @pytest.mark.unit
    def test_async_client_uses_settings(self) -> None:
        settings = AppSettings(user_agent="ua-async")

        async def _fetch() -> dict:
            async with build_async_client(settings, transport=httpx.MockTransport(_echo_headers)) as client:
                response = await client.get("https://example.com/")
            return response.json()

        assert asyncio.run(_fetch())["user-agent"] == "ua-async"


class TestKeepContentAndClose:
    """Tests for keep_content_and_close."""

    @pytest.mark.unit
    def test_body_is_buffered_and_response_closed(self) -> None:
        body = b"x" * 4096
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=body))
        with build_client(transport=transport) as client:
            with client.stream("GET", "https://example.com/blob") as response:
                data = keep_content_and_close(response)
                assert response.is_closed

        assert data == body
        assert response.content == body
        assert b"".join(response.iter_bytes()) == body

    @pytest.mark.unit
    def test_read_failure_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        response = httpx.Response(200, stream=_BrokenStream())

        with caplog.at_level(logging.ERROR, logger="adapters.http_client"):
            data = keep_content_and_close(response)

        assert data is None
        assert response.is_closed
        assert "Error consuming input" in caplog.text


class TestRedirectEndpoint:
    """Tests for redirect_endpoint."""

    @pytest.mark.unit
    def test_absolute_location(self) -> None:
        response = httpx.Response(
            301,
            headers={"Location": "https://new.example.com/x"},
            request=httpx.Request("GET", "http://old.example.com/"),
        )
        assert redirect_endpoint(response) == Endpoint(scheme="https", host="new.example.com", port=443)

    @pytest.mark.unit
    def test_relative_location_uses_request_url(self) -> None:
        response = httpx.Response(
            307,
            headers={"Location": "/other"},
            request=httpx.Request("GET", "http://old.example.com:8080/a"),
        )
        assert str(redirect_endpoint(response)) == "http://old.example.com:8080"

    @pytest.mark.unit
    def test_not_a_redirect(self) -> None:
        response = httpx.Response(200, request=httpx.Request("GET", "http://example.com/"))
        assert redirect_endpoint(response) is None

    @pytest.mark.unit
    def test_non_http_location(self) -> None:
        response = httpx.Response(
            302,
            headers={"Location": "ftp://files.example.com/pub"},
            request=httpx.Request("GET", "http://example.com/"),
        )
        with pytest.raises(InvalidEndpointError):
            redirect_endpoint(response)
