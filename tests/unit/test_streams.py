"""
Unit tests for core.streams.
"""

import io
import logging
from http.client import IncompleteRead
from typing import IO

import pytest

from core.interfaces.response import ResponsePayload
from core.streams import close_connection_but_keep_content_stream


class FakeResponse:
    def __init__(self, content: IO[bytes] | None) -> None:
        self.content = content


class _BrokenStream(io.BytesIO):
    def read(self, *args, **kwargs):  # type: ignore[override]
        raise OSError("socket closed")


class _TruncatedBody(io.BytesIO):
    def read(self, *args, **kwargs):  # type: ignore[override]
        raise IncompleteRead(b"part", 10)


class TestCloseConnectionButKeepContentStream:
    """Tests for draining a response body into memory."""

    @pytest.mark.unit
    def test_fake_response_matches_protocol(self) -> None:
        assert isinstance(FakeResponse(None), ResponsePayload)

    @pytest.mark.unit
    def test_returns_body_and_replaces_stream(self) -> None:
        body = bytes(range(256)) * 4
        original = io.BytesIO(body)
        response = FakeResponse(original)

        data = close_connection_but_keep_content_stream(response)

        assert data == body
        assert len(data) == 1024
        assert original.closed
        assert response.content is not original
        assert response.content.read() == body

    @pytest.mark.unit
    def test_empty_body(self) -> None:
        response = FakeResponse(io.BytesIO(b""))
        assert close_connection_but_keep_content_stream(response) == b""
        assert response.content.read() == b""

    @pytest.mark.unit
    def test_no_body_returns_none(self) -> None:
        response = FakeResponse(None)
        assert close_connection_but_keep_content_stream(response) is None
        assert response.content is None

    @pytest.mark.unit
    def test_read_failure_is_logged_and_stream_closed(self, caplog: pytest.LogCaptureFixture) -> None:
        broken = _BrokenStream(b"partial")
        response = FakeResponse(broken)

        with caplog.at_level(logging.ERROR, logger="core.streams"):
            data = close_connection_but_keep_content_stream(response)

        assert data is None
        assert broken.closed
        assert "Error consuming input" in caplog.text

    @pytest.mark.unit
    def test_truncated_http_body_yields_none(self, caplog: pytest.LogCaptureFixture) -> None:
        """An http.client IncompleteRead is a read failure, not an error for the caller."""
        truncated = _TruncatedBody(b"part")
        response = FakeResponse(truncated)

        with caplog.at_level(logging.ERROR, logger="core.streams"):
            data = close_connection_but_keep_content_stream(response)

        assert data is None
        assert truncated.closed
        assert "Error consuming input" in caplog.text
