"""Tests for the base Client class."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from content_press.clients import (
    Client,
    ConnectionError,
    FetchError,
    NotFoundError,
    build_address,
)
from schemas.content import ContentSource

SOURCE = ContentSource(base_url="https://content.example.com")


def error_response(status_code):
    response = MagicMock()
    response.is_success = False
    response.status_code = status_code
    response.url = "https://content.example.com/test.json"
    return response


class TestBuildAddress:
    """Tests for build_address()."""

    def test_joins_base_and_path(self):
        """Relative path is joined with a single slash."""
        assert build_address(SOURCE, "blogs/_index.json") == (
            "https://content.example.com/blogs/_index.json"
        )

    def test_trailing_slash_on_base_is_ignored(self):
        """A base with and without trailing slash resolve identically."""
        with_slash = ContentSource(base_url="https://content.example.com/")
        without_slash = ContentSource(base_url="https://content.example.com")

        assert build_address(with_slash, "blogs/a.json") == build_address(
            without_slash, "blogs/a.json"
        )

    def test_leading_slash_on_path_is_ignored(self):
        """A leading slash on the path does not double the separator."""
        assert build_address(SOURCE, "/blogs/a.json") == (
            "https://content.example.com/blogs/a.json"
        )

    def test_base_with_path_prefix(self):
        """A base address with its own path keeps the prefix."""
        source = ContentSource(base_url="https://cdn.example.com/site/")

        assert build_address(source, "blogs/a.json") == (
            "https://cdn.example.com/site/blogs/a.json"
        )


class TestClientConfiguration:
    """Tests for Client configuration."""

    def test_base_url_from_source(self):
        """Client exposes the content source base URL."""
        client = Client(ContentSource(base_url="https://content.example.com/"))

        assert client.base_url == "https://content.example.com"

    def test_default_timeout(self):
        """Client has default timeout of 30 seconds."""
        client = Client(SOURCE)

        assert client.timeout == 30

    def test_custom_timeout(self):
        """Client accepts custom timeout."""
        client = Client(SOURCE, {"timeout": 5})

        assert client.timeout == 5

    def test_default_retry_attempts(self):
        """Client makes a single attempt by default."""
        client = Client(SOURCE)

        assert client.retry_attempts == 1

    def test_retry_attempts_floor(self):
        """retry_attempts is never below one."""
        client = Client(SOURCE, {"retry_attempts": 0})

        assert client.retry_attempts == 1

    def test_custom_headers(self):
        """Client accepts custom headers."""
        headers = {"User-Agent": "content-press/test"}
        client = Client(SOURCE, {"headers": headers})

        assert client.headers == headers


class TestClientLifecycle:
    """Tests for Client lifecycle management."""

    def test_lazy_client_initialization(self):
        """httpx.Client is not created until accessed."""
        client = Client(SOURCE)

        assert client._client is None

    def test_client_initialized_on_access(self):
        """httpx.Client is created when client property is accessed."""
        client = Client(SOURCE)

        http_client = client.client

        assert isinstance(http_client, httpx.Client)
        assert client.client is http_client

        client.close()

    def test_context_manager_closes_client(self):
        """Context manager closes the httpx client on exit."""
        with Client(SOURCE) as client:
            _ = client.client
            assert client._client is not None

        assert client._client is None


class TestClientErrorHandling:
    """Tests for Client error handling."""

    def test_404_raises_not_found_error(self):
        """404 response raises NotFoundError."""
        client = Client(SOURCE)

        with pytest.raises(NotFoundError) as exc_info:
            client._handle_response(error_response(404))

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://content.example.com/test.json"

    def test_500_raises_fetch_error(self):
        """5xx response raises FetchError with the status code."""
        client = Client(SOURCE)

        with pytest.raises(FetchError) as exc_info:
            client._handle_response(error_response(503))

        assert exc_info.value.status_code == 503
        assert "503" in exc_info.value.message

    def test_success_returns_response(self):
        """Successful response is returned as-is."""
        client = Client(SOURCE)
        response = MagicMock()
        response.is_success = True

        assert client._handle_response(response) is response

    def test_request_uses_resolved_address(self):
        """Requests go to the address built from the content source."""
        client = Client(SOURCE)
        response = MagicMock()
        response.is_success = True
        client._client = MagicMock()
        client._client.request.return_value = response

        client.get("blogs/_index.json")

        client._client.request.assert_called_once_with(
            "GET", "https://content.example.com/blogs/_index.json"
        )


class TestClientRetryLogic:
    """Tests for Client retry behavior."""

    def test_single_attempt_by_default(self):
        """Without retry configuration a connection error fails immediately."""
        client = Client(SOURCE)
        client._client = MagicMock()
        client._client.request.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(ConnectionError) as exc_info:
            client.get("test.json")

        assert "failed after 1 attempts" in str(exc_info.value)
        assert client._client.request.call_count == 1

    @patch("content_press.clients.client.sleep")
    def test_retries_on_connection_error(self, mock_sleep):
        """Client retries connection errors when configured."""
        client = Client(SOURCE, {"retry_attempts": 3, "retry_delay": 0.1})
        client._client = MagicMock()
        client._client.request.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(ConnectionError):
            client.get("test.json")

        assert client._client.request.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("content_press.clients.client.sleep")
    def test_retries_on_timeout(self, mock_sleep):
        """Client retries timeouts when configured."""
        client = Client(SOURCE, {"retry_attempts": 2})
        client._client = MagicMock()
        client._client.request.side_effect = httpx.TimeoutException("Request timed out")

        with pytest.raises(ConnectionError):
            client.get("test.json")

        assert client._client.request.call_count == 2

    @patch("content_press.clients.client.sleep")
    def test_succeeds_after_retry(self, mock_sleep):
        """Client succeeds if a retry works."""
        client = Client(SOURCE, {"retry_attempts": 3})
        success_response = MagicMock()
        success_response.is_success = True
        client._client = MagicMock()
        client._client.request.side_effect = [
            httpx.ConnectError("Connection refused"),
            success_response,
        ]

        assert client.get("test.json") is success_response
        assert client._client.request.call_count == 2

    def test_no_retry_on_fetch_error(self):
        """HTTP error statuses are never retried."""
        client = Client(SOURCE, {"retry_attempts": 3})
        client._client = MagicMock()
        client._client.request.return_value = error_response(500)

        with pytest.raises(FetchError):
            client.get("test.json")

        assert client._client.request.call_count == 1

