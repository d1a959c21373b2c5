"""Base client for network requests."""

import logging
import threading
from time import sleep

import httpx

from schemas.content import ContentSource

from .exceptions import (
    ConnectionError,
    FetchError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def build_address(source: ContentSource, relative_path: str) -> str:
    """Join a relative document path onto the content source base address.

    Args:
        source: Content source holding the base address
        relative_path: Document path such as "blogs/_index.json"

    Returns:
        Absolute address with exactly one "/" between base and path

    Examples:
        >>> build_address(ContentSource(base_url="https://cdn.example.com/"), "blogs/a.json")
        'https://cdn.example.com/blogs/a.json'
    """
    return f"{source.base_url.rstrip('/')}/{relative_path.lstrip('/')}"


class Client:
    """Base class for content source clients.

    Provides lazy-initialized httpx.Client with context manager support,
    configurable timeout, retries, and headers via dict config.

    Config keys:
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Attempts for connection failures and timeouts (default: 1)
        retry_delay: Delay between retries in seconds (default: 1)
        headers: Additional headers to include in requests
    """

    def __init__(self, source: ContentSource, config: dict | None = None):
        self.source = source
        self._config = config or {}
        self._client: httpx.Client | None = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self.source.base_url

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return max(1, int(self._config.get("retry_attempts", 1)))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client, shared by concurrent fetches."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=self.timeout,
                    headers=self.headers,
                    follow_redirects=True,
                )
            return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying HTTP client."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def address(self, relative_path: str) -> str:
        """Resolve a document path against the content source."""
        return build_address(self.source, relative_path)

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Map HTTP errors to exceptions.

        Args:
            response: The HTTP response to check

        Returns:
            The response if successful

        Raises:
            NotFoundError: For 404 responses
            FetchError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code

        if status_code == 404:
            raise NotFoundError(
                f"Document not found (404): {response.url}",
                url=str(response.url),
            )
        raise FetchError(
            f"Fetch failed with status {status_code}: {response.url}",
            status_code=status_code,
            url=str(response.url),
        )

    def _request(
        self,
        method: str,
        relative_path: str,
        **kwargs,
    ) -> httpx.Response:
        """Make a request, retrying transport failures if configured.

        HTTP error statuses are never retried.

        Args:
            method: HTTP method
            relative_path: Document path resolved against the content source
            **kwargs: Additional arguments passed to httpx.request

        Returns:
            The HTTP response

        Raises:
            ConnectionError: If all attempts fail due to network issues
            FetchError: If the content source returns a non-2xx response
        """
        url = self.address(relative_path)
        last_exception: Exception | None = None

        for attempt in range(self.retry_attempts):
            try:
                logger.debug(f"{method} {url}")
                response = self.client.request(method, url, **kwargs)
                return self._handle_response(response)
            except httpx.ConnectError as e:
                last_exception = e
                logger.warning(
                    f"Connection error (attempt {attempt + 1}/{self.retry_attempts}): {e}"
                )
                if attempt < self.retry_attempts - 1:
                    sleep(self.retry_delay)
            except httpx.TimeoutException as e:
                last_exception = e
                logger.warning(
                    f"Timeout (attempt {attempt + 1}/{self.retry_attempts}): {e}"
                )
                if attempt < self.retry_attempts - 1:
                    sleep(self.retry_delay)

        msg = f"Connection to {url} failed after {self.retry_attempts} attempts"
        raise ConnectionError(msg) from last_exception

    def get(self, relative_path: str, **kwargs) -> httpx.Response:
        """Convenience method for GET requests.

        Args:
            relative_path: Document path resolved against the content source
            **kwargs: Additional arguments passed to httpx.request

        Returns:
            The HTTP response
        """
        return self._request("GET", relative_path, **kwargs)
