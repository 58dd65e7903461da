"""Async HTTP client for external lookups.

A thin wrapper over ``httpx.AsyncClient`` with:
- A bounded per-request timeout
- A single attempt per request
- Errors normalized to `HttpClientError`

Example:
    >>> from staffledger.http import HttpClient
    >>>
    >>> async with HttpClient(base_url="http://localhost:8082", timeout=5.0) as client:
    ...     text = await client.get_text("/Alice")
"""

from __future__ import annotations

from typing import Any

import httpx


class HttpClientError(Exception):
    """Base exception for HTTP client errors.

    Attributes:
        status_code: HTTP status when the server answered, else None.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class HttpClient:
    """Async HTTP client with timeout support.

    Example:
        >>> async with HttpClient(base_url="http://pensions:8082") as client:
        ...     response = await client.get("/Alice")

    Attributes:
        user_agent: User-Agent header value
        timeout: Default request timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "",
        user_agent: str = "StaffLedger/1.0",
        timeout: float = 5.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP client.

        Args:
            base_url: Base URL for relative requests
            user_agent: User-Agent header
            timeout: Default request timeout
            headers: Additional default headers
            transport: Custom httpx transport (tests use ``httpx.MockTransport``)
        """
        self._base_url = base_url
        self._user_agent = user_agent
        self._timeout = timeout
        self._extra_headers = headers or {}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def user_agent(self) -> str:
        """User-Agent header value."""
        return self._user_agent

    @property
    def timeout(self) -> float:
        """Default request timeout in seconds."""
        return self._timeout

    @property
    def headers(self) -> dict[str, str]:
        """Default headers for requests."""
        return {
            "User-Agent": self._user_agent,
            "Accept": "text/plain, */*",
            **self._extra_headers,
        }

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self.headers,
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpClient:
        """Async context manager entry."""
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make one request and map every failure to `HttpClientError`.

        Args:
            method: HTTP method
            url: URL (relative to base_url or absolute)
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response with a success status

        Raises:
            HttpClientError: On any non-success status or transport error
        """
        client = await self._ensure_client()

        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise HttpClientError(f"HTTP {status} from {e.request.url}", status_code=status) from e

        except httpx.TimeoutException as e:
            raise HttpClientError(f"Request timeout after {self._timeout}s") from e

        except httpx.RequestError as e:
            raise HttpClientError(f"Request failed: {e!r}") from e

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request.

        Args:
            url: URL (relative or absolute)
            **kwargs: Additional arguments for httpx

        Returns:
            HTTP response
        """
        return await self._request("GET", url, **kwargs)

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """Get text content from URL.

        Args:
            url: URL to fetch
            **kwargs: Additional arguments

        Returns:
            Response text
        """
        response = await self.get(url, **kwargs)
        return response.text


__all__ = [
    "HttpClient",
    "HttpClientError",
]
