"""
Async HTTP access for ownversion.

:class:`HTTPClient` wraps :class:`httpx.AsyncClient` and turns transport
failures and error statuses into :class:`~ownversion.exceptions.NetworkError`
(:class:`~ownversion.exceptions.PyPIError` for 404). Requests are sent once
and never retried.
"""

from __future__ import annotations

import httpx
from typing import Any, Dict, Optional

from ownversion.utils.logger import get_logger
from ownversion.__version__ import __version__
from ownversion.exceptions import NetworkError, PyPIError
from ownversion.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_VERIFY_SSL,
    USER_AGENT_TEMPLATE,
)

logger = get_logger("http")


def _raise_for_status(response: httpx.Response, url: str) -> None:
    status = response.status_code
    if status == 404:
        raise PyPIError(f"Resource not found: {url}", url=url, status_code=status)
    if status >= 400:
        logger.warning("HTTP %d from %s", status, url)
        raise NetworkError(
            f"HTTP {status} error for {url}",
            url=url,
            status_code=status,
            response_body=response.text,
        )


class HTTPClient:
    """Single-attempt async HTTP client speaking JSON.

    The underlying connection pool is opened lazily and released by
    :meth:`close` or by leaving the ``async with`` block.

    Args:
        timeout: Seconds allowed for each request.
        verify_ssl: Verify TLS certificates.
        user_agent: ``User-Agent`` header; defaults to ``ownversion/<version>``.

    Example:
        >>> async with HTTPClient(timeout=5) as client:
        ...     info = await client.get_json("https://pypi.org/pypi/rich/json")
    """

    def __init__(
        self,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        verify_ssl: bool = DEFAULT_VERIFY_SSL,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        if user_agent is None:
            user_agent = USER_AGENT_TEMPLATE.format(version=__version__)
        self.user_agent = user_agent
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HTTPClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                http2=True,
                timeout=self.timeout,
                verify=self.verify_ssl,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Release the connection pool; safe to call more than once."""
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Send one GET request and return the successful response.

        Surrounding whitespace and quotes are removed from ``url`` first.

        Raises:
            PyPIError: The server answered 404.
            NetworkError: Timeout, transport failure or any other status >= 400.
        """
        client = await self._ensure_client()
        url = url.strip().strip("\"'")
        logger.debug("GET %s", url)

        try:
            response = await client.request("GET", url, **kwargs)
        except httpx.TimeoutException as exc:
            logger.warning("Timed out requesting %s", url)
            raise NetworkError(f"Request timed out: {url}", url=url) from exc
        except httpx.TransportError as exc:
            logger.warning("Transport failure for %s: %s", url, exc)
            raise NetworkError(
                f"Network error while requesting {url}: {exc}", url=url
            ) from exc

        _raise_for_status(response, url)
        return response

    async def get_json(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        """GET ``url`` and decode the body, which must be a JSON object."""
        response = await self.get(url, **kwargs)

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Invalid JSON response from {url}",
                url=url,
                response_body=response.text,
            ) from exc

        if not isinstance(payload, dict):
            raise NetworkError(
                f"Expected JSON object from {url}, got {type(payload).__name__}",
                url=url,
                response_body=response.text,
            )
        return payload
