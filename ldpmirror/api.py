"""HTTP client for LDP repositories."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

import httpx
from requests.utils import parse_header_links

from .exceptions import TransportError
from .utils import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    PREFER_LENIENT,
)

logger = logging.getLogger(__name__)


@dataclass
class LdpResponse:
    """Status, headers and body of a repository response."""

    url: str
    """URI the request was made against"""

    status_code: int

    headers: httpx.Headers = field(default_factory=httpx.Headers)

    content: bytes = b""

    def links(self, rel: str) -> list[str]:
        """Return the targets of all Link headers with the given relation.

        Relative targets are resolved against the request URI. A link whose
        ``rel`` lists several space-separated relations matches each of them.

        Args:
            rel: Link relation, e.g. "type" or "describedby"

        Returns:
            Absolute target URIs in header order
        """
        targets: list[str] = []
        for value in self.headers.get_list("link"):
            for link in parse_header_links(value):
                rels = link.get("rel", "").split()
                if rel in rels and link.get("url"):
                    targets.append(urljoin(self.url, link["url"]))
        return targets


class LdpClient:
    """Client for the HEAD, GET and PUT verbs of an LDP repository."""

    def __init__(
        self,
        user: str | None = None,
        password: str | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            user: Optional user name for basic authentication
            password: Optional password for basic authentication
            max_retries: Maximum number of retry attempts on network errors
            retry_delay: Initial delay between retries in seconds
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.user = user
        self.password = password
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            auth = None
            if self.user:
                auth = httpx.BasicAuth(self.user, self.password or "")
            self._client = httpx.Client(
                auth=auth,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=False,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            self._client.close()
            self._client = None

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Calculate delay before next retry using exponential backoff.

        Args:
            attempt: Current attempt number (0-based)

        Returns:
            Delay in seconds
        """
        base_delay = self.retry_delay * (2**attempt)
        # Add jitter: +/- 25% of base delay
        jitter = base_delay * 0.25 * (2 * random.random() - 1)
        return base_delay + jitter

    def _request(self, method: str, uri: str, **kwargs: Any) -> LdpResponse:
        """Perform a request, retrying on network errors.

        Status codes are never turned into exceptions here; callers check
        them with ldpmirror.status.check_status.

        Args:
            method: HTTP method
            uri: Absolute resource URI
            **kwargs: Additional arguments passed to httpx

        Returns:
            The response

        Raises:
            TransportError: If the request fails after all retries
        """
        client = self._get_client()

        for attempt in range(self.max_retries + 1):
            try:
                response = client.request(method, uri, **kwargs)
                logger.debug("%s %s -> %s", method, uri, response.status_code)
                return LdpResponse(
                    url=uri,
                    status_code=response.status_code,
                    headers=response.headers,
                    content=response.content,
                )
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.debug(
                        "%s %s failed (%s), retrying in %.1fs", method, uri, e, delay
                    )
                    time.sleep(delay)
                    continue
                raise TransportError(f"Network error for {uri}: {e}") from e

        raise TransportError(f"Request failed after all retry attempts: {uri}")

    def head(self, uri: str) -> LdpResponse:
        """Issue a HEAD request."""
        return self._request("HEAD", uri)

    def get(self, uri: str, accept: str | None = None) -> LdpResponse:
        """Issue a GET request.

        Args:
            uri: Resource URI
            accept: Media type to negotiate; binaries are fetched without one

        Returns:
            The response with its full body
        """
        headers = {"Accept": accept} if accept else {}
        return self._request("GET", uri, headers=headers)

    def put(
        self,
        uri: str,
        content: bytes,
        content_type: str,
        lenient: bool = False,
    ) -> LdpResponse:
        """Issue a PUT request creating or replacing a resource.

        Args:
            uri: Resource URI
            content: Request body
            content_type: Media type of the body
            lenient: Ask the server to accept server-managed triples

        Returns:
            The response
        """
        headers = {"Content-Type": content_type}
        if lenient:
            headers["Prefer"] = PREFER_LENIENT
        return self._request("PUT", uri, content=content, headers=headers)
