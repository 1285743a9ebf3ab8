# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""Fire-and-forget HTTP client for vendor tracking endpoints."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import httpx

from ..config.settings import settings

logger = logging.getLogger(__name__)


class TrackingClient:
    """Sends GET requests in the background and ignores their outcome."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        scheme: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
        max_workers: int = 2,
    ):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds
            scheme: Scheme used to complete protocol-relative URLs
            transport: Optional httpx transport (for testing)
            max_workers: Number of background sender threads
        """
        self._timeout = timeout if timeout is not None else settings.tracking_timeout
        self._scheme = scheme or settings.tracking_scheme
        self._transport = transport
        self._max_workers = max_workers
        self._client: Optional[httpx.Client] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers, thread_name_prefix="tracking"
            )
        return self._executor

    def resolve_url(self, url: str) -> str:
        """Complete a protocol-relative URL such as ``//host/path``."""
        if url.startswith("//"):
            return f"{self._scheme}:{url}"
        return url

    def fire(self, url: str) -> Future:
        """Schedule a GET to the URL without waiting for it.

        Returns:
            Future resolving to the status code, or None on failure
        """
        client = self._get_client()
        return self._get_executor().submit(self._send, client, self.resolve_url(url))

    __call__ = fire

    def _send(self, client: httpx.Client, url: str) -> Optional[int]:
        try:
            response = client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Tracking request to {url} failed: {e}")
            return None
        logger.debug(f"Tracking request to {url} returned {response.status_code}")
        return response.status_code

    def close(self) -> None:
        """Wait for pending requests and close the HTTP client."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        if self._client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> "TrackingClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
