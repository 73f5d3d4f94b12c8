"""HTTP fetcher backed by httpx."""

import logging
import time
from typing import Optional

import httpx

from sveltedocs.errors import FetchError

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Downloads llms.txt files over HTTP.

    A single httpx.Client is shared across calls; it is safe to use from
    the worker threads that fetch packages concurrently.
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.Client] = None):
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def fetch(self, url: str) -> str:
        """Return the response body for url.

        Raises:
            FetchError: On transport errors and non-success status codes
        """
        start = time.perf_counter()
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise FetchError(url, f"{exc.response.reason_phrase} ({status})") from exc
        except httpx.HTTPError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Fetch took {elapsed_ms:.0f}ms for {url}")
        return response.text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
