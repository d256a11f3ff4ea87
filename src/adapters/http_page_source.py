"""Live Reddit thread page source with retries and backoff."""

import logging
import time
from typing import Optional

import requests

from src.adapters.page_source import PageSource, page_from_html
from src.core.exceptions import (
    PageFetchError,
    PageForbiddenError,
    PageNotFoundError,
    RateLimitError,
)
from src.core.types import HostPage

logger = logging.getLogger("threadscribe")

_APP_VERSION = "0.1.0"


class RateLimiter:
    """Minimum-interval rate limiter shared by every page fetch.

    Enforces a minimum time gap between requests, across sources.
    On 429, uses exponential backoff.
    """

    def __init__(self, interval_sec: float = 2.0):
        self._interval = interval_sec
        self._last_request_time: float = 0.0

    def wait(self) -> None:
        """Wait if needed to respect minimum interval."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._interval:
            sleep_time = self._interval - elapsed
            logger.debug(f"Rate limiter: sleeping {sleep_time:.1f}s")
            time.sleep(sleep_time)

    def mark_request(self) -> None:
        """Record that a request was just made."""
        self._last_request_time = time.time()

    def get_backoff_time(self, attempt: int) -> float:
        """Exponential backoff: interval * 2^attempt.
        E.g., 2s -> 4s -> 8s -> 16s"""
        return self._interval * (2 ** attempt)


# One throttle per process, so successive exports of live pages are spaced out
DEFAULT_RATE_LIMITER = RateLimiter()


class HttpPageSource(PageSource):
    """Fetches a rendered thread page over HTTP."""

    def __init__(
        self,
        url: str,
        timeout: float = 30,
        max_retries: int = 3,
        user_agent: str = f"desktop:threadscribe:v{_APP_VERSION}",
        rate_limiter: Optional[RateLimiter] = None,
    ):
        self._url = url
        self._timeout = timeout
        self._max_retries = max_retries
        self._rate_limiter = rate_limiter or DEFAULT_RATE_LIMITER
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": "en-US,en;q=0.9",
        })

    def describe(self) -> str:
        return self._url

    def load(self) -> HostPage:
        html = self._fetch_html()
        logger.info(f"Fetched thread page ({len(html)} chars)")
        return page_from_html(html)

    def _fetch_html(self) -> str:
        """Fetch the page with rate limiting and error handling.

        Handles: rate limiting, 429 backoff, HTTP error codes (403, 404),
        transient request failures.
        """
        last_error = None
        for attempt in range(self._max_retries + 1):
            try:
                self._rate_limiter.wait()
                self._rate_limiter.mark_request()
                response = self._session.get(self._url, timeout=self._timeout)

                if response.status_code == 429:
                    if attempt < self._max_retries:
                        backoff = self._rate_limiter.get_backoff_time(attempt)
                        logger.warning(f"Rate limited (429). Backoff: {backoff}s (attempt {attempt + 1})")
                        time.sleep(backoff)
                        continue
                    raise RateLimitError("Rate limit exceeded after max retries")

                if response.status_code == 404:
                    raise PageNotFoundError(f"Not found: {self._url}")
                if response.status_code == 403:
                    raise PageForbiddenError(f"Forbidden: {self._url}")
                response.raise_for_status()

                content_type = response.headers.get("Content-Type", "")
                if "html" not in content_type:
                    raise PageFetchError(f"Expected an HTML page, got '{content_type}'")

                response.encoding = response.encoding or "utf-8"
                return response.text

            except (RateLimitError, PageNotFoundError, PageForbiddenError, PageFetchError):
                raise
            except requests.RequestException as e:
                last_error = e
                if attempt < self._max_retries:
                    backoff = self._rate_limiter.get_backoff_time(attempt)
                    logger.warning(f"Request failed: {e}. Retrying in {backoff}s")
                    time.sleep(backoff)
                    continue

        raise PageFetchError(f"Failed to fetch page: {last_error}")
