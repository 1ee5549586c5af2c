# seo_scout/crawler/fetcher.py
"""
Fetcher module: one rate-limited, retried, timeout-bounded GET per page.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from seo_scout.config import CrawlOptions
from seo_scout.crawler.models import FetchResult
from seo_scout.crawler.rate_limiter import RateLimiter
from seo_scout.crawler.retry import RetryOptions, is_retryable_error, with_retry
from seo_scout.logger import get_logger

RETRY_STATUS: Sequence[int] = (429, 500, 502, 503, 504)
HTML_TYPES: Sequence[str] = ("text/html", "application/xhtml+xml")
TIMEOUT_STATUS = 408


class FetchTimeoutError(Exception):
    """A single request attempt ran out of time."""


class RetryableStatusError(Exception):
    """The server answered with a throttling or gateway status worth retrying."""

    def __init__(self, status: int) -> None:
        super().__init__(f"HTTP {status}")
        self.status = status


def create_session(options: CrawlOptions) -> ClientSession:
    """Session with the crawler's identifying headers; caller closes it."""
    return ClientSession(
        headers={
            "User-Agent": options.user_agent,
            "Accept": "text/html,application/xhtml+xml",
        },
        raise_for_status=False,
    )


class Fetcher:
    """Fetch pages and classify the outcome."""

    def __init__(
        self,
        session: ClientSession,
        options: CrawlOptions,
        rate_limiter: RateLimiter,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.session = session
        self.logger = logger or get_logger("fetcher")
        self.options = options
        self.rate_limiter = rate_limiter
        self._timeout = ClientTimeout(total=options.timeout)
        self._retry = RetryOptions(
            max_retries=options.retry_times,
            initial_delay=options.retry_delay,
            is_retryable=is_retryable_error,
        )

    async def fetch_page(self, url: str) -> Optional[FetchResult]:
        """
        Fetch *url* once the rate limiter allows it.

        Returns FetchResult for any HTTP answer (``html`` empty when the body is
        not HTML), status 408 when attempts time out, and None when the page is
        unreachable.
        """
        await self.rate_limiter.acquire()
        self.logger.debug("Fetching: %s", url)
        try:
            return await with_retry(
                lambda: self._get(url), self._retry, logger=self.logger.getChild("retry")
            )
        except FetchTimeoutError:
            self.logger.debug("Timeout fetching %s", url)
            return FetchResult(html="", status=TIMEOUT_STATUS)
        except RetryableStatusError as exc:
            self.logger.debug("Giving up on %s after HTTP %d", url, exc.status)
            return FetchResult(html="", status=exc.status)
        except (ClientError, OSError, ValueError) as exc:
            self.logger.warning("Failed to fetch %s: %s", url, str(exc) or type(exc).__name__)
            return None

    async def _get(self, url: str) -> FetchResult:
        try:
            async with self.session.get(
                url, timeout=self._timeout, allow_redirects=True
            ) as resp:
                if resp.status in RETRY_STATUS:
                    raise RetryableStatusError(resp.status)
                ctype = resp.headers.get("Content-Type", "").lower()
                if not any(t in ctype for t in HTML_TYPES):
                    self.logger.debug("Non-HTML content-type for %s: %s", url, ctype)
                    return FetchResult(html="", status=resp.status)
                html = await resp.text(errors="replace")
                self.logger.debug("Fetched %s: %d, %d bytes", url, resp.status, len(html))
                return FetchResult(html=html, status=resp.status)
        except asyncio.TimeoutError as exc:
            raise FetchTimeoutError(
                f"timeout after {self.options.timeout:g}s fetching {url}"
            ) from exc


__all__ = [
    "Fetcher",
    "FetchTimeoutError",
    "RetryableStatusError",
    "RETRY_STATUS",
    "create_session",
]
