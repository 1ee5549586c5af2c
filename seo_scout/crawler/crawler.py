# === FILE: seo_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Callable, Deque, Dict, Iterable, List, Optional, Set
from urllib.parse import urlsplit

from aiohttp import ClientSession

from seo_scout.aggregator import CrawlSummary, generate_summary
from seo_scout.config import CrawlOptions
from seo_scout.crawler.fetcher import Fetcher, create_session
from seo_scout.crawler.models import CrawlTarget, PageResult
from seo_scout.crawler.rate_limiter import RateLimiter
from seo_scout.logger import get_logger
from seo_scout.parser.html_parser import parse_page
from seo_scout.utils import is_internal_url, normalize_url, origin_of, should_crawl

__all__ = ("SiteCrawler", "ProgressCallback")

ProgressCallback = Callable[[int, int], None]


class SiteCrawler:
    """Breadth-first crawler for one site with concurrency and rate limits.

    Frontier state (queue, visited set, results, in-flight counter) is only
    touched between awaits on a single event loop, so it needs no lock.
    """

    def __init__(
        self,
        start_url: str,
        options: Optional[CrawlOptions] = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        parts = urlsplit(start_url)
        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise ValueError(f"start URL must be an absolute http(s) URL: {start_url!r}")
        try:
            parts.port
        except ValueError as exc:
            raise ValueError(f"start URL has an invalid port: {start_url!r}") from exc

        self.options = options or CrawlOptions()
        self.on_progress = on_progress
        self.logger = logger or get_logger("crawler")
        self.origin = origin_of(start_url)
        self.hostname = parts.hostname

        self.visited: Set[str] = set()
        self.results: Dict[str, PageResult] = {}
        self.queue: Deque[CrawlTarget] = deque()
        self.active_requests = 0
        self.rate_limiter = RateLimiter(
            self.options.requests_per_second, logger=self.logger.getChild("ratelimit")
        )

        self.session: Optional[ClientSession] = None
        self._tasks: Set[asyncio.Task[None]] = set()
        self._cancelled = False

        self.start_url = self.normalize(start_url)
        self.queue.append(CrawlTarget(url=self.start_url, depth=0, found_on="start"))
        self.logger.debug("Crawler initialized for %s with %s", self.start_url, self.options)

    async def __aenter__(self) -> SiteCrawler:
        self.session = create_session(self.options)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # URL rules                                                          #
    # ------------------------------------------------------------------ #

    def normalize(self, url: str) -> Optional[str]:
        return normalize_url(url, self.origin)

    def is_internal(self, url: str) -> bool:
        return is_internal_url(url, self.hostname)

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #

    def cancel(self) -> None:
        """Stop admitting new pages; in-flight fetches still finish."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    async def crawl(self) -> List[PageResult]:
        """Crawl until the queue is empty and nothing is in flight."""
        if self.session is None or self.session.closed:
            async with create_session(self.options) as session:
                self.session = session
                try:
                    return await self._run()
                finally:
                    self.session = None
        return await self._run()

    @staticmethod
    def generate_summary(results: Iterable[PageResult]) -> CrawlSummary:
        return generate_summary(results)

    # ------------------------------------------------------------------ #
    # Scheduling                                                         #
    # ------------------------------------------------------------------ #

    async def _run(self) -> List[PageResult]:
        if not self.session:
            raise RuntimeError("Session not initialized")
        fetcher = Fetcher(
            self.session, self.options, self.rate_limiter, logger=self.logger.getChild("fetcher")
        )
        self.logger.info("Starting crawl: %s", self.start_url)
        start = time.monotonic()
        try:
            while self.queue or self._tasks:
                self._admit(fetcher)
                if not self._tasks:
                    continue
                done, _ = await asyncio.wait(self._tasks, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    task.result()
        finally:
            for task in self._tasks:
                task.cancel()
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)

        duration = time.monotonic() - start
        self.logger.info(
            "Finished: %d pages in %.2f s (%.2f pages/s)",
            len(self.results),
            duration,
            len(self.results) / duration if duration else 0,
        )
        return list(self.results.values())

    def _admit(self, fetcher: Fetcher) -> None:
        """Start queued targets up to the concurrency cap, without awaiting them."""
        if self._cancelled and self.queue:
            self.logger.info("Crawl cancelled, dropping %d queued URLs", len(self.queue))
            self.queue.clear()

        while self.queue and self.active_requests < self.options.concurrency:
            if len(self.results) + self.active_requests >= self.options.max_pages:
                self.logger.debug("Page budget reached, dropping %d queued URLs", len(self.queue))
                self.queue.clear()
                break
            target = self.queue.popleft()
            if target.url in self.visited:
                continue
            # mark before the first await so no other task can fetch it too
            self.visited.add(target.url)
            self.active_requests += 1
            task = asyncio.create_task(self._process(fetcher, target))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _process(self, fetcher: Fetcher, target: CrawlTarget) -> None:
        try:
            page = await fetcher.fetch_page(target.url)
        finally:
            self.active_requests -= 1

        if page is None:
            self.results[target.url] = PageResult.unreachable(target.url)
        else:
            result = parse_page(target.url, page.html, page.status)
            self.results[target.url] = result
            if target.depth < self.options.max_depth and page.status == 200:
                self._enqueue_links(target, result.links)

        if self.on_progress is not None:
            self.on_progress(len(self.results), len(self.queue))

    def _enqueue_links(self, target: CrawlTarget, links: Iterable[str]) -> None:
        for link in links:
            url = self.normalize(link)
            if url is None or not self.is_internal(url) or url in self.visited:
                continue
            if not should_crawl(url):
                self.logger.debug("Skipping %s", url)
                continue
            self.queue.append(CrawlTarget(url=url, depth=target.depth + 1, found_on=target.url))
