# seo_scout/crawler/rate_limiter.py
"""
Token-bucket rate limiter shared by every fetch of one crawl.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from seo_scout.logger import get_logger


class RateLimiter:
    """Token bucket: holds at most ``requests_per_second`` tokens (never less
    than one) and refills at the same rate, so bursts are bounded by one
    second's worth of requests.

    Acquisitions are serialized by a lock; waiters resume in FIFO order and
    never share a token.
    """

    def __init__(
        self, requests_per_second: float = 10.0, logger: Optional[logging.Logger] = None
    ) -> None:
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be > 0")
        # a bucket smaller than one token would never fill up to a request
        self.max_tokens = max(1.0, float(requests_per_second))
        self.refill_rate = float(requests_per_second)
        self.tokens = self.max_tokens
        self.last_refill = time.monotonic()
        self._lock = asyncio.Lock()
        self.logger = logger or get_logger("ratelimit")

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.max_tokens, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    async def acquire(self) -> None:
        """Wait until a token is available and consume it."""
        async with self._lock:
            self._refill()
            if self.tokens >= 1:
                self.tokens -= 1
                self.logger.debug("Rate limiter: acquired token, %.2f remaining", self.tokens)
                return

            wait = (1 - self.tokens) / self.refill_rate
            self.logger.debug("Rate limiter: waiting %.0f ms for token", wait * 1000)
            await asyncio.sleep(wait)
            self._refill()
            # may dip slightly below zero; the next refill evens it out
            self.tokens -= 1


__all__ = ["RateLimiter"]
