# seo_scout/crawler/retry.py
"""
Exponential backoff around fallible coroutines.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence, TypeVar

from seo_scout.logger import get_logger

T = TypeVar("T")

RETRYABLE_PATTERNS: Sequence[str] = (
    "network",
    "timeout",
    "timed out",
    "econnreset",
    "connection reset",
    "econnrefused",
    "connection refused",
    "socket hang up",
    "server disconnected",
    "cannot connect",
    "etimedout",
    "enotfound",
    "name or service not known",
    "429",
    "500",
    "502",
    "503",
    "504",
)


def _always(_: BaseException) -> bool:
    return True


@dataclass(slots=True, frozen=True)
class RetryOptions:
    """Backoff settings; delays are in seconds."""

    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    backoff_factor: float = 2.0
    is_retryable: Callable[[BaseException], bool] = _always


def is_retryable_error(error: BaseException) -> bool:
    """True for network blips, timeouts, throttling and 5xx gateway errors."""
    message = str(error).lower()
    return any(pattern in message for pattern in RETRYABLE_PATTERNS)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    options: Optional[RetryOptions] = None,
    *,
    logger: Optional[logging.Logger] = None,
) -> T:
    """
    Await ``operation()`` until it succeeds, at most ``max_retries + 1`` times.

    The last error is re-raised once attempts run out or ``is_retryable``
    rejects it. Between attempts the delay grows by ``backoff_factor`` and is
    capped at ``max_delay``. Attempts are logged at DEBUG on *logger*.
    """
    opts = options or RetryOptions()
    log = logger or get_logger("retry")
    delay = min(opts.initial_delay, opts.max_delay)
    attempts = opts.max_retries + 1

    for attempt in range(attempts):
        try:
            log.debug("Attempt %d/%d", attempt + 1, attempts)
            return await operation()
        except Exception as exc:
            if attempt == opts.max_retries:
                log.debug("All %d attempts failed", attempts)
                raise
            if not opts.is_retryable(exc):
                log.debug("Error is not retryable: %s", exc)
                raise
            log.debug(
                "Attempt %d failed: %s. Retrying in %.0f ms...", attempt + 1, exc, delay * 1000
            )
            await asyncio.sleep(delay)
            delay = min(delay * opts.backoff_factor, opts.max_delay)

    raise AssertionError("unreachable")  # pragma: no cover


__all__ = ["RETRYABLE_PATTERNS", "RetryOptions", "is_retryable_error", "with_retry"]
