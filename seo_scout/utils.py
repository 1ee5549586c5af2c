# File: seo_scout/utils.py
"""seo_scout.utils: URL helpers shared by the crawler and the CLI."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from seo_scout.logger import get_logger

__all__: Sequence[str] = (
    "SKIP_EXTENSIONS",
    "SKIP_PATTERNS",
    "validate_url",
    "origin_of",
    "normalize_url",
    "is_internal_url",
    "should_crawl",
    "format_duration",
)

log = get_logger("utils")

SKIP_EXTENSIONS: Sequence[str] = (
    ".pdf", ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico",
    ".css", ".js", ".xml", ".json", ".zip",
    ".mp4", ".mp3", ".wav", ".avi", ".mov",
)
SKIP_PATTERNS: Sequence[str] = (
    "/wp-admin", "/wp-content", "/wp-includes", "/feed", "/rss", "/xmlrpc",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def validate_url(raw: str) -> str:
    """Turn user input into an absolute http(s) URL or raise ValueError.

    A missing scheme defaults to ``https://``. Apart from ``localhost`` and
    ``127.0.0.1`` the hostname needs a dot and a TLD of two or more letters.
    """
    candidate = raw.strip()
    if not candidate.startswith(("http://", "https://")):
        candidate = "https://" + candidate
    try:
        parts = urlsplit(candidate)
        host = parts.hostname
        parts.port  # raises on a malformed port
    except ValueError as exc:
        raise ValueError("Invalid URL format") from exc
    if not host:
        raise ValueError("Invalid hostname")
    if host not in ("localhost", "127.0.0.1"):
        labels = host.split(".")
        if len(labels) < 2 or len(labels[-1]) < 2:
            raise ValueError("Invalid domain format")
    path = parts.path or "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def origin_of(url: str) -> str:
    """``scheme://host[:port]`` of *url*."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def normalize_url(url: str, base: str | None = None) -> str | None:
    """Canonical form used for deduplication.

    Resolves *url* against *base*, lower-cases scheme and host, drops default
    ports and the fragment, and strips one trailing slash unless the path is
    the bare root. Returns ``None`` for input that does not parse as a URL,
    including an out-of-range or non-numeric port.
    """
    try:
        absolute = urljoin(base, url) if base else url
        parts = urlsplit(absolute)
        port = parts.port
    except ValueError:
        log.debug("Cannot normalize %r", url)
        return None

    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        netloc = netloc.rsplit(":", 1)[0]
    path = parts.path or "/"
    if path != "/" and path.endswith("/") and not parts.query:
        path = path[:-1]
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def is_internal_url(url: str, hostname: str) -> bool:
    """True when *url* lives on *hostname*."""
    try:
        return urlsplit(url).hostname == hostname.lower()
    except ValueError:
        return False


def should_crawl(url: str) -> bool:
    """False for static assets and CMS plumbing paths that never hold page content."""
    lowered = url.lower()
    try:
        path = urlsplit(lowered).path
    except ValueError:
        return False
    if path.endswith(tuple(SKIP_EXTENSIONS)):
        return False
    return not any(pattern in lowered for pattern in SKIP_PATTERNS)


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    return f"{seconds / 60:.1f}m"
