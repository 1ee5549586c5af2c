# seo_scout/crawler/models.py
"""
Data models for the SEO Scout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

FAILED_FETCH_ISSUE = "Failed to fetch page"


@dataclass(slots=True, frozen=True)
class CrawlTarget:
    """Queue item: a discovered URL, its link depth and the page it was found on."""

    url: str
    depth: int
    found_on: str


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Body and HTTP status of one fetch; ``html`` is empty for non-HTML responses."""

    html: str
    status: int


@dataclass(slots=True, frozen=True)
class ImageInfo:
    src: str
    alt: Optional[str]


@dataclass(slots=True, frozen=True)
class PageResult:
    """SEO facts collected for one crawled URL. ``status == 0`` means unreachable."""

    url: str
    status: int
    title: Optional[str] = None
    meta_description: Optional[str] = None
    h1: Optional[str] = None
    issues: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    images: List[ImageInfo] = field(default_factory=list)

    @classmethod
    def unreachable(cls, url: str) -> PageResult:
        return cls(url=url, status=0, issues=[FAILED_FETCH_ISSUE])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "FAILED_FETCH_ISSUE",
    "CrawlTarget",
    "FetchResult",
    "ImageInfo",
    "PageResult",
]
