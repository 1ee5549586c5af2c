# File: seo_scout/aggregator.py
"""seo_scout.aggregator: reduce crawled pages into a site-wide SEO report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from seo_scout.crawler.models import PageResult

UNKNOWN_REFERRER = "unknown"


@dataclass(slots=True, frozen=True)
class BrokenLink:
    url: str
    status: int
    found_on: str


@dataclass(slots=True, frozen=True)
class MissingAltText:
    page: str
    image: str


@dataclass(slots=True, frozen=True)
class DuplicateTitle:
    title: str
    pages: List[str]


@dataclass(slots=True)
class CrawlSummary:
    """Site-wide issues found in one crawl."""

    total_pages: int = 0
    broken_links: List[BrokenLink] = field(default_factory=list)
    missing_titles: List[str] = field(default_factory=list)
    missing_meta_descriptions: List[str] = field(default_factory=list)
    missing_h1s: List[str] = field(default_factory=list)
    missing_alt_text: List[MissingAltText] = field(default_factory=list)
    duplicate_titles: List[DuplicateTitle] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        """Issues that weigh on the health score (alt text is reported, not scored)."""
        return (
            len(self.broken_links)
            + len(self.missing_titles)
            + len(self.missing_meta_descriptions)
            + len(self.missing_h1s)
            + len(self.duplicate_titles)
        )

    @property
    def health_score(self) -> float:
        """0-100; each issue per crawled page costs 20 points."""
        if not self.total_pages:
            return 0.0
        return max(0.0, 100 - (self.issue_count / self.total_pages) * 20)

    def counts(self) -> Dict[str, int]:
        return {
            "totalPages": self.total_pages,
            "brokenLinksCount": len(self.broken_links),
            "missingTitlesCount": len(self.missing_titles),
            "missingMetaDescriptionsCount": len(self.missing_meta_descriptions),
            "missingH1sCount": len(self.missing_h1s),
            "missingAltTextCount": len(self.missing_alt_text),
            "duplicateTitlesCount": len(self.duplicate_titles),
        }

    def issues(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("total_pages")
        return data


def _find_referrer(url: str, results: List[PageResult]) -> str:
    for other in results:
        if other.url != url and url in other.links:
            return other.url
    return UNKNOWN_REFERRER


def generate_summary(results: Iterable[PageResult]) -> CrawlSummary:
    """One pass over *results*; only 200 pages feed the on-page checks.

    A broken page is attributed to the first crawled page linking to it,
    ``"unknown"`` when no crawled page does.
    """
    pages = list(results)
    summary = CrawlSummary()
    titles: Dict[str, List[str]] = {}

    for page in pages:
        if page.status >= 400 or page.status == 0:
            summary.broken_links.append(
                BrokenLink(url=page.url, status=page.status, found_on=_find_referrer(page.url, pages))
            )

        if page.status != 200:
            continue

        summary.total_pages += 1
        if not page.title:
            summary.missing_titles.append(page.url)
        else:
            titles.setdefault(page.title, []).append(page.url)
        if not page.meta_description:
            summary.missing_meta_descriptions.append(page.url)
        if not page.h1:
            summary.missing_h1s.append(page.url)
        for image in page.images:
            if not image.alt:
                summary.missing_alt_text.append(MissingAltText(page=page.url, image=image.src))

    summary.duplicate_titles = [
        DuplicateTitle(title=title, pages=urls) for title, urls in titles.items() if len(urls) > 1
    ]
    return summary


@dataclass(slots=True)
class CrawlReport:
    """Everything one crawl produced, ready for the report renderers."""

    url: str
    summary: CrawlSummary
    pages: List[PageResult] = field(default_factory=list)
    crawled_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_results(cls, url: str, pages: Iterable[PageResult]) -> CrawlReport:
        pages = list(pages)
        return cls(url=url, summary=generate_summary(pages), pages=pages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "crawledAt": self.crawled_at.isoformat(),
            "summary": self.summary.counts(),
            "issues": self.summary.issues(),
            "healthScore": round(self.summary.health_score),
            "pages": [page.to_dict() for page in self.pages],
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = [
    "BrokenLink",
    "MissingAltText",
    "DuplicateTitle",
    "CrawlSummary",
    "CrawlReport",
    "generate_summary",
]
