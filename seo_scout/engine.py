# File: seo_scout/engine.py
"""seo_scout.engine: orchestration layer that runs a crawl and builds the report."""

from __future__ import annotations

import logging
from typing import Optional

from seo_scout.aggregator import CrawlReport
from seo_scout.config import CrawlOptions
from seo_scout.crawler.crawler import ProgressCallback, SiteCrawler
from seo_scout.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(
    url: str,
    options: Optional[CrawlOptions] = None,
    *,
    on_progress: Optional[ProgressCallback] = None,
    log: Optional[logging.Logger] = None,
) -> CrawlReport:
    """Crawl *url* inside one HTTP session and return the aggregated report."""
    log = log or logger
    async with SiteCrawler(url, options, on_progress=on_progress, logger=log) as crawler:
        pages = await crawler.crawl()
    report = CrawlReport.from_results(url, pages)
    log.info(
        "Summary: %d pages, %d issues, health %.0f/100",
        report.summary.total_pages,
        report.summary.issue_count,
        report.summary.health_score,
    )
    return report
