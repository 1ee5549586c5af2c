# seo_scout/report/csv_report.py
"""CSV export: one row per crawled page."""
from __future__ import annotations

import csv
import io
from typing import Iterable, Sequence

from seo_scout.crawler.models import PageResult

CSV_HEADERS: Sequence[str] = (
    "url",
    "status",
    "title",
    "meta_description",
    "h1",
    "links",
    "images",
    "issue_count",
    "issues",
)


def render_csv(pages: Iterable[PageResult]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for page in pages:
        writer.writerow(
            [
                page.url,
                page.status,
                page.title or "",
                page.meta_description or "",
                page.h1 or "",
                len(page.links),
                len(page.images),
                len(page.issues),
                "; ".join(page.issues),
            ]
        )
    return buffer.getvalue()
