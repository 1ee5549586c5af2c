# seo_scout/report/table_report.py
"""Terminal summary: plain-text tables coloured with click."""
from __future__ import annotations

from typing import List, Sequence

import click

from seo_scout.aggregator import CrawlSummary


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[:width] + "..."


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Bordered table; column widths follow the widest cell."""
    cells = [[str(c) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(values: Sequence[str], styled: bool = False) -> str:
        parts = []
        for value, width in zip(values, widths):
            padded = value.ljust(width)
            parts.append(click.style(padded, fg="cyan") if styled else padded)
        return "| " + " | ".join(parts) + " |"

    out = [border, line(headers, styled=True), border]
    out.extend(line(row) for row in cells)
    out.append(border)
    return "\n".join(out)


def _url_list(title: str, urls: Sequence[str], limit: int = 10) -> List[str]:
    out = ["", click.style(title, fg="yellow", bold=True), ""]
    out.extend(f"  {click.style('•', dim=True)} {url}" for url in urls[:limit])
    if len(urls) > limit:
        out.append(f"  ... and {len(urls) - limit} more pages")
    return out


def render_table(summary: CrawlSummary) -> str:
    out: List[str] = [click.style("Crawl Summary", fg="cyan", bold=True), ""]
    out.append(
        format_table(
            ["Metric", "Count"],
            [
                ["Total Pages Crawled", summary.total_pages],
                ["Broken Links", len(summary.broken_links)],
                ["Missing Titles", len(summary.missing_titles)],
                ["Missing Meta Descriptions", len(summary.missing_meta_descriptions)],
                ["Missing H1 Tags", len(summary.missing_h1s)],
                ["Missing Alt Text", len(summary.missing_alt_text)],
                ["Duplicate Titles", len(summary.duplicate_titles)],
            ],
        )
    )

    if summary.broken_links:
        out += ["", click.style("Broken Links", fg="red", bold=True), ""]
        rows = [
            [
                _clip(link.url, 60),
                "Failed" if link.status == 0 else link.status,
                _clip(link.found_on, 40),
            ]
            for link in summary.broken_links[:20]
        ]
        out.append(format_table(["URL", "Status", "Found On"], rows))
        if len(summary.broken_links) > 20:
            out.append(f"... and {len(summary.broken_links) - 20} more broken links")

    if summary.missing_titles:
        out += _url_list("Missing Title Tags", summary.missing_titles)
    if summary.missing_meta_descriptions:
        out += _url_list("Missing Meta Descriptions", summary.missing_meta_descriptions)
    if summary.missing_h1s:
        out += _url_list("Missing H1 Tags", summary.missing_h1s)

    if summary.duplicate_titles:
        out += ["", click.style("Duplicate Titles", fg="yellow", bold=True), ""]
        for dup in summary.duplicate_titles[:5]:
            out.append(f'  "{dup.title}"')
            out.extend(click.style(f"    • {page}", dim=True) for page in dup.pages[:3])
            if len(dup.pages) > 3:
                out.append(click.style(f"    ... and {len(dup.pages) - 3} more pages", dim=True))
        if len(summary.duplicate_titles) > 5:
            out.append(f"... and {len(summary.duplicate_titles) - 5} more duplicate titles")

    if summary.missing_alt_text:
        out += ["", click.style("Images Missing Alt Text", fg="yellow", bold=True), ""]
        per_page: dict[str, int] = {}
        for item in summary.missing_alt_text:
            per_page[item.page] = per_page.get(item.page, 0) + 1
        out.append(f"{len(summary.missing_alt_text)} images across {len(per_page)} pages")
        for page, count in list(per_page.items())[:5]:
            out.append(click.style(f"  • {page} ({count} images)", dim=True))
        if len(per_page) > 5:
            out.append(f"... and {len(per_page) - 5} more pages")

    score = summary.health_score
    colour = "green" if score >= 80 else "yellow" if score >= 60 else "red"
    out += [
        "",
        click.style("SEO Health Score", fg="cyan", bold=True),
        "",
        "  " + click.style(f"{round(score)}/100", fg=colour, bold=True),
        click.style(
            f"  Based on {summary.total_pages} pages and {summary.issue_count} issues found",
            dim=True,
        ),
    ]
    return "\n".join(out)
