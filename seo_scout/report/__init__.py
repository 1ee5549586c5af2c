# File: seo_scout/report/__init__.py
"""seo_scout.report: renderers for crawl reports (table, JSON, CSV, HTML) used by the CLI."""

from __future__ import annotations

from seo_scout.report.csv_report import render_csv
from seo_scout.report.html_report import render_html
from seo_scout.report.json_report import render_json
from seo_scout.report.table_report import format_table, render_table

__all__ = ["render_csv", "render_html", "render_json", "render_table", "format_table"]
