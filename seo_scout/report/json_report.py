# seo_scout/report/json_report.py

"""
JSON report generation for SEO Scout.

Serializes a CrawlReport to a file.
"""
from pathlib import Path

from seo_scout.aggregator import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *report* as JSON at the given path.

    :param report: CrawlReport with the crawl summary and pages
    :param output_path: path to the JSON file
    :param pretty: indent the output by two spaces
    :return: Path of the written file

    Example:
    ```python
    from seo_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/crawl.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(report.json(pretty=pretty), encoding='utf-8')
    return output
