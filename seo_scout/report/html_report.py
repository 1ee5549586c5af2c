"""seo_scout.report.html_report: HTML report rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from seo_scout.aggregator import CrawlReport

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    report: CrawlReport,
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from a template and save it.

    Args:
        report: CrawlReport to render.
        template_dir: directory holding ``report.html.j2``; ``None`` uses the
            template shipped with the package.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.

    Example:
    ```python
    from seo_scout.report.html_report import render_html
    html_path = render_html(report, template_dir=None, output_path='reports/crawl.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "url": report.url,
        "crawled_at": report.crawled_at,
        "summary": report.summary,
        "health_score": round(report.summary.health_score),
        "pages": report.pages,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
