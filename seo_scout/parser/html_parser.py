# === FILE: seo_scout/parser/html_parser.py ===
"""HTML parsing for SEO Scout.

:func:`parse_page` turns a fetched document into a
:class:`~seo_scout.crawler.models.PageResult`:

* title: first ``<title>`` text, trimmed, ``None`` if empty.
* meta_description: ``<meta name="description" content="…">``.
* h1: first ``<h1>`` text.
* links: absolute URLs of every ``<a href>`` except fragments and
  script/mail/phone/data pseudo-links.
* images: absolute ``<img src>`` paired with the trimmed ``alt``.

The issue list is derived from those fields only; no network access happens
here, so an empty document simply reports every "missing" issue.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from seo_scout.crawler.models import ImageInfo, PageResult

__all__: Sequence[str] = ("parse_page", "find_issues", "TITLE_MAX", "META_DESCRIPTION_MAX")

TITLE_MAX = 60
META_DESCRIPTION_MAX = 160

_SKIP_HREF_PREFIXES = ("#", "javascript:", "mailto:", "tel:", "data:", "vbscript:")


def _text(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return tag.get_text().strip() or None


def _attr(tag: Optional[Tag], name: str) -> Optional[str]:
    if tag is None:
        return None
    value = tag.get(name)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _resolve(base: str, ref: str) -> Optional[str]:
    try:
        absolute = urljoin(base, ref)
        urlsplit(absolute).port
    except ValueError:
        return None
    return absolute


def _extract_links(soup: BeautifulSoup, page_url: str) -> List[str]:
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        href = href.strip()
        if not href or href.lower().startswith(_SKIP_HREF_PREFIXES):
            continue
        absolute = _resolve(page_url, href)
        if absolute:
            links.append(absolute)
    return links


def _extract_images(soup: BeautifulSoup, page_url: str) -> List[ImageInfo]:
    images: List[ImageInfo] = []
    for tag in soup.find_all("img", src=True):
        src = tag.get("src")
        if not isinstance(src, str) or not src.strip():
            continue
        absolute = _resolve(page_url, src.strip())
        if absolute:
            images.append(ImageInfo(src=absolute, alt=_attr(tag, "alt")))
    return images


def find_issues(
    title: Optional[str],
    meta_description: Optional[str],
    h1: Optional[str],
    images: Sequence[ImageInfo] = (),
) -> List[str]:
    """On-page issues for the extracted fields; every applicable check is reported."""
    issues: List[str] = []
    if not title:
        issues.append("Missing title tag")
    if not meta_description:
        issues.append("Missing meta description")
    if not h1:
        issues.append("Missing H1 tag")
    if title and len(title) > TITLE_MAX:
        issues.append(f"Title too long (>{TITLE_MAX} chars)")
    if meta_description and len(meta_description) > META_DESCRIPTION_MAX:
        issues.append(f"Meta description too long (>{META_DESCRIPTION_MAX} chars)")
    for image in images:
        if not image.alt:
            issues.append(f"Image missing alt text: {image.src[:50]}...")
    return issues


def parse_page(url: str, html: str, status: int) -> PageResult:
    """Extract SEO facts from *html* served at *url* with HTTP *status*."""
    soup = BeautifulSoup(html or "", "html.parser")

    title = _text(soup.find("title"))
    meta_description = _attr(soup.find("meta", attrs={"name": "description"}), "content")
    h1 = _text(soup.find("h1"))
    images = _extract_images(soup, url)

    return PageResult(
        url=url,
        status=status,
        title=title,
        meta_description=meta_description,
        h1=h1,
        issues=find_issues(title, meta_description, h1, images),
        links=_extract_links(soup, url),
        images=images,
    )
