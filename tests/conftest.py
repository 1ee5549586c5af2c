# File: tests/conftest.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Dict, List, Optional

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from seo_scout.aggregator import CrawlReport
from seo_scout.config import CrawlOptions
from seo_scout.crawler.models import ImageInfo, PageResult


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@asynccontextmanager
async def serve(app: web.Application) -> AsyncIterator[str]:
    """Run *app* on a free localhost port, yield its base URL, ensure cleanup."""
    server = TestServer(app, host="127.0.0.1")
    await server.start_server()
    try:
        yield f"http://127.0.0.1:{server.port}"
    finally:
        await server.close()


def html_page(body: str = "", *, title: str = "Page", description: str = "Desc", h1: str = "Heading") -> str:
    head = f"<title>{title}</title>" if title else ""
    if description:
        head += f'<meta name="description" content="{description}">'
    heading = f"<h1>{h1}</h1>" if h1 else ""
    return f"<html><head>{head}</head><body>{heading}{body}</body></html>"


def html_response(body: str, status: int = 200, **kwargs) -> web.Response:
    return web.Response(text=html_page(body, **kwargs), status=status, content_type="text/html")


def link_app(pages: Dict[str, str], hits: Optional[Dict[str, int]] = None) -> web.Application:
    """Application serving ``path -> body`` as full HTML pages and counting hits per path."""
    app = web.Application()
    counter = hits if hits is not None else {}

    def handler_for(path: str, body: str) -> Callable:
        async def handler(_):
            counter[path] = counter.get(path, 0) + 1
            return html_response(body, title=f"Title {path}")

        return handler

    for path, body in pages.items():
        app.router.add_get(path, handler_for(path, body))
    return app


@pytest.fixture()
def fast_options() -> CrawlOptions:
    """Options tuned for local servers: no pacing, tiny backoff."""
    return CrawlOptions(
        max_depth=3,
        max_pages=100,
        concurrency=5,
        timeout=2.0,
        requests_per_second=1000,
        retry_times=2,
        retry_delay=0.01,
    )


@pytest.fixture()
def make_page() -> Callable[..., PageResult]:
    def _make(
        url: str,
        status: int = 200,
        title: Optional[str] = "Title",
        meta_description: Optional[str] = "Description",
        h1: Optional[str] = "Heading",
        links: Optional[List[str]] = None,
        images: Optional[List[ImageInfo]] = None,
    ) -> PageResult:
        return PageResult(
            url=url,
            status=status,
            title=title,
            meta_description=meta_description,
            h1=h1,
            links=links or [],
            images=images or [],
        )

    return _make


@pytest.fixture()
def sample_report(make_page) -> CrawlReport:
    pages = [
        make_page(
            "https://example.com/",
            links=["https://example.com/about", "https://example.com/gone"],
            images=[ImageInfo(src="https://example.com/logo.png", alt=None)],
        ),
        make_page("https://example.com/about", title=None),
        make_page("https://example.com/gone", status=404, title=None, meta_description=None, h1=None),
    ]
    return CrawlReport.from_results("https://example.com/", pages)
