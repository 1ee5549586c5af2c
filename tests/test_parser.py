# File: tests/test_parser.py
from seo_scout.crawler.models import ImageInfo
from seo_scout.parser.html_parser import find_issues, parse_page

PAGE_URL = "https://example.com/blog/post"

FULL_PAGE = """
<html>
  <head>
    <title>  Hello world  </title>
    <meta name="description" content="  A short description ">
  </head>
  <body>
    <h1> Main heading </h1>
    <h1>Second heading</h1>
    <a href="/about">About</a>
    <a href="other">Relative</a>
    <a href="https://external.org/x">External</a>
    <a href="#top">Top</a>
    <a href="javascript:void(0)">JS</a>
    <a href="MAILTO:me@example.com">Mail</a>
    <a href="tel:+123">Call</a>
    <a href="data:text/plain,hi">Data</a>
    <a href="vbscript:msgbox">VB</a>
    <a href="http://[::1">Broken</a>
    <a>No href</a>
    <img src="/img/logo.png" alt=" Logo ">
    <img src="banner.jpg">
    <img src="spacer.gif" alt="   ">
  </body>
</html>
"""


def test_extracts_fields():
    page = parse_page(PAGE_URL, FULL_PAGE, 200)

    assert page.url == PAGE_URL
    assert page.status == 200
    assert page.title == "Hello world"
    assert page.meta_description == "A short description"
    assert page.h1 == "Main heading"
    assert page.links == [
        "https://example.com/about",
        "https://example.com/blog/other",
        "https://external.org/x",
    ]
    assert page.images == [
        ImageInfo(src="https://example.com/img/logo.png", alt="Logo"),
        ImageInfo(src="https://example.com/blog/banner.jpg", alt=None),
        ImageInfo(src="https://example.com/blog/spacer.gif", alt=None),
    ]


def test_issues_for_images_without_alt():
    page = parse_page(PAGE_URL, FULL_PAGE, 200)
    assert page.issues == [
        "Image missing alt text: https://example.com/blog/banner.jpg...",
        "Image missing alt text: https://example.com/blog/spacer.gif...",
    ]


def test_empty_document_reports_every_missing_field():
    page = parse_page(PAGE_URL, "", 200)
    assert page.title is None
    assert page.meta_description is None
    assert page.h1 is None
    assert page.links == []
    assert page.images == []
    assert page.issues == ["Missing title tag", "Missing meta description", "Missing H1 tag"]


def test_blank_elements_count_as_missing():
    html = '<title>   </title><meta name="description" content=""><h1>\n</h1>'
    page = parse_page(PAGE_URL, html, 200)
    assert (page.title, page.meta_description, page.h1) == (None, None, None)


def test_length_checks():
    html = (
        f"<title>{'t' * 61}</title>"
        f'<meta name="description" content="{"d" * 161}">'
        "<h1>Heading</h1>"
    )
    page = parse_page(PAGE_URL, html, 200)
    assert page.issues == [
        "Title too long (>60 chars)",
        "Meta description too long (>160 chars)",
    ]


def test_lengths_at_the_limit_are_fine():
    html = f"<title>{'t' * 60}</title><meta name=\"description\" content=\"{'d' * 160}\"><h1>x</h1>"
    assert parse_page(PAGE_URL, html, 200).issues == []


def test_long_image_url_is_truncated_in_issue():
    src = "https://cdn.example.com/" + "a" * 100 + ".png"
    page = parse_page(PAGE_URL, f'<img src="{src}">', 200)
    assert f"Image missing alt text: {src[:50]}..." in page.issues


def test_checks_are_independent():
    issues = find_issues(None, "d" * 200, None, [ImageInfo(src="https://e.com/i.png", alt=None)])
    assert issues == [
        "Missing title tag",
        "Missing H1 tag",
        "Meta description too long (>160 chars)",
        "Image missing alt text: https://e.com/i.png...",
    ]


def test_status_is_carried_through():
    assert parse_page(PAGE_URL, "<title>x</title>", 404).status == 404


def test_links_and_images_with_bad_ports_are_dropped():
    html = (
        '<a href="http://example.com:99999/x">out of range</a>'
        '<a href="//example.com:abc/y">not a number</a>'
        '<a href="http://[::1/z">broken host</a>'
        '<a href="/kept">kept</a>'
        '<img src="http://example.com:70000/i.png" alt="bad">'
    )
    page = parse_page(PAGE_URL, html, 200)
    assert page.links == ["https://example.com/kept"]
    assert page.images == []
