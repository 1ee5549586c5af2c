"""HTML parsing for crawled pages."""
