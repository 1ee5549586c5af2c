"""Crawler internals: frontier, fetcher, rate limiter and retry policy."""
