"""Fetchers that download raw documentation text."""

from sveltedocs.fetchers.http_fetcher import HttpFetcher

__all__ = ["HttpFetcher"]
