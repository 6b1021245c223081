"""Crawl engine: URL resolution, admission control, fetching and traversal."""
