"""
creepy package initializer.
Defines package version and exposes the public crawl API.
The CLI lives in :mod:`creepy.cli` (console script ``creepy``).
"""
__version__ = "0.1.0"

from creepy.config import RuleSet, load_config
from creepy.crawler.models import CrawlOutcome, SeedRejectedError
from creepy.engine import Engine, start_crawl

__all__ = ["RuleSet", "load_config", "CrawlOutcome", "SeedRejectedError", "Engine", "start_crawl"]
