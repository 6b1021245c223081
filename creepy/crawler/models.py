"""
Data models and exceptions for the creepy crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional


@dataclass(slots=True)
class PageData:
    """Holds the requested URL, decoded body and HTTP status of a fetched page."""

    url: str
    content: str
    status: Optional[int] = None


@dataclass(slots=True)
class CrawlOutcome:
    """Hits, misses and unexhausted URLs collected by one crawl."""

    hits: List[str] = field(default_factory=list)
    misses: List[str] = field(default_factory=list)
    unexhausted: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return asdict(self)


class ConfigurationError(ValueError):
    """The rule set cannot be used to start a crawl."""


class SeedRejectedError(ConfigurationError):
    """One or more seeds are rejected by the rule set's own admission rules."""

    def __init__(self, seeds: List[str]) -> None:
        self.seeds = seeds
        super().__init__(f"Your blacklist overrides seeds you have set: {', '.join(seeds)}")


class FetchError(Exception):
    """A page could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class MalformedLinkError(ValueError):
    """An href could not be turned into an absolute URL."""

    def __init__(self, href: str, reason: str) -> None:
        self.href = href
        self.reason = reason
        super().__init__(f"Could not parse URL {href!r}: {reason}")


class RelativeURLError(MalformedLinkError):
    """The text is a relative reference and needs a base URL."""
