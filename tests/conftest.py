# File: tests/conftest.py
from typing import Callable, Dict, List, Union

import pytest

from creepy.config import RuleSet
from creepy.crawler.models import FetchError, PageData
from creepy.logger import logger


class FakeFetcher:
    """In-memory stand-in for Fetcher: url -> html body, or an exception to raise."""

    def __init__(self, pages: Dict[str, Union[str, Exception]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> PageData:
        self.calls.append(url)
        body = self.pages.get(url)
        if body is None:
            raise FetchError(url, "connection refused")
        if isinstance(body, Exception):
            raise body
        return PageData(url=url, content=body, status=200)


@pytest.fixture()
def make_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def make_rules() -> Callable[..., RuleSet]:
    """
    Return a RuleSet factory with fast defaults for tests.
    """

    def _make(**overrides) -> RuleSet:
        params = {"seeds": ["https://x.test/"], "timeout": 2.0, "user_agent": "TestAgent/1.0"}
        params.update(overrides)
        return RuleSet(**params)

    return _make


@pytest.fixture()
def creepy_log(caplog):
    """The project logger does not propagate; hook caplog onto it directly."""
    logger.addHandler(caplog.handler)
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)
