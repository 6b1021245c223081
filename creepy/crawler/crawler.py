from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from aiohttp import ClientSession
from bs4 import BeautifulSoup

from creepy.config import RuleSet
from creepy.crawler.admission import admit, rejected_seeds
from creepy.crawler.fetcher import Fetcher, open_session
from creepy.crawler.link_extractor import extract_links, matches, parse_document
from creepy.crawler.models import CrawlOutcome, FetchError, MalformedLinkError, SeedRejectedError
from creepy.crawler.resolver import is_http_url, resolve
from creepy.crawler.visited import VisitedSet
from creepy.logger import logger

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """
    Follows every admissible link reachable from the seeds and sorts the
    fetched pages into hits and misses.

    Usage::

        async with AsyncCrawler(rules) as crawler:
            outcome = await crawler.crawl()

    A crawler instance owns its visited set and outcome; use one per crawl.
    """

    def __init__(self, config: RuleSet, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self._validate_config()
        self.fetcher = fetcher
        self.session: Optional[ClientSession] = None
        self.visited = VisitedSet()
        self.outcome = CrawlOutcome()
        self._rate_lock = asyncio.Lock()
        self._last_fetch_ts: Optional[float] = None

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = open_session(self.config)
            self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlOutcome:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized; use 'async with AsyncCrawler(...)'")
        seeds = [str(seed) for seed in self.config.seeds]
        logger.info("Crawl started: %s", ", ".join(seeds) or "(no seeds)")
        if self.config.respect_robots_txt:
            logger.info("respect_robots_txt is set; robots.txt rules are not enforced")
        start = time.monotonic()

        queue: asyncio.Queue[str] = asyncio.Queue()
        for seed in seeds:
            queue.put_nowait(seed)
        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        drained = asyncio.create_task(queue.join())
        try:
            # a worker only finishes early if it crashed
            await asyncio.wait([drained, *workers], return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (drained, *workers):
                task.cancel()
            results = await asyncio.gather(drained, *workers, return_exceptions=True)
        for result in results:
            if isinstance(result, Exception):
                raise result

        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d hit, %d miss, %d unexhausted in %.2f s",
            len(self.outcome.hits), len(self.outcome.misses), len(self.outcome.unexhausted), duration,
        )
        return self.outcome

    async def _worker(self, queue: asyncio.Queue[str]) -> None:
        while True:
            url = await queue.get()
            try:
                await self._visit(url, queue)
            finally:
                queue.task_done()

    async def _visit(self, url: str, queue: asyncio.Queue[str]) -> None:
        if not self.visited.add(url):
            return
        await self._wait_for_politeness()
        logger.info("crawling %s", url)
        try:
            page = await self.fetcher.fetch(url)  # type: ignore[union-attr]
        except FetchError as exc:
            logger.warning("Error: %s", exc)
            self.outcome.unexhausted.append(url)
            return
        finally:
            self._last_fetch_ts = time.monotonic()

        document = parse_document(page.content)
        if matches(document, self.config.match_selector):
            self.outcome.hits.append(url)
        else:
            self.outcome.misses.append(url)
        for link in self._discover(url, document):
            queue.put_nowait(link)

    def _discover(self, base: str, document: BeautifulSoup) -> List[str]:
        legs: List[str] = []
        for href in extract_links(document, self.config.link_selector):
            try:
                link = resolve(base, href)
            except MalformedLinkError as exc:
                logger.warning("%s (on %s)", exc, base)
                continue
            if link is None:
                continue
            if not is_http_url(link):
                logger.debug("Skipping non-HTTP link %s", link)
                continue
            if link in self.visited:
                continue
            if not admit(link, self.config):
                logger.debug("Rejected by rules: %s", link)
                continue
            legs.append(link)
        return legs

    async def _wait_for_politeness(self) -> None:
        delay = self.config.delay
        if delay <= 0:
            return
        async with self._rate_lock:
            if self._last_fetch_ts is not None:
                wait = delay - (time.monotonic() - self._last_fetch_ts)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_fetch_ts = time.monotonic()

    def _validate_config(self) -> None:
        rejected = rejected_seeds(self.config)
        if rejected:
            logger.error("Seeds rejected by their own rules: %s", rejected)
            raise SeedRejectedError(rejected)
