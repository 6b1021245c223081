"""creepy.engine: Orchestration layer для запуска обхода и получения CrawlOutcome."""

from __future__ import annotations

import asyncio
from typing import Optional

from creepy.config import RuleSet
from creepy.crawler.crawler import AsyncCrawler
from creepy.crawler.models import CrawlOutcome
from creepy.logger import logger

__all__ = ["Engine", "start_crawl"]


async def start_crawl(cfg: RuleSet) -> CrawlOutcome:
    """
    Запускает асинхронный краулер в контексте и возвращает CrawlOutcome.

    Бросает SeedRejectedError до любого сетевого запроса, если стартовый URL
    отклоняется собственными правилами набора.
    """
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl()


class Engine:
    """Фасад для синхронного кода: запуск обхода с общим таймаутом."""

    def __init__(self, config: RuleSet, scan_timeout: Optional[float] = None) -> None:
        self.config = config
        self.scan_timeout = scan_timeout

    def run(self) -> CrawlOutcome:
        """Запускает обход (с общим таймаутом, если он задан) и возвращает результат."""
        try:
            return asyncio.run(asyncio.wait_for(start_crawl(self.config), timeout=self.scan_timeout or None))
        except asyncio.TimeoutError:
            logger.error("Crawl did not finish within %s seconds", self.scan_timeout)
            raise
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise
