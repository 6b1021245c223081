"""
Fetcher module: performs a single HTTP GET per page, with timeout and optional Basic auth.
"""
from __future__ import annotations

import asyncio
import base64

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from creepy.config import Credentials, RuleSet
from creepy.crawler.models import FetchError, PageData
from creepy.logger import logger

__all__ = ("Fetcher", "open_session")

_TEXT_MIME_PREFIXES = ("text/",)
_TEXT_MIME_TYPES = ("application/xhtml+xml", "application/xml")


def _basic_auth(creds: Credentials) -> str:
    token = base64.b64encode(f"{creds.user}:{creds.password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def open_session(config: RuleSet) -> ClientSession:
    """Create the session used for a whole crawl."""
    if config.accept_invalid_certs:
        logger.warning("TLS certificate verification is DISABLED (accept_invalid_certs=true)")
    headers = {"User-Agent": config.user_agent, "Accept": "text/html"}
    if config.credentials is not None:
        headers["Authorization"] = _basic_auth(config.credentials)
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers=headers,
        connector=TCPConnector(ssl=False if config.accept_invalid_certs else True),
        raise_for_status=False,
    )


class Fetcher:
    """Fetches one page per call. No retries: any failure is a FetchError."""

    def __init__(self, session: ClientSession, config: RuleSet) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its decoded body.

        Raises FetchError on connection errors, timeouts, non-text responses,
        bodies that cannot be decoded and requests aiohttp refuses to build
        (e.g. credentials in the URL on top of configured ones). HTTP error
        statuses are not failures; the page is returned with its status.
        """
        try:
            async with self.session.get(url) as resp:
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime and not (mime.startswith(_TEXT_MIME_PREFIXES) or mime in _TEXT_MIME_TYPES):
                    raise FetchError(url, f"non-text response ({mime})")
                try:
                    text = await resp.text()
                except (UnicodeDecodeError, LookupError) as exc:
                    raise FetchError(url, f"response text error: {exc}") from exc
                logger.debug("Fetched %s: %s (%d chars)", url, resp.status, len(text))
                return PageData(url, text, resp.status)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.config.timeout} s") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            raise FetchError(url, f"invalid request: {exc}") from exc
