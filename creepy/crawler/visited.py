"""
Visited-URL bookkeeping for a single crawl.
"""
from __future__ import annotations

from typing import Set

from creepy.crawler.resolver import visit_key


class VisitedSet:
    """
    URLs already taken off the frontier, keyed by :func:`visit_key`.

    Only grows. :meth:`add` is a test-and-set with no await point, so it is
    atomic for all workers sharing one event loop.
    """

    def __init__(self) -> None:
        self._keys: Set[str] = set()

    def add(self, url: str) -> bool:
        """Mark *url* visited. Returns False if it already was."""
        key = visit_key(url)
        if key in self._keys:
            return False
        self._keys.add(key)
        return True

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and visit_key(url) in self._keys

    def __len__(self) -> int:
        return len(self._keys)
