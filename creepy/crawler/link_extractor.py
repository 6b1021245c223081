"""
Link extraction and page matching utilities for creepy.
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("DEFAULT_LINK_SELECTOR", "compile_selector", "parse_document", "extract_links", "matches")

DEFAULT_LINK_SELECTOR = "a[href]"


@lru_cache(maxsize=64)
def compile_selector(selector: str) -> soupsieve.SoupSieve:
    """Compile a CSS selector, raising ValueError if it is not valid."""
    try:
        return soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"invalid CSS selector {selector!r}: {exc}") from exc


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_links(document: BeautifulSoup, selector: Optional[str] = None) -> List[str]:
    """
    Return the raw href values of elements matched by *selector*.

    Document order is kept and duplicates are not removed. Matched elements
    without an href are skipped.
    """
    links: List[str] = []
    for tag in compile_selector(selector or DEFAULT_LINK_SELECTOR).select(document):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            links.append(href)
    return links


def matches(document: BeautifulSoup, selector: Optional[str] = None) -> bool:
    """A page is a hit when no selector is set or at least one element matches it."""
    if selector is None:
        return True
    return compile_selector(selector).select_one(document) is not None
