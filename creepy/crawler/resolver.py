"""
URL resolution for links found on crawled pages.

Links are either absolute (returned in a normalized form) or relative
references that are grafted onto the origin of the page they were found on.
Same-page fragments are ignored; anything else that cannot be parsed is
reported to the caller as :class:`MalformedLinkError`.
"""
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

from creepy.crawler.models import MalformedLinkError, RelativeURLError

__all__ = ("parse_absolute", "resolve", "visit_key", "is_http_url", "EMPTY_HOST")

#: placeholder host used when the base URL has none
EMPTY_HOST = "EMPTY"

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_HOST_RE = re.compile(r"^(\[[0-9A-Fa-f:.]+\]|[^\s/?#@\[\]\\<>^|%\"`{}]+)$")
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})

_PATH_SAFE = "/:@!$&'()*+,;=%~"
_QUERY_SAFE = _PATH_SAFE + "?"


def _split_netloc(netloc: str) -> tuple[str, str]:
    userinfo, at, hostport = netloc.rpartition("@")
    return (userinfo + at), hostport


def parse_absolute(text: str) -> str:
    """
    Parse *text* as an absolute URL and return its normalized serialization.

    Scheme and host are lower-cased and an empty path on hierarchical schemes
    becomes ``/``. Raises :class:`RelativeURLError` when *text* carries no
    scheme and :class:`MalformedLinkError` for any other parse failure.
    """
    raw = text.strip()
    scheme, sep, _ = raw.partition(":")
    if not sep or not _SCHEME_RE.match(scheme):
        raise RelativeURLError(text, "relative URL without a base")
    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise MalformedLinkError(text, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in _HOST_SCHEMES:
        # mailto:, javascript:, data: and friends are opaque
        return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))

    userinfo, hostport = _split_netloc(parts.netloc)
    host = parts.hostname
    if not host:
        raise MalformedLinkError(text, "empty host")
    try:
        parts.port
    except ValueError as exc:
        raise MalformedLinkError(text, "invalid port number") from exc
    host_text = hostport.rsplit(":", 1)[0] if not hostport.endswith("]") else hostport
    if not _HOST_RE.match(host_text):
        raise MalformedLinkError(text, "invalid domain character")

    netloc = userinfo + hostport.lower()
    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    query = quote(parts.query, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, parts.fragment))


def resolve(base: str, href: str) -> Optional[str]:
    """
    Turn *href* found on the page at *base* into an absolute URL.

    Returns ``None`` for same-page fragments and empty hrefs. Relative
    references are appended to ``scheme://host[:port]`` of *base* verbatim.
    """
    try:
        return parse_absolute(href)
    except RelativeURLError:
        pass

    stripped = href.strip()
    if not stripped or stripped.startswith("#"):
        return None

    origin = urlsplit(base)
    _, hostport = _split_netloc(origin.netloc)
    try:
        return parse_absolute(f"{origin.scheme}://{hostport or EMPTY_HOST}{stripped}")
    except MalformedLinkError as exc:
        raise MalformedLinkError(href, exc.reason) from exc


def visit_key(url: str) -> str:
    """Identity of *url* in the visited set: scheme, host, path and query."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, ""))


def is_http_url(url: str) -> bool:
    return urlsplit(url).scheme in ("http", "https")
