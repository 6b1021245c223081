import pytest

from creepy.crawler.models import MalformedLinkError, RelativeURLError
from creepy.crawler.resolver import is_http_url, parse_absolute, resolve, visit_key

BASE = "https://a.com/dir/page"


def test_root_relative_link_uses_base_origin():
    assert resolve(BASE, "/x") == "https://a.com/x"


def test_absolute_link_is_returned_unchanged():
    assert resolve(BASE, "https://b.com/path?q=1#frag") == "https://b.com/path?q=1#frag"


@pytest.mark.parametrize("href", ["#section", "#", "", "   "])
def test_fragment_and_empty_links_are_silently_ignored(href):
    assert resolve(BASE, href) is None


def test_garbage_link_is_reported():
    with pytest.raises(MalformedLinkError) as info:
        resolve(BASE, "not a url::::")
    assert info.value.href == "not a url::::"


def test_malformed_absolute_link_is_reported():
    with pytest.raises(MalformedLinkError):
        resolve(BASE, "http://")
    with pytest.raises(MalformedLinkError):
        resolve(BASE, "http://a.com:99999/")


def test_base_port_is_kept():
    assert resolve("http://localhost:8080/a/b", "/c") == "http://localhost:8080/c"


def test_query_only_link():
    assert resolve(BASE, "?page=2") == "https://a.com/?page=2"


def test_base_without_host_uses_placeholder():
    assert resolve("file:///tmp/index.html", "/y") == "file://EMPTY/y"


def test_credentials_in_base_are_not_copied():
    assert resolve("https://user:pw@a.com/", "/x") == "https://a.com/x"


def test_parse_absolute_normalizes_scheme_host_and_empty_path():
    assert parse_absolute("  HTTPS://Example.COM  ") == "https://example.com/"


def test_parse_absolute_rejects_relative_reference():
    with pytest.raises(RelativeURLError):
        parse_absolute("/just/a/path")


def test_opaque_schemes_pass_through():
    assert resolve(BASE, "mailto:someone@a.com") == "mailto:someone@a.com"
    assert not is_http_url("mailto:someone@a.com")
    assert is_http_url("https://a.com/")


def test_visit_key_ignores_fragment_only():
    assert visit_key("https://a.com/x#top") == visit_key("https://a.com/x")
    assert visit_key("https://a.com") == visit_key("https://a.com/")
    assert visit_key("https://a.com/x?p=1") != visit_key("https://a.com/x?p=2")
    assert visit_key("https://a.com/x") != visit_key("https://a.com/x/")
