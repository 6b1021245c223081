import pytest
from pydantic import ValidationError

from creepy.config import RuleSet
from creepy.crawler.link_extractor import compile_selector, extract_links, matches, parse_document

PAGE = """
<html><head><link rel="stylesheet" href="/style.css"></head>
<body>
  <a href="/a">A</a>
  <a name="anchor">no href</a>
  <a class="follow" href="/b">B</a>
  <a href="/a">A again</a>
  <div class="follow">not a link</div>
</body></html>
"""


def test_default_selector_takes_every_anchor_with_href_in_order():
    assert extract_links(parse_document(PAGE)) == ["/a", "/b", "/a"]


def test_custom_selector_skips_elements_without_href():
    assert extract_links(parse_document(PAGE), ".follow") == ["/b"]


def test_no_match_rule_is_always_a_hit():
    assert matches(parse_document(""), None)
    assert matches(parse_document(PAGE))


def test_match_rule_needs_one_element():
    doc = parse_document(PAGE)
    assert matches(doc, "a.follow")
    assert not matches(doc, "form")


def test_invalid_selector():
    with pytest.raises(ValueError):
        compile_selector("a[")
    with pytest.raises(ValidationError):
        RuleSet(match_selector="a[")
