"""
Admission control: which URLs the crawler is allowed to visit.
"""
from __future__ import annotations

from re import Pattern
from typing import Iterable, List

from creepy.config import RuleSet

__all__ = ("admit", "rejected_seeds")


def _any_match(patterns: Iterable[Pattern[str]], url: str) -> bool:
    return any(p.search(url) for p in patterns)


def admit(url: str, rules: RuleSet) -> bool:
    """
    Return True if *url* may be crawled under *rules*.

    Override-deny patterns reject unconditionally. Deny patterns reject
    unless an allow pattern matches too. Everything else is admitted.
    """
    if _any_match(rules.override_deny, url):
        return False
    if _any_match(rules.deny, url):
        return _any_match(rules.allow, url)
    return True


def rejected_seeds(rules: RuleSet) -> List[str]:
    """Seeds that the rule set itself would refuse to crawl."""
    return [str(seed) for seed in rules.seeds if not admit(str(seed), rules)]
