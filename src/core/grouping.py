"""Partition tabs into duplicate groups."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, List, TypeVar

from core.models import Tab
from core.rules_engine import CustomRule, DefaultRule, Rule, compile_rule_pattern
from core.urls import normalize_url

K = TypeVar("K", bound=Hashable)


def group_by(tabs: Iterable[Tab], key_fn: Callable[[Tab], K]) -> Dict[K, List[Tab]]:
    """Group tabs by ``key_fn``, keeping encounter order inside each group."""

    groups: Dict[K, List[Tab]] = {}
    for tab in tabs:
        groups.setdefault(key_fn(tab), []).append(tab)
    return groups


def base_url_key(tab: Tab) -> str:
    return normalize_url(tab.url)


def group_tabs(tabs: Iterable[Tab], rule: Rule) -> Dict[str, List[Tab]]:
    """Group already-eligible tabs according to ``rule``.

    The default rule yields one group per base URL. A custom rule yields at
    most one group, keyed by the rule name, holding every matching tab.
    Raises InvalidPatternError for a custom rule with a bad pattern.
    """

    if isinstance(rule, DefaultRule):
        return group_by(tabs, base_url_key)
    if isinstance(rule, CustomRule):
        pattern = compile_rule_pattern(rule.pattern)
        by_match = group_by(tabs, lambda tab: bool(pattern.search(tab.url)))
        matching = by_match.get(True)
        if not matching:
            return {}
        return {rule.name: matching}
    raise TypeError(f"Unsupported rule type: {type(rule).__name__}")
