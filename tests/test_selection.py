from __future__ import annotations

import itertools
import random

from core.classifier import filter_eligible
from core.grouping import group_tabs
from core.models import Tab
from core.rules_engine import CustomRule, DefaultRule
from core.selection import find_tabs_to_close, select_to_close

SCENARIO_TABS = [
    Tab(id=1, url="https://example.com/page"),
    Tab(id=2, url="https://example.com/page"),
    Tab(id=3, url="https://github.com/user/repo"),
]


def test_small_groups_close_nothing() -> None:
    assert select_to_close([], 1) == set()
    assert select_to_close([Tab(id=5, url="https://example.com")], 999) == set()


def test_keeps_newest_when_focused_tab_not_in_group() -> None:
    group = [Tab(id=3, url="u"), Tab(id=1, url="u"), Tab(id=2, url="u")]
    assert select_to_close(group, 999) == {1, 2}


def test_keeps_focused_tab_even_if_not_newest() -> None:
    group = [Tab(id=1, url="u"), Tab(id=2, url="u"), Tab(id=3, url="u")]
    assert select_to_close(group, 2) == {1, 3}


def test_no_focused_tab_keeps_newest() -> None:
    group = [Tab(id=1, url="u"), Tab(id=2, url="u")]
    assert select_to_close(group, None) == {1}


def test_scenario_focused_tab_in_group() -> None:
    assert find_tabs_to_close(SCENARIO_TABS, 1, DefaultRule()) == [2]


def test_scenario_focused_tab_absent() -> None:
    assert find_tabs_to_close(SCENARIO_TABS, 999, DefaultRule()) == [1]


def test_scenario_custom_rule_keeps_focused_match() -> None:
    tabs = [
        Tab(id=1, url="https://github.com/a"),
        Tab(id=2, url="https://github.com/b"),
        Tab(id=3, url="https://other.example/"),
    ]
    assert find_tabs_to_close(tabs, 2, CustomRule(name="gh", pattern=r"github\.com")) == [1]


def test_custom_rule_keeps_newest_match_when_focused_tab_does_not_match() -> None:
    tabs = [
        Tab(id=1, url="https://github.com/user/repo1"),
        Tab(id=2, url="https://github.com/user/repo2"),
        Tab(id=3, url="https://example.com"),
    ]
    assert find_tabs_to_close(tabs, 3, CustomRule(name="gh", pattern=r"github\.com")) == [1]


def test_internal_pages_are_never_closed() -> None:
    tabs = [
        Tab(id=1, url="chrome://settings"),
        Tab(id=2, url="https://example.com"),
        Tab(id=3, url="https://example.com?id=1"),
        Tab(id=4, url="about:blank"),
        Tab(id=5, url="chrome://settings"),
    ]
    assert find_tabs_to_close(tabs, 999, DefaultRule()) == [2]
    assert find_tabs_to_close(tabs, 999, CustomRule(name="all", pattern=".")) == [2]


def test_multiple_groups_each_keep_one() -> None:
    tabs = [
        Tab(id=1, url="https://example.com/page1"),
        Tab(id=2, url="https://example.com/page1?id=1"),
        Tab(id=3, url="https://example.com/page2"),
        Tab(id=4, url="https://example.com/page2?id=1"),
    ]
    assert find_tabs_to_close(tabs, 999, DefaultRule()) == [1, 3]
    assert find_tabs_to_close(tabs, 1, DefaultRule()) == [2, 3]


def _random_tabs(rng: random.Random) -> list[Tab]:
    urls = [
        "https://example.com/page",
        "https://example.com/page?id=2",
        "https://example.com/other#x",
        "https://github.com/user/repo",
        "chrome://settings",
        "not a url",
    ]
    ids = rng.sample(range(1, 50), rng.randint(0, 8))
    return [Tab(id=tab_id, url=rng.choice(urls)) for tab_id in ids]


def test_properties_over_random_snapshots() -> None:
    rng = random.Random(1234)
    rules = [DefaultRule(), CustomRule(name="ex", pattern=r"example\.com")]
    for _, rule in itertools.product(range(200), rules):
        tabs = _random_tabs(rng)
        focused = rng.choice([tab.id for tab in tabs] + [999])
        to_close = find_tabs_to_close(tabs, focused, rule)

        assert focused not in to_close

        for group in group_tabs(filter_eligible(tabs), rule).values():
            members = {tab.id for tab in group}
            if focused not in members and len(group) > 1:
                assert select_to_close(group, focused) == members - {max(members)}

        survivors = [tab for tab in tabs if tab.id not in to_close]
        assert find_tabs_to_close(survivors, focused, rule) == []
