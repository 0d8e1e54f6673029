from __future__ import annotations

import pytest

from core.errors import InvalidPatternError
from core.models import Tab
from core.rules_engine import CustomRule, build_rules, compile_rule_pattern, find_rule, match_tabs


def test_build_rules_skips_disabled_entries() -> None:
    rules = build_rules(
        [
            {"name": "GitHub", "pattern": r"github\.com"},
            {"name": "Off", "pattern": "x", "enabled": False},
        ]
    )
    assert rules == [CustomRule(name="GitHub", pattern=r"github\.com")]


def test_build_rules_rejects_bad_pattern() -> None:
    with pytest.raises(InvalidPatternError) as excinfo:
        build_rules([{"name": "bad", "pattern": "[invalid(regex"}])
    assert excinfo.value.pattern == "[invalid(regex"


def test_build_rules_requires_name() -> None:
    with pytest.raises(ValueError):
        build_rules([{"name": "  ", "pattern": "x"}])


def test_empty_pattern_is_invalid() -> None:
    with pytest.raises(InvalidPatternError):
        compile_rule_pattern("")


def test_match_tabs_searches_anywhere_in_url() -> None:
    tabs = [
        Tab(id=1, url="https://example.com/search?q=test"),
        Tab(id=2, url="https://example.com/search?q=another"),
        Tab(id=3, url="https://example.com/page"),
    ]
    assert [tab.id for tab in match_tabs(tabs, r"/search\?")] == [1, 2]


def test_find_rule_is_case_insensitive() -> None:
    rules = [CustomRule(name="GitHub", pattern="g")]
    assert find_rule(rules, "github").name == "GitHub"
    with pytest.raises(KeyError):
        find_rule(rules, "gitlab")
