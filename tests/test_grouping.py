from __future__ import annotations

import pytest

from core.errors import InvalidPatternError
from core.grouping import base_url_key, group_by, group_tabs
from core.models import Tab
from core.rules_engine import CustomRule, DefaultRule


def test_groups_tabs_with_same_base_url() -> None:
    tabs = [
        Tab(id=1, url="https://example.com/page?id=1"),
        Tab(id=2, url="https://example.com/page?id=2"),
        Tab(id=3, url="https://example.com/other"),
    ]
    groups = group_by(tabs, base_url_key)
    assert len(groups) == 2
    assert [tab.id for tab in groups["https://example.com/page"]] == [1, 2]
    assert [tab.id for tab in groups["https://example.com/other"]] == [3]


def test_empty_input_gives_no_groups() -> None:
    assert group_by([], base_url_key) == {}


def test_encounter_order_is_kept() -> None:
    tabs = [Tab(id=9, url="https://a.example/"), Tab(id=2, url="https://a.example/")]
    assert [tab.id for tab in group_by(tabs, base_url_key)["https://a.example/"]] == [9, 2]


def test_default_rule_groups_by_base_url() -> None:
    tabs = [
        Tab(id=1, url="https://github.com/user/repo"),
        Tab(id=2, url="https://github.com/other/repo"),
        Tab(id=3, url="https://stackoverflow.com/questions/123"),
    ]
    assert len(group_tabs(tabs, DefaultRule())) == 3


def test_custom_rule_forms_a_single_group() -> None:
    tabs = [
        Tab(id=1, url="https://github.com/user/repo"),
        Tab(id=2, url="https://github.com/other/repo"),
        Tab(id=3, url="https://stackoverflow.com/questions/123"),
    ]
    groups = group_tabs(tabs, CustomRule(name="GitHub", pattern=r"github\.com"))
    assert list(groups) == ["GitHub"]
    assert [tab.id for tab in groups["GitHub"]] == [1, 2]


def test_custom_rule_without_matches_has_no_group() -> None:
    tabs = [Tab(id=1, url="https://example.com")]
    assert group_tabs(tabs, CustomRule(name="none", pattern=r"github\.com")) == {}


def test_custom_rule_with_bad_pattern_raises() -> None:
    with pytest.raises(InvalidPatternError):
        group_tabs([Tab(id=1, url="https://example.com")], CustomRule(name="bad", pattern="[invalid(regex"))


def test_unknown_rule_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        group_tabs([], object())  # type: ignore[arg-type]
