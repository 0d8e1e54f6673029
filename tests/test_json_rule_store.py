from __future__ import annotations

import json

import pytest

from adapters.json_rule_store import JsonRuleStore


def test_missing_file_has_no_rules(tmp_path) -> None:
    assert JsonRuleStore(tmp_path / "config.json").load_rules() == []


def test_persist_keeps_other_sections(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cdp": {"port": 9222}, "rules": []}), encoding="utf-8")
    store = JsonRuleStore(path)

    store.persist_rules([{"name": "GitHub", "pattern": r"github\.com"}])

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["cdp"] == {"port": 9222}
    assert store.load_rules() == [{"name": "GitHub", "pattern": r"github\.com"}]


def test_non_dict_entries_are_ignored(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"rules": [{"name": "a", "pattern": "b"}, "junk"]}), encoding="utf-8")

    assert JsonRuleStore(path).load_rules() == [{"name": "a", "pattern": "b"}]


def test_rules_must_be_a_list(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"rules": {"name": "a"}}), encoding="utf-8")

    with pytest.raises(ValueError):
        JsonRuleStore(path).load_rules()
