"""Validation helpers for rule editing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from core.errors import InvalidPatternError
from core.rules_engine import compile_rule_pattern


@dataclass
class RuleInput:
    name: str | None
    pattern: str | None
    error: str | None = None


def parse_rule_input(raw_name: str, raw_pattern: str) -> RuleInput:
    name = raw_name.strip()
    pattern = raw_pattern.strip()
    if not name or not pattern:
        return RuleInput(None, None, "Please fill in all fields")
    try:
        compile_rule_pattern(pattern)
    except InvalidPatternError as exc:
        return RuleInput(name, None, f"Invalid regex pattern: {exc.reason}")
    return RuleInput(name, pattern)


def is_runnable(rule: Mapping[str, Any]) -> bool:
    """Disabled rules stay listed for editing but are never run."""

    return bool(rule.get("enabled", True))
