"""Rule types, compilation and dry-run matching (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, List, Union

from core.errors import InvalidPatternError
from core.models import Tab


@dataclass(frozen=True)
class DefaultRule:
    """Group tabs by base URL (query string and fragment ignored)."""

    name: str = "Ignore URL parameters"


@dataclass(frozen=True)
class CustomRule:
    """Treat every tab whose URL matches ``pattern`` as one duplicate group."""

    name: str
    pattern: str


Rule = Union[DefaultRule, CustomRule]


def compile_rule_pattern(pattern: str) -> re.Pattern:
    """Compile a user-supplied pattern or raise InvalidPatternError."""

    if not pattern:
        raise InvalidPatternError(pattern, "pattern is empty")
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc


def build_rules(rules_config: Iterable[dict]) -> List[CustomRule]:
    """Normalize rule configs into CustomRule values.

    Each entry needs a ``name`` and a ``pattern``. Entries with
    ``enabled: false`` are skipped. Patterns are compiled once here so a bad
    pattern in the config fails fast with InvalidPatternError.
    """

    compiled: List[CustomRule] = []
    for rule in rules_config:
        if not rule.get("enabled", True):
            continue
        name = str(rule.get("name", "")).strip()
        if not name:
            raise ValueError("Rule is missing a name")
        pattern = str(rule.get("pattern", ""))
        compile_rule_pattern(pattern)
        compiled.append(CustomRule(name=name, pattern=pattern))
    return compiled


def find_rule(rules: Iterable[CustomRule], name: str) -> CustomRule:
    """Return the rule with the given name (case-insensitive)."""

    wanted = name.strip().lower()
    for rule in rules:
        if rule.name.lower() == wanted:
            return rule
    raise KeyError(f"No rule named {name!r}")


def match_tabs(tabs: Iterable[Tab], pattern: str) -> List[Tab]:
    """Return tabs whose URL matches ``pattern`` anywhere, in input order."""

    compiled = compile_rule_pattern(pattern)
    return [tab for tab in tabs if compiled.search(tab.url)]


def rule_to_config(rule: CustomRule) -> dict:
    """Serialize a rule to the shape stored in config.json."""

    return {"name": rule.name, "pattern": rule.pattern}
