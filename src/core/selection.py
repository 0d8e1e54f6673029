"""Decide which tabs of a duplicate group to close."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from core.classifier import INTERNAL_URL_PREFIXES, filter_eligible
from core.grouping import group_tabs
from core.models import Tab
from core.rules_engine import Rule


def select_to_close(group: Sequence[Tab], focused_tab_id: Optional[int]) -> Set[int]:
    """Return the ids to close in one group.

    Keeps the focused tab when it belongs to the group, otherwise keeps the
    newest tab (highest id). Groups of one or zero tabs close nothing.
    """

    if len(group) <= 1:
        return set()

    ordered = sorted(group, key=lambda tab: tab.id)
    if any(tab.id == focused_tab_id for tab in ordered):
        keep_id = focused_tab_id
    else:
        keep_id = ordered[-1].id

    return {tab.id for tab in ordered if tab.id != keep_id}


def find_tabs_to_close(
    tabs: Iterable[Tab],
    focused_tab_id: Optional[int],
    rule: Rule,
    prefixes: Iterable[str] = INTERNAL_URL_PREFIXES,
) -> List[int]:
    """Run classification, grouping and selection over a tab snapshot."""

    eligible = filter_eligible(tabs, prefixes)
    to_close: Set[int] = set()
    for group in group_tabs(eligible, rule).values():
        to_close.update(select_to_close(group, focused_tab_id))
    return sorted(to_close)
