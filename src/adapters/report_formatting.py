"""Shared result formatting helpers.

The CLI and the control panel print the same wording for trigger results.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping


def format_closed_label(count: int) -> str:
    """Return the "(N tabs closed)" label shown next to the restore action."""

    if count <= 0:
        return "(nothing to restore)"
    suffix = "s" if count > 1 else ""
    return f"({count} tab{suffix} closed)"


def _format_ids(ids: Iterable[int]) -> str:
    return ", ".join(str(tab_id) for tab_id in ids)


def format_result(result: Mapping[str, Any]) -> str:
    """Return a one-line summary for a router response or SweepResult dict."""

    action = result.get("action", "")
    if not result.get("success"):
        return f"Failed: {result.get('error') or 'unknown error'}"

    count = int(result.get("count") or 0)
    if action == "test_custom_rule":
        if not count:
            return "No matching tabs found for this rule."
        return f"Found {count} matching tabs. Tab IDs: {_format_ids(result.get('matched_ids', []))}"
    if action == "restore_last_closed":
        if not count:
            return "Nothing to restore."
        return f"Reopened {count} tab{'s' if count > 1 else ''}."
    if action in {"execute_default_rule", "execute_custom_rule"}:
        rule = result.get("rule_name") or "rule"
        if not count:
            return f"{rule}: no duplicates found."
        return f"{rule}: closed {count} tab{'s' if count > 1 else ''} ({_format_ids(result.get('closed_ids', []))})."
    if action == "get_closed_count":
        return format_closed_label(count)
    return "OK"


def format_batch_lines(tabs: Iterable[Mapping[str, Any]]) -> list[str]:
    """Return one display line per tab snapshot in the outstanding batch."""

    lines = []
    for snapshot in tabs:
        url = snapshot.get("url", "")
        title = snapshot.get("title") or url
        lines.append(f"{snapshot.get('id')}: {title} <{url}>")
    return lines
