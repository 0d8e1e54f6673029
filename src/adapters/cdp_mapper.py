"""CDP-to-core mapping adapter.

This keeps DevTools JSON details out of the core.
"""

from __future__ import annotations

from typing import Any, Iterable, List

from core.models import Tab, TabSnapshot


def is_tab_target(target: dict[str, Any]) -> bool:
    """Only page targets are tabs; workers, iframes and extensions are not."""

    return target.get("type") == "page" and bool(target.get("id"))


def page_targets(targets: Iterable[dict[str, Any]]) -> List[dict[str, Any]]:
    return [target for target in targets if is_tab_target(target)]


def build_tab(target: dict[str, Any], tab_id: int) -> Tab:
    return Tab(id=tab_id, url=str(target.get("url", "")), title=str(target.get("title", "")))


def build_snapshot(target: dict[str, Any], tab_id: int) -> TabSnapshot:
    return TabSnapshot(id=tab_id, url=str(target.get("url", "")), title=str(target.get("title", "")))
