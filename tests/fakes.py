from __future__ import annotations

from typing import Optional

from core.errors import TabNotFoundError
from core.models import ClosedBatch, Tab, TabSnapshot


class FakeBrowser:
    def __init__(self, tabs: list[Tab], focused_id: Optional[int] = None, events: Optional[list] = None) -> None:
        self.tabs = list(tabs)
        self.focused_id = focused_id
        self.events = events if events is not None else []
        self.created: list[str] = []
        self.vanished: set[int] = set()

    async def query_tabs(self, scope: str) -> list[Tab]:
        self.events.append(("query_tabs", scope))
        return list(self.tabs)

    async def query_focused_tab(self) -> Optional[int]:
        return self.focused_id

    async def get_tab(self, tab_id: int) -> TabSnapshot:
        self.events.append(("get_tab", tab_id))
        for tab in self.tabs:
            if tab.id == tab_id and tab_id not in self.vanished:
                return TabSnapshot(id=tab.id, url=tab.url, title=tab.title)
        raise TabNotFoundError(tab_id)

    async def delete_tabs(self, tab_ids: list[int]) -> list[int]:
        self.events.append(("delete_tabs", list(tab_ids)))
        present = {tab.id for tab in self.tabs} - self.vanished
        missing = [tab_id for tab_id in tab_ids if tab_id not in present]
        self.tabs = [tab for tab in self.tabs if tab.id not in tab_ids]
        return missing

    async def create_tab(self, url: str) -> int:
        self.events.append(("create_tab", url))
        new_id = max((tab.id for tab in self.tabs), default=0) + 1
        self.tabs.append(Tab(id=new_id, url=url))
        self.created.append(url)
        return new_id


class FakeBatchStore:
    def __init__(self, events: Optional[list] = None) -> None:
        self.batch: Optional[ClosedBatch] = None
        self.events = events if events is not None else []

    def persist_closed_batch(self, batch: ClosedBatch) -> None:
        self.events.append(("persist", [tab.id for tab in batch.tabs]))
        self.batch = batch

    def load_closed_batch(self) -> Optional[ClosedBatch]:
        return self.batch

    def clear_closed_batch(self) -> None:
        self.events.append(("clear",))
        self.batch = None


class FakeRuleStore:
    def __init__(self, rules: Optional[list[dict]] = None) -> None:
        self.rules = [dict(rule) for rule in rules or []]
        self.writes = 0

    def load_rules(self) -> list[dict]:
        return [dict(rule) for rule in self.rules]

    def persist_rules(self, rules: list[dict]) -> None:
        self.writes += 1
        self.rules = [dict(rule) for rule in rules]
