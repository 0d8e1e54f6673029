"""Ports (interfaces) used by the core.

Ports define the minimal contracts for browser, rule storage and batch
storage adapters so the core can be reused with different hosts.
"""

from __future__ import annotations

from typing import Optional, Protocol

from core.models import ClosedBatch, Tab, TabSnapshot


class BrowserPort(Protocol):
    """Tab operations provided by the host browser."""

    async def query_tabs(self, scope: str) -> list[Tab]:
        ...

    async def query_focused_tab(self) -> Optional[int]:
        ...

    async def get_tab(self, tab_id: int) -> TabSnapshot:
        """Raise TabNotFoundError when the tab no longer exists."""
        ...

    async def delete_tabs(self, tab_ids: list[int]) -> list[int]:
        """Close tabs and return the ids that were already gone."""
        ...

    async def create_tab(self, url: str) -> int:
        ...


class RuleStorePort(Protocol):
    """Persistence for user-defined rules."""

    def load_rules(self) -> list[dict]:
        ...

    def persist_rules(self, rules: list[dict]) -> None:
        ...


class BatchStorePort(Protocol):
    """Local persistence for the single outstanding ClosedBatch."""

    def persist_closed_batch(self, batch: ClosedBatch) -> None:
        ...

    def load_closed_batch(self) -> Optional[ClosedBatch]:
        ...

    def clear_closed_batch(self) -> None:
        ...
