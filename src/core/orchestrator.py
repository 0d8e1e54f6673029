"""Closing and restoring tabs through the browser and batch ports."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from core.errors import TabNotFoundError
from core.models import ClosedBatch, TabSnapshot
from core.ports import BatchStorePort, BrowserPort

LOGGER = logging.getLogger(__name__)


class ClosureOrchestrator:
    """Snapshot, persist, then delete; and the reverse for restore."""

    def __init__(self, browser: BrowserPort, batch_store: BatchStorePort) -> None:
        self._browser = browser
        self._batch_store = batch_store

    async def close_and_store(self, tab_ids: Iterable[int]) -> Optional[ClosedBatch]:
        """Close ``tab_ids`` after recording them as the current ClosedBatch.

        The batch is persisted before any deletion is requested so a failure
        in between never loses the ability to restore.
        """

        ids = list(tab_ids)
        if not ids:
            return None

        snapshots: list[TabSnapshot] = []
        for tab_id in ids:
            try:
                snapshots.append(await self._browser.get_tab(tab_id))
            except TabNotFoundError:
                LOGGER.debug("Tab %s vanished before snapshot, skipping", tab_id)

        batch = ClosedBatch(tabs=tuple(snapshots), count=len(ids))
        self._batch_store.persist_closed_batch(batch)

        missing = await self._browser.delete_tabs(ids)
        if missing:
            LOGGER.info("%s tab(s) were already closed: %s", len(missing), missing)
        LOGGER.info("Closed %s tab(s)", len(ids) - len(missing))
        return batch

    async def restore(self) -> int:
        """Reopen the last batch in stored order and clear it.

        A batch whose snapshots all vanished is cleared without reopening
        anything. When reopening fails partway, only the snapshots not yet
        reopened stay stored and the error propagates.
        """

        batch = self._batch_store.load_closed_batch()
        if batch is None:
            return 0
        if batch.is_empty:
            self._batch_store.clear_closed_batch()
            return 0

        reopened = 0
        try:
            for snapshot in batch.tabs:
                await self._browser.create_tab(snapshot.url)
                reopened += 1
        finally:
            remaining = batch.tabs[reopened:]
            if remaining:
                LOGGER.warning("Restore stopped after %s of %s tab(s)", reopened, len(batch.tabs))
                self._batch_store.persist_closed_batch(
                    ClosedBatch(tabs=remaining, count=len(remaining), created_at=batch.created_at)
                )
            else:
                self._batch_store.clear_closed_batch()

        LOGGER.info("Restored %s tab(s)", reopened)
        return reopened
