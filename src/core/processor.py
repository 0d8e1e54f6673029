"""Trigger entry points for tabsweep.

This module is host-agnostic. It only relies on ports for the browser and
storage, enabling other frontends or adapters without changes here.

Each trigger follows a strict order:
1) Validate the rule (custom rules only), before any port call
2) Read one snapshot of tabs plus the focused tab id
3) Compute the close-list with the pure engine
4) Snapshot, persist and delete through the ClosureOrchestrator
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.classifier import filter_eligible
from core.config import SweepConfig
from core.errors import InvalidPatternError
from core.models import ClosedBatch, SweepResult
from core.orchestrator import ClosureOrchestrator
from core.ports import BatchStorePort, BrowserPort
from core.rules_engine import CustomRule, DefaultRule, Rule, compile_rule_pattern, match_tabs
from core.selection import find_tabs_to_close

LOGGER = logging.getLogger(__name__)


class TabSweeper:
    """Orchestrates snapshot, selection, closing and restore."""

    def __init__(
        self,
        browser: BrowserPort,
        batch_store: BatchStorePort,
        config: Optional[SweepConfig] = None,
    ) -> None:
        self._browser = browser
        self._batch_store = batch_store
        self._config = config or SweepConfig()
        self._orchestrator = ClosureOrchestrator(browser, batch_store)
        # Triggers in one process run one at a time; the batch is single-slot.
        self._lock = asyncio.Lock()

    async def execute_default_rule(self) -> SweepResult:
        """Close tabs that share a base URL."""

        return await self._execute(DefaultRule(), action="execute_default_rule")

    async def execute_custom_rule(self, name: str, pattern: str) -> SweepResult:
        """Close all but one tab among those matching ``pattern``."""

        action = "execute_custom_rule"
        try:
            compile_rule_pattern(pattern)
        except InvalidPatternError as exc:
            LOGGER.warning("Rule %s rejected: %s", name, exc.reason)
            return SweepResult(success=False, action=action, error=str(exc), rule_name=name)
        return await self._execute(CustomRule(name=name, pattern=pattern), action=action)

    async def test_custom_rule(self, pattern: str) -> SweepResult:
        """Dry run: report which tabs ``pattern`` matches without closing any."""

        action = "test_custom_rule"
        try:
            compile_rule_pattern(pattern)
        except InvalidPatternError as exc:
            return SweepResult(success=False, action=action, error=str(exc))

        tabs = await self._browser.query_tabs(self._config.window_scope)
        eligible = filter_eligible(tabs, self._config.internal_prefixes)
        matched = [tab.id for tab in match_tabs(eligible, pattern)]
        return SweepResult(success=True, action=action, matched_ids=matched, count=len(matched))

    async def restore_last_batch(self) -> SweepResult:
        """Reopen the tabs closed by the previous trigger."""

        async with self._lock:
            restored = await self._orchestrator.restore()
        return SweepResult(success=True, action="restore_last_closed", count=restored)

    def last_batch(self) -> Optional[ClosedBatch]:
        """Return the outstanding ClosedBatch without consuming it."""

        return self._batch_store.load_closed_batch()

    def closed_count(self) -> int:
        """Number of tabs in the outstanding ClosedBatch (0 when none)."""

        batch = self.last_batch()
        return batch.count if batch else 0

    async def _execute(self, rule: Rule, action: str) -> SweepResult:
        async with self._lock:
            tabs = await self._browser.query_tabs(self._config.window_scope)
            focused_id = await self._browser.query_focused_tab()
            to_close = find_tabs_to_close(tabs, focused_id, rule, self._config.internal_prefixes)
            if not to_close:
                LOGGER.info("No duplicates for %s", rule.name)
                return SweepResult(success=True, action=action, rule_name=rule.name)

            await self._orchestrator.close_and_store(to_close)
        LOGGER.info("Rule %s closed %s tab(s)", rule.name, len(to_close))
        return SweepResult(
            success=True,
            action=action,
            closed_ids=to_close,
            count=len(to_close),
            rule_name=rule.name,
        )
