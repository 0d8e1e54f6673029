"""Request/response message interface for presentation layers.

Frontends never touch the ClosedBatch or the rule set directly; they send a
dict with an ``action`` and receive a dict that always carries ``success``.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from core.ports import RuleStorePort
from core.processor import TabSweeper
from core.rules_engine import build_rules, rule_to_config

LOGGER = logging.getLogger(__name__)

Handler = Callable[[dict], Awaitable[dict]]


def _failure(action: str, error: str) -> dict:
    return {"success": False, "action": action, "error": error}


class MessageRouter:
    """Dispatch action messages to the sweeper and the rule store."""

    def __init__(self, sweeper: TabSweeper, rule_store: RuleStorePort) -> None:
        self._sweeper = sweeper
        self._rule_store = rule_store
        self._handlers: Dict[str, Handler] = {
            "execute_default_rule": self._execute_default_rule,
            "execute_custom_rule": self._execute_custom_rule,
            "test_custom_rule": self._test_custom_rule,
            "restore_last_closed": self._restore_last_closed,
            "get_closed_count": self._get_closed_count,
            "get_closed_batch": self._get_closed_batch,
            "list_rules": self._list_rules,
            "save_rule": self._save_rule,
            "delete_rule": self._delete_rule,
        }

    @property
    def actions(self) -> list[str]:
        return sorted(self._handlers)

    async def handle(self, request: dict[str, Any]) -> dict[str, Any]:
        """Handle one request; errors come back as failure responses."""

        action = str(request.get("action", ""))
        handler = self._handlers.get(action)
        if handler is None:
            return _failure(action, f"Unknown action: {action or '(missing)'}")
        try:
            return await handler(request)
        except Exception as exc:
            LOGGER.exception("Error while handling %s", action)
            return _failure(action, str(exc) or type(exc).__name__)

    async def _execute_default_rule(self, request: dict) -> dict:
        result = await self._sweeper.execute_default_rule()
        return result.to_dict()

    async def _execute_custom_rule(self, request: dict) -> dict:
        result = await self._sweeper.execute_custom_rule(
            str(request.get("name", "")),
            str(request.get("pattern", "")),
        )
        return result.to_dict()

    async def _test_custom_rule(self, request: dict) -> dict:
        result = await self._sweeper.test_custom_rule(str(request.get("pattern", "")))
        return result.to_dict()

    async def _restore_last_closed(self, request: dict) -> dict:
        result = await self._sweeper.restore_last_batch()
        return result.to_dict()

    async def _get_closed_count(self, request: dict) -> dict:
        return {"success": True, "action": "get_closed_count", "count": self._sweeper.closed_count()}

    async def _get_closed_batch(self, request: dict) -> dict:
        batch = self._sweeper.last_batch()
        tabs = [] if batch is None else [
            {"id": snapshot.id, "url": snapshot.url, "title": snapshot.title} for snapshot in batch.tabs
        ]
        return {
            "success": True,
            "action": "get_closed_batch",
            "count": batch.count if batch else 0,
            "tabs": tabs,
        }

    async def _list_rules(self, request: dict) -> dict:
        rules = [
            {
                "name": str(entry.get("name", "")),
                "pattern": str(entry.get("pattern", "")),
                "enabled": bool(entry.get("enabled", True)),
            }
            for entry in self._rule_store.load_rules()
        ]
        return {"success": True, "action": "list_rules", "rules": rules}

    async def _save_rule(self, request: dict) -> dict:
        action = "save_rule"
        entry = {
            "name": str(request.get("name", "")).strip(),
            "pattern": str(request.get("pattern", "")).strip(),
        }
        try:
            (rule,) = build_rules([entry])
        except ValueError as exc:
            return _failure(action, str(exc))

        original = str(request.get("original_name") or rule.name).lower()
        rules = self._rule_store.load_rules()
        if original != rule.name.lower() and any(
            str(existing.get("name", "")).lower() == rule.name.lower() for existing in rules
        ):
            return _failure(action, f"A rule named {rule.name!r} already exists")
        replaced = False
        updated: list[dict] = []
        for existing in rules:
            if str(existing.get("name", "")).lower() == original and not replaced:
                merged = dict(existing)
                merged.update(rule_to_config(rule))
                updated.append(merged)
                replaced = True
            else:
                updated.append(existing)
        if not replaced:
            updated.append(rule_to_config(rule))

        self._rule_store.persist_rules(updated)
        LOGGER.info("Rule saved: %s", rule.name)
        return {"success": True, "action": action, "rule": rule_to_config(rule)}

    async def _delete_rule(self, request: dict) -> dict:
        action = "delete_rule"
        name = str(request.get("name", "")).strip().lower()
        rules = self._rule_store.load_rules()
        remaining = [rule for rule in rules if str(rule.get("name", "")).lower() != name]
        if len(remaining) == len(rules):
            return _failure(action, f"No rule named {request.get('name')!r}")
        self._rule_store.persist_rules(remaining)
        return {"success": True, "action": action}
