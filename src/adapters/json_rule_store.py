"""JSON config-file rule store.

Implements the core RuleStorePort on top of the ``rules`` section of
config.json, so rules stay next to the rest of the settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

LOGGER = logging.getLogger(__name__)


class JsonRuleStore:
    """Read and write ``config["rules"]`` without touching other sections."""

    def __init__(self, config_path: Path | str) -> None:
        self._config_path = Path(config_path)

    def _read_config(self) -> dict[str, Any]:
        if not self._config_path.exists():
            return {}
        loaded = json.loads(self._config_path.read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError("config root must be an object")
        return loaded

    def load_rules(self) -> list[dict]:
        rules = self._read_config().get("rules", [])
        if not isinstance(rules, list):
            raise ValueError("config.rules must be a list")
        return [dict(rule) for rule in rules if isinstance(rule, dict)]

    def persist_rules(self, rules: list[dict]) -> None:
        config = self._read_config()
        config["rules"] = rules
        self._config_path.write_text(
            json.dumps(config, indent=2, ensure_ascii=True) + "\n",
            encoding="utf-8",
        )
        LOGGER.debug("Persisted %s rule(s) to %s", len(rules), self._config_path)
