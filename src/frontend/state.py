"""State container for the control panel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PanelState:
    rules: list[dict[str, Any]] = field(default_factory=list)
    closed_count: int = 0
    error: str | None = None
