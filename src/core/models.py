"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any browser-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Tab:
    """One open tab as reported by the host.

    Ids are unique and increase with creation order, so a higher id always
    means a more recently created tab.
    """

    id: int
    url: str
    title: str = ""


@dataclass(frozen=True)
class TabSnapshot:
    """Tab metadata captured right before the tab is closed."""

    id: int
    url: str
    title: str = ""


@dataclass(frozen=True)
class ClosedBatch:
    """The most recent set of tabs closed by a single trigger."""

    tabs: tuple[TabSnapshot, ...]
    count: int
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.tabs


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one trigger, reported back to the invoking surface."""

    success: bool
    action: str
    closed_ids: list[int] = field(default_factory=list)
    matched_ids: list[int] = field(default_factory=list)
    count: int = 0
    error: Optional[str] = None
    rule_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "action": self.action,
            "closed_ids": list(self.closed_ids),
            "matched_ids": list(self.matched_ids),
            "count": self.count,
            "error": self.error,
            "rule_name": self.rule_name,
        }
