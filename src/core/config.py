"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.classifier import INTERNAL_URL_PREFIXES


@dataclass(frozen=True)
class SweepConfig:
    """Settings for one sweeper instance."""

    internal_prefixes: tuple[str, ...] = INTERNAL_URL_PREFIXES
    window_scope: str = "current_window"
