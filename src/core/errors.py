"""Exceptions raised by the core and its adapters."""

from __future__ import annotations


class TabSweepError(Exception):
    """Base class for tabsweep errors."""


class InvalidPatternError(TabSweepError, ValueError):
    """A custom rule pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid regex pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class TabNotFoundError(TabSweepError, LookupError):
    """The host no longer knows the requested tab id."""

    def __init__(self, tab_id: int) -> None:
        super().__init__(f"Tab not found: {tab_id}")
        self.tab_id = tab_id


class BrowserProtocolError(TabSweepError):
    """The browser DevTools endpoint failed or answered with an error."""
