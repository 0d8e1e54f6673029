"""Tab eligibility: browser-internal pages are never touched."""

from __future__ import annotations

from typing import Iterable, List

from core.models import Tab

# Settings pages, blank/internal pages, extension pages and Edge internals.
INTERNAL_URL_PREFIXES: tuple[str, ...] = (
    "chrome://",
    "about:",
    "chrome-extension://",
    "edge://",
)


def is_eligible(tab: Tab, prefixes: Iterable[str] = INTERNAL_URL_PREFIXES) -> bool:
    """Return True when the tab may take part in duplicate detection."""

    return not tab.url.startswith(tuple(prefixes))


def filter_eligible(tabs: Iterable[Tab], prefixes: Iterable[str] = INTERNAL_URL_PREFIXES) -> List[Tab]:
    """Drop internal tabs, keeping the relative order of the rest."""

    prefix_tuple = tuple(prefixes)
    return [tab for tab in tabs if is_eligible(tab, prefix_tuple)]
