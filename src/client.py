"""DevTools browser client factory for tabsweep."""

from __future__ import annotations

import logging

import settings
from adapters.cdp_browser import ChromeDevToolsBrowser
from adapters.sqlite_storage import SQLiteStorage


def build_browser(storage: SQLiteStorage) -> ChromeDevToolsBrowser:
    """Create the CDP browser adapter from settings.

    The browser must already run with ``--remote-debugging-port``; nothing is
    launched here.
    """

    base_url = f"http://{settings.CDP_HOST}:{settings.CDP_PORT}"
    logging.getLogger(__name__).info("Using DevTools endpoint %s", base_url)
    return ChromeDevToolsBrowser(base_url, registry=storage, timeout=settings.CDP_TIMEOUT)
