"""Chrome DevTools Protocol browser adapter.

Implements the core BrowserPort over the DevTools HTTP endpoints exposed by a
browser started with ``--remote-debugging-port``. CDP target ids are opaque
strings, so integer tab ids come from the SQLite target registry. Window
membership comes from the browser WebSocket session.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx

from adapters.cdp_mapper import build_snapshot, build_tab, page_targets
from adapters.cdp_session import CdpSession
from adapters.sqlite_storage import SQLiteStorage
from core.errors import BrowserProtocolError, TabNotFoundError
from core.models import Tab, TabSnapshot

LOGGER = logging.getLogger(__name__)

SUPPORTED_SCOPES = {"current_window"}

SessionFactory = Callable[[str], Any]


class ChromeDevToolsBrowser:
    """BrowserPort backed by ``/json/*`` DevTools endpoints."""

    def __init__(
        self,
        base_url: str,
        registry: SQLiteStorage,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self._registry = registry
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._session_factory = session_factory or (lambda ws_url: CdpSession(ws_url, timeout))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _list_pages(self) -> tuple[list[dict[str, Any]], dict[str, int]]:
        response = await self._client.get("/json/list")
        response.raise_for_status()
        pages = page_targets(response.json())
        # The listing puts the newest targets first; register oldest first so
        # integer ids grow with creation order.
        ids = self._registry.register_targets(target["id"] for target in reversed(pages))
        return pages, ids

    async def _window_ids(self, target_ids: list[str]) -> dict[str, int]:
        """Map each target id to its browser window id.

        Targets that close while being looked up are left out.
        """

        response = await self._client.get("/json/version")
        response.raise_for_status()
        ws_url = response.json().get("webSocketDebuggerUrl")
        if not ws_url:
            raise BrowserProtocolError("DevTools did not advertise a browser WebSocket")

        windows: dict[str, int] = {}
        async with self._session_factory(ws_url) as session:
            for target_id in target_ids:
                try:
                    result = await session.send("Browser.getWindowForTarget", {"targetId": target_id})
                except BrowserProtocolError as exc:
                    LOGGER.debug("No window for target %s: %s", target_id, exc)
                    continue
                windows[target_id] = int(result["windowId"])
        return windows

    async def query_tabs(self, scope: str) -> list[Tab]:
        """Return the page targets in the window of the focused page."""

        if scope not in SUPPORTED_SCOPES:
            raise ValueError(f"Unsupported tab scope: {scope}")
        pages, ids = await self._list_pages()
        if not pages:
            return []
        windows = await self._window_ids([target["id"] for target in pages])
        current = next((windows[target["id"]] for target in pages if target["id"] in windows), None)
        return [
            build_tab(target, ids[target["id"]])
            for target in pages
            if current is not None and windows.get(target["id"]) == current
        ]

    async def query_focused_tab(self) -> Optional[int]:
        """Return the most recently activated page, listed first by DevTools."""

        pages, ids = await self._list_pages()
        if not pages:
            return None
        return ids[pages[0]["id"]]

    async def get_tab(self, tab_id: int) -> TabSnapshot:
        target_id = self._registry.lookup_target(tab_id)
        if target_id is None:
            raise TabNotFoundError(tab_id)
        pages, _ = await self._list_pages()
        for target in pages:
            if target["id"] == target_id:
                return build_snapshot(target, tab_id)
        raise TabNotFoundError(tab_id)

    async def delete_tabs(self, tab_ids: list[int]) -> list[int]:
        """Close each tab; ids the browser no longer knows are returned."""

        missing: list[int] = []
        for tab_id in tab_ids:
            target_id = self._registry.lookup_target(tab_id)
            if target_id is None:
                missing.append(tab_id)
                continue
            response = await self._client.get(f"/json/close/{target_id}")
            if response.status_code == 404:
                LOGGER.debug("Target %s already gone", target_id)
                missing.append(tab_id)
                continue
            response.raise_for_status()
        return missing

    async def create_tab(self, url: str) -> int:
        # Current Chrome only accepts PUT for /json/new.
        response = await self._client.put(f"/json/new?{quote(url, safe='')}")
        response.raise_for_status()
        target = response.json()
        ids = self._registry.register_targets([target["id"]])
        return ids[target["id"]]
