"""Browser-level DevTools WebSocket session.

The ``/json`` HTTP endpoints cannot tell which window a page lives in; the
``Browser`` domain can, but only over the browser WebSocket advertised by
``/json/version``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import websockets
from websockets.exceptions import WebSocketException

from core.errors import BrowserProtocolError

LOGGER = logging.getLogger(__name__)


class CdpSession:
    """Minimal request/response client for one DevTools WebSocket."""

    def __init__(self, ws_url: str, timeout: float = 5.0) -> None:
        self._ws_url = ws_url
        self._timeout = timeout
        self._conn: Any = None
        self._next_id = 0

    async def __aenter__(self) -> "CdpSession":
        try:
            self._conn = await websockets.connect(
                self._ws_url,
                open_timeout=self._timeout,
                max_size=None,
            )
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            raise BrowserProtocolError(f"Cannot open DevTools session: {exc}") from exc
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def send(self, method: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """Call ``method`` and return its ``result``; events are skipped."""

        self._next_id += 1
        message_id = self._next_id
        payload = {"id": message_id, "method": method, "params": params or {}}
        try:
            await self._conn.send(json.dumps(payload))
            while True:
                raw = await asyncio.wait_for(self._conn.recv(), self._timeout)
                message = json.loads(raw)
                if message.get("id") == message_id:
                    break
        except (asyncio.TimeoutError, WebSocketException) as exc:
            raise BrowserProtocolError(f"{method} failed: {exc}") from exc

        if "error" in message:
            error = message["error"]
            raise BrowserProtocolError(f"{method} failed: {error.get('message', error)}")
        return message.get("result", {})
