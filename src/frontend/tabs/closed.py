"""Closed tab: the last batch of closed tabs and the restore action."""

from __future__ import annotations

from typing import Any

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from adapters.report_formatting import format_closed_label, format_result


class ClosedTab(Container):
    """Shows the outstanding ClosedBatch and reopens it on request."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._table_ready = False

    def compose(self):
        with Vertical(id="closed-panel"):
            yield Static("", id="closed-count")
            yield DataTable(id="closed-table", cursor_type="row")
            with Horizontal(id="closed-actions"):
                yield Button("Reopen closed tabs", id="restore-btn", variant="success")
                yield Button("Refresh", id="closed-refresh")
            yield Static("", id="closed-output")

    async def on_mount(self) -> None:
        table = self.query_one("#closed-table", DataTable)
        table.add_column("id", key="id", width=8)
        table.add_column("title", key="title", width=36)
        table.add_column("url", key="url", width=48)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self.query_one("#closed-actions").styles.height = 3
        self._table_ready = True
        await self.reload_batch()

    async def reload_batch(self) -> None:
        if not self._table_ready:
            return
        response = await self.app.call_router({"action": "get_closed_batch"})
        table = self.query_one("#closed-table", DataTable)
        table.clear()
        if not response.get("success"):
            self._set_output(format_result(response))
            return
        count = int(response.get("count") or 0)
        self.app.panel_state.closed_count = count
        self.query_one("#closed-count", Static).update(format_closed_label(count))
        for position, snapshot in enumerate(response.get("tabs", [])):
            table.add_row(
                str(snapshot.get("id", "")),
                self._clip_text(snapshot.get("title") or ""),
                self._clip_text(snapshot.get("url") or ""),
                key=str(position),
            )
        self.query_one("#restore-btn", Button).disabled = count == 0

    @on(Button.Pressed, "#restore-btn")
    async def _on_restore(self) -> None:
        response = await self.app.call_router({"action": "restore_last_closed"})
        self._set_output(format_result(response))
        await self.app.refresh_closed()

    @on(Button.Pressed, "#closed-refresh")
    async def _on_refresh(self) -> None:
        await self.app.refresh_closed()

    def _set_output(self, message: str) -> None:
        self.query_one("#closed-output", Static).update(message)

    @staticmethod
    def _clip_text(value: str, limit: int = 48) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."
