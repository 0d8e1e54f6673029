"""Main Textual app for the tabsweep control panel."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from core.messages import MessageRouter
from .constants import SWEEP_GREEN
from .state import PanelState
from .tabs.closed import ClosedTab
from .tabs.rules import RulesTab


class ControlPanelApp(App):
    """Control panel that talks to the core only through the message router."""

    BINDINGS = [
        ("d", "run_default", "Close duplicates"),
        ("r", "restore", "Reopen closed"),
        ("q", "quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def __init__(
        self,
        router: MessageRouter,
        on_shutdown: Optional[Callable[[], Awaitable[None]]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.router = router
        self.panel_state = PanelState()
        self._on_shutdown = on_shutdown

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static("close duplicate tabs", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("", id="header-status")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Rules", id="rules"),
                    Tab("Closed", id="closed"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield RulesTab(id="rules")
            yield ClosedTab(id="closed")
        yield Footer()

    async def on_mount(self) -> None:
        self._set_active_tab("rules")
        await self.refresh_closed()

    async def on_unmount(self) -> None:
        if self._on_shutdown is not None:
            await self._on_shutdown()

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self._set_active_tab(tab_id)

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id

    async def call_router(self, request: dict[str, Any]) -> dict[str, Any]:
        """Send one request to the core and record any failure in the header."""

        response = await self.router.handle(request)
        self.panel_state.error = None if response.get("success") else response.get("error")
        self._refresh_header()
        return response

    async def refresh_closed(self) -> None:
        response = await self.call_router({"action": "get_closed_count"})
        if response.get("success"):
            self.panel_state.closed_count = int(response.get("count") or 0)
        self._refresh_header()
        try:
            closed_tab = self.query_one(ClosedTab)
        except Exception:
            return
        await closed_tab.reload_batch()

    async def action_run_default(self) -> None:
        await self.call_router({"action": "execute_default_rule"})
        await self.refresh_closed()

    async def action_restore(self) -> None:
        await self.call_router({"action": "restore_last_closed"})
        await self.refresh_closed()

    def _refresh_header(self) -> None:
        status = self.query_one("#header-status", Static)
        status.remove_class("status-loaded", "status-modified", "status-error")
        if self.panel_state.error:
            status.update(f"error: {self.panel_state.error}")
            status.add_class("status-error")
        elif self.panel_state.closed_count:
            status.update(f"restorable: {self.panel_state.closed_count}")
            status.add_class("status-modified")
        else:
            status.update("nothing to restore")
            status.add_class("status-loaded")

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("TAB", SWEEP_GREEN),
            ("SWEEP > Control Panel", "bold"),
        )
