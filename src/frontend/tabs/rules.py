"""Rules tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from adapters.report_formatting import format_result
from ..constants import DEFAULT_RULE_LABEL
from ..modals import DeleteRuleScreen, RuleFormScreen
from ..validators import is_runnable


class RulesTab(Container):
    """Rules tab for running the default rule and managing custom rules."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._current_row_key: Optional[str] = None
        self._editing_name: Optional[str] = None
        self._table_ready = False

    def compose(self):
        with Vertical(id="rules-panel"):
            yield Static("Predefined rules", classes="section-title")
            with Horizontal(id="predefined-actions"):
                yield Button(DEFAULT_RULE_LABEL, id="run-default", variant="primary")
            yield Static("Custom rules", classes="section-title")
            yield DataTable(id="rules-table", cursor_type="row")
            with Horizontal(id="rules-actions"):
                yield Button("Run rule", id="run-rule", variant="success")
                yield Button("Test rule", id="test-rule")
                yield Button("Add rule", id="add-rule")
                yield Button("Edit rule", id="edit-rule")
                yield Button("Delete rule", id="delete-rule", variant="error")
            yield Static("", id="rules-output")

    async def on_mount(self) -> None:
        table = self.query_one("#rules-table", DataTable)
        table.add_column("name", key="name", width=28)
        table.add_column("regex", key="pattern", width=48)
        table.add_column("state", key="state", width=10)
        table.zebra_stripes = True
        self.query_one("#rules-actions").styles.height = 3
        self._table_ready = True
        await self.reload_rules()

    async def reload_rules(self) -> None:
        if not self._table_ready:
            return
        response = await self.app.call_router({"action": "list_rules"})
        rules = response.get("rules", []) if response.get("success") else []
        self.app.panel_state.rules = rules
        table = self.query_one("#rules-table", DataTable)
        table.clear()
        if not response.get("success"):
            self._set_output(format_result(response))
        for index, rule in enumerate(rules):
            state = "enabled" if is_runnable(rule) else "disabled"
            table.add_row(rule.get("name", ""), rule.get("pattern", ""), state, key=str(index))
        if self._current_row_key is not None and self._current_index() is None:
            self._current_row_key = None
        self._update_action_state()
        if not rules and response.get("success"):
            self._set_output("No custom rules yet")

    def _update_action_state(self) -> None:
        rule = self._current_rule()
        runnable = rule is not None and is_runnable(rule)
        for button_id in ("#run-rule", "#test-rule"):
            self.query_one(button_id, Button).disabled = not runnable
        for button_id in ("#edit-rule", "#delete-rule"):
            self.query_one(button_id, Button).disabled = rule is None

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self._current_row_key = self._coerce_row_key(event.row_key)
        self._update_action_state()

    @on(Button.Pressed, "#run-default")
    async def _on_run_default(self) -> None:
        response = await self.app.call_router({"action": "execute_default_rule"})
        self._set_output(format_result(response))
        await self.app.refresh_closed()

    @on(Button.Pressed, "#run-rule")
    async def _on_run_rule(self) -> None:
        rule = self._current_rule()
        if rule is None or not is_runnable(rule):
            return
        response = await self.app.call_router(
            {"action": "execute_custom_rule", "name": rule["name"], "pattern": rule["pattern"]}
        )
        self._set_output(format_result(response))
        await self.app.refresh_closed()

    @on(Button.Pressed, "#test-rule")
    async def _on_test_rule(self) -> None:
        rule = self._current_rule()
        if rule is None:
            return
        response = await self.app.call_router({"action": "test_custom_rule", "pattern": rule["pattern"]})
        self._set_output(format_result(response))

    @on(Button.Pressed, "#add-rule")
    def _on_add_rule(self) -> None:
        self._editing_name = None
        self.app.push_screen(RuleFormScreen(), self._handle_rule_form)

    @on(Button.Pressed, "#edit-rule")
    def _on_edit_rule(self) -> None:
        rule = self._current_rule()
        if rule is None:
            return
        self._editing_name = rule.get("name", "")
        self.app.push_screen(
            RuleFormScreen(rule.get("name", ""), rule.get("pattern", "")),
            self._handle_rule_form,
        )

    async def _handle_rule_form(self, payload: dict[str, str] | None) -> None:
        if not payload:
            return
        request: dict[str, Any] = {"action": "save_rule", **payload}
        if self._editing_name is not None:
            request["original_name"] = self._editing_name
        self._editing_name = None
        response = await self.app.call_router(request)
        if response.get("success"):
            self._set_output(f"Saved {payload['name']}")
        else:
            self._set_output(format_result(response))
        await self.reload_rules()

    @on(Button.Pressed, "#delete-rule")
    def _on_delete_rule(self) -> None:
        rule = self._current_rule()
        if rule is None:
            return
        self.app.push_screen(DeleteRuleScreen(rule.get("name", "")), self._handle_delete_rule)

    async def _handle_delete_rule(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        rule = self._current_rule()
        if rule is None:
            return
        response = await self.app.call_router({"action": "delete_rule", "name": rule["name"]})
        if not response.get("success"):
            self._set_output(format_result(response))
        self._current_row_key = None
        await self.reload_rules()

    def _set_output(self, message: str) -> None:
        self.query_one("#rules-output", Static).update(message)

    def _current_rule(self) -> Optional[dict[str, Any]]:
        index = self._current_index()
        if index is None:
            return None
        return self.app.panel_state.rules[index]

    def _current_index(self) -> Optional[int]:
        if self._current_row_key is None:
            return None
        try:
            index = int(self._current_row_key)
        except ValueError:
            return None
        if index >= len(self.app.panel_state.rules):
            return None
        return index

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
