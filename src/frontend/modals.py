"""Modal dialogs for the Textual control panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .validators import parse_rule_input


class RuleFormScreen(ModalScreen[dict[str, str] | None]):
    """Modal form for adding or editing a custom rule."""

    def __init__(self, name: str = "", pattern: str = "") -> None:
        super().__init__()
        self._initial_name = name
        self._initial_pattern = pattern

    def compose(self) -> ComposeResult:
        title = "Edit Custom Rule" if self._initial_name else "Add Custom Rule"
        yield Container(
            Static(title, classes="modal-title"),
            Static("", id="rule-form-error", classes="modal-error"),
            Static("name", classes="form-label"),
            Input(value=self._initial_name, placeholder="Rule name", id="rule-form-name"),
            Static("regex", classes="form-label"),
            Input(value=self._initial_pattern, placeholder=r"github\.com", id="rule-form-pattern"),
            Horizontal(
                Button("Save", id="rule-form-confirm", variant="success"),
                Button("Cancel", id="rule-form-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "rule-form-cancel":
            self.dismiss(None)
            return
        if event.button.id != "rule-form-confirm":
            return
        name = self.query_one("#rule-form-name", Input).value
        pattern = self.query_one("#rule-form-pattern", Input).value
        parsed = parse_rule_input(name, pattern)
        if parsed.error or parsed.name is None or parsed.pattern is None:
            self.query_one("#rule-form-error", Static).update(parsed.error or "invalid rule")
            return
        self.dismiss({"name": parsed.name, "pattern": parsed.pattern})


class DeleteRuleScreen(ModalScreen[bool]):
    """Confirm deletion of a rule."""

    def __init__(self, rule_name: str) -> None:
        super().__init__()
        self._rule_name = rule_name or "(unnamed rule)"

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Delete this rule?", classes="modal-title"),
            Static(self._rule_name, classes="modal-body"),
            Horizontal(
                Button("Delete", id="delete-rule-confirm", variant="error"),
                Button("Cancel", id="delete-rule-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "delete-rule-confirm":
            self.dismiss(True)
        else:
            self.dismiss(False)
