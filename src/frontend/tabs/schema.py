"""Schema tab: the YAML editor and its validate/apply/reload actions."""

from __future__ import annotations

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Static, TextArea

from core.models import APPLY, VALIDATE
from core.workflow import ApplyWorkflowController


class SchemaTab(Container):
    """Editor bound to the draft store."""

    def compose(self):
        with Vertical(id="schema-panel"):
            yield Static("Schema", id="schema-title")
            yield TextArea(id="schema-editor")
            with Horizontal(id="schema-actions"):
                yield Button("Validate", id="validate-btn")
                yield Button("Apply", id="apply-btn", variant="success")
                yield Button("Reload", id="reload-btn")

    def show_document(self, content: str) -> None:
        editor = self.query_one("#schema-editor", TextArea)
        if editor.text != content:
            editor.load_text(content)

    def refresh_controls(self, controller: ApplyWorkflowController) -> None:
        loaded = controller.draft.loaded
        self.query_one("#validate-btn", Button).disabled = not loaded or controller.is_pending(VALIDATE)
        self.query_one("#apply-btn", Button).disabled = not loaded or controller.is_pending(APPLY)

    @on(TextArea.Changed, "#schema-editor")
    def _on_editor_changed(self, event: TextArea.Changed) -> None:
        # Echoes of load_text match the draft already and are no-ops.
        self.app.controller.draft.edit(event.text_area.text)

    @on(Button.Pressed, "#validate-btn")
    def _on_validate(self) -> None:
        self.app.action_validate_schema()

    @on(Button.Pressed, "#apply-btn")
    def _on_apply(self) -> None:
        self.app.action_apply_schema()

    @on(Button.Pressed, "#reload-btn")
    def _on_reload(self) -> None:
        self.app.action_reload_schema()
