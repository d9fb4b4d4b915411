"""Modal dialogs for the Textual schema panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmApplyTestConfigScreen(ModalScreen[bool]):
    """Ask before the predefined test config replaces the cluster schema."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Apply test config?", classes="modal-title"),
            Static(self._text, classes="modal-body"),
            Horizontal(
                Button("Apply", id="confirm-apply", variant="warning"),
                Button("Cancel", id="confirm-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "confirm-apply":
            self.dismiss(True)
        else:
            self.dismiss(False)
