"""Config tab: archive upload and the predefined test config."""

from __future__ import annotations

from typing import Any

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Input, Static

from core.models import IDLE, UPLOAD_ARCHIVE
from core.workflow import ApplyWorkflowController

from ..validators import parse_archive_path


class ClusterConfigTab(Container):
    """Upload a ZIP archive with config.yml or apply the bundled test config."""

    def __init__(self, download_url: str, can_apply_test_config: bool, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._download_url = download_url
        self._can_apply_test_config = can_apply_test_config

    def compose(self):
        with Vertical(id="config-panel"):
            yield Static(
                f"Current configuration can be downloaded at {self._download_url}",
                classes="subtle",
            )
            yield Static("You can upload a ZIP archive with config.yml and all necessary files:")
            with Horizontal(id="upload-block"):
                yield Input(placeholder="path/to/config.zip", id="archive-path")
                yield Button("Upload config", id="upload-btn", variant="primary")
            yield Static("", id="upload-error", classes="form-error")
            if self._can_apply_test_config:
                yield Static("You can also apply predefined test config:")
                yield Button("Apply test config", id="apply-test-btn", variant="warning")

    def refresh_controls(self, controller: ApplyWorkflowController) -> None:
        self.query_one("#upload-btn", Button).disabled = controller.is_pending(UPLOAD_ARCHIVE)
        if self._can_apply_test_config:
            self.query_one("#apply-test-btn", Button).disabled = controller.state != IDLE

    @on(Button.Pressed, "#upload-btn")
    @on(Input.Submitted, "#archive-path")
    def _on_upload(self) -> None:
        error = self.query_one("#upload-error", Static)
        info = parse_archive_path(self.query_one("#archive-path", Input).value)
        if info.error or info.path is None:
            error.update(info.error or "invalid archive path")
            return
        try:
            data = info.path.read_bytes()
        except OSError as exc:
            error.update(f"read failed: {exc.strerror or exc}")
            return
        error.update("")
        self.app.upload_archive(data, info.filename or info.path.name)

    @on(Button.Pressed, "#apply-test-btn")
    def _on_apply_test(self) -> None:
        self.app.action_apply_test_config()
