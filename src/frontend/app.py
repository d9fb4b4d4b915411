"""Main Textual app for the schemadeck panel."""

from __future__ import annotations

from typing import Any, Awaitable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from adapters.notification_formatting import severity_for
from core.errors import WorkflowError
from core.models import CURRENT_DRAFT, PREDEFINED_TEST_CONFIG, WARNING, Draft, Notification
from core.workflow import ApplyWorkflowController

from .constants import ACCENT_GREEN, REFRESH_INTERVAL
from .modals import ConfirmApplyTestConfigScreen
from .tabs.cluster_config import ClusterConfigTab
from .tabs.schema import SchemaTab


class SchemaPanelApp(App):
    """Schema panel driven by one apply workflow controller."""

    BINDINGS = [
        ("ctrl+t", "validate_schema", "Validate"),
        ("ctrl+s", "apply_schema", "Apply"),
        ("ctrl+r", "reload_schema", "Reload"),
    ]

    CSS = """
    Screen {
        background: #0f1a21;
        color: #e8eef5;
    }

    #header {
        height: 7;
        padding: 1 4;
        border-bottom: solid #2a3a46;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        text-align: right;
    }

    .subtle {
        color: #c6d2dd;
    }

    .status-loaded {
        color: #3fbf7f;
    }

    .status-modified {
        color: #e0b84f;
    }

    .status-error {
        color: #e05f5f;
    }

    #tabs-center {
        height: 4;
        align: center middle;
    }

    #schema-editor {
        height: 1fr;
    }

    #schema-actions, #upload-block, .modal-actions {
        height: 3;
    }

    #archive-path {
        width: 1fr;
    }

    .form-error {
        color: #e05f5f;
    }

    ConfirmApplyTestConfigScreen {
        align: center middle;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: thick #2a3a46;
        background: #16242e;
    }

    .modal-title {
        text-style: bold;
    }
    """

    def __init__(self, controller: ApplyWorkflowController, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.controller = controller

    def compose(self) -> ComposeResult:
        cluster = self.controller.cluster
        self._header_status = Static("", id="header-status")
        self._schema_panel = SchemaTab(id="schema")
        self._config_panel = ClusterConfigTab(
            download_url=f"{cluster.endpoint}/admin/config",
            can_apply_test_config=self.controller.can_apply_test_config,
            id="config",
        )
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static(f"cluster: {cluster.alias}", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static(cluster.endpoint, classes="subtle")
                    yield self._header_status

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Schema", id="schema"),
                    Tab("Config", id="config"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield self._schema_panel
            yield self._config_panel
        yield Footer()

    def on_mount(self) -> None:
        self.controller.on_notify(self._show_notification)
        self.controller.draft.subscribe(self._on_draft_changed)
        self._set_active_tab("schema")
        self._refresh_controls()
        self.set_interval(REFRESH_INTERVAL, self._refresh_controls)
        self.run_worker(self._guarded(self.controller.reload()))

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        self._set_active_tab(event.tab.id or "schema")

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id

    def action_validate_schema(self) -> None:
        self.run_worker(self._guarded(self.controller.validate()))

    def action_apply_schema(self) -> None:
        self.run_worker(self._guarded(self.controller.apply(CURRENT_DRAFT)))

    def action_reload_schema(self) -> None:
        self.run_worker(self._guarded(self.controller.reload()))

    def action_apply_test_config(self) -> None:
        self.run_worker(self._request_test_config())

    def upload_archive(self, data: bytes, filename: str) -> None:
        self.run_worker(self._guarded(self.controller.upload_archive(data, filename)))

    async def _request_test_config(self) -> None:
        await self._guarded(self.controller.apply(PREDEFINED_TEST_CONFIG))
        prompt = self.controller.prompt
        if prompt.visible:
            self.push_screen(ConfirmApplyTestConfigScreen(prompt.text), self._handle_test_config_choice)

    def _handle_test_config_choice(self, confirmed: bool | None) -> None:
        if confirmed:
            self.run_worker(self._guarded(self.controller.confirm()))
        else:
            self.controller.cancel()
        self._refresh_controls()

    async def _guarded(self, command: Awaitable[Any]) -> None:
        try:
            await command
        except WorkflowError as exc:
            # Rejections happen before anything is sent; surface them as warnings.
            self.controller.sink.emit(Notification(WARNING, str(exc), "Rejected"))
        self._refresh_controls()

    def _show_notification(self, notification: Notification) -> None:
        self.notify(
            notification.text,
            title=notification.title or "",
            severity=severity_for(notification),
        )

    def _on_draft_changed(self, draft: Draft) -> None:
        self._schema_panel.show_document(draft.content)
        self._refresh_header()

    def _refresh_controls(self) -> None:
        self._refresh_header()
        self._schema_panel.refresh_controls(self.controller)
        self._config_panel.refresh_controls(self.controller)

    def _refresh_header(self) -> None:
        status = self._header_status
        draft = self.controller.draft

        status.remove_class("status-loaded", "status-modified", "status-error")
        if not draft.loaded:
            status.update("schema: not loaded")
            status.add_class("status-error")
        elif draft.is_dirty:
            status.update("schema: modified *")
            status.add_class("status-modified")
        else:
            status.update("schema: loaded")
            status.add_class("status-loaded")

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("SCHEMA", ACCENT_GREEN),
            ("DECK > Cluster Config", "bold"),
        )
