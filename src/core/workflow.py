"""Apply workflow controller.

This module is transport-agnostic. It only relies on the remote config port
and the notification sink, so the same workflow drives the Textual panel and
the command line.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from core.config import WorkflowConfig
from core.confirmation import ConfirmationGate
from core.draft import DraftStore
from core.errors import (
    ApplyFailed,
    ConcurrentConfirmationError,
    DuplicateRequestError,
    FetchFailed,
    RemoteFailure,
    RemoteServiceError,
    TestConfigUnavailableError,
    UploadFailed,
    ValidationFailed,
)
from core.models import (
    APPLY,
    AWAITING_CONFIRM,
    CURRENT_DRAFT,
    DANGER,
    FAILED,
    IDLE,
    PENDING,
    PREDEFINED_TEST_CONFIG,
    SUCCEEDED,
    SUCCESS,
    UPLOAD_ARCHIVE,
    VALIDATE,
    ClusterRef,
    ConfirmationPrompt,
    Notification,
    RemoteResult,
    WorkflowRequest,
)
from core.notifications import NotificationSink
from core.ports import NotifierPort, RemoteConfigPort

LOGGER = logging.getLogger(__name__)


class ApplyWorkflowController:
    """Orchestrates validate, confirm, apply and reload against one cluster."""

    def __init__(
        self,
        service: RemoteConfigPort,
        cluster: ClusterRef,
        draft: Optional[DraftStore] = None,
        gate: Optional[ConfirmationGate] = None,
        sink: Optional[NotificationSink] = None,
        config: Optional[WorkflowConfig] = None,
    ) -> None:
        self._service = service
        self._cluster = cluster
        self._config = config or WorkflowConfig()
        self._draft = draft or DraftStore()
        self._gate = gate or ConfirmationGate()
        self._sink = sink or NotificationSink(self._config.history_size)
        self._messages = self._config.messages
        # At most one in-flight request per kind.
        self._pending: dict[str, WorkflowRequest] = {}
        # Only the most recently issued fetch may replace the draft.
        self._fetch_generation = 0

    @property
    def cluster(self) -> ClusterRef:
        return self._cluster

    @property
    def draft(self) -> DraftStore:
        return self._draft

    @property
    def sink(self) -> NotificationSink:
        return self._sink

    @property
    def prompt(self) -> ConfirmationPrompt:
        return self._gate.prompt

    @property
    def can_apply_test_config(self) -> bool:
        return self._config.test_config is not None

    @property
    def state(self) -> str:
        """State of the apply path: idle, awaiting_confirm or pending."""

        if self._gate.visible:
            return AWAITING_CONFIRM
        if APPLY in self._pending:
            return PENDING
        return IDLE

    def is_pending(self, kind: str) -> bool:
        return kind in self._pending

    def on_notify(self, handler: NotifierPort) -> None:
        self._sink.on_notify(handler)

    async def validate(self) -> WorkflowRequest:
        """Ask the cluster whether the current draft is a valid schema."""

        request = self._begin(WorkflowRequest(kind=VALIDATE, payload=self._draft.content))
        result = await self._call(request, lambda: self._service.validate(self._cluster, request.payload))
        if result.ok:
            self._complete(
                request,
                success=Notification(SUCCESS, self._messages.validation_ok, self._messages.validation_title),
            )
        else:
            self._complete(request, error=ValidationFailed(result.reason or "validation failed"))
        return request

    async def apply(self, source: str = CURRENT_DRAFT) -> Optional[WorkflowRequest]:
        """Apply the current draft, or open the prompt for the test config.

        The predefined test config is only sent after ``confirm()``; in that
        case this returns ``None`` once the prompt is open.
        """

        if source == PREDEFINED_TEST_CONFIG:
            if self._config.test_config is None:
                raise TestConfigUnavailableError()
            self._ensure_not_pending(APPLY)
            request = WorkflowRequest(
                kind=APPLY,
                payload=self._config.test_config,
                requires_confirmation=True,
                source=source,
            )
            self._gate.request(request, self._messages.confirm_test_config)
            LOGGER.info("Test config apply awaits confirmation for %s", self._cluster.alias)
            return None
        if source != CURRENT_DRAFT:
            raise ValueError(f"unknown apply source: {source}")
        if self._gate.visible:
            # The request awaiting a decision keeps the apply path.
            LOGGER.warning("Rejected apply: test config awaits confirmation")
            raise ConcurrentConfirmationError()

        request = self._begin(WorkflowRequest(kind=APPLY, payload=self._draft.content, source=source))
        return await self._execute_apply(request)

    async def confirm(self) -> Optional[WorkflowRequest]:
        """Execute the request awaiting confirmation, if any."""

        request = self._gate.pending_request
        if request is None:
            return None
        # A rejected confirm leaves the prompt open.
        self._ensure_not_pending(request.kind)
        self._gate.confirm()
        self._begin(request)
        return await self._execute_apply(request)

    def cancel(self) -> Optional[WorkflowRequest]:
        return self._gate.cancel()

    async def reload(self) -> bool:
        """Replace the draft with the server's current schema.

        Unsaved edits are dropped without asking; the editor shows the loss.
        """

        self._fetch_generation += 1
        generation = self._fetch_generation
        try:
            document = await self._service.fetch(self._cluster)
        except RemoteServiceError as exc:
            if generation != self._fetch_generation:
                LOGGER.debug("Ignoring failure of superseded fetch from %s", self._cluster.alias)
                return False
            error = FetchFailed(exc.reason)
            LOGGER.warning("Fetch from %s failed: %s", self._cluster.alias, error.reason)
            self._sink.emit(Notification(DANGER, error.reason, self._messages.error_title))
            return False
        if generation != self._fetch_generation:
            LOGGER.debug("Ignoring superseded fetch from %s", self._cluster.alias)
            return False
        self._draft.load(document)
        LOGGER.info("Loaded schema from %s (%s chars)", self._cluster.alias, len(document))
        return True

    async def upload_archive(self, data: bytes, filename: str) -> WorkflowRequest:
        """Upload a ZIP archive with config.yml; the draft is not touched."""

        request = self._begin(WorkflowRequest(kind=UPLOAD_ARCHIVE, payload=data, name=filename))
        result = await self._call(
            request,
            lambda: self._service.upload_archive(self._cluster, data, filename),
        )
        if result.ok:
            request.name = result.name or filename
            self._complete(
                request,
                success=Notification(
                    SUCCESS,
                    self._messages.upload_ok.format(name=request.name),
                    self._messages.apply_title,
                ),
            )
        else:
            self._complete(request, error=UploadFailed(result.reason or "upload failed"))
        return request

    async def _execute_apply(self, request: WorkflowRequest) -> WorkflowRequest:
        result = await self._call(request, lambda: self._service.apply(self._cluster, request.payload))
        if not result.ok:
            # The draft is left exactly as the operator had it.
            self._complete(request, error=ApplyFailed(result.reason or "apply failed"))
            return request

        text = self._messages.apply_ok
        if request.source == PREDEFINED_TEST_CONFIG:
            text = self._messages.test_config_ok
        if self._pending.get(request.kind) is not request:
            LOGGER.debug("Ignoring outcome of superseded %s request", request.kind)
            return request
        request.status = SUCCEEDED
        LOGGER.info("%s request succeeded on %s", request.kind, self._cluster.alias)
        self._sink.emit(Notification(SUCCESS, text, self._messages.apply_title))
        # The apply stays pending until the draft holds what the server stored.
        try:
            await self.reload()
        finally:
            self._release(request)
        return request

    def _ensure_not_pending(self, kind: str) -> None:
        if kind in self._pending:
            LOGGER.warning("Rejected duplicate %s request", kind)
            raise DuplicateRequestError(kind)

    def _begin(self, request: WorkflowRequest) -> WorkflowRequest:
        # Registration happens before the first await, so racing tasks see it.
        self._ensure_not_pending(request.kind)
        request.status = PENDING
        self._pending[request.kind] = request
        LOGGER.info("Started %s request for %s", request.kind, self._cluster.alias)
        return request

    async def _call(
        self,
        request: WorkflowRequest,
        call: Callable[[], Awaitable[RemoteResult]],
    ) -> RemoteResult:
        try:
            return await call()
        except RemoteServiceError as exc:
            return RemoteResult.failure(exc.reason)
        except BaseException:
            self._release(request)
            request.status = FAILED
            raise

    def _complete(
        self,
        request: WorkflowRequest,
        success: Optional[Notification] = None,
        error: Optional[RemoteFailure] = None,
    ) -> bool:
        if not self._release(request):
            LOGGER.debug("Ignoring outcome of superseded %s request", request.kind)
            return False
        if error is None:
            request.status = SUCCEEDED
            LOGGER.info("%s request succeeded on %s", request.kind, self._cluster.alias)
            if success is not None:
                self._sink.emit(success)
            return True
        request.status = FAILED
        request.error = error
        LOGGER.warning("%s request failed on %s: %s", request.kind, self._cluster.alias, error.reason)
        self._sink.emit(Notification(DANGER, error.reason, self._messages.error_title))
        return True

    def _release(self, request: WorkflowRequest) -> bool:
        if self._pending.get(request.kind) is not request:
            return False
        del self._pending[request.kind]
        return True
