"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any transport-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

# Notification kinds understood by every sink.
SUCCESS = "success"
DANGER = "danger"
WARNING = "warning"
NOTIFICATION_KINDS = (SUCCESS, DANGER, WARNING)

# Request kinds tracked by the workflow controller.
VALIDATE = "validate"
APPLY = "apply"
UPLOAD_ARCHIVE = "upload_archive"

# Request lifecycle.
IDLE = "idle"
PENDING = "pending"
AWAITING_CONFIRM = "awaiting_confirm"
SUCCEEDED = "succeeded"
FAILED = "failed"

# Apply sources.
CURRENT_DRAFT = "current_draft"
PREDEFINED_TEST_CONFIG = "predefined_test_config"


@dataclass(frozen=True)
class ClusterRef:
    """Identity of the cluster every remote call is addressed to."""

    alias: str
    endpoint: str


@dataclass(frozen=True)
class Notification:
    kind: str
    text: str
    title: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in NOTIFICATION_KINDS:
            raise ValueError(f"unknown notification kind: {self.kind}")


@dataclass(frozen=True)
class RemoteResult:
    """Minimal response contract of validate, apply and upload calls."""

    ok: bool
    reason: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def success(cls, name: Optional[str] = None) -> "RemoteResult":
        return cls(ok=True, name=name)

    @classmethod
    def failure(cls, reason: str) -> "RemoteResult":
        return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class Draft:
    """Immutable snapshot of the editable document."""

    content: str
    baseline: str

    @property
    def is_dirty(self) -> bool:
        return self.content != self.baseline


@dataclass
class WorkflowRequest:
    """One operation issued by the operator."""

    kind: str
    payload: Any = None
    requires_confirmation: bool = False
    source: Optional[str] = None
    status: str = IDLE
    error: Optional[Exception] = None
    name: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED


@dataclass(frozen=True)
class ConfirmationPrompt:
    """Render state of the confirmation modal."""

    visible: bool = False
    pending_request: Optional[WorkflowRequest] = None
    text: str = ""
