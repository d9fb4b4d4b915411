"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so the app layer can build it safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class NotificationMessages:
    """Texts used for success notifications and the confirmation prompt."""

    validation_title: str = "Schema validation"
    validation_ok: str = "Schema is valid"
    apply_title: str = "Success"
    apply_ok: str = "Schema successfully applied"
    test_config_ok: str = "Test config successfully applied"
    upload_ok: str = "{name} file uploaded successfully"
    error_title: str = "Error"
    confirm_test_config: str = "Do you really want to apply the test config?"


@dataclass(frozen=True)
class WorkflowConfig:
    """Settings for the apply workflow controller."""

    test_config: Optional[str] = None
    history_size: int = 50
    messages: NotificationMessages = field(default_factory=NotificationMessages)
