"""Confirmation gate for requests that must be approved before execution."""

from __future__ import annotations

import logging
from typing import Optional

from core.errors import ConcurrentConfirmationError
from core.models import ConfirmationPrompt, WorkflowRequest

LOGGER = logging.getLogger(__name__)


class ConfirmationGate:
    """Two states: hidden, or awaiting a decision on exactly one request."""

    def __init__(self) -> None:
        self._pending: Optional[WorkflowRequest] = None
        self._text = ""

    @property
    def visible(self) -> bool:
        return self._pending is not None

    @property
    def pending_request(self) -> Optional[WorkflowRequest]:
        return self._pending

    @property
    def prompt(self) -> ConfirmationPrompt:
        if self._pending is None:
            return ConfirmationPrompt()
        return ConfirmationPrompt(visible=True, pending_request=self._pending, text=self._text)

    def request(self, request: WorkflowRequest, text: str = "") -> None:
        if not request.requires_confirmation:
            raise ValueError(f"{request.kind} request does not require confirmation")
        if self._pending is not None:
            LOGGER.warning("Rejected %s request: another one awaits confirmation", request.kind)
            raise ConcurrentConfirmationError()
        self._pending = request
        self._text = text

    def confirm(self) -> Optional[WorkflowRequest]:
        """Close the prompt and hand the approved request back for execution."""

        request = self._pending
        self._clear()
        return request

    def cancel(self) -> Optional[WorkflowRequest]:
        """Close the prompt, dropping the request without side effects."""

        request = self._pending
        self._clear()
        if request is not None:
            LOGGER.info("Cancelled %s request", request.kind)
        return request

    def _clear(self) -> None:
        self._pending = None
        self._text = ""
