from __future__ import annotations

import pytest

from core.confirmation import ConfirmationGate
from core.errors import ConcurrentConfirmationError
from core.models import APPLY, WorkflowRequest


def _request(payload: str = "spaces: {}") -> WorkflowRequest:
    return WorkflowRequest(kind=APPLY, payload=payload, requires_confirmation=True)


def test_request_opens_prompt() -> None:
    gate = ConfirmationGate()
    request = _request()
    gate.request(request, "Apply?")

    prompt = gate.prompt
    assert prompt.visible is True
    assert prompt.pending_request is request
    assert prompt.text == "Apply?"


def test_confirm_hands_request_back_and_hides() -> None:
    gate = ConfirmationGate()
    request = _request()
    gate.request(request)

    assert gate.confirm() is request
    assert gate.visible is False
    assert gate.pending_request is None


def test_cancel_discards_request() -> None:
    gate = ConfirmationGate()
    gate.request(_request())
    gate.cancel()
    assert gate.prompt.visible is False
    assert gate.prompt.pending_request is None
    assert gate.confirm() is None


def test_second_request_is_rejected_and_first_kept() -> None:
    gate = ConfirmationGate()
    first = _request("first")
    gate.request(first)

    with pytest.raises(ConcurrentConfirmationError):
        gate.request(_request("second"))
    assert gate.pending_request is first


def test_request_without_confirmation_flag_is_refused() -> None:
    gate = ConfirmationGate()
    with pytest.raises(ValueError):
        gate.request(WorkflowRequest(kind=APPLY, payload="x"))
    assert gate.visible is False
