"""Workflow error taxonomy.

Remote failures are recorded on the failed request and reported as
notifications. Rejections (duplicate or concurrent requests) are raised to the
caller before anything is sent.
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base class for every error raised or recorded by the workflow."""


class RemoteFailure(WorkflowError):
    """A remote call completed with a failure reason."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ValidationFailed(RemoteFailure):
    pass


class ApplyFailed(RemoteFailure):
    pass


class UploadFailed(RemoteFailure):
    pass


class FetchFailed(RemoteFailure):
    pass


class RemoteServiceError(RemoteFailure):
    """Raised by port adapters when the service could not produce a document."""


class DuplicateRequestError(WorkflowError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"a {kind} request is already pending")
        self.kind = kind


class ConcurrentConfirmationError(WorkflowError):
    def __init__(self) -> None:
        super().__init__("another request is already awaiting confirmation")


class TestConfigUnavailableError(WorkflowError):
    # Not a pytest test class.
    __test__ = False

    def __init__(self) -> None:
        super().__init__("no predefined test config is available")
