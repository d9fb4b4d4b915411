"""Ports (interfaces) used by the apply workflow.

Ports define the minimal contracts for the remote config service and
notification delivery so the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import ClusterRef, Notification, RemoteResult


class RemoteConfigPort(Protocol):
    """Remote operations required by the apply workflow."""

    async def fetch(self, cluster: ClusterRef) -> str:
        ...

    async def validate(self, cluster: ClusterRef, document: str) -> RemoteResult:
        ...

    async def apply(self, cluster: ClusterRef, document: str) -> RemoteResult:
        ...

    async def upload_archive(self, cluster: ClusterRef, data: bytes, filename: str) -> RemoteResult:
        ...


class NotifierPort(Protocol):
    """Notification delivery required by the sink."""

    def __call__(self, notification: Notification) -> None:
        ...
