"""HTTP adapter for the cluster admin API.

The schema document travels over the cluster's GraphQL endpoint, archives go
through the multipart config upload. Transport problems never escape as
``httpx`` exceptions: they become failure results or ``RemoteServiceError``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from core.errors import RemoteServiceError
from core.models import ClusterRef, RemoteResult

LOGGER = logging.getLogger(__name__)

GRAPHQL_PATH = "/admin/api"
CONFIG_PATH = "/admin/config"

FETCH_SCHEMA_QUERY = """
query getSchema {
    cluster {
        schema {
            as_yaml
        }
    }
}
"""

CHECK_SCHEMA_QUERY = """
query checkSchema($yaml: String!) {
    cluster {
        check_schema(as_yaml: $yaml) {
            error
        }
    }
}
"""

APPLY_SCHEMA_MUTATION = """
mutation setSchema($yaml: String!) {
    cluster {
        schema(as_yaml: $yaml) {
            as_yaml
        }
    }
}
"""


class HttpConfigService:
    """Remote config port implementation on top of ``httpx.AsyncClient``."""

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        auth_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._auth_token = auth_token
        self._transport = transport

    def _client(self, cluster: ClusterRef) -> httpx.AsyncClient:
        headers = {}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return httpx.AsyncClient(
            base_url=cluster.endpoint,
            timeout=self.timeout_seconds,
            headers=headers,
            transport=self._transport,
        )

    async def fetch(self, cluster: ClusterRef) -> str:
        data = await self._graphql(cluster, FETCH_SCHEMA_QUERY)
        document = _dig(data, "cluster", "schema", "as_yaml")
        if not isinstance(document, str):
            raise RemoteServiceError("Malformed schema response")
        return document

    async def validate(self, cluster: ClusterRef, document: str) -> RemoteResult:
        try:
            data = await self._graphql(cluster, CHECK_SCHEMA_QUERY, {"yaml": document})
        except RemoteServiceError as exc:
            return RemoteResult.failure(exc.reason)
        error = _dig(data, "cluster", "check_schema", "error")
        if error:
            return RemoteResult.failure(str(error))
        return RemoteResult.success()

    async def apply(self, cluster: ClusterRef, document: str) -> RemoteResult:
        try:
            await self._graphql(cluster, APPLY_SCHEMA_MUTATION, {"yaml": document})
        except RemoteServiceError as exc:
            return RemoteResult.failure(exc.reason)
        return RemoteResult.success()

    async def upload_archive(self, cluster: ClusterRef, data: bytes, filename: str) -> RemoteResult:
        files = {"file": (filename, data, "application/zip")}
        try:
            async with self._client(cluster) as client:
                response = await client.put(CONFIG_PATH, files=files)
        except httpx.HTTPError as exc:
            LOGGER.warning("Config upload to %s failed: %s", cluster.alias, exc)
            return RemoteResult.failure(_describe_transport_error(exc))
        if response.is_success:
            return RemoteResult.success(name=filename)
        return RemoteResult.failure(_upload_error(response))

    async def _graphql(
        self,
        cluster: ClusterRef,
        query: str,
        variables: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        payload = {"query": query, "variables": variables or {}}
        try:
            async with self._client(cluster) as client:
                response = await client.post(GRAPHQL_PATH, json=payload)
        except httpx.HTTPError as exc:
            LOGGER.warning("GraphQL request to %s failed: %s", cluster.alias, exc)
            raise RemoteServiceError(_describe_transport_error(exc)) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise RemoteServiceError(f"Cluster API error {response.status_code}") from exc

        # Errors raised by the schema engine come back with status 200.
        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            first = errors[0] if isinstance(errors, list) else errors
            message = first.get("message") if isinstance(first, dict) else None
            raise RemoteServiceError(str(message or first))
        if not response.is_success:
            raise RemoteServiceError(f"Cluster API error {response.status_code}")
        data = body.get("data") if isinstance(body, dict) else None
        return data if isinstance(data, dict) else {}


def _dig(data: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _upload_error(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("err"):
        return str(body["err"])
    text = response.text.strip()
    return text or f"Upload failed with status {response.status_code}"


def _describe_transport_error(exc: httpx.HTTPError) -> str:
    detail = str(exc)
    if detail:
        return f"Cluster unreachable: {detail}"
    return f"Cluster unreachable: {type(exc).__name__}"
