from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from adapters.http_config_service import HttpConfigService
from core.errors import RemoteServiceError
from core.models import ClusterRef

CLUSTER = ClusterRef(alias="dummy-1", endpoint="http://cluster.test")


def _service(handler, auth_token: "str | None" = None) -> HttpConfigService:
    return HttpConfigService(transport=httpx.MockTransport(handler), auth_token=auth_token)


def _graphql_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


def test_fetch_returns_schema_yaml() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": {"cluster": {"schema": {"as_yaml": "spaces: []\n"}}}})

    document = asyncio.run(_service(handler, auth_token="s3cret").fetch(CLUSTER))

    assert document == "spaces: []\n"
    assert seen[0].method == "POST"
    assert seen[0].url == "http://cluster.test/admin/api"
    assert seen[0].headers["Authorization"] == "Bearer s3cret"
    assert "as_yaml" in _graphql_body(seen[0])["query"]


def test_fetch_graphql_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"errors": [{"message": "cluster isn't bootstrapped"}]})

    with pytest.raises(RemoteServiceError) as excinfo:
        asyncio.run(_service(handler).fetch(CLUSTER))
    assert excinfo.value.reason == "cluster isn't bootstrapped"


def test_fetch_malformed_response_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"cluster": None}})

    with pytest.raises(RemoteServiceError):
        asyncio.run(_service(handler).fetch(CLUSTER))


def test_validate_reports_check_schema_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        body = _graphql_body(request)
        assert "check_schema" in body["query"]
        assert body["variables"] == {"yaml": "spaces: bad"}
        return httpx.Response(
            200,
            json={"data": {"cluster": {"check_schema": {"error": "spaces: must be a table, got string"}}}},
        )

    result = asyncio.run(_service(handler).validate(CLUSTER, "spaces: bad"))

    assert result.ok is False
    assert result.reason == "spaces: must be a table, got string"


def test_validate_null_error_is_success() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"cluster": {"check_schema": {"error": None}}}})

    result = asyncio.run(_service(handler).validate(CLUSTER, "spaces: []"))

    assert result.ok is True


def test_apply_graphql_error_becomes_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert _graphql_body(request)["query"].strip().startswith("mutation")
        return httpx.Response(200, json={"data": None, "errors": [{"message": "spaces: must be a table, got string"}]})

    result = asyncio.run(_service(handler).apply(CLUSTER, "spaces: incorrect-2"))

    assert result.ok is False
    assert result.reason == "spaces: must be a table, got string"


def test_validate_single_error_object_becomes_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": None, "errors": {"message": "schema engine is busy"}})

    result = asyncio.run(_service(handler).validate(CLUSTER, "spaces: []"))

    assert result.ok is False
    assert result.reason == "schema engine is busy"


def test_apply_connection_error_becomes_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(_service(handler).apply(CLUSTER, "spaces: []"))

    assert result.ok is False
    assert result.reason == "Cluster unreachable: connection refused"


def test_apply_http_status_error_without_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    result = asyncio.run(_service(handler).apply(CLUSTER, "spaces: []"))

    assert result.ok is False
    assert result.reason == "Cluster API error 502"


def test_upload_sends_multipart_archive() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    result = asyncio.run(_service(handler).upload_archive(CLUSTER, b"PK\x03\x04", "config.zip"))

    assert result.ok is True
    assert result.name == "config.zip"
    assert seen[0].method == "PUT"
    assert seen[0].url.path == "/admin/config"
    assert seen[0].headers["Content-Type"].startswith("multipart/form-data")
    assert b'filename="config.zip"' in seen[0].content


def test_upload_error_uses_err_field() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"err": "bad zip"})

    result = asyncio.run(_service(handler).upload_archive(CLUSTER, b"nope", "config.zip"))

    assert result.ok is False
    assert result.reason == "bad zip"


def test_upload_error_falls_back_to_text() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="internal error")

    result = asyncio.run(_service(handler).upload_archive(CLUSTER, b"nope", "config.zip"))

    assert result.reason == "internal error"
