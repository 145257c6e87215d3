import json

import httpx
import pytest
import respx
from geoserver_rest_client.errors import (
    GeoServerConflictError,
    GeoServerConnectionError,
    GeoServerResponseError,
)
from httpx import Response

from mock_geoserver import BASE, VERSION_PAYLOAD, VERSION_URL

PREFIX = "my-namespace"
URI = "http://www.example.com"


@pytest.mark.asyncio
@respx.mock
async def test_get_all_empty_sentinel(client):
    respx.get(BASE + "namespaces.json").mock(
        return_value=Response(200, json={"namespaces": ""})
    )

    async with client:
        result = await client.namespaces.get_all()

    assert result["namespaces"] == ""


@pytest.mark.asyncio
@respx.mock
async def test_create_namespace(client):
    route = respx.post(BASE + "namespaces").mock(return_value=Response(201, text=PREFIX))

    async with client:
        created = await client.namespaces.create(PREFIX, URI)

    assert created == PREFIX
    body = json.loads(route.calls[0].request.content)
    assert body == {"namespace": {"prefix": PREFIX, "uri": URI}}
    assert route.calls[0].request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
@respx.mock
async def test_create_existing_namespace_is_a_conflict(client):
    respx.post(BASE + "namespaces").mock(return_value=Response(409, text="exists"))

    async with client:
        with pytest.raises(GeoServerConflictError):
            await client.namespaces.create(PREFIX, URI)


@pytest.mark.asyncio
@respx.mock
async def test_get_namespace(client):
    respx.get(f"{BASE}namespaces/{PREFIX}.json").mock(
        return_value=Response(200, json={"namespace": {"prefix": PREFIX, "uri": URI}})
    )

    async with client:
        result = await client.namespaces.get(PREFIX)

    assert result["namespace"]["uri"] == URI


@pytest.mark.asyncio
@respx.mock
async def test_get_missing_namespace_on_live_server_returns_none(client):
    respx.get(f"{BASE}namespaces/does-not-exist.json").mock(
        return_value=Response(404, text="No such namespace: 'does-not-exist' found")
    )
    respx.get(VERSION_URL).mock(return_value=Response(200, json=VERSION_PAYLOAD))

    async with client:
        assert await client.namespaces.get("does-not-exist") is None


@pytest.mark.asyncio
@respx.mock
async def test_get_namespace_connection_refused_raises(client):
    respx.get(f"{BASE}namespaces/does-not-exist.json").mock(
        side_effect=httpx.ConnectError("connection refused")
    )
    respx.get(VERSION_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    async with client:
        with pytest.raises(GeoServerConnectionError):
            await client.namespaces.get("does-not-exist")


@pytest.mark.asyncio
@respx.mock
async def test_delete_namespace(client):
    route = respx.delete(f"{BASE}namespaces/{PREFIX}").mock(return_value=Response(200))

    async with client:
        await client.namespaces.delete(PREFIX)

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_delete_missing_namespace(client):
    respx.delete(f"{BASE}namespaces/{PREFIX}").mock(return_value=Response(404))

    async with client:
        with pytest.raises(GeoServerResponseError) as exc:
            await client.namespaces.delete(PREFIX)

    assert exc.value.message == "Namespace doesn't exist"
