import json

import httpx
import pytest
import respx
from geoserver_rest_client.errors import (
    GeoServerClientError,
    GeoServerConflictError,
    GeoServerConnectionError,
    GeoServerResponseError,
)
from httpx import Response

from mock_geoserver import BASE, VERSION_PAYLOAD, VERSION_URL

WS = "my-workspace"
SLD = '<?xml version="1.0"?><StyledLayerDescriptor version="1.0.0"/>'


@pytest.mark.asyncio
@respx.mock
async def test_get_all_combines_defaults_and_workspace_styles(client):
    respx.get(BASE + "styles.json").mock(
        return_value=Response(
            200, json={"styles": {"style": [{"name": "line"}, {"name": "point"}]}}
        )
    )
    respx.get(BASE + "workspaces.json").mock(
        return_value=Response(
            200,
            json={"workspaces": {"workspace": [{"name": "a"}, {"name": "b"}]}},
        )
    )
    respx.get(BASE + "workspaces/a/styles.json").mock(
        return_value=Response(200, json={"styles": {"style": {"name": "a-style"}}})
    )
    respx.get(BASE + "workspaces/b/styles.json").mock(
        return_value=Response(200, json={"styles": ""})
    )

    async with client:
        styles = await client.styles.get_all()

    assert [s["name"] for s in styles] == ["line", "point", "a-style"]


@pytest.mark.asyncio
@respx.mock
async def test_workspace_styles_failure_propagates(client):
    respx.get(BASE + "workspaces.json").mock(
        return_value=Response(200, json={"workspaces": {"workspace": [{"name": "a"}]}})
    )
    respx.get(BASE + "workspaces/a/styles.json").mock(
        side_effect=httpx.ConnectError("connection refused")
    )

    async with client:
        with pytest.raises(GeoServerConnectionError):
            await client.styles.get_all_workspace_styles()


@pytest.mark.asyncio
@respx.mock
async def test_publish_sld(client):
    route = respx.post(f"{BASE}workspaces/{WS}/styles?name=rivers").mock(
        return_value=Response(201, text="rivers")
    )

    async with client:
        await client.styles.publish(WS, "rivers", SLD)

    request = route.calls[0].request
    assert request.headers["Content-Type"] == "application/vnd.ogc.sld+xml"
    assert request.content.decode("utf-8") == SLD


@pytest.mark.asyncio
@respx.mock
async def test_publish_existing_style_is_a_conflict(client):
    respx.post(BASE + "styles?name=rivers").mock(return_value=Response(403))

    async with client:
        with pytest.raises(GeoServerConflictError) as exc:
            await client.styles.publish(None, "rivers", SLD)

    assert "already exists" in exc.value.message


@pytest.mark.asyncio
@respx.mock
async def test_delete_style_with_dependants(client):
    respx.delete(f"{BASE}workspaces/{WS}/styles/rivers?recurse=false&purge=false").mock(
        return_value=Response(403, text="style in use")
    )

    async with client:
        with pytest.raises(GeoServerConflictError):
            await client.styles.delete(WS, "rivers")


@pytest.mark.asyncio
@respx.mock
async def test_delete_missing_style(client):
    respx.delete(f"{BASE}styles/rivers?recurse=true&purge=true").mock(
        return_value=Response(404)
    )

    async with client:
        with pytest.raises(GeoServerResponseError) as exc:
            await client.styles.delete(None, "rivers", recurse=True, purge=True)

    assert exc.value.message == "Style 'rivers' doesn't exist"


@pytest.mark.asyncio
@respx.mock
async def test_assign_style_to_layer(client):
    style = {"style": {"name": "rivers", "format": "sld"}}
    respx.get(f"{BASE}workspaces/{WS}/styles/rivers.json").mock(
        return_value=Response(200, json=style)
    )
    route = respx.post(f"{BASE}layers/{WS}:water/styles?default=true").mock(
        return_value=Response(201)
    )

    async with client:
        await client.styles.assign_style_to_layer(WS, "water", WS, "rivers")

    assert json.loads(route.calls[0].request.content) == style


@pytest.mark.asyncio
@respx.mock
async def test_assign_missing_style(client):
    respx.get(BASE + "styles/nope.json").mock(return_value=Response(404))
    respx.get(VERSION_URL).mock(return_value=Response(200, json=VERSION_PAYLOAD))

    async with client:
        with pytest.raises(GeoServerClientError):
            await client.styles.assign_style_to_layer(WS, "water", None, "nope", False)
