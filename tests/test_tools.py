import json

import httpx
import pytest
import respx
from ec_fdk.core.sdk import fdk
from ec_fdk.core.storage import MemoryTokenStore
from ec_fdk.tools.assets import asset_list, get_asset
from ec_fdk.tools.datamanagers import dm_list, get_datamanager, model_list
from ec_fdk.tools.entries import (
    create_entry,
    delete_entry,
    edit_entry,
    entry_list,
    get_entry,
    get_schema,
)
from ec_fdk.tools.system import fdk_status

STAGE = "https://datamanager.cachena.entrecode.de"
LIVE = "https://datamanager.entrecode.de"


@pytest.fixture
def sdk():
    return fdk("stage").storage_adapter(MemoryTokenStore({"stage": "admin"}))


@pytest.mark.asyncio
@respx.mock
async def test_entry_list_defaults_to_small_cleaned_page(sdk):
    route = respx.get(f"{STAGE}/api/83cc6374/muffin").mock(
        return_value=httpx.Response(
            200,
            json={
                "count": 1,
                "total": 9,
                "_embedded": {"83cc6374:muffin": [{"id": "1", "_links": {}}]},
            },
        )
    )

    result = await entry_list(sdk, dm="83cc6374", model="muffin", sort="-created")

    assert result == {"count": 1, "total": 9, "items": [{"id": "1"}]}
    params = route.calls[0].request.url.params
    assert params["size"] == "5"
    assert params["sort"] == "-created"
    assert route.calls[0].request.headers["Authorization"] == "Bearer admin"


@pytest.mark.asyncio
@respx.mock
async def test_env_argument_switches_environment(sdk):
    route = respx.get(f"{LIVE}/api/83cc6374/muffin").mock(
        return_value=httpx.Response(200, json={"id": "e1", "_embedded": {}})
    )

    result = await get_entry(sdk, dm="83cc6374", model="muffin", id="e1", env="live")

    assert result == {"id": "e1"}
    # the stage token is not sent to live
    assert "Authorization" not in route.calls[0].request.headers


@pytest.mark.asyncio
@respx.mock
async def test_create_and_edit_entry(sdk):
    post = respx.post(f"{STAGE}/api/83cc6374/muffin").mock(
        return_value=httpx.Response(200, json={"id": "new", "_links": {}})
    )
    put = respx.put(f"{STAGE}/api/83cc6374/muffin").mock(
        return_value=httpx.Response(200, json={"id": "new", "name": "y"})
    )

    created = await create_entry(sdk, dm="83cc6374", model="muffin", data={"name": "x"})
    edited = await edit_entry(
        sdk, dm="83cc6374", model="muffin", id="new", data={"name": "y"}
    )

    assert created == {"id": "new"}
    assert edited == {"id": "new", "name": "y"}
    assert json.loads(post.calls[0].request.content) == {"name": "x"}
    assert put.calls[0].request.url.params["_id"] == "new"


@pytest.mark.asyncio
@respx.mock
async def test_delete_entry_reports_deleted(sdk):
    respx.delete(f"{STAGE}/api/83cc6374/muffin").mock(return_value=httpx.Response(204))

    result = await delete_entry(sdk, dm="83cc6374", model="muffin", id="e1")

    assert result == {"deleted": True, "id": "e1"}


@pytest.mark.asyncio
@respx.mock
async def test_get_schema_tool(sdk):
    respx.get(f"{STAGE}/api/schema/83cc6374/muffin").mock(
        return_value=httpx.Response(
            200,
            json={"allOf": [{}, {"properties": {"name": {"title": "text"}}}]},
        )
    )

    result = await get_schema(sdk, dm="83cc6374", model="muffin")

    assert result == {"name": {"required": False, "type": "text"}}


@pytest.mark.asyncio
@respx.mock
async def test_asset_tools(sdk):
    respx.get(f"{STAGE}/a/83cc6374/photos").mock(
        side_effect=[
            httpx.Response(
                200,
                json={
                    "count": 1,
                    "total": 1,
                    "_embedded": {"ec:dm-asset": {"assetID": "a1", "_links": {}}},
                },
            ),
            httpx.Response(
                200, json={"_embedded": {"ec:dm-asset": {"assetID": "a1"}}}
            ),
        ]
    )

    listed = await asset_list(sdk, dm="83cc6374", asset_group="photos")
    single = await get_asset(sdk, dm="83cc6374", asset_group="photos", id="a1")

    assert listed["items"] == [{"assetID": "a1"}]
    assert single == {"assetID": "a1"}


@pytest.mark.asyncio
@respx.mock
async def test_datamanager_tools(sdk):
    route = respx.get(f"{STAGE}/").mock(
        side_effect=[
            httpx.Response(
                200,
                json={"count": 1, "total": 1, "_embedded": {"ec:datamanager": []}},
            ),
            httpx.Response(200, json={"dataManagerID": "uuid", "_links": {}}),
        ]
    )
    models = respx.get(f"{STAGE}/model").mock(
        return_value=httpx.Response(200, json={"count": 0, "total": 0})
    )

    assert (await dm_list(sdk, size=10))["items"] == []
    assert await get_datamanager(sdk, dm_id="uuid") == {"dataManagerID": "uuid"}
    assert (await model_list(sdk, dm_id="uuid"))["items"] == []

    assert route.calls[0].request.url.params["size"] == "10"
    assert route.calls[1].request.url.params["dataManagerID"] == "uuid"
    assert models.calls[0].request.url.params["dataManagerID"] == "uuid"


@pytest.mark.asyncio
async def test_fdk_status_reports_token(sdk):
    assert await fdk_status(sdk) == {"env": "stage", "has_admin_token": True}
    assert await fdk_status(sdk, env="live") == {
        "env": "live",
        "has_admin_token": False,
    }
