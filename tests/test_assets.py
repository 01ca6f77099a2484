import httpx
import pytest
import respx
from ec_fdk.core.assets import (
    asset_list,
    create_asset,
    create_assets,
    delete_asset,
    get_asset,
)
from ec_fdk.core.errors import MissingConfigurationError

GROUP = "https://datamanager.cachena.entrecode.de/a/83cc6374/photos"
CONFIG = {"env": "stage", "dmShortID": "83cc6374", "assetGroup": "photos"}


@pytest.mark.asyncio
@respx.mock
async def test_asset_list_defaults_and_relation():
    route = respx.get(GROUP).mock(
        return_value=httpx.Response(
            200,
            json={
                "count": 1,
                "total": 1,
                "_embedded": {"ec:dm-asset": {"assetID": "a"}},
            },
        )
    )

    result = await asset_list(CONFIG)

    assert str(route.calls[0].request.url) == f"{GROUP}?_list=true&page=1&size=50"
    assert result["items"] == [{"assetID": "a"}]


@pytest.mark.asyncio
@respx.mock
async def test_get_asset_unwraps_embedded_asset():
    route = respx.get(GROUP).mock(
        return_value=httpx.Response(
            200, json={"_embedded": {"ec:dm-asset": {"assetID": "a1", "title": "t"}}}
        )
    )

    result = await get_asset({**CONFIG, "assetID": "a1"})

    assert result == {"assetID": "a1", "title": "t"}
    assert str(route.calls[0].request.url) == f"{GROUP}?assetID=a1"


@pytest.mark.asyncio
async def test_get_asset_requires_asset_id():
    with pytest.raises(MissingConfigurationError) as exc:
        await get_asset(CONFIG)
    assert exc.value.field == "asset_id"


@pytest.mark.asyncio
@respx.mock
async def test_create_asset_uploads_multipart_from_path(tmp_path):
    photo = tmp_path / "muffin.png"
    photo.write_bytes(b"\x89PNG")
    route = respx.post(GROUP).mock(
        return_value=httpx.Response(
            200, json={"_embedded": {"ec:dm-asset": {"assetID": "new"}}}
        )
    )

    result = await create_asset(
        {**CONFIG, "file": str(photo), "options": {"preserveFilenames": True}}
    )

    assert result == {"assetID": "new"}
    request = route.calls[0].request
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    body = request.content
    assert b'name="file"; filename="muffin.png"' in body
    assert b"Content-Type: image/png" in body
    assert b'name="preserveFilenames"' in body
    assert b"true" in body


@pytest.mark.asyncio
async def test_create_asset_missing_file_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        await create_asset({**CONFIG, "file": str(tmp_path / "nope.png")})


@pytest.mark.asyncio
@respx.mock
async def test_create_assets_returns_list():
    route = respx.post(GROUP).mock(
        return_value=httpx.Response(
            200,
            json={"_embedded": {"ec:dm-asset": [{"assetID": "1"}, {"assetID": "2"}]}},
        )
    )

    result = await create_assets({**CONFIG, "files": [b"one", b"two"]})

    assert [a["assetID"] for a in result] == ["1", "2"]
    disposition = b'Content-Disposition: form-data; name="file"'
    assert route.calls[0].request.content.count(disposition) == 2


@pytest.mark.asyncio
@respx.mock
async def test_delete_asset_returns_none():
    route = respx.delete(f"{GROUP}/a1").mock(return_value=httpx.Response(204))

    assert await delete_asset({**CONFIG, "assetID": "a1", "token": "t"}) is None
    assert route.calls[0].request.headers["Authorization"] == "Bearer t"
