import httpx
import pytest
import respx
from ec_fdk.core.errors import ApiError, ResponseParseError, TransportError
from ec_fdk.core.fetcher import fetcher

URL = "https://datamanager.cachena.entrecode.de/api/83cc6374/muffin"


@pytest.mark.asyncio
@respx.mock
async def test_get_parses_json_and_sends_bearer_token():
    route = respx.get(URL).mock(return_value=httpx.Response(200, json={"count": 1}))

    data = await fetcher(URL, token="tkn", headers={"X-Extra": "1"})

    assert data == {"count": 1}
    sent = route.calls[0].request.headers
    assert sent["Authorization"] == "Bearer tkn"
    assert sent["X-Extra"] == "1"


@pytest.mark.asyncio
@respx.mock
async def test_no_token_no_authorization_header():
    route = respx.get(URL).mock(return_value=httpx.Response(200, json={}))

    await fetcher(URL)

    assert "Authorization" not in route.calls[0].request.headers


@pytest.mark.asyncio
@respx.mock
async def test_caller_headers_are_not_mutated():
    respx.get(URL).mock(return_value=httpx.Response(200, json={}))
    headers = {"Content-Type": "application/json"}

    await fetcher(URL, token="tkn", headers=headers)

    assert headers == {"Content-Type": "application/json"}


@pytest.mark.asyncio
@respx.mock
async def test_json_error_body_raises_api_error():
    respx.delete(URL).mock(
        return_value=httpx.Response(
            404,
            json={"title": "Not found", "detail": "no such entry", "verbose": "x"},
        )
    )

    with pytest.raises(ApiError) as exc:
        await fetcher(URL, method="DELETE")

    err = exc.value
    assert err.status_code == 404
    assert err.method == "DELETE"
    assert err.url == URL
    assert str(err) == "Not found\nno such entry\nx"
    assert err.response_json["detail"] == "no such entry"


@pytest.mark.asyncio
@respx.mock
async def test_non_json_error_raises_transport_error():
    respx.get(URL).mock(return_value=httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(TransportError) as exc:
        await fetcher(URL)

    assert str(exc.value) == "unexpected fetch error: Bad Gateway"
    assert exc.value.status_code == 502
    assert not isinstance(exc.value, ApiError)


@pytest.mark.asyncio
@respx.mock
async def test_network_failure_raises_transport_error():
    respx.get(URL).mock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(TransportError):
        await fetcher(URL)


@pytest.mark.asyncio
@respx.mock
async def test_raw_res_returns_response():
    respx.post(URL).mock(return_value=httpx.Response(204))

    resp = await fetcher(URL, raw_res=True, method="post")

    assert isinstance(resp, httpx.Response)
    assert resp.status_code == 204


@pytest.mark.asyncio
@respx.mock
async def test_empty_success_body_is_none():
    respx.get(URL).mock(return_value=httpx.Response(204))

    assert await fetcher(URL) is None


@pytest.mark.asyncio
@respx.mock
async def test_non_json_success_raises_parse_error():
    respx.get(URL).mock(return_value=httpx.Response(200, text="<html></html>"))

    with pytest.raises(ResponseParseError) as exc:
        await fetcher(URL)

    assert isinstance(exc.value, TransportError)
    assert "<html>" in str(exc.value)


@pytest.mark.asyncio
@respx.mock
async def test_uses_passed_client():
    route = respx.get(URL).mock(return_value=httpx.Response(200, json={"ok": True}))

    async with httpx.AsyncClient(headers={"User-Agent": "ec-fdk-test"}) as http:
        assert await fetcher(URL, http=http) == {"ok": True}

    assert route.calls[0].request.headers["User-Agent"] == "ec-fdk-test"


@pytest.mark.asyncio
@respx.mock
async def test_request_log_never_contains_query_token(caplog):
    logout = (
        "https://datamanager.cachena.entrecode.de/api/83cc6374/_auth/logout"
        "?clientID=rest&token=secret"
    )
    respx.post(logout).mock(return_value=httpx.Response(204))

    with caplog.at_level("DEBUG", logger="ec_fdk.fetcher"):
        await fetcher(logout, method="POST", raw_res=True)

    record = next(r for r in caplog.records if r.getMessage() == "fdk.request")
    assert record.status == 204
    assert "secret" not in record.url
