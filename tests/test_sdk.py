import httpx
import pytest
import respx
from ec_fdk.core.actions import act, action_name
from ec_fdk.core.auth import Realm
from ec_fdk.core.errors import (
    ApiError,
    MissingConfigurationError,
    NoStorageAdapterError,
    UnknownActionError,
)
from ec_fdk.core.sdk import Fdk, fdk
from ec_fdk.core.storage import MemoryTokenStore

MUFFIN = "https://datamanager.cachena.entrecode.de/api/83cc6374/muffin"
ACCOUNTS = "https://accounts.cachena.entrecode.de"


class AsyncStore:
    def __init__(self, tokens=None):
        self.tokens = dict(tokens or {})

    async def get(self, key):
        return self.tokens.get(key)

    async def set(self, key, token):
        self.tokens[key] = token

    async def remove(self, key):
        self.tokens.pop(key, None)


def _entries(items):
    return {
        "count": len(items),
        "total": len(items),
        "_embedded": {"83cc6374:muffin": items},
    }


# --- builder ---------------------------------------------------------------- #


def test_setters_copy_on_write():
    root = fdk("stage")
    scoped = root.dm("83cc6374").model("muffin")

    assert isinstance(scoped, Fdk)
    assert scoped is not root
    assert root.config.dm_short_id is None
    assert root.config.model is None
    assert scoped.config.dm_short_id == "83cc6374"
    assert scoped.config.env == "stage"


def test_set_accepts_aliases_and_keeps_parent():
    a = fdk("stage").set({"dmShortID": "abc"})
    b = a.set(entryID="e1", model="muffin")
    assert a.config.entry_id is None
    assert (b.config.dm_short_id, b.config.entry_id, b.config.model) == (
        "abc",
        "e1",
        "muffin",
    )


def test_aliased_setters():
    chain = fdk("live").dm_id("uuid").entry("e1").asset_group("g").asset("a1")
    assert chain.config.dm_id == "uuid"
    assert chain.config.entry_id == "e1"
    assert chain.config.asset_id == "a1"
    assert chain.clean().config.clean is True
    assert chain.clean(False).config.clean is False


def test_repr_hides_secrets():
    text = repr(fdk("stage").token("secret").set(password="pw"))
    assert "secret" not in text
    assert "pw" not in text
    assert "stage" in text


# --- token resolution ------------------------------------------------------- #


@pytest.mark.asyncio
async def test_explicit_token_wins():
    store = MemoryTokenStore({"stage": "admin"})
    sdk = fdk("stage").storage_adapter(store).token("explicit")
    assert await sdk.get_best_token() == "explicit"
    assert await sdk.get_token(Realm.TENANT) == "explicit"


@pytest.mark.asyncio
async def test_admin_token_preferred_over_tenant():
    store = MemoryTokenStore({"stage": "admin", "83cc6374": "tenant"})
    sdk = fdk("stage").dm("83cc6374").storage_adapter(store)
    assert await sdk.get_best_token() == "admin"
    assert await sdk.get_tenant_token() == "tenant"


@pytest.mark.asyncio
async def test_tenant_token_used_when_no_admin_token():
    store = MemoryTokenStore({"83cc6374": "tenant"})
    sdk = fdk("stage").dm("83cc6374").storage_adapter(store)
    assert await sdk.get_best_token() == "tenant"
    assert await sdk.has_tenant_token() is True
    assert await sdk.has_admin_token() is False
    assert await sdk.has_any_token() is True


@pytest.mark.asyncio
async def test_no_store_means_no_token():
    sdk = fdk("stage").dm("83cc6374")
    assert await sdk.get_best_token() is None
    assert await sdk.has_any_token() is False
    with pytest.raises(NoStorageAdapterError):
        await sdk.get_admin_token()
    with pytest.raises(NoStorageAdapterError):
        await sdk.set_token(Realm.ADMIN, "x")


@pytest.mark.asyncio
async def test_missing_tenant_key_is_swallowed():
    sdk = fdk("stage").storage_adapter(MemoryTokenStore())
    assert await sdk.get_best_token() is None
    with pytest.raises(MissingConfigurationError):
        await sdk.get_tenant_token()


@pytest.mark.asyncio
async def test_async_store_is_awaited():
    store = AsyncStore()
    sdk = fdk("stage").storage_adapter(store)

    await sdk.set_token(Realm.ADMIN, "tkn")
    assert await sdk.get_best_token() == "tkn"

    await sdk.remove_token(Realm.ADMIN)
    assert store.tokens == {}


# --- login / logout --------------------------------------------------------- #


@pytest.mark.asyncio
@respx.mock
async def test_login_admin_stores_token_under_env(caplog):
    respx.post(f"{ACCOUNTS}/auth/login").mock(
        return_value=httpx.Response(200, json={"token": "admin-token"})
    )
    store = MemoryTokenStore()
    sdk = fdk("stage").storage_adapter(store)

    with caplog.at_level("INFO", logger="ec_fdk.sdk"):
        res = await sdk.login_admin("a@b.c", "pw")

    assert res == {"token": "admin-token"}
    assert store.get("stage") == "admin-token"
    record = next(r for r in caplog.records if r.getMessage() == "auth.login")
    assert record.realm == "admin"
    assert not hasattr(record, "password")


@pytest.mark.asyncio
@respx.mock
async def test_login_tenant_stores_token_under_short_id():
    respx.post(
        "https://datamanager.cachena.entrecode.de/api/83cc6374/_auth/login"
    ).mock(return_value=httpx.Response(200, json={"token": "tenant-token"}))
    store = AsyncStore()
    sdk = fdk("stage").dm("83cc6374").storage_adapter(store)

    await sdk.login_tenant("a@b.c", "pw")

    assert store.tokens == {"83cc6374": "tenant-token"}


@pytest.mark.asyncio
async def test_login_without_store_fails_before_request():
    with pytest.raises(NoStorageAdapterError):
        await fdk("stage").login_admin("a@b.c", "pw")


@pytest.mark.asyncio
@respx.mock
async def test_logout_admin_uses_stored_token_then_removes_it():
    route = respx.post(f"{ACCOUNTS}/auth/logout").mock(
        return_value=httpx.Response(204)
    )
    store = MemoryTokenStore({"stage": "admin-token"})
    sdk = fdk("stage").storage_adapter(store)

    await sdk.logout_admin()

    assert route.calls[0].request.headers["Authorization"] == "Bearer admin-token"
    assert store.get("stage") is None


@pytest.mark.asyncio
@respx.mock
async def test_logout_removes_token_even_if_remote_fails():
    respx.post(f"{ACCOUNTS}/auth/logout").mock(
        return_value=httpx.Response(401, json={"title": "expired"})
    )
    store = MemoryTokenStore({"stage": "admin-token"})

    with pytest.raises(ApiError):
        await fdk("stage").storage_adapter(store).logout_admin()

    assert len(store) == 0


# --- terminals -------------------------------------------------------------- #


@pytest.mark.asyncio
@respx.mock
async def test_entry_list_end_to_end_url():
    route = respx.get(MUFFIN).mock(
        return_value=httpx.Response(200, json=_entries([{"id": "1"}]))
    )

    result = await fdk("stage").dm("83cc6374").model("muffin").entry_list()

    assert str(route.calls[0].request.url) == (
        "https://datamanager.cachena.entrecode.de/api/83cc6374/muffin"
        "?_list=true&page=1&size=50"
    )
    assert "Authorization" not in route.calls[0].request.headers
    assert result["items"] == [{"id": "1"}]


@pytest.mark.asyncio
@respx.mock
async def test_terminal_attaches_best_token():
    route = respx.get(MUFFIN).mock(return_value=httpx.Response(200, json={"id": "e1"}))
    store = MemoryTokenStore({"83cc6374": "tenant"})
    sdk = fdk("stage").storage_adapter(store).dm("83cc6374").model("muffin")

    await sdk.get_entry("e1")

    assert route.calls[0].request.headers["Authorization"] == "Bearer tenant"
    # the builder itself never learns the token
    assert sdk.config.token is None


@pytest.mark.asyncio
@respx.mock
async def test_clean_strips_hal_from_list_items():
    respx.get(MUFFIN).mock(
        return_value=httpx.Response(
            200, json=_entries([{"id": "1", "_links": {"self": {}}, "_embedded": {}}])
        )
    )

    result = await fdk("stage").dm("83cc6374").model("muffin").clean().entries()

    assert result["items"] == [{"id": "1"}]


@pytest.mark.asyncio
@respx.mock
async def test_entry_id_from_chain_or_argument():
    route = respx.get(MUFFIN).mock(return_value=httpx.Response(200, json={"id": "x"}))
    chain = fdk("stage").dm("83cc6374").model("muffin").entry_id("from-chain")

    await chain.get_entry()
    await chain.get_entry("from-arg")

    assert route.calls[0].request.url.params["_id"] == "from-chain"
    assert route.calls[1].request.url.params["_id"] == "from-arg"


@pytest.mark.asyncio
@respx.mock(assert_all_called=False)
async def test_edit_entry_safe_requires_modified():
    route = respx.put(MUFFIN).mock(return_value=httpx.Response(200, json={}))
    chain = fdk("stage").dm("83cc6374").model("muffin")

    with pytest.raises(MissingConfigurationError):
        await chain.edit_entry_safe("e1", {"name": "x"})

    assert route.call_count == 0


@pytest.mark.asyncio
@respx.mock
async def test_edit_entry_safe_sends_precondition():
    route = respx.put(MUFFIN).mock(return_value=httpx.Response(200, json={}))
    chain = fdk("stage").dm("83cc6374").model("muffin")

    await chain.edit_entry_safe(
        "e1", {"name": "x", "_modified": "2024-01-02T03:04:05.000Z"}
    )

    headers = route.calls[0].request.headers
    assert headers["If-Unmodified-Since"] == "Tue, 02 Jan 2024 03:04:05 GMT"


@pytest.mark.asyncio
@respx.mock
async def test_map_entries_through_builder():
    respx.get(MUFFIN).mock(
        return_value=httpx.Response(200, json=_entries([{"id": "1"}, {"id": "2"}]))
    )

    ids = await fdk("stage").dm("83cc6374").model("muffin").map_entries(
        lambda entry: entry["id"]
    )

    assert ids == ["1", "2"]


@pytest.mark.asyncio
@respx.mock
async def test_model_list_uses_chain_dm_id():
    route = respx.get("https://datamanager.cachena.entrecode.de/model").mock(
        return_value=httpx.Response(200, json={"count": 0, "total": 0})
    )

    await fdk("stage").dm_id("uuid").model_list({"size": 5})

    assert route.calls[0].request.url.params["dataManagerID"] == "uuid"
    assert route.calls[0].request.url.params["size"] == "5"


# --- act -------------------------------------------------------------------- #


def test_action_name_normalizes_camel_case():
    assert action_name("entryList") == "entry_list"
    assert action_name("editDmClient") == "edit_dm_client"
    assert action_name("get_entry") == "get_entry"


@pytest.mark.asyncio
@respx.mock
async def test_act_dispatches_by_name():
    respx.get(MUFFIN).mock(return_value=httpx.Response(200, json=_entries([])))

    result = await act(
        {
            "action": "entryList",
            "env": "stage",
            "dmShortID": "83cc6374",
            "model": "muffin",
        }
    )

    assert result == {"count": 0, "total": 0, "items": []}


@pytest.mark.asyncio
async def test_act_unknown_action_lists_valid_names():
    with pytest.raises(UnknownActionError) as exc:
        await act({"action": "bakeMuffin", "env": "stage"})

    assert "entry_list" in exc.value.valid
    assert '"bakeMuffin" does not exist!' in str(exc.value)
    assert isinstance(exc.value, LookupError)


@pytest.mark.asyncio
async def test_act_requires_action():
    with pytest.raises(MissingConfigurationError):
        await act({"env": "stage"})


@pytest.mark.asyncio
@respx.mock
async def test_builder_act_uses_best_token():
    route = respx.get(MUFFIN).mock(return_value=httpx.Response(200, json={"id": "e1"}))
    sdk = fdk("stage").dm("83cc6374").model("muffin").token("tkn")

    await sdk.act("getEntry", entry_id="e1")

    assert route.calls[0].request.headers["Authorization"] == "Bearer tkn"
