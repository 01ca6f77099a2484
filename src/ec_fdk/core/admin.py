"""
Platform (admin) resources: datamanagers, models, roles, clients, accounts,
groups, invites, tokens, plus the generic resource/raw calls.
Most of these need an admin-realm token.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from .context import FdkConfig, as_config
from .fetcher import JSON_HEADERS, fetcher
from .hal import (
    ListEnvelope,
    embedded_items,
    first_relation,
    get_embedded,
    list_envelope,
)
from .util import api_url, expect, query

ADMIN_LIST_OPTIONS = {"size": 25, "page": 1, "_list": True}

ConfigLike = Union[FdkConfig, Mapping[str, Any]]


def _route(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    q = query(params or {})
    return f"{path}?{q}" if q else path


async def _send(url: str, config: FdkConfig, method: str, value: Any = None) -> Any:
    return await fetcher(
        url,
        token=config.token,
        method=method,
        json=value,
        headers=JSON_HEADERS,
        http=config.http,
    )


async def _delete(url: str, config: FdkConfig) -> Any:
    return await fetcher(
        url,
        token=config.token,
        raw_res=True,
        method="DELETE",
        headers=JSON_HEADERS,
        http=config.http,
    )


# --- Datamanagers ---------------------------------------------------------- #


async def get_datamanager(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id)
    url = api_url(_route("", {"dataManagerID": config.dm_id}), config.env)
    return await fetcher(url, token=config.token, http=config.http)


async def dm_list(config: ConfigLike) -> ListEnvelope:
    config = as_config(config)
    expect(env=config.env)
    options = {**ADMIN_LIST_OPTIONS, **(config.options or {})}
    url = api_url(_route("", options), config.env)
    payload = await fetcher(url, token=config.token, http=config.http)
    return list_envelope(payload, "ec:datamanager")


async def create_datamanager(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, value=config.value)
    return await _send(api_url("", config.env), config, "POST", config.value)


async def edit_datamanager(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, value=config.value)
    url = api_url(_route("", {"dataManagerID": config.dm_id}), config.env)
    return await _send(url, config, "PUT", config.value)


async def delete_datamanager(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id)
    url = api_url(_route("", {"dataManagerID": config.dm_id}), config.env)
    return await _delete(url, config)


# --- Models ---------------------------------------------------------------- #


async def model_list(config: ConfigLike) -> ListEnvelope:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id)
    options = {
        **ADMIN_LIST_OPTIONS,
        "dataManagerID": config.dm_id,
        **(config.options or {}),
    }
    url = api_url(_route("model", options), config.env)
    payload = await fetcher(url, token=config.token, http=config.http)
    return list_envelope(payload, "ec:model")


async def create_model(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, value=config.value)
    url = api_url(_route("model", {"dataManagerID": config.dm_id}), config.env)
    return await _send(url, config, "POST", config.value)


async def edit_model(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env, dm_id=config.dm_id, model_id=config.model_id, value=config.value
    )
    params = {"dataManagerID": config.dm_id, "modelID": config.model_id}
    url = api_url(_route("model", params), config.env)
    return await _send(url, config, "PUT", config.value)


async def delete_model(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, model_id=config.model_id)
    params = {"dataManagerID": config.dm_id, "modelID": config.model_id}
    return await _delete(api_url(_route("model", params), config.env), config)


# --- Templates / asset groups / asset metadata ----------------------------- #


async def create_template(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, value=config.value)
    return await _send(api_url("template", config.env), config, "POST", config.value)


async def create_asset_group(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, value=config.value)
    url = api_url(_route("assetgroup", {"dataManagerID": config.dm_id}), config.env)
    return await _send(url, config, "POST", config.value)


async def edit_asset_group(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_id=config.dm_id,
        asset_group_id=config.asset_group_id,
        value=config.value,
    )
    params = {"dataManagerID": config.dm_id, "assetGroupID": config.asset_group_id}
    url = api_url(_route("assetgroup", params), config.env)
    return await _send(url, config, "PUT", config.value)


async def edit_asset(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        asset_group=config.asset_group,
        asset_id=config.asset_id,
        value=config.value,
    )
    url = api_url(
        f"a/{config.dm_short_id}/{config.asset_group}/{config.asset_id}", config.env
    )
    return await _send(url, config, "PUT", config.value)


# --- Datamanager clients, roles and accounts ------------------------------ #


async def edit_dm_client(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_id=config.dm_id,
        client_id=config.client_id,
        value=config.value,
    )
    params = {"dataManagerID": config.dm_id, "clientID": config.client_id}
    url = api_url(_route("client", params), config.env)
    return await _send(url, config, "PUT", config.value)


async def create_role(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, value=config.value)
    url = api_url(_route("role", {"dataManagerID": config.dm_id}), config.env)
    return await _send(url, config, "POST", config.value)


async def edit_role(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env, dm_id=config.dm_id, role_id=config.role_id, value=config.value
    )
    params = {"dataManagerID": config.dm_id, "roleID": config.role_id}
    url = api_url(_route("role", params), config.env)
    return await _send(url, config, "PUT", config.value)


async def delete_role(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, role_id=config.role_id)
    params = {"dataManagerID": config.dm_id, "roleID": config.role_id}
    return await _delete(api_url(_route("role", params), config.env), config)


async def edit_dm_account(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_id=config.dm_id,
        account_id=config.account_id,
        value=config.value,
    )
    params = {"dataManagerID": config.dm_id, "accountID": config.account_id}
    url = api_url(_route("account", params), config.env)
    return await _send(url, config, "PUT", config.value)


async def delete_dm_account(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, dm_id=config.dm_id, account_id=config.account_id)
    params = {"dataManagerID": config.dm_id, "accountID": config.account_id}
    return await _delete(api_url(_route("account", params), config.env), config)


# --- Stats / history ------------------------------------------------------- #


async def get_stats(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env)
    url = api_url(_route("stats", config.options), config.env)
    return await fetcher(url, token=config.token, http=config.http)


async def get_history(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env)
    url = api_url(_route("entries", config.options), config.env, "dm-history")
    return await fetcher(url, token=config.token, http=config.http)


# --- Account server: clients, groups, invites, accounts, tokens ----------- #


async def create_account_client(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, value=config.value)
    url = api_url("client", config.env, "accounts")
    return await _send(url, config, "POST", config.value)


async def edit_account_client(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, client_id=config.client_id, value=config.value)
    params = {"clientID": config.client_id}
    url = api_url(_route("client", params), config.env, "accounts")
    return await _send(url, config, "PUT", config.value)


async def delete_account_client(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, client_id=config.client_id)
    params = {"clientID": config.client_id}
    url = api_url(_route("client", params), config.env, "accounts")
    return await _delete(url, config)


async def create_group(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, value=config.value)
    url = api_url("group", config.env, "accounts")
    return await _send(url, config, "POST", config.value)


async def edit_group(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, group_id=config.group_id, value=config.value)
    url = api_url(_route("group", {"groupID": config.group_id}), config.env, "accounts")
    return await _send(url, config, "PUT", config.value)


async def delete_group(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, group_id=config.group_id)
    url = api_url(_route("group", {"groupID": config.group_id}), config.env, "accounts")
    return await _delete(url, config)


async def create_invite(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, value=config.value)
    url = api_url("invite", config.env, "accounts")
    res = await _send(url, config, "POST", config.value)
    invite = get_embedded(res, "ec:invite")
    return invite if invite is not None else res


async def edit_invite(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, invite_id=config.invite_id, value=config.value)
    params = {"invite": config.invite_id}
    url = api_url(_route("invite", params), config.env, "accounts")
    return await _send(url, config, "PUT", config.value)


async def delete_invite(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, invite_id=config.invite_id)
    params = {"invite": config.invite_id}
    url = api_url(_route("invite", params), config.env, "accounts")
    return await _delete(url, config)


async def edit_account(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, account_id=config.account_id, value=config.value)
    url = api_url(
        _route("account", {"accountID": config.account_id}), config.env, "accounts"
    )
    return await _send(url, config, "PUT", config.value)


async def list_tokens(config: ConfigLike) -> List[Any]:
    config = as_config(config)
    expect(env=config.env, account_id=config.account_id)
    url = api_url(
        _route("account/tokens", {"accountID": config.account_id}),
        config.env,
        "accounts",
    )
    payload = await fetcher(url, token=config.token, http=config.http)
    return embedded_items(payload, "ec:account/token")


async def create_token(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, account_id=config.account_id)
    url = api_url(
        _route("account/tokens", {"accountID": config.account_id}),
        config.env,
        "accounts",
    )
    return await _send(url, config, "POST")


async def delete_token(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        account_id=config.account_id,
        access_token_id=config.access_token_id,
    )
    params = {"accessTokenID": config.access_token_id, "accountID": config.account_id}
    url = api_url(_route("account/tokens", params), config.env, "accounts")
    return await _delete(url, config)


# --- Generic resources ----------------------------------------------------- #


async def resource_list(config: ConfigLike) -> ListEnvelope:
    """
    List any HAL collection: <subdomain>/<resource>?_list=true&...
    Items are taken from the first relation under _embedded.
    """
    config = as_config(config)
    subdomain = config.subdomain or "datamanager"
    expect(env=config.env, resource=config.resource)
    options = {**ADMIN_LIST_OPTIONS, **(config.options or {})}
    url = api_url(_route(config.resource, options), config.env, subdomain)
    payload = await fetcher(url, token=config.token, http=config.http)
    relation = first_relation(payload)
    return list_envelope(payload, relation or "")


async def resource_get(config: ConfigLike) -> Any:
    config = as_config(config)
    subdomain = config.subdomain or "datamanager"
    expect(env=config.env, resource=config.resource)
    url = api_url(_route(config.resource, config.options), config.env, subdomain)
    return await fetcher(url, token=config.token, http=config.http)


async def resource_edit(config: ConfigLike) -> Any:
    config = as_config(config)
    subdomain = config.subdomain or "datamanager"
    expect(env=config.env, resource=config.resource, value=config.value)
    url = api_url(_route(config.resource, config.options), config.env, subdomain)
    return await _send(url, config, "PUT", config.value)


async def resource_delete(config: ConfigLike) -> Any:
    config = as_config(config)
    subdomain = config.subdomain or "datamanager"
    expect(env=config.env, resource=config.resource)
    url = api_url(_route(config.resource, config.options), config.env, subdomain)
    return await _delete(url, config)


async def raw(config: ConfigLike, **fetch_options: Any) -> Any:
    """
    Escape hatch for endpoints without a dedicated operation.
    Fetches https://<subdomain>(.cachena).entrecode.de/<route>?<options>;
    fetch_options (method, json, headers, ...) go to the fetcher as-is.
    Example: raw({"env": "stage", "route": "entries", "subdomain": "dm-history",
                  "options": {"size": 25, "dataManagerID": "x"}})
    """
    config = as_config(config)
    subdomain = config.subdomain or "datamanager"
    expect(env=config.env, route=config.route)
    url = api_url(_route(config.route, config.options), config.env, subdomain)
    fetch_options.setdefault("raw_res", config.raw_res)
    return await fetcher(url, token=config.token, http=config.http, **fetch_options)


__all__ = [
    "get_datamanager",
    "dm_list",
    "create_datamanager",
    "edit_datamanager",
    "delete_datamanager",
    "model_list",
    "create_model",
    "edit_model",
    "delete_model",
    "create_template",
    "create_asset_group",
    "edit_asset_group",
    "edit_asset",
    "edit_dm_client",
    "create_role",
    "edit_role",
    "delete_role",
    "edit_dm_account",
    "delete_dm_account",
    "get_stats",
    "get_history",
    "create_account_client",
    "edit_account_client",
    "delete_account_client",
    "create_group",
    "edit_group",
    "delete_group",
    "create_invite",
    "edit_invite",
    "delete_invite",
    "edit_account",
    "list_tokens",
    "create_token",
    "delete_token",
    "resource_list",
    "resource_get",
    "resource_edit",
    "resource_delete",
    "raw",
]
