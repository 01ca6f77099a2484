"""
Login/logout against the two token realms.

- admin realm: ec accounts server, tokens keyed by env
- tenant realm: a datamanager's public API, tokens keyed by dmShortID
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Union

from .context import FdkConfig, as_config
from .fetcher import JSON_HEADERS, fetcher
from .util import api_url, expect, query

ConfigLike = Union[FdkConfig, Mapping[str, Any]]


class Realm(str, Enum):
    ADMIN = "admin"
    TENANT = "tenant"


def admin_auth_key(config: ConfigLike) -> str:
    config = as_config(config)
    expect(env=config.env)
    return config.env


def tenant_auth_key(config: ConfigLike) -> str:
    config = as_config(config)
    expect(dm_short_id=config.dm_short_id)
    return config.dm_short_id


def auth_key(realm: Realm, config: ConfigLike) -> str:
    if Realm(realm) is Realm.ADMIN:
        return admin_auth_key(config)
    return tenant_auth_key(config)


async def login_admin(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, email=config.email, password=config.password)
    url = api_url("auth/login?clientID=rest", config.env, "accounts")
    return await fetcher(
        url,
        method="POST",
        json={"email": config.email, "password": config.password},
        headers=JSON_HEADERS,
        http=config.http,
    )


async def login_tenant(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        email=config.email,
        password=config.password,
    )
    url = api_url(f"api/{config.dm_short_id}/_auth/login?clientID=rest", config.env)
    return await fetcher(
        url,
        method="POST",
        json={"email": config.email, "password": config.password},
        headers=JSON_HEADERS,
        http=config.http,
    )


async def logout_admin(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(env=config.env, token=config.token)
    url = api_url("auth/logout?clientID=rest", config.env, "accounts")
    return await fetcher(
        url, token=config.token, raw_res=True, method="POST", http=config.http
    )


async def logout_tenant(config: ConfigLike) -> Any:
    """The tenant API takes the token as a query parameter, not a header."""
    config = as_config(config)
    expect(env=config.env, dm_short_id=config.dm_short_id, token=config.token)
    q = query({"clientID": "rest", "token": config.token})
    url = api_url(f"api/{config.dm_short_id}/_auth/logout?{q}", config.env)
    return await fetcher(url, raw_res=True, method="POST", http=config.http)


__all__ = [
    "Realm",
    "admin_auth_key",
    "tenant_auth_key",
    "auth_key",
    "login_admin",
    "login_tenant",
    "logout_admin",
    "logout_tenant",
]
