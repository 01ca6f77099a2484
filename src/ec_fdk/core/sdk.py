"""
Fluent, immutable request builder.

Every setter returns a new Fdk; terminals resolve the best token, merge it with
the call arguments into a throwaway config and run one resource operation.

Example:
    sdk = fdk("stage").storage_adapter(MemoryTokenStore())
    muffins = await sdk.dm("83cc6374").model("muffin").entry_list({"size": 10})
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

import httpx

from . import admin, assets, auth, entries
from .actions import action_name, resolve_action
from .auth import Realm, auth_key
from .context import FdkConfig, as_config
from .errors import MissingConfigurationError, NoStorageAdapterError
from .hal import ListEnvelope, clean_result
from .observability import log_event
from .storage import TokenStore, maybe_await
from .util import expect

log = logging.getLogger("ec_fdk.sdk")

Operation = Callable[[FdkConfig], Awaitable[Any]]


def _given(**params: Any) -> Dict[str, Any]:
    # unset call arguments fall back to what the chain already carries
    return {k: v for k, v in params.items() if v is not None}


class Fdk:
    def __init__(self, config: Union[FdkConfig, Mapping[str, Any], None] = None):
        self.config = as_config(config)

    def __repr__(self) -> str:
        fields = self.config.model_dump(
            exclude_none=True, exclude={"token", "password", "storage_adapter"}
        )
        return f"Fdk({fields!r})"

    # --- copy-on-write setters -------------------------------------------- #

    def set(self, partial: Optional[Mapping[str, Any]] = None, **fields: Any) -> Fdk:
        return Fdk(self.config.merge(partial, **fields))

    def env(self, env: str) -> Fdk:
        return self.set(env=env)

    def model(self, model: str) -> Fdk:
        return self.set(model=model)

    def token(self, token: str) -> Fdk:
        return self.set(token=token)

    def dm_short_id(self, dm_short_id: str) -> Fdk:
        return self.set(dm_short_id=dm_short_id)

    def dm(self, dm_short_id: str) -> Fdk:
        return self.set(dm_short_id=dm_short_id)

    def dm_id(self, dm_id: str) -> Fdk:
        return self.set(dm_id=dm_id)

    def entry_id(self, entry_id: str) -> Fdk:
        return self.set(entry_id=entry_id)

    def entry(self, entry_id: str) -> Fdk:
        return self.set(entry_id=entry_id)

    def asset_group(self, asset_group: str) -> Fdk:
        return self.set(asset_group=asset_group)

    def asset_id(self, asset_id: str) -> Fdk:
        return self.set(asset_id=asset_id)

    def asset(self, asset_id: str) -> Fdk:
        return self.set(asset_id=asset_id)

    def subdomain(self, subdomain: str) -> Fdk:
        return self.set(subdomain=subdomain)

    def resource(self, resource: str) -> Fdk:
        return self.set(resource=resource)

    def route(self, route: str) -> Fdk:
        return self.set(route=route)

    def storage_adapter(self, storage_adapter: TokenStore) -> Fdk:
        return self.set(storage_adapter=storage_adapter)

    def http(self, client: httpx.AsyncClient) -> Fdk:
        return self.set(http=client)

    def clean(self, flag: bool = True) -> Fdk:
        """Strip _links/_embedded from results of later terminals."""
        return self.set(clean=flag)

    # --- tokens ----------------------------------------------------------- #

    def _store(self) -> TokenStore:
        store = self.config.storage_adapter
        if store is None:
            raise NoStorageAdapterError(
                "no storage_adapter set; call .storage_adapter(store) first"
            )
        return store

    async def get_token(self, realm: Realm) -> Optional[str]:
        if self.config.token:
            return self.config.token
        store = self._store()
        return await maybe_await(store.get(auth_key(realm, self.config)))

    async def get_admin_token(self) -> Optional[str]:
        return await self.get_token(Realm.ADMIN)

    async def get_tenant_token(self) -> Optional[str]:
        return await self.get_token(Realm.TENANT)

    async def set_token(self, realm: Realm, token: str) -> None:
        store = self._store()
        await maybe_await(store.set(auth_key(realm, self.config), token))

    async def remove_token(self, realm: Realm) -> None:
        store = self._store()
        await maybe_await(store.remove(auth_key(realm, self.config)))

    async def _try_token(self, realm: Realm) -> Optional[str]:
        try:
            return await self.get_token(realm)
        except (NoStorageAdapterError, MissingConfigurationError):
            return None

    async def get_best_token(self) -> Optional[str]:
        """Admin token if there is one, else the tenant token, else None."""
        return await self._try_token(Realm.ADMIN) or await self._try_token(
            Realm.TENANT
        )

    async def has_admin_token(self) -> bool:
        return bool(await self._try_token(Realm.ADMIN))

    async def has_tenant_token(self) -> bool:
        return bool(await self._try_token(Realm.TENANT))

    async def has_any_token(self) -> bool:
        return bool(await self.get_best_token())

    async def _login(self, realm: Realm, email: str, password: str) -> Any:
        store = self._store()
        key = auth_key(realm, self.config)
        login = auth.login_admin if realm is Realm.ADMIN else auth.login_tenant
        res = await login(self.config.merge(email=email, password=password))
        await maybe_await(store.set(key, res["token"]))
        log_event("auth.login", logger=log, realm=realm.value, env=self.config.env)
        return res

    async def _logout(self, realm: Realm) -> Any:
        store = self._store()
        key = auth_key(realm, self.config)
        token = await self.get_token(realm)
        logout = auth.logout_admin if realm is Realm.ADMIN else auth.logout_tenant
        try:
            return await logout(self.config.merge(token=token))
        finally:
            await maybe_await(store.remove(key))
            log_event(
                "auth.logout", logger=log, realm=realm.value, env=self.config.env
            )

    async def login_admin(self, email: str, password: str) -> Any:
        return await self._login(Realm.ADMIN, email, password)

    async def login_tenant(self, email: str, password: str) -> Any:
        return await self._login(Realm.TENANT, email, password)

    async def logout_admin(self) -> Any:
        return await self._logout(Realm.ADMIN)

    async def logout_tenant(self) -> Any:
        return await self._logout(Realm.TENANT)

    # --- dispatch --------------------------------------------------------- #

    async def _config_with_token(self, **params: Any) -> FdkConfig:
        token = await self.get_best_token()
        return self.config.merge(params, token=token)

    async def _run(self, operation: Operation, **params: Any) -> Any:
        config = await self._config_with_token(**params)
        result = await operation(config)
        return clean_result(result) if config.clean else result

    async def act(self, action: Optional[str] = None, **params: Any) -> Any:
        """Run a named operation against this chain's config."""
        name = action or self.config.action
        expect(action=name)
        fn = resolve_action(name)
        log_event("fdk.act", logger=log, action=action_name(name), env=self.config.env)
        return await self._run(fn, action=name, **params)

    # --- entries ---------------------------------------------------------- #

    async def public_api(self) -> Any:
        return await self._run(entries.public_api)

    async def entry_list(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self._run(entries.entry_list, **_given(options=options))

    async def entries(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self.entry_list(options)

    async def map_entries(
        self,
        fn: Callable[[Any], Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> List[Any]:
        config = await self._config_with_token(**_given(options=options))
        return await entries.map_entries(config, fn)

    async def get_entry(self, entry_id: Optional[str] = None) -> Any:
        return await self._run(entries.get_entry, **_given(entry_id=entry_id))

    async def create_entry(self, value: Dict[str, Any]) -> Any:
        return await self._run(entries.create_entry, value=value)

    async def edit_entry(
        self, entry_id: Optional[str] = None, value: Optional[Dict[str, Any]] = None
    ) -> Any:
        params = _given(entry_id=entry_id, value=value)
        return await self._run(entries.edit_entry, **params)

    async def edit_entry_safe(
        self, entry_id: Optional[str] = None, value: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Edit only if the entry is unchanged since value["_modified"]."""
        params = _given(entry_id=entry_id, value=value)
        return await self._run(entries.edit_entry, safe_put=True, **params)

    async def delete_entry(self, entry_id: Optional[str] = None) -> Any:
        return await self._run(entries.delete_entry, **_given(entry_id=entry_id))

    async def get_schema(self, with_metadata: bool = False) -> Dict[str, Any]:
        return await self._run(entries.get_schema, with_metadata=with_metadata)

    # --- assets ----------------------------------------------------------- #

    async def asset_list(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self._run(assets.asset_list, **_given(options=options))

    async def assets(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self.asset_list(options)

    async def get_asset(self, asset_id: Optional[str] = None) -> Any:
        return await self._run(assets.get_asset, **_given(asset_id=asset_id))

    async def create_asset(
        self,
        file: Any,
        name: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        params = _given(name=name, options=options)
        return await self._run(assets.create_asset, file=file, **params)

    async def create_assets(
        self, files: List[Any], options: Optional[Mapping[str, Any]] = None
    ) -> List[Any]:
        params = _given(options=options)
        return await self._run(assets.create_assets, files=files, **params)

    async def edit_asset(
        self, asset_id: Optional[str] = None, value: Optional[Dict[str, Any]] = None
    ) -> Any:
        params = _given(asset_id=asset_id, value=value)
        return await self._run(admin.edit_asset, **params)

    async def delete_asset(self, asset_id: Optional[str] = None) -> None:
        return await self._run(assets.delete_asset, **_given(asset_id=asset_id))

    # --- datamanagers & models -------------------------------------------- #

    async def dm_list(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self._run(admin.dm_list, **_given(options=options))

    async def get_datamanager(self, dm_id: Optional[str] = None) -> Any:
        return await self._run(admin.get_datamanager, **_given(dm_id=dm_id))

    async def create_datamanager(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_datamanager, value=value)

    async def edit_datamanager(
        self, dm_id: Optional[str] = None, value: Optional[Dict[str, Any]] = None
    ) -> Any:
        params = _given(dm_id=dm_id, value=value)
        return await self._run(admin.edit_datamanager, **params)

    async def delete_datamanager(self, dm_id: Optional[str] = None) -> Any:
        return await self._run(admin.delete_datamanager, **_given(dm_id=dm_id))

    async def model_list(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self._run(admin.model_list, **_given(options=options))

    async def create_model(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_model, value=value)

    async def edit_model(self, model_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(admin.edit_model, model_id=model_id, value=value)

    async def delete_model(self, model_id: str) -> Any:
        return await self._run(admin.delete_model, model_id=model_id)

    async def create_template(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_template, value=value)

    async def create_asset_group(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_asset_group, value=value)

    async def edit_asset_group(
        self, asset_group_id: str, value: Dict[str, Any]
    ) -> Any:
        return await self._run(
            admin.edit_asset_group, asset_group_id=asset_group_id, value=value
        )

    # --- datamanager clients, roles, accounts ----------------------------- #

    async def edit_dm_client(self, client_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(admin.edit_dm_client, client_id=client_id, value=value)

    async def create_role(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_role, value=value)

    async def edit_role(self, role_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(admin.edit_role, role_id=role_id, value=value)

    async def delete_role(self, role_id: str) -> Any:
        return await self._run(admin.delete_role, role_id=role_id)

    async def edit_dm_account(self, account_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(
            admin.edit_dm_account, account_id=account_id, value=value
        )

    async def delete_dm_account(self, account_id: str) -> Any:
        return await self._run(admin.delete_dm_account, account_id=account_id)

    async def get_stats(self, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._run(admin.get_stats, **_given(options=options))

    async def get_history(self, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._run(admin.get_history, **_given(options=options))

    # --- account server --------------------------------------------------- #

    async def create_account_client(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_account_client, value=value)

    async def edit_account_client(
        self, client_id: str, value: Dict[str, Any]
    ) -> Any:
        return await self._run(
            admin.edit_account_client, client_id=client_id, value=value
        )

    async def delete_account_client(self, client_id: str) -> Any:
        return await self._run(admin.delete_account_client, client_id=client_id)

    async def create_group(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_group, value=value)

    async def edit_group(self, group_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(admin.edit_group, group_id=group_id, value=value)

    async def delete_group(self, group_id: str) -> Any:
        return await self._run(admin.delete_group, group_id=group_id)

    async def create_invite(self, value: Dict[str, Any]) -> Any:
        return await self._run(admin.create_invite, value=value)

    async def edit_invite(self, invite_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(admin.edit_invite, invite_id=invite_id, value=value)

    async def delete_invite(self, invite_id: str) -> Any:
        return await self._run(admin.delete_invite, invite_id=invite_id)

    async def edit_account(self, account_id: str, value: Dict[str, Any]) -> Any:
        return await self._run(admin.edit_account, account_id=account_id, value=value)

    async def list_tokens(self, account_id: str) -> List[Any]:
        return await self._run(admin.list_tokens, account_id=account_id)

    async def create_token(self, account_id: str) -> Any:
        return await self._run(admin.create_token, account_id=account_id)

    async def delete_token(self, account_id: str, access_token_id: str) -> Any:
        return await self._run(
            admin.delete_token,
            account_id=account_id,
            access_token_id=access_token_id,
        )

    # --- generic ---------------------------------------------------------- #

    async def resource_list(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> ListEnvelope:
        return await self._run(admin.resource_list, **_given(options=options))

    async def resource_get(self, options: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._run(admin.resource_get, **_given(options=options))

    async def resource_edit(
        self, value: Dict[str, Any], options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        params = _given(options=options)
        return await self._run(admin.resource_edit, value=value, **params)

    async def resource_delete(
        self, options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        return await self._run(admin.resource_delete, **_given(options=options))

    async def raw(
        self, options: Optional[Mapping[str, Any]] = None, **fetch_options: Any
    ) -> Any:
        """
        Call <subdomain>/<route> directly; fetch_options (method, json,
        headers, raw_res) go to the fetcher.
        """
        config = await self._config_with_token(**_given(options=options))
        return await admin.raw(config, **fetch_options)


def fdk(env: str = "stage", **config: Any) -> Fdk:
    """Root builder for an environment."""
    return Fdk({"env": env, **config})


__all__ = ["Fdk", "fdk"]
