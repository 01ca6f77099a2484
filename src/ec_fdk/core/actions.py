"""Name -> resource operation registry behind act()."""

from __future__ import annotations

import re
from typing import Any, Awaitable, Callable, Dict, Mapping, Union

from . import admin, assets, auth, entries
from .context import FdkConfig, as_config
from .errors import UnknownActionError
from .observability import log_event
from .util import expect

Action = Callable[[FdkConfig], Awaitable[Any]]

ACTIONS: Dict[str, Action] = {
    # entries
    "public_api": entries.public_api,
    "entry_list": entries.entry_list,
    "get_entry": entries.get_entry,
    "create_entry": entries.create_entry,
    "edit_entry": entries.edit_entry,
    "delete_entry": entries.delete_entry,
    "get_schema": entries.get_schema,
    # assets
    "asset_list": assets.asset_list,
    "get_asset": assets.get_asset,
    "create_asset": assets.create_asset,
    "create_assets": assets.create_assets,
    "delete_asset": assets.delete_asset,
    "edit_asset": admin.edit_asset,
    # auth
    "login_admin": auth.login_admin,
    "login_tenant": auth.login_tenant,
    "logout_admin": auth.logout_admin,
    "logout_tenant": auth.logout_tenant,
}
ACTIONS.update({name: getattr(admin, name) for name in admin.__all__})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def action_name(name: str) -> str:
    """
    Normalize camelCase action names.
    Example: action_name("entryList") -> 'entry_list'
    """
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def resolve_action(name: str) -> Action:
    fn = ACTIONS.get(action_name(name))
    if fn is None:
        raise UnknownActionError(name, ACTIONS)
    return fn


async def act(config: Union[FdkConfig, Mapping[str, Any]]) -> Any:
    """
    Run the operation named by config.action with the rest of the bag.
    Example: await act({"action": "entryList", "env": "stage",
                        "dmShortID": "83cc6374", "model": "muffin"})
    """
    config = as_config(config)
    expect(action=config.action)
    fn = resolve_action(config.action)
    log_event("fdk.act", action=action_name(config.action), env=config.env)
    return await fn(config)


__all__ = ["ACTIONS", "act", "action_name", "resolve_action"]
