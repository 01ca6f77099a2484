"""Config bag threaded through every builder chain and resource operation."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field


class FdkConfig(BaseModel):
    """
    Immutable key/value record describing one request.

    Known keys are typed fields (snake_case, with the camelCase aliases the
    API documentation uses); anything else is kept as an extra.
    """

    env: Optional[str] = None
    dm_short_id: Optional[str] = Field(default=None, alias="dmShortID")
    dm_id: Optional[str] = Field(default=None, alias="dmID")
    model: Optional[str] = None
    entry_id: Optional[str] = Field(default=None, alias="entryID")
    asset_group: Optional[str] = Field(default=None, alias="assetGroup")
    asset_id: Optional[str] = Field(default=None, alias="assetID")
    token: Optional[str] = None
    storage_adapter: Optional[Any] = Field(default=None, alias="storageAdapter")

    # generic / raw calls
    resource: Optional[str] = None
    subdomain: Optional[str] = None
    route: Optional[str] = None
    raw_res: bool = Field(default=False, alias="rawRes")

    # call arguments
    action: Optional[str] = None
    options: Optional[Dict[str, Any]] = None
    value: Optional[Any] = None
    safe_put: bool = Field(default=False, alias="safePut")
    with_metadata: bool = Field(default=False, alias="withMetadata")
    file: Optional[Any] = None
    files: Optional[Any] = None
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    # admin identifiers
    model_id: Optional[str] = Field(default=None, alias="modelID")
    asset_group_id: Optional[str] = Field(default=None, alias="assetGroupID")
    client_id: Optional[str] = Field(default=None, alias="clientID")
    role_id: Optional[str] = Field(default=None, alias="roleID")
    account_id: Optional[str] = Field(default=None, alias="accountID")
    group_id: Optional[str] = Field(default=None, alias="groupID")
    invite_id: Optional[str] = Field(default=None, alias="inviteID")
    access_token_id: Optional[str] = Field(default=None, alias="accessTokenID")

    clean: bool = Field(default=False, alias="_clean")
    http: Optional[httpx.AsyncClient] = Field(default=None, exclude=True)

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        arbitrary_types_allowed=True,
        protected_namespaces=(),
    )

    def merge(
        self, partial: Optional[Mapping[str, Any]] = None, **fields: Any
    ) -> "FdkConfig":
        """Return a new bag with partial shallow-merged over this one."""
        update: Dict[str, Any] = {}
        for key, value in {**(partial or {}), **fields}.items():
            update[_FIELD_BY_ALIAS.get(key, key)] = value
        return self.model_copy(update=update)


_FIELD_BY_ALIAS: Dict[str, str] = {
    field.alias: name
    for name, field in FdkConfig.model_fields.items()
    if field.alias
}


def as_config(config: FdkConfig | Mapping[str, Any] | None) -> FdkConfig:
    if isinstance(config, FdkConfig):
        return config
    return FdkConfig.model_validate(dict(config or {}))


__all__ = ["FdkConfig", "as_config"]
