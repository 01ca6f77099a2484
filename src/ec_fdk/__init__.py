"""ec_fdk package exports: the Fdk builder plus the flat-function API."""

from .core import admin
from .core.actions import act
from .core.assets import (
    asset_list,
    create_asset,
    create_assets,
    delete_asset,
    get_asset,
)
from .core.auth import (
    Realm,
    login_admin,
    login_tenant,
    logout_admin,
    logout_tenant,
)
from .core.context import FdkConfig
from .core.entries import (
    create_entry,
    delete_entry,
    delete_entry_object,
    edit_entry,
    edit_entry_object,
    entry_list,
    filter_options,
    get_entry,
    get_entry_asset,
    get_entry_env,
    get_entry_short_id,
    get_schema,
    map_entries,
    public_api,
)
from .core.errors import (
    ApiError,
    FdkError,
    MissingConfigurationError,
    NoStorageAdapterError,
    ResponseParseError,
    TransportError,
    UnknownActionError,
    UnknownEnvironmentError,
    UnknownSubdomainError,
)
from .core.sdk import Fdk, fdk
from .core.storage import FileTokenStore, MemoryTokenStore, TokenStore
from .core.util import api_url, query

__all__ = [
    # Builder
    "Fdk",
    "fdk",
    "FdkConfig",
    "act",
    # Tokens
    "Realm",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "login_admin",
    "login_tenant",
    "logout_admin",
    "logout_tenant",
    # Entries
    "public_api",
    "entry_list",
    "get_entry",
    "create_entry",
    "edit_entry",
    "delete_entry",
    "map_entries",
    "get_schema",
    "filter_options",
    "get_entry_short_id",
    "get_entry_env",
    "get_entry_asset",
    "edit_entry_object",
    "delete_entry_object",
    # Admin resources (ec_fdk.admin.dm_list, ...)
    "admin",
    # Assets
    "asset_list",
    "get_asset",
    "create_asset",
    "create_assets",
    "delete_asset",
    # URLs
    "api_url",
    "query",
    # Exceptions
    "FdkError",
    "MissingConfigurationError",
    "UnknownEnvironmentError",
    "UnknownSubdomainError",
    "ApiError",
    "TransportError",
    "ResponseParseError",
    "NoStorageAdapterError",
    "UnknownActionError",
]
