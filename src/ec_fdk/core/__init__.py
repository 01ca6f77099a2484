"""Core domain surface for ec-fdk (transport-agnostic)."""

from .actions import ACTIONS, act
from .auth import Realm, admin_auth_key, tenant_auth_key
from .config import EnvConfig, fdk_from_env, load_env_config
from .context import FdkConfig, as_config
from .errors import (
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
from .fetcher import fetcher
from .hal import ListEnvelope, clean_result, get_embedded, get_link, get_link_href
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)
from .sdk import Fdk, fdk
from .storage import FileTokenStore, MemoryTokenStore, TokenStore
from .util import APIS, api_url, expect, query

__all__ = [
    # Builder
    "Fdk",
    "fdk",
    "FdkConfig",
    "as_config",
    "act",
    "ACTIONS",
    # Tokens
    "Realm",
    "admin_auth_key",
    "tenant_auth_key",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
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
    # URL / fetch / HAL
    "APIS",
    "api_url",
    "query",
    "expect",
    "fetcher",
    "ListEnvelope",
    "get_link",
    "get_link_href",
    "get_embedded",
    "clean_result",
    # Config helpers
    "EnvConfig",
    "load_env_config",
    "fdk_from_env",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
