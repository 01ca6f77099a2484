"""URL construction and precondition helpers shared by all resource operations."""

from __future__ import annotations

from typing import Any, Dict, Mapping
from urllib.parse import quote

from .errors import (
    MissingConfigurationError,
    UnknownEnvironmentError,
    UnknownSubdomainError,
)

APIS: Dict[str, Dict[str, str]] = {
    "datamanager": {
        "live": "https://datamanager.entrecode.de/",
        "stage": "https://datamanager.cachena.entrecode.de/",
    },
    "accounts": {
        "live": "https://accounts.entrecode.de/",
        "stage": "https://accounts.cachena.entrecode.de/",
    },
    "appserver": {
        "live": "https://appserver.entrecode.de/",
        "stage": "https://appserver.cachena.entrecode.de/",
    },
    "dm-history": {
        "live": "https://dm-history.entrecode.de/",
        "stage": "https://dm-history.cachena.entrecode.de/",
    },
}

ENVS = ("stage", "live")


def api_url(route: str, env: str = "stage", subdomain: str = "datamanager") -> str:
    """
    Resolve the absolute URL of an API route.
    Example: api_url("api/83cc6374/muffin", "live")
        -> 'https://datamanager.entrecode.de/api/83cc6374/muffin'
    """
    api = APIS.get(subdomain)
    if api is None:
        raise UnknownSubdomainError(
            f'subdomain "{subdomain}" not found. Try one of {", ".join(APIS)}'
        )
    base = api.get(env)
    if base is None:
        raise UnknownEnvironmentError(
            f'env "{env}" not found. Try one of {", ".join(api)}'
        )
    return base + route


def _query_value(value: Any) -> str:
    # Rendered the way the API expects JS-style values.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    return str(value)


def query(params: Mapping[str, Any], *, encode: bool = False) -> str:
    """
    Serialize params into a query string sorted by key.

    Values are not percent-encoded unless encode=True; the remote API has
    always received them verbatim. None values are skipped.
    """
    pairs = []
    for key in sorted(params):
        value = params[key]
        if value is None:
            continue
        rendered = _query_value(value)
        if encode:
            rendered = quote(rendered, safe=",")
        pairs.append(f"{key}={rendered}")
    return "&".join(pairs)


def expect(**fields: Any) -> None:
    """Fail fast with MissingConfigurationError for the first unset field."""
    for key, value in fields.items():
        if value is None:
            raise MissingConfigurationError(key)


__all__ = ["APIS", "ENVS", "api_url", "query", "expect"]
