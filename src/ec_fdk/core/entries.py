from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from .context import FdkConfig, as_config
from .errors import MissingConfigurationError, ResponseParseError
from .fetcher import JSON_HEADERS, fetcher
from .hal import ListEnvelope, get_link_href, list_envelope
from .storage import maybe_await
from .util import APIS, api_url, expect, query

DEFAULT_LIST_OPTIONS = {"size": 50, "page": 1, "_list": True}

SYSTEM_FIELDS = frozenset(
    {
        "created",
        "creator",
        "id",
        "modified",
        "private",
        "_created",
        "_creator",
        "_embedded",
        "_entryTitle",
        "_id",
        "_links",
        "_modelTitle",
        "_modelTitleField",
        "_modified",
    }
)

ConfigLike = Union[FdkConfig, Mapping[str, Any]]


def without_system_fields(entry_like: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in entry_like.items() if k not in SYSTEM_FIELDS}


def http_date(value: Union[str, int, float, datetime]) -> str:
    """
    Render an ISO timestamp, epoch milliseconds or a datetime as an
    RFC 1123 GMT date.
    """
    if isinstance(value, (int, float)):
        value = datetime.fromtimestamp(value / 1000, timezone.utc)
    elif isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


async def public_api(config: ConfigLike) -> Any:
    """Load the root document of a datamanager's public API."""
    config = as_config(config)
    expect(env=config.env, dm_short_id=config.dm_short_id)
    url = api_url(f"api/{config.dm_short_id}", config.env)
    return await fetcher(url, token=config.token, http=config.http)


async def entry_list(config: ConfigLike) -> ListEnvelope:
    """
    List entries of a model.
    Caller options win over the defaults (size=50, page=1, _list=true).
    """
    config = as_config(config)
    expect(env=config.env, dm_short_id=config.dm_short_id, model=config.model)
    options = {**DEFAULT_LIST_OPTIONS, **(config.options or {})}
    q = query(options)
    url = api_url(f"api/{config.dm_short_id}/{config.model}?{q}", config.env)
    payload = await fetcher(url, token=config.token, http=config.http)
    return list_envelope(payload, f"{config.dm_short_id}:{config.model}")


async def get_entry(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        model=config.model,
        entry_id=config.entry_id,
    )
    q = query({"_id": config.entry_id})
    url = api_url(f"api/{config.dm_short_id}/{config.model}?{q}", config.env)
    return await fetcher(url, token=config.token, http=config.http)


async def create_entry(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        model=config.model,
        value=config.value,
    )
    url = api_url(f"api/{config.dm_short_id}/{config.model}", config.env)
    return await fetcher(
        url,
        token=config.token,
        method="POST",
        json=config.value,
        headers=JSON_HEADERS,
        http=config.http,
    )


async def edit_entry(config: ConfigLike) -> Any:
    """
    Replace an entry's fields with PUT.
    System fields are stripped from the value. With safe_put, the value
    must carry _modified and the write only succeeds if the entry has not
    changed since.
    """
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        model=config.model,
        entry_id=config.entry_id,
        value=config.value,
    )
    headers = dict(JSON_HEADERS)
    if config.safe_put:
        if config.value.get("_modified") is None:
            raise MissingConfigurationError("_modified")
        headers["If-Unmodified-Since"] = http_date(config.value["_modified"])

    url = api_url(
        f"api/{config.dm_short_id}/{config.model}?_id={config.entry_id}", config.env
    )
    return await fetcher(
        url,
        token=config.token,
        method="PUT",
        json=without_system_fields(config.value),
        headers=headers,
        http=config.http,
    )


async def delete_entry(config: ConfigLike) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        model=config.model,
        entry_id=config.entry_id,
    )
    url = api_url(
        f"api/{config.dm_short_id}/{config.model}?_id={config.entry_id}", config.env
    )
    return await fetcher(
        url,
        token=config.token,
        raw_res=True,
        method="DELETE",
        headers=JSON_HEADERS,
        http=config.http,
    )


async def map_entries(
    config: ConfigLike, fn: Callable[[Any], Union[Any, Awaitable[Any]]]
) -> List[Any]:
    """
    Walk all pages of an entry list, one page in flight at a time, and
    collect fn(entry) for every entry in page order.
    """
    config = as_config(config)
    expect(env=config.env, dm_short_id=config.dm_short_id, model=config.model)
    options = {**DEFAULT_LIST_OPTIONS, **(config.options or {})}

    results: List[Any] = []
    processed = 0
    total: Optional[int] = None
    while total is None or processed < total:
        page = await entry_list(config.merge(options=dict(options)))
        for entry in page["items"]:
            results.append(await maybe_await(fn(entry)))
        processed += len(page["items"])
        total = page["total"] or 0
        if not page["items"]:
            # total is stale (entries deleted mid-walk)
            break
        options["page"] = int(options["page"]) + 1
    return results


def _parse_field_title(prop: Dict[str, Any]) -> None:
    title = prop.pop("title", None)
    if isinstance(title, str) and "<" in title and ">" in title:
        type_, _, rest = title.partition("<")
        resource = rest[:-1] if rest.endswith(">") else rest
        prop["type"] = type_
        prop["resource"] = resource.split(":")[1] if ":" in resource else resource
    elif title in ("asset", "entry", "assets", "entries"):
        # no target resource given
        prop["type"] = title
        prop["resource"] = None
    else:
        prop["type"] = title


async def get_schema(config: ConfigLike) -> Dict[str, Any]:
    """
    Load a model's JSON schema and flatten it into {field: {type, required, ...}}.
    Field titles like "entry<muffin>" become type="entry", resource="muffin".
    """
    config = as_config(config)
    expect(env=config.env, dm_short_id=config.dm_short_id, model=config.model)
    url = api_url(f"api/schema/{config.dm_short_id}/{config.model}", config.env)
    res = await fetcher(url, http=config.http)

    all_of = res.get("allOf") if isinstance(res, dict) else None
    schema = all_of[1] if isinstance(all_of, list) and len(all_of) > 1 else None
    if not isinstance(schema, dict) or not isinstance(schema.get("properties"), dict):
        raise ResponseParseError(
            f"get_schema: {url} returned unexpected format: {res!r}"
        )

    properties = schema["properties"]
    required = schema.get("required") or []
    props: Dict[str, Any] = {}
    for name, prop in without_system_fields(properties).items():
        prop = dict(prop)
        prop["required"] = name in required
        prop.pop("oneOf", None)
        _parse_field_title(prop)
        props[name] = prop

    if config.with_metadata:
        meta = {
            "modelTitleField": properties.get("_modelTitleField", {}).get("title"),
            "modelTitle": properties.get("_modelTitle", {}).get("title"),
        }
        return {"properties": props, "meta": meta}
    return props


# --- Entry helpers -------------------------------------------------------- #


def filter_options(options: Mapping[str, Any]) -> Dict[str, str]:
    """
    Translate ec.sdk filter options into entrecode list query params.
    Example: {"name": {"search": "cup"}, "page": 2} -> {"name~": "cup", "page": "2"}
    """
    out: Dict[str, str] = {}
    for key, o in options.items():
        if not isinstance(o, dict):
            out[key] = str(o)
            continue
        if o.get("sort"):
            sort = o["sort"]
            out["sort"] = ",".join(sort) if isinstance(sort, (list, tuple)) else sort
        if o.get("search"):
            out[f"{key}~"] = o["search"]
        if o.get("notNull"):
            out[f"{key}!"] = ""
        if o.get("null"):
            out[key] = ""
        if o.get("any"):
            out[key] = ",".join(str(v) for v in o["any"])
        if o.get("from"):
            out[f"{key}From"] = o["from"]
        if o.get("to"):
            out[f"{key}To"] = o["to"]
    return out


def get_entry_short_id(entry: Dict[str, Any]) -> Optional[str]:
    """
    Read the datamanager short id from an entry's collection link.
    Example: '.../api/83cc6374/muffin' -> '83cc6374'
    """
    href = get_link_href(entry, "collection")
    if not href:
        return None
    return href.rstrip("/").split("/")[-2]


def get_entry_env(entry: Dict[str, Any]) -> Optional[str]:
    href = get_link_href(entry, "collection")
    if not href:
        return None
    base = href.split("api/")[0]
    for env, url in APIS["datamanager"].items():
        if url == base:
            return env
    return None


def get_entry_asset(field: str, entry: Dict[str, Any]) -> Any:
    """Return the asset embedded in an entry for the given field."""
    short_id = get_entry_short_id(entry)
    embedded = entry.get("_embedded") or {}
    return embedded.get(f"{short_id}:{entry.get('_modelTitle')}/{field}/asset")


def _entry_config(entry: Dict[str, Any], **extra: Any) -> FdkConfig:
    return FdkConfig(
        env=get_entry_env(entry),
        dm_short_id=get_entry_short_id(entry),
        model=entry.get("_modelTitle"),
        entry_id=entry.get("id"),
        **extra,
    )


async def edit_entry_object(
    entry: Dict[str, Any], value: Dict[str, Any], token: Optional[str] = None
) -> Any:
    """Edit an entry located by its own links."""
    return await edit_entry(_entry_config(entry, value=value, token=token))


async def delete_entry_object(
    entry: Dict[str, Any], token: Optional[str] = None
) -> Any:
    return await delete_entry(_entry_config(entry, token=token))


__all__ = [
    "SYSTEM_FIELDS",
    "DEFAULT_LIST_OPTIONS",
    "without_system_fields",
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
]
