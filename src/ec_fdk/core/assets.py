from __future__ import annotations

import mimetypes
import os
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .context import FdkConfig, as_config
from .fetcher import fetcher
from .hal import ListEnvelope, embedded_items, get_embedded, list_envelope
from .util import api_url, expect, query

ASSET_RELATION = "ec:dm-asset"
DEFAULT_LIST_OPTIONS = {"size": 50, "page": 1, "_list": True}


def _file_part(
    stack: ExitStack, file: Any, name: Optional[str] = None
) -> Tuple[str, Any, str]:
    """
    Build an httpx multipart tuple from a path, bytes or an open binary file.
    Paths are streamed from disk, not read into memory.
    """
    if isinstance(file, (str, os.PathLike)):
        path = Path(file)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file}")
        name = name or path.name
        file = stack.enter_context(path.open("rb"))
    elif isinstance(file, bytearray):
        file = bytes(file)
    elif not isinstance(file, bytes):
        name = name or os.path.basename(getattr(file, "name", "") or "") or None
    name = name or "file"
    ctype = mimetypes.guess_type(name)[0] or "application/octet-stream"
    return name, file, ctype


def _form_data(options: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if not options:
        return None
    return {
        key: ("true" if value else "false") if isinstance(value, bool) else str(value)
        for key, value in options.items()
    }


async def get_asset(config: FdkConfig | Mapping[str, Any]) -> Any:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        asset_group=config.asset_group,
        asset_id=config.asset_id,
    )
    q = query({"assetID": config.asset_id})
    url = api_url(f"a/{config.dm_short_id}/{config.asset_group}?{q}", config.env)
    payload = await fetcher(url, token=config.token, http=config.http)
    return get_embedded(payload, ASSET_RELATION)


async def asset_list(config: FdkConfig | Mapping[str, Any]) -> ListEnvelope:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        asset_group=config.asset_group,
    )
    options = {**DEFAULT_LIST_OPTIONS, **(config.options or {})}
    q = query(options)
    url = api_url(f"a/{config.dm_short_id}/{config.asset_group}?{q}", config.env)
    payload = await fetcher(url, token=config.token, http=config.http)
    return list_envelope(payload, ASSET_RELATION)


async def create_asset(config: FdkConfig | Mapping[str, Any]) -> Any:
    """
    Upload one file into an asset group.
    `file` may be a path, bytes or a binary file object; `options` are sent
    as additional form fields (e.g. preserveFilenames, ignoreDuplicates).
    """
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        asset_group=config.asset_group,
        file=config.file,
    )
    url = api_url(f"a/{config.dm_short_id}/{config.asset_group}", config.env)
    with ExitStack() as stack:
        part = _file_part(stack, config.file, config.name)
        payload = await fetcher(
            url,
            token=config.token,
            method="POST",
            files={"file": part},
            data=_form_data(config.options),
            http=config.http,
        )
    return get_embedded(payload, ASSET_RELATION)


async def create_assets(config: FdkConfig | Mapping[str, Any]) -> List[Any]:
    """Upload several files in one request; always returns a list."""
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        asset_group=config.asset_group,
        files=config.files,
    )
    url = api_url(f"a/{config.dm_short_id}/{config.asset_group}", config.env)
    with ExitStack() as stack:
        parts = [("file", _file_part(stack, f)) for f in config.files]
        payload = await fetcher(
            url,
            token=config.token,
            method="POST",
            files=parts,
            data=_form_data(config.options),
            http=config.http,
        )
    return embedded_items(payload, ASSET_RELATION)


async def delete_asset(config: FdkConfig | Mapping[str, Any]) -> None:
    config = as_config(config)
    expect(
        env=config.env,
        dm_short_id=config.dm_short_id,
        asset_group=config.asset_group,
        asset_id=config.asset_id,
    )
    url = api_url(
        f"a/{config.dm_short_id}/{config.asset_group}/{config.asset_id}", config.env
    )
    await fetcher(
        url, token=config.token, raw_res=True, method="DELETE", http=config.http
    )


__all__ = [
    "ASSET_RELATION",
    "get_asset",
    "asset_list",
    "create_asset",
    "create_assets",
    "delete_asset",
]
