from __future__ import annotations

from typing import Any, Dict, Optional

from ec_fdk.core.sdk import Fdk
from ec_fdk.tools._scope import Env, list_options, scoped

DEFAULT_TOOL_PAGE_SIZE = 5


async def entry_list(
    sdk: Fdk,
    dm: str,
    model: str,
    size: int = DEFAULT_TOOL_PAGE_SIZE,
    page: Optional[int] = None,
    sort: Optional[str] = None,
    env: Optional[Env] = None,
) -> Dict[str, Any]:
    """
    List entries of a model.
    Returns {"count", "total", "items"}; items are stripped of _links/_embedded.
    """
    return await scoped(sdk, env, dm_short_id=dm, model=model).entry_list(
        list_options(size, page, sort)
    )


async def get_entry(
    sdk: Fdk, dm: str, model: str, id: str, env: Optional[Env] = None
) -> Dict[str, Any]:
    """Get a single entry by ID."""
    return await scoped(sdk, env, dm_short_id=dm, model=model).get_entry(id)


async def create_entry(
    sdk: Fdk,
    dm: str,
    model: str,
    data: Dict[str, Any],
    env: Optional[Env] = None,
) -> Dict[str, Any]:
    """Create a new entry from a JSON object of field values."""
    return await scoped(sdk, env, dm_short_id=dm, model=model).create_entry(data)


async def edit_entry(
    sdk: Fdk,
    dm: str,
    model: str,
    id: str,
    data: Dict[str, Any],
    env: Optional[Env] = None,
) -> Dict[str, Any]:
    """Update an entry. Fields not in data are left as the API defaults them."""
    return await scoped(sdk, env, dm_short_id=dm, model=model).edit_entry(id, data)


async def delete_entry(
    sdk: Fdk, dm: str, model: str, id: str, env: Optional[Env] = None
) -> Dict[str, Any]:
    """Delete an entry."""
    await scoped(sdk, env, dm_short_id=dm, model=model).delete_entry(id)
    return {"deleted": True, "id": id}


async def get_schema(
    sdk: Fdk, dm: str, model: str, env: Optional[Env] = None
) -> Dict[str, Any]:
    """Get a model's field schema: {field: {type, required, resource, ...}}."""
    return await scoped(sdk, env, dm_short_id=dm, model=model).get_schema()
