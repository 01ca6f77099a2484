from __future__ import annotations

from typing import Any, Dict, Optional

from ec_fdk.core.sdk import Fdk
from ec_fdk.tools._scope import Env, list_options, scoped


async def dm_list(
    sdk: Fdk,
    size: int = 5,
    page: Optional[int] = None,
    env: Optional[Env] = None,
) -> Dict[str, Any]:
    """List datamanagers visible to the logged-in account (admin token)."""
    return await scoped(sdk, env).dm_list(list_options(size, page))


async def model_list(
    sdk: Fdk,
    dm_id: str,
    size: int = 5,
    page: Optional[int] = None,
    env: Optional[Env] = None,
) -> Dict[str, Any]:
    """List models of a datamanager. Takes the long dataManagerID (UUID)."""
    return await scoped(sdk, env, dm_id=dm_id).model_list(list_options(size, page))


async def get_datamanager(
    sdk: Fdk, dm_id: str, env: Optional[Env] = None
) -> Dict[str, Any]:
    """Get a datamanager by its long dataManagerID (UUID)."""
    return await scoped(sdk, env).get_datamanager(dm_id)
