from __future__ import annotations

from typing import Any, Dict, Optional

from ec_fdk.core.sdk import Fdk
from ec_fdk.tools._scope import Env, list_options, scoped


async def asset_list(
    sdk: Fdk,
    dm: str,
    asset_group: str,
    size: int = 5,
    page: Optional[int] = None,
    sort: Optional[str] = None,
    env: Optional[Env] = None,
) -> Dict[str, Any]:
    """List assets of an asset group."""
    scope = scoped(sdk, env, dm_short_id=dm, asset_group=asset_group)
    return await scope.asset_list(list_options(size, page, sort))


async def get_asset(
    sdk: Fdk, dm: str, asset_group: str, id: str, env: Optional[Env] = None
) -> Optional[Dict[str, Any]]:
    """Get a single asset by assetID."""
    scope = scoped(sdk, env, dm_short_id=dm, asset_group=asset_group)
    return await scope.get_asset(id)
