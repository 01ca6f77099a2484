from __future__ import annotations

from typing import Any, Dict, Optional

from ec_fdk.core.sdk import Fdk
from ec_fdk.tools._scope import Env, scoped


async def fdk_status(sdk: Fdk, env: Optional[Env] = None) -> Dict[str, Any]:
    """
    Report which environment the server talks to and whether an admin token
    is available (log in with `ec-fdk login`).
    """
    scope = scoped(sdk, env)
    return {
        "env": scope.config.env,
        "has_admin_token": await scope.has_admin_token(),
    }
