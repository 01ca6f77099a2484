"""Shared helpers for tool modules."""

from typing import Any, Dict, Literal, Optional

from ec_fdk.core.sdk import Fdk

Env = Literal["stage", "live"]


def scoped(sdk: Fdk, env: Optional[str] = None, **fields: Any) -> Fdk:
    """Cleaned builder for one tool call, optionally switched to another env."""
    if env:
        fields["env"] = env
    return sdk.set(fields).clean()


def list_options(
    size: int, page: Optional[int] = None, sort: Optional[str] = None
) -> Dict[str, Any]:
    options: Dict[str, Any] = {"size": size}
    if page:
        options["page"] = page
    if sort:
        options["sort"] = sort
    return options
