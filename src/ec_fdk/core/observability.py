"""Structured log events for auth transitions, dispatched actions and requests."""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

import httpx

# LogRecord attributes; passing them in `extra` makes logging raise KeyError
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime"}

# never end up in a log line, neither as a field nor as a query parameter
SECRET_KEYS = frozenset({"token", "password", "access_token"})

REDACTED = "redacted"


def redact_url(url: Union[str, httpx.URL]) -> str:
    """
    Mask secret query parameters.
    Example: redact_url(".../_auth/logout?clientID=rest&token=abc")
        -> '.../_auth/logout?clientID=rest&token=redacted'
    """
    parsed = httpx.URL(str(url))
    for key in SECRET_KEYS:
        if key in parsed.params:
            parsed = parsed.copy_set_param(key, REDACTED)
    return str(parsed)


def event_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop reserved and secret keys; redact URLs."""
    out: Dict[str, Any] = {}
    for key, value in fields.items():
        if key in RESERVED_LOG_KEYS or key in SECRET_KEYS:
            continue
        if key == "url" and value is not None:
            value = redact_url(value)
        out[key] = value
    return out


def log_event(
    event: str,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    log = logger or logging.getLogger("ec_fdk.observability")
    if log.isEnabledFor(level):
        log.log(level, event, extra=event_fields(fields))


__all__ = ["log_event", "event_fields", "redact_url", "SECRET_KEYS"]
