from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from .errors import ApiError, ResponseParseError, TransportError
from .observability import log_event, redact_url

log = logging.getLogger("ec_fdk.fetcher")

JSON_HEADERS = {"Content-Type": "application/json"}


async def fetcher(
    url: str,
    *,
    token: Optional[str] = None,
    raw_res: bool = False,
    method: str = "GET",
    headers: Optional[Dict[str, str]] = None,
    json: Any = None,
    files: Any = None,
    data: Optional[Dict[str, Any]] = None,
    http: Optional[httpx.AsyncClient] = None,
) -> Any:
    """
    Core request function.
    - Adds a Bearer Authorization header when a token is given
    - Raises ApiError on non-2xx JSON error bodies, TransportError otherwise
    - Returns the httpx.Response untouched when raw_res is set
    - Returns None for 204/empty bodies, parsed JSON otherwise
    """
    method = method.upper()
    headers = dict(headers or {})
    if token:
        headers["Authorization"] = f"Bearer {token}"

    kwargs: Dict[str, Any] = {"headers": headers}
    if json is not None:
        kwargs["json"] = json
    if files is not None:
        kwargs["files"] = files
    if data is not None:
        kwargs["data"] = data

    start = time.perf_counter()
    try:
        if http is not None:
            resp = await http.request(method, url, **kwargs)
        else:
            async with httpx.AsyncClient() as client:
                resp = await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise TransportError(
            f"Network error calling {method} {redact_url(url)}: {exc}"
        ) from exc

    log_event(
        "fdk.request",
        logger=log,
        level=logging.DEBUG,
        method=method,
        url=resp.request.url,
        status=resp.status_code,
        duration_ms=int((time.perf_counter() - start) * 1000),
    )

    if not resp.is_success:
        raise _to_error(resp, method=method)

    if raw_res:
        return resp
    if resp.status_code == 204 or not resp.content:
        return None

    try:
        return resp.json()
    except ValueError as exc:
        snippet = (resp.text or "")[:500]
        raise ResponseParseError(
            f"Expected JSON from {method} {redact_url(resp.request.url)}, "
            f"got non-JSON body snippet: {snippet!r}",
            status_code=resp.status_code,
        ) from exc


def _to_error(resp: httpx.Response, *, method: str) -> Exception:
    url = redact_url(resp.request.url)
    # application/json and application/problem+json
    if "json" in resp.headers.get("content-type", ""):
        try:
            parsed = resp.json()
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            return ApiError(
                status_code=resp.status_code,
                method=method,
                url=url,
                response_json=parsed,
            )
    return TransportError(
        f"unexpected fetch error: {resp.reason_phrase}",
        status_code=resp.status_code,
    )


__all__ = ["fetcher", "JSON_HEADERS"]
