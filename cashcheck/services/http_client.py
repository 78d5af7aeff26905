from __future__ import annotations

"""Lightweight async HTTP helper for JSON lookups.

Single attempt only: no retries and no timeout other than the one passed in
(None keeps the httpx default). Every transport-level problem surfaces as
HttpError carrying the underlying message.
"""
from typing import Any, Dict, Optional

import httpx


class HttpError(Exception):
    pass


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[Dict[str, str]] = None,
) -> Any:
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as e:
        raise HttpError(f"HTTP {e.response.status_code} for {e.request.url}") from e
    except httpx.HTTPError as e:
        raise HttpError(str(e)) from e
    except ValueError as e:  # JSON decode
        raise HttpError(f"Malformed JSON from {url}: {e}") from e


def make_async_client(
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    kwargs: Dict[str, Any] = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)
