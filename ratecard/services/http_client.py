from __future__ import annotations

"""Async HTTP helper for the upstream rate services.

Single attempt per call: a failed fetch is reported, never retried.
"""
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger("ratecard.http")


class HttpError(Exception):
    pass


async def get_json(
    url: str,
    *,
    params: Optional[Dict[str, str]] = None,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    try:
        async with httpx.AsyncClient(
            timeout=timeout, transport=transport, follow_redirects=True
        ) as client:
            resp = await client.get(url, params=params)
    except httpx.HTTPError as e:
        raise HttpError(f"Request to {url} failed: {e}") from e
    if resp.is_error:
        logger.info("upstream error", extra={"url": url, "status": resp.status_code})
        raise HttpError(f"HTTP {resp.status_code} for {url}")
    try:
        data = resp.json()
    except ValueError as e:  # JSON decode
        raise HttpError(f"Invalid JSON from {url}: {e}") from e
    if not isinstance(data, dict):
        raise HttpError(f"Unexpected JSON payload from {url}")
    return data
