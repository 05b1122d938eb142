"""
Single-attempt HTTP GET used for public key and revocation list retrieval.
"""

from typing import Any, Dict, Optional

import httpx

from .shared.config import get_settings


async def fetch(url: str, client: Optional[httpx.AsyncClient] = None) -> httpx.Response:
    """GET ``url`` once, without retries.

    Uses the injected client when given, otherwise a short-lived one. The
    response is returned as-is; callers decide what a bad status means.
    """
    if client is not None:
        return await client.get(url)

    client_kwargs: Dict[str, Any] = {}
    timeout = get_settings().http_timeout
    if timeout is not None:
        client_kwargs["timeout"] = timeout

    async with httpx.AsyncClient(**client_kwargs) as owned_client:
        return await owned_client.get(url)
