from __future__ import annotations

"""Per-request outbound HTTP client."""

from typing import AsyncIterator

import httpx


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency yielding a client that lives for one request.

    Timeouts are passed per call, so the client itself has none.
    """
    async with httpx.AsyncClient(timeout=None, follow_redirects=True) as client:
        yield client
