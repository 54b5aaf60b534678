from __future__ import annotations

"""Download the caller's audio file into memory."""

from time import perf_counter
from typing import Optional

import httpx

from app.relay.errors import AudioDownloadError, AudioTooLargeError
from app.relay.schemas.transcribe_io import AudioPayload
from app.relay.services.logging import get_logger
from app.relay.services.metrics import metrics


async def fetch_audio(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float,
    max_bytes: Optional[int] = None,
) -> AudioPayload:
    """GET `url` and buffer the whole body.

    Raises AudioDownloadError on a non-2xx reply and AudioTooLargeError when
    `max_bytes` is set and the body grows past it. Network errors
    (httpx.HTTPError) propagate to the caller.
    """

    logger = get_logger()
    start = perf_counter()
    try:
        logger.info("audio_fetch_start")
        async with client.stream("GET", url, timeout=timeout) as resp:
            if not resp.is_success:
                await resp.aread()
                logger.warning("audio_fetch_rejected", status=resp.status_code, preview=resp.text[:200])
                raise AudioDownloadError(resp.status_code, resp.text)

            declared = resp.headers.get("content-length")
            if max_bytes is not None and declared and declared.isdigit() and int(declared) > max_bytes:
                logger.warning("audio_too_large", declared=int(declared), limit=max_bytes)
                raise AudioTooLargeError(max_bytes)

            buf = bytearray()
            async for chunk in resp.aiter_bytes():
                buf.extend(chunk)
                if max_bytes is not None and len(buf) > max_bytes:
                    logger.warning("audio_too_large", received=len(buf), limit=max_bytes)
                    raise AudioTooLargeError(max_bytes)

            payload = AudioPayload(data=bytes(buf), content_type=resp.headers.get("content-type"))
        elapsed_ms = int((perf_counter() - start) * 1000)
        logger.info("audio_fetch_ok", size=payload.size, content_type=payload.content_type, elapsed_ms=elapsed_ms)
        metrics.inc("audio_bytes_total", value=payload.size)
        return payload
    finally:
        metrics.observe("audio_fetch_seconds", perf_counter() - start)
