from __future__ import annotations

"""HTTP client for the transcription provider (OpenAI Whisper API)."""

from time import perf_counter

import httpx
import orjson
from pydantic import ValidationError

from app.config.settings import Settings
from app.relay.errors import ProviderError, ProviderParseError
from app.relay.schemas.transcribe_io import AudioPayload, ProviderTranscription
from app.relay.services.logging import get_logger
from app.relay.services.metrics import metrics


def build_multipart(audio: AudioPayload, settings: Settings) -> tuple[dict[str, str], dict[str, tuple[str, bytes]]]:
    # httpx derives the part content type from the filename, not the source
    data = {"model": settings.whisper_model}
    files = {"file": (settings.upload_filename, audio.data)}
    return data, files


def parse_transcription(text: str) -> ProviderTranscription:
    """Parse a 2xx provider body; anything not shaped like a transcription is a parse error."""

    try:
        raw = orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise ProviderParseError(text) from exc
    if not isinstance(raw, dict):
        raise ProviderParseError(text)
    try:
        return ProviderTranscription.model_validate(raw)
    except ValidationError as exc:
        raise ProviderParseError(text) from exc


async def transcribe(client: httpx.AsyncClient, audio: AudioPayload, settings: Settings) -> ProviderTranscription:
    """POST the audio to the provider and return the parsed transcription.

    The body is always read as text first so error replies reach the caller
    unmodified. Raises ProviderError / ProviderParseError; httpx.HTTPError on
    network errors.
    """

    url = str(settings.transcription_url)
    headers = {"Authorization": f"Bearer {settings.openai_api_key}", "Accept": "application/json"}
    data, files = build_multipart(audio, settings)

    logger = get_logger().bind(model=settings.whisper_model)
    start = perf_counter()
    try:
        logger.info("provider_request_start", url=url, size=audio.size)
        resp = await client.post(
            url,
            data=data,
            files=files,
            headers=headers,
            timeout=settings.provider_timeout_seconds,
        )
        text = resp.text
        if not resp.is_success:
            logger.warning("provider_error", status=resp.status_code, preview=text[:200])
            raise ProviderError(resp.status_code, text)

        try:
            result = parse_transcription(text)
        except ProviderParseError:
            logger.warning(
                "provider_bad_json",
                status=resp.status_code,
                content_type=resp.headers.get("content-type", ""),
                preview=text[:200],
            )
            raise

        elapsed_ms = int((perf_counter() - start) * 1000)
        logger.info("provider_request_ok", status=resp.status_code, elapsed_ms=elapsed_ms, chars=len(result.text))
        return result
    finally:
        metrics.observe("provider_request_seconds", perf_counter() - start)
