from __future__ import annotations

"""Core transcription relay: validate, fetch, submit, interpret."""

from typing import Any

import httpx

from app.config.settings import Settings
from app.relay.errors import MissingFileUrlError
from app.relay.schemas.transcribe_io import TranscribeRequest, TranscribeResponse
from app.relay.services.audio_fetch import fetch_audio
from app.relay.services.whisper_client import transcribe


def parse_request(body: Any) -> str:
    """Return the audio URL from a decoded JSON body or raise MissingFileUrlError."""

    if not isinstance(body, dict):
        raise MissingFileUrlError()
    req = TranscribeRequest.model_validate(body)
    if not req.has_file_url:
        raise MissingFileUrlError()
    return req.file_url


async def handle_transcribe(body: Any, *, settings: Settings, client: httpx.AsyncClient) -> TranscribeResponse:
    """Run one request through the relay.

    Steps run strictly in order and the first failure wins; classified
    failures are raised as RelayError subclasses, anything else propagates
    untouched.
    """

    file_url = parse_request(body)
    audio = await fetch_audio(
        client,
        file_url,
        timeout=settings.fetch_timeout_seconds,
        max_bytes=settings.max_audio_bytes,
    )
    result = await transcribe(client, audio, settings)
    return TranscribeResponse(transcript=result.text, full_response=result.model_dump())
