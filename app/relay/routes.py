from __future__ import annotations

"""Inbound HTTP surface of the relay."""

import json

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app.config.settings import Settings, get_settings
from app.relay.errors import INTERNAL_ERROR, RelayError
from app.relay.handler import handle_transcribe
from app.relay.services.http import get_http_client
from app.relay.services.logging import get_logger
from app.relay.services.metrics import metrics


router = APIRouter()

LIVENESS_TEXT = "OK - Whisper transcription server up and running!"


@router.get("/", response_class=PlainTextResponse)
async def liveness() -> str:
    return LIVENESS_TEXT


async def _read_json(request: Request) -> object:
    # A body that is not JSON is treated like one without fileUrl
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.post("/transcribe")
async def transcribe_endpoint(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    logger = get_logger()
    try:
        body = await _read_json(request)
        result = await handle_transcribe(body, settings=settings, client=client)
    except RelayError as exc:
        outcome = type(exc).__name__
        logger.info("transcribe_failed", outcome=outcome, status=exc.status_code)
        metrics.inc("transcribe_requests_total", labels={"outcome": outcome})
        return JSONResponse(status_code=exc.status_code, content=exc.body)
    except Exception as exc:
        logger.exception("transcribe_unhandled_error", error_type=type(exc).__name__)
        metrics.inc("transcribe_requests_total", labels={"outcome": "unhandled"})
        return JSONResponse(status_code=500, content={"error": str(exc) or INTERNAL_ERROR})

    logger.info("transcribe_ok", chars=len(result.transcript))
    metrics.inc("transcribe_requests_total", labels={"outcome": "ok"})
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))
