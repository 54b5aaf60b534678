from __future__ import annotations

"""FastAPI app entry: transcription relay, healthz and metrics."""

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
import structlog

from app.config.settings import get_settings
from app.relay.routes import router as relay_router
from app.relay.services.logging import configure_logging
from app.relay.services.metrics import metrics


configure_logging(get_settings().log_level)
logger = structlog.get_logger()
logger.info(
    "startup",
    port=get_settings().port,
    transcription_url=str(get_settings().transcription_url),
    model=get_settings().whisper_model,
)


app = FastAPI(title="Whisper transcription relay")
app.include_router(relay_router)


@app.middleware("http")
async def add_trace_id(request: Request, call_next):
    trace_id = request.headers.get("X-Trace-Id") or uuid.uuid4().hex
    structlog.contextvars.bind_contextvars(trace_id=trace_id, path=request.url.path)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()
    response.headers["X-Trace-Id"] = trace_id
    return response


@app.get("/healthz", response_class=PlainTextResponse)
async def healthz() -> str:
    return "ok"


@app.get("/metrics", response_class=PlainTextResponse)
async def metrics_endpoint() -> str:
    return metrics.to_prometheus()
