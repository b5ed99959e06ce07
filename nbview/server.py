"""FastAPI server exposing notebook rendering to editor integrations."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from nbview.config import NbviewConfig, load_config
from nbview.core import Diag, ErrorKind
from nbview.notebook.model import Notebook
from nbview.notebook.parser import load_notebook
from nbview.render.engine import render
from nbview.render.sink import BufferSink, QueueSink, adeliver
from nbview.viewer import show_notebook

logger = logging.getLogger("nbview.server")

app = FastAPI(title="nbview", version="0.1.0")

_STATUS_BY_KIND = {
    ErrorKind.IO_UNAVAILABLE.value: 404,
    ErrorKind.MALFORMED_DOCUMENT.value: 422,
}

# Batches buffered between the renderer and a slow client.
_STREAM_QUEUE_SIZE = 8


class RenderRequest(BaseModel):
    path: str


def _error_payload(diag: Diag | None) -> dict[str, str]:
    if diag is None:
        return {"code": "UNKNOWN", "message": "Unknown error"}
    return {"code": diag.code, "message": diag.message}


@app.get("/api/health")
async def health() -> dict[str, Any]:
    return {"ok": True}


@app.get("/api/config")
async def get_config() -> dict[str, Any]:
    config = load_config()
    return {"options": config.display.options(), "batch_size": config.render.batch_size}


@app.post("/api/render")
async def render_notebook(request: RenderRequest) -> Any:
    logger.info("POST /api/render path=%s", request.path)
    config = load_config()
    sink = BufferSink()
    result = await asyncio.to_thread(
        show_notebook,
        request.path,
        lambda: sink,
        display=config.display,
        batch_size=config.render.batch_size,
    )
    if not result.ok:
        payload = _error_payload(result.first_error)
        return JSONResponse(status_code=_STATUS_BY_KIND.get(payload["code"], 400), content=payload)
    return {"lines": sink.lines, "options": sink.options}


@app.post("/api/render/stream")
async def render_notebook_stream(request: RenderRequest) -> EventSourceResponse:
    logger.info("POST /api/render/stream path=%s", request.path)
    return EventSourceResponse(render_events(request.path, load_config()))


async def render_events(path: str, config: NbviewConfig) -> AsyncGenerator[dict[str, str]]:
    """SSE events for one render: ``lines`` per batch, then ``options``.

    A notebook that fails to load yields a single ``error`` event and no lines.
    """
    loaded = await asyncio.to_thread(load_notebook, path)
    if not loaded.ok or loaded.data is None:
        logger.warning("Render stream failed for %s: %s", path, loaded.diagnostics)
        yield {"event": "error", "data": json.dumps(_error_payload(loaded.first_error))}
        return

    sink = QueueSink(maxsize=_STREAM_QUEUE_SIZE)
    producer = asyncio.create_task(_produce(loaded.data, sink, config.render.batch_size))
    try:
        async for batch in sink.batches():
            yield {"event": "lines", "data": json.dumps(batch, ensure_ascii=False)}
        count = await producer
    finally:
        # Client went away mid-stream.
        if not producer.done():
            producer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await producer

    logger.info("Render stream complete: %s (%d lines)", path, count)
    yield {"event": "options", "data": json.dumps(config.display.options())}


async def _produce(notebook: Notebook, sink: QueueSink, batch_size: int) -> int:
    try:
        count = await adeliver(render(notebook), sink, batch_size)
    except Exception:
        logger.exception("Error while streaming render")
        await sink.close()
        raise
    await sink.close()
    return count
