from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from spriteforge.config import get_settings
from spriteforge.handlers import generation_handler, video_handler
from spriteforge.services.errors import (
    ConfigurationError,
    DecodeError,
    PresetNotFoundError,
    SpriteForgeError,
    TransportError,
)

logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="SpriteForge API")

app.include_router(generation_handler.router)
app.include_router(video_handler.router)


def _status_for(exc: SpriteForgeError) -> int:
    if isinstance(exc, PresetNotFoundError):
        return 404
    if isinstance(exc, ConfigurationError):
        return 400
    if isinstance(exc, DecodeError):
        return 422
    if isinstance(exc, TransportError):
        return 502
    return 500


@app.exception_handler(SpriteForgeError)
async def spriteforge_error_handler(request: Request, exc: SpriteForgeError):
    status = _status_for(exc)
    logger.error("%s %s failed with %s: %s", request.method, request.url.path, exc.code, exc)
    return JSONResponse(status_code=status, content=exc.to_dict())


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}
