"""FastAPI application for the Mastermind vault API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ....config import settings
from ....config.logging import setup_logging
from ....core.domain.exceptions import MastermindError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import chat, health, notes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, log_file=settings.log_file, json_format=settings.log_json)
    logger.info("Mastermind API starting up (vault: %s)", settings.vault_dir)
    logger.info("Debug mode: %s", "ENABLED" if settings.debug else "DISABLED")
    yield
    logger.info("Mastermind API shutting down...")


app = FastAPI(
    title="Mastermind API",
    description="Vault-aware assistant: relevance-ranked note context, search, and tool-enabled chat.",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(chat.router)
app.include_router(notes.router)


@app.exception_handler(MastermindError)
async def mastermind_error_handler(request: Request, exc: MastermindError) -> JSONResponse:
    """Render MastermindError as structured JSON."""
    status_code = get_http_status_code(exc)
    log_exception(
        exc,
        log=logger,
        level=logging.WARNING if status_code < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict(include_trace=settings.debug))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any unhandled exception as structured JSON."""
    log_exception(exc, log=logger, extra_context={"path": str(request.url.path), "method": request.method})
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=settings.debug),
    )


__all__ = ["app"]
