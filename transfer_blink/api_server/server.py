"""
FastAPI server exposing the Solana Action for token transfers.

The chain reader is created once in the lifespan and shared by all requests
through the get_chain_reader dependency (tests override it with a fake).
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from transfer_blink import __version__
from transfer_blink.api_server.actions import actions_rules, router as actions_router
from transfer_blink.api_server.dependencies import action_headers
from transfer_blink.chain.reader import SolanaChainReader
from transfer_blink.config.settings import get_settings
from transfer_blink.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared chain reader on startup."""
    settings = get_settings()
    app.state.chain_reader = SolanaChainReader.from_settings(settings)
    logger.info(
        "api_started",
        network=settings.solana_network,
        blockchain_id=settings.blockchain_id,
        action_version=settings.action_version,
    )
    yield
    logger.info("api_stopped")


app = FastAPI(
    title="Transfer Blink API",
    description="Solana Action that builds unsigned SOL and SPL token transfer transactions.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(actions_router, prefix="/api", tags=["Actions"])


@app.get("/actions.json")
def actions_json() -> JSONResponse:
    return JSONResponse(content=actions_rules(), headers=action_headers(get_settings()))


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are client errors (400), reported in the action error shape."""
    logger.info("request_invalid", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request"},
        headers=action_headers(get_settings()),
    )

