"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from fastapi import Request

from transfer_blink.chain.reader import ChainStateReader, SolanaChainReader
from transfer_blink.config.settings import Settings, get_settings


def get_app_settings() -> Settings:
    return get_settings()


def get_chain_reader(request: Request) -> ChainStateReader:
    """Dependency: the app-scoped chain reader created in the lifespan (created lazily otherwise)."""
    reader = getattr(request.app.state, "chain_reader", None)
    if reader is None:
        reader = SolanaChainReader.from_settings(get_settings())
        request.app.state.chain_reader = reader
    return reader


def action_headers(settings: Settings) -> dict[str, str]:
    """CORS and Solana Actions headers sent with every action response."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET,POST,PUT,OPTIONS",
        "Access-Control-Allow-Headers": (
            "Content-Type, Authorization, Content-Encoding, Accept-Encoding, "
            "X-Accept-Action-Version, X-Accept-Blockchain-Ids"
        ),
        "Access-Control-Expose-Headers": "X-Action-Version, X-Blockchain-Ids",
        "X-Blockchain-Ids": settings.blockchain_id,
        "X-Action-Version": settings.action_version,
    }
