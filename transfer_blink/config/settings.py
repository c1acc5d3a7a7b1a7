"""
Application settings.

Typed view over the environment (see config/env.py) shared by the API server
and the chain reader. Values are read once per process; call
get_settings.cache_clear() in tests after changing the environment.
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass, field

from transfer_blink.config.env import (
    get_blockchain_id,
    get_commitment,
    get_solana_network,
    get_solana_rpc_url,
    load_transfer_env,
)

DEFAULT_ACTION_VERSION = "2.4"
DEFAULT_ICON_PATH = "/transfer_blink.png"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000
DEFAULT_RPC_TIMEOUT_SEC = 10.0


def _env_str(name: str, default: str) -> str:
    load_transfer_env()
    return (os.getenv(name) or "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name, str(default))
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Service configuration (env or explicit)."""

    solana_network: str = field(default_factory=get_solana_network)
    solana_rpc_url: str = field(default_factory=get_solana_rpc_url)
    commitment: str = field(default_factory=get_commitment)
    blockchain_id: str = field(default_factory=get_blockchain_id)
    rpc_timeout_sec: float = field(default_factory=lambda: _env_float("SOLANA_RPC_TIMEOUT_SEC", DEFAULT_RPC_TIMEOUT_SEC))
    action_version: str = field(default_factory=lambda: _env_str("ACTION_VERSION", DEFAULT_ACTION_VERSION))
    action_icon_path: str = field(default_factory=lambda: _env_str("ACTION_ICON_PATH", DEFAULT_ICON_PATH))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", DEFAULT_API_HOST))
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", DEFAULT_API_PORT))


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment on first use."""
    return Settings()
