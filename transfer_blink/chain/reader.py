"""
Chain-state reader over Solana JSON-RPC.

SolanaChainReader wraps a solana-py Client. One instance is shared by all
in-flight requests (the underlying httpx client is thread-safe) and holds no
per-request state. Transport and RPC failures are raised as
ChainStateUnavailable so callers can tell them apart from bad input.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Protocol

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solana.rpc.core import RPCException
from solders.hash import Hash
from solders.pubkey import Pubkey

from transfer_blink.config.env import mask_rpc_url
from transfer_blink.config.settings import Settings, get_settings
from transfer_blink.core.exceptions import ChainStateUnavailable
from transfer_blink.logging import get_logger
from transfer_blink.utils.wallet_utils import short_address

logger = get_logger(__name__)

_TRANSIENT_ERRORS = (SolanaRpcException, RPCException, httpx.HTTPError, OSError)


@dataclass(frozen=True)
class AccountSnapshot:
    """The parts of an on-chain account the engine reads."""

    owner: Pubkey
    data: bytes
    lamports: int = 0


class ChainStateReader(Protocol):
    def get_latest_blockhash(self) -> Hash: ...

    def get_account_info(self, address: Pubkey) -> AccountSnapshot | None: ...


def _raw_bytes_from_account_data(data: object) -> bytes:
    """Normalize account.data to bytes (solders returns bytes; older clients a [b64, enc] pair)."""
    if data is None:
        return b""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, (list, tuple)) and data and isinstance(data[0], str):
        return base64.b64decode(data[0])
    return bytes(data)


class SolanaChainReader:
    """ChainStateReader backed by solana.rpc.api.Client."""

    def __init__(self, client: Any, commitment: str = "confirmed") -> None:
        self._client = client
        self._commitment = Commitment(commitment)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "SolanaChainReader":
        cfg = settings or get_settings()
        client = Client(cfg.solana_rpc_url, commitment=Commitment(cfg.commitment), timeout=cfg.rpc_timeout_sec)
        logger.info(
            "chain_reader_created",
            rpc_url=mask_rpc_url(cfg.solana_rpc_url),
            commitment=cfg.commitment,
        )
        return cls(client, commitment=cfg.commitment)

    def get_latest_blockhash(self) -> Hash:
        try:
            resp = self._client.get_latest_blockhash(commitment=self._commitment)
        except _TRANSIENT_ERRORS as e:
            logger.warning("chain_blockhash_failed", error=str(e))
            raise ChainStateUnavailable(f"Failed to fetch latest blockhash: {e}") from e
        value = getattr(resp, "value", None)
        if value is None or getattr(value, "blockhash", None) is None:
            raise ChainStateUnavailable("RPC returned no blockhash")
        return value.blockhash

    def get_account_info(self, address: Pubkey) -> AccountSnapshot | None:
        try:
            resp = self._client.get_account_info(address, commitment=self._commitment, encoding="base64")
        except _TRANSIENT_ERRORS as e:
            logger.warning("chain_account_read_failed", address=short_address(address), error=str(e))
            raise ChainStateUnavailable(f"Failed to read account {address}: {e}") from e
        acc = getattr(resp, "value", None)
        if acc is None:
            return None
        return AccountSnapshot(
            owner=acc.owner,
            data=_raw_bytes_from_account_data(acc.data),
            lamports=int(getattr(acc, "lamports", 0) or 0),
        )
