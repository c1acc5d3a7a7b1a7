"""Wallet address parsing and display helpers."""

from __future__ import annotations

from typing import Any

from solders.pubkey import Pubkey

from transfer_blink.core.exceptions import InvalidAddress


def parse_address(raw: Any, field: str) -> Pubkey:
    """Parse a base58 Solana address; raise InvalidAddress naming the offending field."""
    if isinstance(raw, Pubkey):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidAddress(field, "" if raw is None else str(raw))
    try:
        return Pubkey.from_string(raw.strip())
    except Exception as e:
        raise InvalidAddress(field, raw) from e


def short_address(address: Any) -> str:
    """Truncate an address for logs."""
    text = str(address)
    return text[:8] + "..." if len(text) > 12 else text
