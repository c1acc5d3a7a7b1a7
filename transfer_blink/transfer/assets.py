"""
Asset classification: native SOL vs. SPL token mint.

The token string from the request is classified exactly once; everything
downstream dispatches on the resulting NativeAsset / FungibleAsset value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from solders.pubkey import Pubkey
from spl.token.constants import WRAPPED_SOL_MINT

from transfer_blink.utils.wallet_utils import parse_address

NATIVE_ALIASES = frozenset({"SOL", "SOLANA"})
NATIVE_DECIMALS = 9
LAMPORTS_PER_SOL = 10**NATIVE_DECIMALS
WRAPPED_SOL_MINT_STR = str(WRAPPED_SOL_MINT)


@dataclass(frozen=True)
class NativeAsset:
    """Native SOL, moved with a System Program transfer."""

    decimals: int = NATIVE_DECIMALS

    @property
    def label(self) -> str:
        return "SOL"


@dataclass(frozen=True)
class FungibleAsset:
    """SPL token identified by its mint address."""

    mint: Pubkey

    @property
    def label(self) -> str:
        return str(self.mint)


Asset = Union[NativeAsset, FungibleAsset]


def is_native_token(token: str) -> bool:
    raw = token.strip()
    return raw.upper() in NATIVE_ALIASES or raw == WRAPPED_SOL_MINT_STR


def classify_token(token: str) -> Asset:
    """
    Classify a token identifier.

    "SOL" / "SOLANA" (any case) and the wrapped-SOL mint are native; anything
    else must parse as a mint address, otherwise InvalidAddress is raised.
    """
    if isinstance(token, str) and is_native_token(token):
        return NativeAsset()
    return FungibleAsset(mint=parse_address(token, "token mint"))
