"""
Mint metadata resolution.

Reads the mint account and decodes the SPL Token mint layout (shared by the
legacy Token program and Token-2022). A plain mint is exactly 82 bytes; a
Token-2022 mint with extensions is padded to 165 bytes and tagged
AccountType::Mint at byte 165. Token accounts (165 bytes, or tagged
AccountType::Account) are rejected. Extension data is ignored:

    0   u32  mint_authority option
    4   32   mint_authority
    36  u64  supply
    44  u8   decimals
    45  u8   is_initialized
    46  u32  freeze_authority option
    50  32   freeze_authority
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID

from transfer_blink.chain.reader import AccountSnapshot, ChainStateReader
from transfer_blink.core.exceptions import MintMalformed, MintNotFound
from transfer_blink.logging import get_logger

logger = get_logger(__name__)

MINT_ACCOUNT_LEN = 82
MINT_SUPPLY_OFFSET = 36
MINT_DECIMALS_OFFSET = 44
MINT_INITIALIZED_OFFSET = 45
# Token-2022 extended accounts: base layout padded to 165 bytes, then the AccountType byte
TOKEN_2022_ACCOUNT_TYPE_OFFSET = 165
TOKEN_2022_ACCOUNT_TYPE_MINT = 1
TOKEN_PROGRAM_IDS = (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID)


@dataclass(frozen=True)
class MintInfo:
    address: Pubkey
    decimals: int
    token_program_id: Pubkey
    supply: int = 0
    is_initialized: bool = True


def _is_extended_mint(account: AccountSnapshot) -> bool:
    """Token-2022 mint with extensions: tagged AccountType::Mint after the padded base."""
    return (
        account.owner == TOKEN_2022_PROGRAM_ID
        and len(account.data) > TOKEN_2022_ACCOUNT_TYPE_OFFSET
        and account.data[TOKEN_2022_ACCOUNT_TYPE_OFFSET] == TOKEN_2022_ACCOUNT_TYPE_MINT
    )


def parse_mint_account(mint: Pubkey, account: AccountSnapshot) -> MintInfo:
    """Decode a mint account; raise MintMalformed if it is not an initialized token mint."""
    if account.owner not in TOKEN_PROGRAM_IDS:
        raise MintMalformed(str(mint), f"owned by {account.owner}, not a token program")
    data = account.data
    if len(data) != MINT_ACCOUNT_LEN and not _is_extended_mint(account):
        raise MintMalformed(str(mint), f"account data is {len(data)} bytes, not a mint layout")
    (supply,) = struct.unpack_from("<Q", data, MINT_SUPPLY_OFFSET)
    decimals = data[MINT_DECIMALS_OFFSET]
    if data[MINT_INITIALIZED_OFFSET] != 1:
        raise MintMalformed(str(mint), "mint is not initialized")
    return MintInfo(
        address=mint,
        decimals=decimals,
        token_program_id=account.owner,
        supply=supply,
        is_initialized=True,
    )


def resolve_mint(reader: ChainStateReader, mint: Pubkey) -> MintInfo:
    """Fetch and decode the mint account. ChainStateUnavailable from the reader propagates."""
    account = reader.get_account_info(mint)
    if account is None:
        raise MintNotFound(str(mint))
    info = parse_mint_account(mint, account)
    logger.debug(
        "mint_resolved",
        mint=str(mint),
        decimals=info.decimals,
        token_program=str(info.token_program_id),
    )
    return info


def resolve_decimals(reader: ChainStateReader, mint: Pubkey) -> int:
    return resolve_mint(reader, mint).decimals
