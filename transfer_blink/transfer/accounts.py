"""Associated token account (holding account) derivation and existence checks."""

from __future__ import annotations

from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import get_associated_token_address

from transfer_blink.chain.reader import ChainStateReader
from transfer_blink.logging import get_logger
from transfer_blink.utils.wallet_utils import short_address

logger = get_logger(__name__)


def holding_account_address(
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Pubkey:
    """ATA for (owner, mint) under the given token program."""
    return get_associated_token_address(owner, mint, token_program_id)


def holding_account_exists(
    reader: ChainStateReader,
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> bool:
    """
    True if the owner's ATA for mint is present on chain.

    Any account at the derived address counts; the address is a PDA only the
    associated token program can create.
    """
    ata = holding_account_address(owner, mint, token_program_id)
    exists = reader.get_account_info(ata) is not None
    logger.debug(
        "holding_account_probed",
        owner=short_address(owner),
        mint=str(mint),
        ata=str(ata),
        exists=exists,
    )
    return exists
