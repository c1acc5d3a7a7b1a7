"""
Transfer transaction engine.

build_transfer_transaction() is the single entry point the API calls:

    parse payer/recipient, validate amount      (no I/O)
    classify token                              (native | fungible)
    fungible: resolve mint -> normalize amount -> probe recipient ATA
    native:   normalize with 9 decimals
    build instructions
    fetch latest blockhash, assemble, serialize (blockhash read last)

All failures are TransferError subclasses; nothing is retried here.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from solders.transaction import VersionedTransaction

from transfer_blink.chain.reader import ChainStateReader
from transfer_blink.logging import get_logger
from transfer_blink.transfer.accounts import holding_account_exists
from transfer_blink.transfer.amounts import normalize_amount, parse_amount
from transfer_blink.transfer.assembler import assemble_transaction, serialize_transaction
from transfer_blink.transfer.assets import Asset, FungibleAsset, classify_token
from transfer_blink.transfer.instructions import build_transfer_instructions
from transfer_blink.transfer.mint import MintInfo, resolve_mint
from transfer_blink.utils.wallet_utils import parse_address, short_address

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransferPlan:
    """Everything decided about a transfer before the blockhash is fetched."""

    asset: Asset
    ui_amount: Decimal
    amount: int
    decimals: int
    mint: MintInfo | None = None
    creates_recipient_account: bool = False


@dataclass(frozen=True)
class BuiltTransfer:
    plan: TransferPlan
    transaction: VersionedTransaction

    def serialize(self) -> bytes:
        return serialize_transaction(self.transaction)


def build_transfer(
    reader: ChainStateReader,
    payer: Any,
    recipient: Any,
    token: str,
    amount: Any,
) -> BuiltTransfer:
    """Build the unsigned transfer transaction and the plan it was built from."""
    payer_key = parse_address(payer, "payer")
    recipient_key = parse_address(recipient, "recipient")
    ui_amount = parse_amount(amount)
    asset = classify_token(token)

    mint: MintInfo | None = None
    creates_account = False
    if isinstance(asset, FungibleAsset):
        mint = resolve_mint(reader, asset.mint)
        decimals = mint.decimals
        raw_amount = normalize_amount(ui_amount, decimals)
        creates_account = not holding_account_exists(
            reader, recipient_key, mint.address, mint.token_program_id
        )
    else:
        decimals = asset.decimals
        raw_amount = normalize_amount(ui_amount, decimals)

    instructions = build_transfer_instructions(
        payer_key,
        recipient_key,
        asset,
        raw_amount,
        mint=mint,
        recipient_account_exists=not creates_account,
    )
    plan = TransferPlan(
        asset=asset,
        ui_amount=ui_amount,
        amount=raw_amount,
        decimals=decimals,
        mint=mint,
        creates_recipient_account=creates_account,
    )

    blockhash = reader.get_latest_blockhash()
    tx = assemble_transaction(payer_key, blockhash, instructions)
    logger.info(
        "transfer_built",
        payer=short_address(payer_key),
        recipient=short_address(recipient_key),
        asset=asset.label,
        amount=raw_amount,
        decimals=decimals,
        instruction_count=len(instructions),
        creates_recipient_account=creates_account,
    )
    return BuiltTransfer(plan=plan, transaction=tx)


def build_transfer_transaction(
    reader: ChainStateReader,
    payer: Any,
    recipient: Any,
    token: str,
    amount: Any,
) -> bytes:
    """Serialized unsigned transaction moving `amount` of `token` from payer to recipient."""
    return build_transfer(reader, payer, recipient, token, amount).serialize()
