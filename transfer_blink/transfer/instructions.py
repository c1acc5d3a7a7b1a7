"""
Transfer instruction building.

InstructionBuilder accumulates instructions in execution order. Account
creation is appended before the transfer that needs it, so the ordering
holds by construction. The payer funds ATA creation and signs every transfer.
"""

from __future__ import annotations

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams as SystemTransferParams
from solders.system_program import transfer as system_transfer
from spl.token.instructions import (
    TransferCheckedParams,
    create_associated_token_account,
    transfer_checked,
)

from transfer_blink.transfer.accounts import holding_account_address
from transfer_blink.transfer.assets import Asset, FungibleAsset, NativeAsset
from transfer_blink.transfer.mint import MintInfo


class InstructionBuilder:
    """Ordered instruction list for a single payer."""

    def __init__(self, payer: Pubkey) -> None:
        self.payer = payer
        self._instructions: list[Instruction] = []

    def __len__(self) -> int:
        return len(self._instructions)

    def native_transfer(self, recipient: Pubkey, lamports: int) -> "InstructionBuilder":
        self._instructions.append(
            system_transfer(
                SystemTransferParams(from_pubkey=self.payer, to_pubkey=recipient, lamports=lamports)
            )
        )
        return self

    def create_holding_account(self, owner: Pubkey, mint: MintInfo) -> "InstructionBuilder":
        self._instructions.append(
            create_associated_token_account(
                payer=self.payer,
                owner=owner,
                mint=mint.address,
                token_program_id=mint.token_program_id,
            )
        )
        return self

    def checked_token_transfer(self, recipient: Pubkey, mint: MintInfo, amount: int) -> "InstructionBuilder":
        source = holding_account_address(self.payer, mint.address, mint.token_program_id)
        dest = holding_account_address(recipient, mint.address, mint.token_program_id)
        self._instructions.append(
            transfer_checked(
                TransferCheckedParams(
                    program_id=mint.token_program_id,
                    source=source,
                    mint=mint.address,
                    dest=dest,
                    owner=self.payer,
                    amount=amount,
                    decimals=mint.decimals,
                )
            )
        )
        return self

    def build(self) -> list[Instruction]:
        return list(self._instructions)


def build_transfer_instructions(
    payer: Pubkey,
    recipient: Pubkey,
    asset: Asset,
    amount: int,
    *,
    mint: MintInfo | None = None,
    recipient_account_exists: bool = True,
) -> list[Instruction]:
    """
    Instructions moving `amount` base units of `asset` from payer to recipient.

    Native: one System Program transfer. Fungible: [create recipient ATA] when
    recipient_account_exists is False, then transfer_checked stating mint and decimals.
    `mint` is required for fungible assets and must describe asset.mint.
    """
    builder = InstructionBuilder(payer)
    if isinstance(asset, NativeAsset):
        return builder.native_transfer(recipient, amount).build()
    if not isinstance(asset, FungibleAsset):
        raise TypeError(f"Unknown asset type {type(asset).__name__}")
    if mint is None or mint.address != asset.mint:
        raise ValueError("Resolved mint info for the asset's mint is required for token transfers")
    if not recipient_account_exists:
        builder.create_holding_account(recipient, mint)
    return builder.checked_token_transfer(recipient, mint, amount).build()
