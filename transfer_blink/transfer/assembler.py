"""
Versioned transaction assembly.

Compiles instructions into a v0 message with the payer as fee payer and wraps
it in an unsigned VersionedTransaction: every required signature slot holds
the default (all-zero) signature for the wallet to fill in.
"""

from __future__ import annotations

from collections.abc import Sequence

from solders.hash import Hash
from solders.instruction import Instruction
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from transfer_blink.core.exceptions import AssemblyError

# Max serialized transaction size (IPv6 MTU minus headers)
PACKET_DATA_SIZE = 1232


def assemble_transaction(
    payer: Pubkey,
    recent_blockhash: Hash,
    instructions: Sequence[Instruction],
) -> VersionedTransaction:
    if not instructions:
        raise AssemblyError("Cannot assemble a transaction with no instructions")
    try:
        message = MessageV0.try_compile(payer, list(instructions), [], recent_blockhash)
    except Exception as e:
        raise AssemblyError(f"Failed to compile transaction message: {e}") from e
    signatures = [Signature.default()] * message.header.num_required_signatures
    tx = VersionedTransaction.populate(message, signatures)
    size = len(bytes(tx))
    if size > PACKET_DATA_SIZE:
        raise AssemblyError(
            f"Transaction is {size} bytes, exceeds maximum of {PACKET_DATA_SIZE}"
        )
    return tx


def serialize_transaction(tx: VersionedTransaction) -> bytes:
    return bytes(tx)
