"""
Transfer engine: classify the token, resolve mint metadata, normalize the
amount, decide on ATA creation, build instructions and assemble an unsigned
versioned transaction.
"""

from transfer_blink.transfer.engine import BuiltTransfer, build_transfer, build_transfer_transaction

__all__ = ["BuiltTransfer", "build_transfer", "build_transfer_transaction"]
