"""
Chain-state access for the transfer engine.

The engine only needs two reads: the latest blockhash and raw account info.
Both go through a ChainStateReader so tests can substitute a deterministic fake.
"""

from transfer_blink.chain.reader import AccountSnapshot, ChainStateReader, SolanaChainReader

__all__ = ["AccountSnapshot", "ChainStateReader", "SolanaChainReader"]
