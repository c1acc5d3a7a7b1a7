"""
Transfer Blink — Solana Action backend for one-click token transfers.

Builds unsigned, versioned Solana transactions that move SOL or any SPL token
from the requesting wallet to a recipient. The wallet signs and submits; this
service never holds keys and never broadcasts.
"""

__version__ = "0.1.0"
