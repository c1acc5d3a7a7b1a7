"""
API server package — Solana Actions HTTP interface.

Serves action metadata and turns POSTed transfer requests into unsigned
transactions via the transfer engine.
"""
