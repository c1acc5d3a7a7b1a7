"""
Structured logging for Transfer Blink.

JSON logs with timestamp, event_type and request context (wallets, mint, amounts).
Use get_logger() in every module for aggregation-friendly output.
"""

from transfer_blink.logging.logger import bind_request, get_logger

__all__ = ["bind_request", "get_logger"]
