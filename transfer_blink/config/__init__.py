"""
Configuration management for Transfer Blink.

Loads settings from environment variables and an optional .env file.
"""

from transfer_blink.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
