"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn transfer_blink.api_server.app:app --host 0.0.0.0 --port 8000
"""

from transfer_blink.api_server.server import app

__all__ = ["app"]
