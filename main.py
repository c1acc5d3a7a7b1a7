"""
Main entrypoint: run the Transfer Blink API with uvicorn.

Env: SOLANA_NETWORK, SOLANA_RPC_URL, API_HOST, API_PORT, LOG_LEVEL, etc.

Equivalent: uvicorn transfer_blink.api_server.app:app --host 0.0.0.0 --port 8000
"""

# Configure structured JSON logging before other imports that may log
from transfer_blink.logging import get_logger

logger = get_logger("main")


def main() -> None:
    import uvicorn

    from transfer_blink.config import get_settings
    from transfer_blink.config.env import mask_rpc_url

    settings = get_settings()
    logger.info(
        "main_starting",
        network=settings.solana_network,
        rpc_url=mask_rpc_url(settings.solana_rpc_url),
        host=settings.api_host,
        port=settings.api_port,
    )
    uvicorn.run(
        "transfer_blink.api_server.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
