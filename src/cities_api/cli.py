"""Server entry point."""

import logging
import sys

import uvicorn

from cities_api.config import settings


def setup_logging() -> None:
    """Configure logging for the server."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def run() -> None:
    """Serve the API until SIGINT/SIGTERM, then shut down gracefully."""
    setup_logging()
    logger = logging.getLogger(__name__)

    scheme = "https" if settings.tls_enabled else "http"
    logger.info(f"Cities API starting on {scheme}://{settings.host}:{settings.port}")
    if not settings.tls_enabled and (settings.tls_cert or settings.tls_key):
        logger.warning("TLS needs both CITIES_TLS_CERT and CITIES_TLS_KEY; serving plain HTTP")

    uvicorn.run(
        "cities_api.main:app",
        host=settings.host,
        port=settings.port,
        ssl_certfile=settings.tls_cert if settings.tls_enabled else None,
        ssl_keyfile=settings.tls_key if settings.tls_enabled else None,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_config=None,
    )


if __name__ == "__main__":
    run()
