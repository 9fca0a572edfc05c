"""Main entry point for the URL redirect resolver service.

Run:
  python -m src.main
"""

import asyncio
import logging
import signal
import sys

from .config import Config, load_config, validate_config
from .resolver import RedirectResolver
from .server import ResolverServer, ServerConfig

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)


def build_server(config: Config) -> ResolverServer:
    """Wire the resolver and HTTP server from application config."""
    server_config = ServerConfig(
        host=config.host,
        port=config.port,
        api_secret=config.api_secret,
        rate_limit_max_requests=config.rate_limit_max_requests,
        rate_limit_window_seconds=config.rate_limit_window_seconds,
        rate_limit_sweep_seconds=config.rate_limit_sweep_seconds,
    )
    return ResolverServer(
        config=server_config,
        resolver=RedirectResolver.from_config(config),
    )


async def run_service() -> None:
    """Run the resolver service until SIGINT/SIGTERM."""
    config = load_config()

    validation_errors = validate_config(config)
    if validation_errors:
        for err in validation_errors:
            logger.error(err)
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    server = build_server(config)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    try:
        await server.start()
        await stop_event.wait()
    finally:
        logger.info("Shutting down resolver service")
        await server.stop()


def main():
    """Entry point."""
    asyncio.run(run_service())


if __name__ == "__main__":
    main()
