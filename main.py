"""UtiliDesk entrypoint -- loads config and serves the widget API.

Usage:
    python main.py
    python main.py --config /path/to/config.yaml
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from aiohttp import web

from core.config import load_config
from server import create_app


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Quiet down noisy libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="UtiliDesk widget server")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config.yaml (default: ~/.utilidesk/config.yaml)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help="Path to .env file (default: ~/.utilidesk/.env)",
    )
    return parser.parse_args()


async def run(config_path: str | None = None, env_path: str | None = None) -> None:
    """Load configuration and serve until interrupted."""
    config = load_config(config_path=config_path, env_path=env_path)
    logging.getLogger().setLevel(getattr(logging, config.logging.level.upper(), logging.INFO))
    logger = logging.getLogger("utilidesk")

    app = create_app(config)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, config.server.host, config.server.port)
    await site.start()

    logger.info(
        "UtiliDesk running at http://%s:%d",
        config.server.host,
        config.server.port,
    )
    if not config.licenses_path.is_file():
        logger.warning(
            "No license inventory at %s; run 'utilidesk licenses' to generate it",
            config.licenses_path,
        )

    # Run until interrupted
    try:
        await asyncio.Event().wait()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        logger.info("Shutting down...")
        await runner.cleanup()
        logger.info("Shutdown complete")


def main() -> None:
    args = parse_args()
    setup_logging("INFO")
    try:
        asyncio.run(run(config_path=args.config, env_path=args.env))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
