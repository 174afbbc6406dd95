"""Entry point for ``python -m sociomap``."""

from __future__ import annotations

import argparse
import logging

import uvicorn

from sociomap.config import settings
from sociomap.logging_config import setup_logging

logger = logging.getLogger("sociomap")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="SocioMap API server")
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Bind address (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Bind port (default: {settings.port})",
    )
    args = parser.parse_args(argv)

    if settings.is_production:
        # The hosting platform imports sociomap.api.main:app itself
        setup_logging(settings.log_level, settings.log_format)
        logger.info("ENVIRONMENT=production, not binding a local port")
        return

    uvicorn.run(
        "sociomap.api.main:app",
        host=args.host,
        port=args.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
