"""Command line entry point for the Home Assistant tool server."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from .config import ConfigError, load_config
from .const import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL
from .server import run_stdio

_LOGGER = logging.getLogger(__name__)


def main() -> None:
    """Load the configuration and run the server."""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config()
    except ConfigError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run_stdio(config))
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted")
    except Exception:
        _LOGGER.exception("Fatal error running server")
        sys.exit(1)


if __name__ == "__main__":
    main()
