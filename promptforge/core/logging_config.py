# /promptforge/core/logging_config.py

import logging

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configures the root logger once for the whole application."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # httpx logs every request at INFO; provider calls are already logged by the adapters.
    logging.getLogger("httpx").setLevel(logging.WARNING)
