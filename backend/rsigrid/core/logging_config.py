"""
Logging setup for the backend.

Service modules log through `logging.getLogger(__name__)`; this only
configures the root handler once at startup.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging (no-op if handlers already exist)."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # aiohttp access chatter is noise at INFO
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
