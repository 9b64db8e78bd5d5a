"""
Logging setup.

Every module logs through logging.getLogger(__name__); this only wires the
root handler once at startup.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger (no-op for handlers if already configured)."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
