"""Logging configuration for the bot service."""

import logging

from .config import settings

_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Install a stream handler on the root logger once.

    Uvicorn installs its own handlers for ``uvicorn.*`` loggers; this only
    covers the ``resultbot`` module loggers and anything else propagating to
    the root logger.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _CONFIGURED = True


__all__ = ["configure_logging"]
