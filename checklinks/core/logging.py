import logging
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler

from checklinks.core.config import get as cfg_get

_CONFIGURED = False


def setup(level: Optional[str] = None) -> logging.Logger:
    global _CONFIGURED
    level = level or cfg_get("CHECKLINKS_LOG_LEVEL", "WARNING")
    if not _CONFIGURED:
        # stdout carries the result stream, log records go to stderr
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.WARNING),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )
        _CONFIGURED = True
    else:
        logging.getLogger().setLevel(getattr(logging, level.upper(), logging.WARNING))
    return logging.getLogger("checklinks")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not _CONFIGURED:
        setup()
    return logging.getLogger(name or "checklinks")
