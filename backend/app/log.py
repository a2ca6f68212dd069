import sys
from typing import Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

_default_removed = False
_handler_id: Optional[int] = None


def configure_logging(level: str = "INFO") -> int:
    """Install the app's stderr sink, replacing only the sink this module added.

    loguru's default handler is dropped the first time; sinks added by
    embedding code are left alone.
    """
    global _default_removed, _handler_id
    if not _default_removed:
        try:
            logger.remove(0)
        except ValueError:
            pass  # default handler already removed by the host
        _default_removed = True
    if _handler_id is not None:
        logger.remove(_handler_id)
    _handler_id = logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper(), colorize=True)
    return _handler_id
