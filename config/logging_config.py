"""
Logging setup.

Library modules log through ``loguru.logger`` directly; entry points call
``setup_logging`` once to install a single stderr sink.
"""
import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}"


def setup_logging(level: str = "INFO") -> int:
    """
    Replace loguru's default handler with one stderr sink.

    Args:
        level: Minimum level name (e.g. 'DEBUG', 'INFO', 'WARNING')

    Returns:
        Handler id of the installed sink
    """
    logger.remove()
    return logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
