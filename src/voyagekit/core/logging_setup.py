"""Logging setup for voyagekit entry points."""

import logging
from typing import Optional

from voyagekit.core.config import LoggingConfig

PACKAGE_LOGGER = "voyagekit"

_handler: Optional[logging.Handler] = None


def configure_logging(config: Optional[LoggingConfig] = None, verbose: bool = False) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Library code only creates loggers; this is called by the CLI. Calling it
    again replaces the previous handler instead of adding another one.

    Args:
        config: Level and format; defaults come from defaults.yaml
        verbose: Force DEBUG level

    Returns:
        The configured package logger
    """
    global _handler

    config = config or LoggingConfig()
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(config.format))
    package_logger.addHandler(_handler)
    package_logger.setLevel(level)
    return package_logger
