"""
Core Layer - Configuration and logging setup.
"""

from voyagekit.core.config import (
    API_KEY_ENV_VAR,
    DEFAULT_BASE_URL,
    ClientConfig,
    LoggingConfig,
    RetryConfig,
    VoyageConfig,
    load_config,
)
from voyagekit.core.logging_setup import configure_logging

__all__ = [
    "API_KEY_ENV_VAR",
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "LoggingConfig",
    "RetryConfig",
    "VoyageConfig",
    "load_config",
    "configure_logging",
]
