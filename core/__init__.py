"""
Core utilities and configuration for the archive runner.

This package provides foundational components used throughout the archiver:

Modules:
    config: Process settings and environment variable management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and the per-set logger adapter

Usage:
    from core.config import settings
    from core.exceptions import ConfigurationError, SourceReadError
    from core.logging import setup_logging, get_set_logger

Example:
    # Initialize logging
    setup_logging()

    logger = get_set_logger(logging.getLogger("archiver"), "users", width=10)
    logger.info("Beginning archive set")
"""

__all__ = [
    "settings",
    "setup_logging",
    "get_set_logger",
    # Exceptions
    "ArchiverException",
    "ConfigurationError",
    "SetConfigurationError",
    "SourceError",
    "SourceReadError",
    "AuthenticationError",
    "DestinationError",
    "DestinationWriteError",
    "AlertError",
]

from core.config import settings
from core.logging import setup_logging, get_set_logger
from core.exceptions import (
    ArchiverException,
    ConfigurationError,
    SetConfigurationError,
    SourceError,
    SourceReadError,
    AuthenticationError,
    DestinationError,
    DestinationWriteError,
    AlertError,
)
