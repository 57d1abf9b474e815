"""
Logging configuration
"""

import logging
import sys
from typing import Any, MutableMapping, Tuple

from core.config import settings


def setup_logging():
    """Configure application logging"""

    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # boto and httpx are chatty at INFO
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")


class SetLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every record with the padded name of the archive set."""

    def __init__(self, logger: logging.Logger, set_name: str, width: int = 0):
        super().__init__(logger, {"archive_set": set_name})
        self.prefix = f"[ {set_name:<{width}} ] "

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs


def get_set_logger(logger: logging.Logger, set_name: str, width: int = 0) -> SetLoggerAdapter:
    """Build the logger handle used for the duration of one archive set."""
    return SetLoggerAdapter(logger, set_name, width)
