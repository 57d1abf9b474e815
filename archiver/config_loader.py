"""
Load the archive configuration document
"""

from pathlib import Path
from typing import Optional, Union
import logging
import os

from pydantic import ValidationError

from core.config import settings
from core.exceptions import ConfigurationError
from schemas.config import AppConfig

logger = logging.getLogger(__name__)


def resolve_config_path(config_file: Optional[str] = None) -> str:
    """
    Pick the configuration file to use.

    Order: the explicit argument, the CONFIG_PATH environment variable,
    then the CONFIG_PATH setting (default ``./config.json``).
    """
    if config_file:
        return config_file
    return os.environ.get("CONFIG_PATH") or settings.CONFIG_PATH


def load_config(config_file: Optional[str] = None) -> AppConfig:
    """
    Read and parse the configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    path = resolve_config_path(config_file)
    logger.info(f"Using config file: {path}")

    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ConfigurationError(
            f"unable to read application config file {path}",
            context={"config_file": path},
            original_exception=e
        )

    return parse_config(data)


def parse_config(data: Union[bytes, str]) -> AppConfig:
    """
    Parse the JSON configuration document.

    Raises:
        ConfigurationError: If the JSON is malformed or the Source or
            Destination type is missing
    """
    try:
        config = AppConfig.model_validate_json(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"unable to parse application configuration: {e}",
            original_exception=e
        )

    if not config.source.type:
        raise ConfigurationError("configuration appears to be missing a Source configuration")

    if not config.destination.type:
        raise ConfigurationError("configuration appears to be missing a Destination configuration")

    logger.info(
        f"Configuration loaded. Source type: {config.source.type}, "
        f"Destination type: {config.destination.type}"
    )
    logger.info(f"{len(config.sets)} archive sets found:")
    for i, archive_set in enumerate(config.sets, start=1):
        logger.info(f"  {i}) {archive_set.name}")

    return config
