"""
Select and build source/destination adapters from their declared Type
"""

from typing import Awaitable, Callable, Dict
import logging

from pydantic import ValidationError

from archiver.base import Destination, NullDestination, NullSource, Source
from archiver.destinations.s3 import S3Destination
from archiver.sources.rest_api import create_rest_api_source
from core.exceptions import ConfigurationError
from models.base import DestinationType, SourceType
from schemas.base import parse_raw_json
from schemas.config import DestinationConfig, NullSourceConfig, SourceConfig

logger = logging.getLogger(__name__)

SourceFactory = Callable[[SourceConfig], Awaitable[Source]]
DestinationFactory = Callable[[DestinationConfig], Awaitable[Destination]]


async def _create_null_source(source_config: SourceConfig) -> Source:
    try:
        config = parse_raw_json(NullSourceConfig, source_config.adapter_config)
    except ValidationError as e:
        raise ConfigurationError(f"invalid Null adapter config: {e}", original_exception=e)
    return NullSource(config.data.encode())


async def _create_s3_destination(destination_config: DestinationConfig) -> Destination:
    return S3Destination.from_destination_config(destination_config)


async def _create_null_destination(destination_config: DestinationConfig) -> Destination:
    return NullDestination()


SOURCE_FACTORIES: Dict[SourceType, SourceFactory] = {
    SourceType.REST_API: create_rest_api_source,
    SourceType.NULL: _create_null_source,
}

DESTINATION_FACTORIES: Dict[DestinationType, DestinationFactory] = {
    DestinationType.S3: _create_s3_destination,
    DestinationType.NULL: _create_null_destination,
}


async def create_source(source_config: SourceConfig) -> Source:
    """
    Build the source adapter named by ``source_config.type``.

    Raises:
        ConfigurationError: If the type is unrecognized or the adapter
            cannot be constructed
    """
    try:
        source_type = SourceType(source_config.type)
    except ValueError:
        raise ConfigurationError("unrecognized source type", context={"type": source_config.type})

    logger.debug(f"Creating {source_type.value} source")
    return await SOURCE_FACTORIES[source_type](source_config)


async def create_destination(destination_config: DestinationConfig) -> Destination:
    """
    Build the destination adapter named by ``destination_config.type``.

    Raises:
        ConfigurationError: If the type is unrecognized or the adapter
            cannot be constructed
    """
    try:
        destination_type = DestinationType(destination_config.type)
    except ValueError:
        raise ConfigurationError("unrecognized destination type", context={"type": destination_config.type})

    logger.debug(f"Creating {destination_type.value} destination")
    return await DESTINATION_FACTORIES[destination_type](destination_config)
