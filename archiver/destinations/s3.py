"""S3 object store destination."""

from typing import Any, Optional
import asyncio
import logging
import time

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from archiver.base import Destination
from core.exceptions import ConfigurationError, DestinationWriteError, SetConfigurationError
from models.base import LogLevel
from schemas.base import parse_raw_json
from schemas.config import DestinationConfig
from schemas.event_log import EventLogItem
from schemas.s3 import DEFAULT_OBJECT_NAME_PREFIX, S3Config, S3SetConfig

logger = logging.getLogger(__name__)


class S3Destination(Destination):
    """
    Store each set's payload as a new object in one S3 bucket.

    Object keys are ``<ObjectNamePrefix><nanosecond timestamp>``.
    """

    def __init__(self, config: S3Config, client: Optional[Any] = None):
        self.config = config
        self.set_config = S3SetConfig()

        if client is None:
            client = boto3.client(
                service_name="s3",
                region_name=config.aws_config.region,
                aws_access_key_id=config.aws_config.access_key_id,
                aws_secret_access_key=config.aws_config.secret_access_key,
                config=Config(signature_version="s3v4"),
            )
        self.client = client

        logger.info(f"S3 destination initialized for bucket {config.bucket_name}")

    @classmethod
    def from_destination_config(
        cls,
        destination_config: DestinationConfig,
        client: Optional[Any] = None,
    ) -> "S3Destination":
        """
        Validate the adapter configuration; bucket, region and both keys are required.

        Raises:
            ConfigurationError: If the config is malformed or incomplete
        """
        try:
            config = parse_raw_json(S3Config, destination_config.adapter_config)
        except ValidationError as e:
            raise ConfigurationError(
                f"error reading S3 destination config: {e}",
                original_exception=e
            )

        missing = None
        if not config.bucket_name:
            missing = "an S3 bucket name"
        elif not config.aws_config.region:
            missing = "an AWS region"
        elif not config.aws_config.access_key_id:
            missing = "an AWS access key"
        elif not config.aws_config.secret_access_key:
            missing = "an AWS secret access key"

        if missing:
            raise ConfigurationError(f"error reading S3 destination config: config is missing {missing}")

        return cls(config, client=client)

    @property
    def bucket_name(self) -> str:
        return self.config.bucket_name

    def for_set(self, set_name: str, set_config: Any) -> None:
        try:
            parsed = parse_raw_json(S3SetConfig, set_config)
        except ValidationError as e:
            raise SetConfigurationError(
                f"bad configuration in set '{set_name}': {e}",
                context={"set_name": set_name},
                original_exception=e
            )

        if not parsed.object_name_prefix:
            parsed.object_name_prefix = f"{set_name}/{DEFAULT_OBJECT_NAME_PREFIX}"

        self.set_config = parsed

    async def write(self, data: bytes, event_log: "asyncio.Queue[EventLogItem]") -> None:
        key = f"{self.set_config.object_name_prefix}{time.time_ns()}"

        try:
            await asyncio.to_thread(self._save_object, data, key)
        except DestinationWriteError as e:
            await event_log.put(EventLogItem(
                level=LogLevel.ALERT,
                message=f"error saving to S3: {e}",
            ))
            raise

        await event_log.put(EventLogItem(
            level=LogLevel.INFO,
            message=f"saved to {key} on bucket {self.bucket_name}",
        ))

    def _save_object(self, data: bytes, key: str) -> None:
        try:
            self.client.put_object(Bucket=self.bucket_name, Key=key, Body=data)
        except (BotoCoreError, ClientError) as e:
            raise DestinationWriteError(
                f"error saving data to {self.bucket_name}/{key}",
                context={"bucket": self.bucket_name, "key": key},
                original_exception=e
            )

        logger.debug(f"s3 object written: bucket={self.bucket_name} key={key} size={len(data)}")
